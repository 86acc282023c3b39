"""Application services."""

from paisaplan.services.tracker import ExpenseTracker

__all__ = ["ExpenseTracker"]
