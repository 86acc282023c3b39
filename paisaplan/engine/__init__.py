"""Budget metrics engine and aggregate rollups.

Pure functions over read-only snapshots.
"""

from paisaplan.engine.calculator import (
    calculate_budget_status,
    check_spending_alert,
    evaluate_budget,
    evaluate_snapshot,
)

__all__ = [
    "calculate_budget_status",
    "check_spending_alert",
    "evaluate_budget",
    "evaluate_snapshot",
]
