"""Expense tracker service.

Holds every write operation of the app (expenses, credits, budget,
categories) and hands read-only snapshots to the engine for the figures.
Each write is load -> modify -> save against the injected repository.
"""

import logging
import re
from datetime import datetime
from decimal import Decimal
from uuid import uuid4

from paisaplan.core.exceptions import (
    CategoryExistsError,
    CategoryInUseError,
    CategoryNotFoundError,
    NoBudgetError,
)
from paisaplan.core.models import (
    DEFAULT_ICON,
    AlertWindow,
    Budget,
    BudgetEvaluation,
    Category,
    CategoryTotal,
    Credit,
    DashboardStats,
    Expense,
    MonthlyPoint,
    Snapshot,
    Tip,
    Transaction,
    TransactionFilter,
    TransactionSort,
    WorkspaceConfig,
)
from paisaplan.engine.aggregator import (
    build_transactions,
    calculate_category_breakdown,
    calculate_dashboard_stats,
    calculate_monthly_series,
    calculate_monthly_total,
    calculate_weekly_total,
)
from paisaplan.engine.calculator import check_spending_alert, evaluate_snapshot, validate_budget
from paisaplan.engine.periods import utcnow
from paisaplan.storage import Repository

logger = logging.getLogger(__name__)


def _slugify(name: str) -> str:
    slug = re.sub(r"[^a-z0-9]+", "-", name.lower()).strip("-")
    return slug or uuid4().hex[:8]


class ExpenseTracker:
    """Application service over a snapshot repository."""

    def __init__(self, repository: Repository, config: WorkspaceConfig | None = None):
        self.repository = repository
        self.config = config or WorkspaceConfig(name="default")

    @property
    def currency(self) -> str:
        return self.config.currency

    def snapshot(self) -> Snapshot:
        return self.repository.load()

    # -------------------------------------------------------------------------
    # Expenses
    # -------------------------------------------------------------------------

    def add_expense(
        self,
        title: str,
        amount: Decimal,
        category: str,
        date: datetime | None = None,
        description: str | None = None,
        now: datetime | None = None,
    ) -> tuple[Expense, list[Tip]]:
        """Record an expense.

        Args:
            title: Label for the expense.
            amount: Positive amount.
            category: Category id or name.
            date: When the spend occurred (default: now).
            description: Optional note.
            now: Evaluation time for the spending alert (default: current time).

        Returns:
            The stored expense and any spending alerts it triggered.

        Raises:
            CategoryNotFoundError: If no category matches.
        """
        now = now or utcnow()
        snapshot = self.repository.load()
        matched = snapshot.find_category(category)
        if matched is None:
            raise CategoryNotFoundError(f"Category not found: {category}")

        expense = Expense(
            title=title,
            amount=amount,
            category=matched.name,
            date=date or now,
            description=description or None,
        )

        # Alert uses spending before this expense plus the new amount.
        window = self.config.alert_window
        if window == AlertWindow.MONTH:
            window_total = calculate_monthly_total(snapshot.expenses, now)
        else:
            window_total = calculate_weekly_total(snapshot.expenses, now)
        alert = check_spending_alert(snapshot.budget, window_total, expense.amount, window)

        snapshot.expenses.insert(0, expense)
        self.repository.save(snapshot)
        logger.info("Added expense %r (%s) to %s", expense.title, expense.amount, matched.name)

        alerts = [alert] if alert else []
        for tip in alerts:
            logger.debug("Spending alert: %s", tip.message)
        return expense, alerts

    # -------------------------------------------------------------------------
    # Budget & credits
    # -------------------------------------------------------------------------

    def set_budget(
        self,
        total_amount: Decimal,
        duration: int,
        start_date: datetime | None = None,
    ) -> Budget:
        """Replace the active budget. Credits start again from zero.

        Raises:
            InvalidBudgetConfiguration: If amount or duration is not positive.
        """
        budget = Budget(
            total_amount=total_amount,
            duration=duration,
            start_date=start_date or utcnow(),
        )
        validate_budget(budget)

        snapshot = self.repository.load()
        snapshot.budget = budget
        self.repository.save(snapshot)
        logger.info("Budget set: %s over %d days", budget.total_amount, budget.duration)
        return budget

    def add_credit(self, amount: Decimal, description: str | None = None) -> Budget:
        """Add money to the active budget.

        Raises:
            NoBudgetError: If no budget is configured.
        """
        snapshot = self.repository.load()
        if snapshot.budget is None:
            raise NoBudgetError("Set a budget before adding credits")

        credit = Credit(amount=amount, description=description or None)
        snapshot.budget = snapshot.budget.model_copy(
            update={
                "total_amount": snapshot.budget.total_amount + credit.amount,
                "credits": snapshot.budget.credits + credit.amount,
            }
        )
        snapshot.credits.append(credit)
        self.repository.save(snapshot)
        logger.info("Added credit of %s", credit.amount)
        return snapshot.budget

    # -------------------------------------------------------------------------
    # Categories
    # -------------------------------------------------------------------------

    def list_categories(self) -> list[Category]:
        return self.repository.load().categories

    def add_category(self, name: str, icon: str | None = None) -> Category:
        snapshot = self.repository.load()
        if snapshot.find_category(name) is not None:
            raise CategoryExistsError(f"Category already exists: {name}")

        category_id = _slugify(name)
        if any(c.id == category_id for c in snapshot.categories):
            category_id = f"{category_id}-{uuid4().hex[:6]}"

        category = Category(id=category_id, name=name, icon=icon or DEFAULT_ICON)
        snapshot.categories.append(category)
        self.repository.save(snapshot)
        logger.info("Added category %r", name)
        return category

    def rename_category(self, reference: str, new_name: str) -> Category:
        """Rename a category. Expenses filed under the old name follow it.

        Raises:
            CategoryNotFoundError: If no category matches.
            CategoryExistsError: If another category already uses the name as its name or id.
        """
        snapshot = self.repository.load()
        category = snapshot.find_category(reference)
        if category is None:
            raise CategoryNotFoundError(f"Category not found: {reference}")

        if any(c.id != category.id and c.matches(new_name) for c in snapshot.categories):
            raise CategoryExistsError(f"Category already exists: {new_name}")

        old_name = category.name
        category.name = new_name
        snapshot.expenses = [
            e.model_copy(update={"category": new_name}) if e.category == old_name else e
            for e in snapshot.expenses
        ]
        self.repository.save(snapshot)
        logger.info("Renamed category %r to %r", old_name, new_name)
        return category

    def delete_category(self, reference: str) -> Category:
        """Delete a category that has no expenses.

        Raises:
            CategoryNotFoundError: If no category matches.
            CategoryInUseError: If any expense is filed under it.
        """
        snapshot = self.repository.load()
        category = snapshot.find_category(reference)
        if category is None:
            raise CategoryNotFoundError(f"Category not found: {reference}")

        in_use = sum(1 for e in snapshot.expenses if category.matches(e.category))
        if in_use:
            raise CategoryInUseError(
                f"Cannot delete category {category.name!r} with {in_use} existing expenses"
            )

        snapshot.categories = [c for c in snapshot.categories if c.id != category.id]
        self.repository.save(snapshot)
        logger.info("Deleted category %r", category.name)
        return category

    # -------------------------------------------------------------------------
    # Read side
    # -------------------------------------------------------------------------

    def status(self, now: datetime | None = None) -> BudgetEvaluation:
        return evaluate_snapshot(self.repository.load(), now or utcnow(), self.currency)

    def dashboard(self, now: datetime | None = None) -> DashboardStats:
        snapshot = self.repository.load()
        return calculate_dashboard_stats(snapshot.expenses, snapshot.budget, now or utcnow())

    def monthly_series(self) -> list[MonthlyPoint]:
        return calculate_monthly_series(self.repository.load().expenses)

    def category_breakdown(self) -> list[CategoryTotal]:
        snapshot = self.repository.load()
        return calculate_category_breakdown(snapshot.expenses, snapshot.categories)

    def transactions(
        self,
        kind: TransactionFilter = TransactionFilter.ALL,
        sort_by: TransactionSort = TransactionSort.DATE,
    ) -> list[Transaction]:
        snapshot = self.repository.load()
        return build_transactions(snapshot.expenses, snapshot.credits, kind, sort_by)
