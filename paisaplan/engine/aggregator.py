"""Aggregate rollups over expenses and credits.

Category totals, rolling/calendar window totals, the monthly trend series,
dashboard headline numbers and the unified transaction list.
"""

from collections.abc import Iterable
from datetime import datetime
from decimal import Decimal

from paisaplan.core.models import (
    Budget,
    Category,
    CategoryTotal,
    Credit,
    DashboardStats,
    Expense,
    MonthlyPoint,
    Transaction,
    TransactionFilter,
    TransactionKind,
    TransactionSort,
)
from paisaplan.engine.periods import as_utc, format_month, in_same_month, in_week_window, month_key

MONTHLY_SERIES_LENGTH = 6


def sum_amounts(expenses: Iterable[Expense]) -> Decimal:
    return sum((e.amount for e in expenses), Decimal(0))


def expenses_for_category(expenses: Iterable[Expense], category: Category) -> list[Expense]:
    return [e for e in expenses if category.matches(e.category)]


def calculate_category_total(expenses: Iterable[Expense], category: Category) -> Decimal:
    """Sum of amounts for expenses filed under a category."""
    return sum_amounts(expenses_for_category(expenses, category))


def calculate_category_breakdown(
    expenses: list[Expense],
    categories: list[Category],
) -> list[CategoryTotal]:
    """Per-category totals and counts, in category order.

    Categories without spending are omitted.
    """
    breakdown: list[CategoryTotal] = []
    for category in categories:
        matched = expenses_for_category(expenses, category)
        total = sum_amounts(matched)
        if total > 0:
            breakdown.append(CategoryTotal(category=category, total=total, count=len(matched)))
    return breakdown


def expenses_this_week(expenses: Iterable[Expense], now: datetime) -> list[Expense]:
    """Expenses dated within the rolling 7 days ending at now."""
    return [e for e in expenses if in_week_window(e.date, now)]


def expenses_this_month(expenses: Iterable[Expense], now: datetime) -> list[Expense]:
    """Expenses dated within the calendar month and year of now."""
    return [e for e in expenses if in_same_month(e.date, now)]


def calculate_weekly_total(expenses: Iterable[Expense], now: datetime) -> Decimal:
    return sum_amounts(expenses_this_week(expenses, now))


def calculate_monthly_total(expenses: Iterable[Expense], now: datetime) -> Decimal:
    return sum_amounts(expenses_this_month(expenses, now))


def calculate_monthly_series(
    expenses: Iterable[Expense],
    limit: int = MONTHLY_SERIES_LENGTH,
) -> list[MonthlyPoint]:
    """Monthly spending totals for trend charts.

    Groups expenses by (year, month), keeps the most recent `limit` groups
    and returns them oldest first.
    """
    months: dict[tuple[int, int], Decimal] = {}
    for expense in expenses:
        key = month_key(expense.date)
        months[key] = months.get(key, Decimal(0)) + expense.amount

    recent = sorted(months)[-limit:] if limit > 0 else []
    return [
        MonthlyPoint(year=year, month=month, label=format_month(year, month), total=months[(year, month)])
        for year, month in recent
    ]


def calculate_dashboard_stats(
    expenses: list[Expense],
    budget: Budget | None,
    now: datetime,
) -> DashboardStats:
    """Headline dashboard figures: balance plus month and week totals."""
    total = sum_amounts(expenses)
    this_month = expenses_this_month(expenses, now)
    this_week = expenses_this_week(expenses, now)

    return DashboardStats(
        total_expenses=total,
        current_balance=budget.total_amount - total if budget else Decimal(0),
        monthly_total=sum_amounts(this_month),
        monthly_count=len(this_month),
        weekly_total=sum_amounts(this_week),
        weekly_count=len(this_week),
    )


def build_transactions(
    expenses: list[Expense],
    credits: list[Credit],
    kind: TransactionFilter = TransactionFilter.ALL,
    sort_by: TransactionSort = TransactionSort.DATE,
) -> list[Transaction]:
    """Merge expenses and credits into one list.

    Sorting by date puts the newest first; by amount, the largest first.
    """
    rows: list[Transaction] = []

    if kind in (TransactionFilter.ALL, TransactionFilter.EXPENSES):
        rows.extend(
            Transaction(
                id=str(e.id),
                title=e.title,
                amount=e.amount,
                kind=TransactionKind.EXPENSE,
                category=e.category,
                date=e.date,
                description=e.description,
            )
            for e in expenses
        )

    if kind in (TransactionFilter.ALL, TransactionFilter.CREDITS):
        rows.extend(
            Transaction(
                id=str(c.id),
                title=c.description or "Budget Credit",
                amount=c.amount,
                kind=TransactionKind.CREDIT,
                date=c.date,
                description=c.description,
            )
            for c in credits
        )

    if sort_by == TransactionSort.AMOUNT:
        rows.sort(key=lambda row: row.amount, reverse=True)
    else:
        rows.sort(key=lambda row: as_utc(row.date), reverse=True)
    return rows


def calculate_credit_total(credits: Iterable[Credit]) -> Decimal:
    return sum((c.amount for c in credits), Decimal(0))
