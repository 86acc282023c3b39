"""Budget status engine.

Derives budget status figures and advisory tips from a budget and the
total spent so far. Every function here is pure: same inputs, same output,
no I/O.
"""

from datetime import datetime
from decimal import Decimal

from paisaplan.core.exceptions import InvalidBudgetConfiguration
from paisaplan.core.formatting import TENTHS, format_currency, quantize
from paisaplan.core.models import (
    AlertWindow,
    Budget,
    BudgetEvaluation,
    DerivedBudgetStatus,
    Snapshot,
    Tip,
    TipKind,
)
from paisaplan.engine.periods import days_elapsed as count_days_elapsed

UNDERSPEND_PERCENT = Decimal(50)
EXHAUSTION_PERCENT = Decimal(80)
ALERT_RATIO = Decimal("0.9")

_WINDOW_DAYS = {
    AlertWindow.WEEK: Decimal(7),
    AlertWindow.MONTH: Decimal(30),
}


def _to_decimal(value: Decimal | int | float) -> Decimal:
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def validate_budget(budget: Budget) -> None:
    """Check that a budget's status can be computed.

    Raises:
        InvalidBudgetConfiguration: If total_amount or duration is not positive.
    """
    if not budget.total_amount.is_finite() or budget.total_amount <= 0:
        raise InvalidBudgetConfiguration(
            f"Budget amount must be positive, got {budget.total_amount}"
        )
    if budget.duration <= 0:
        raise InvalidBudgetConfiguration(
            f"Budget duration must be positive, got {budget.duration} days"
        )


def calculate_budget_status(
    budget: Budget,
    total_expenses: Decimal,
    now: datetime,
) -> DerivedBudgetStatus:
    """Calculate derived status figures for a budget.

    Args:
        budget: Active budget.
        total_expenses: Sum of all expense amounts.
        now: Evaluation timestamp.

    Returns:
        DerivedBudgetStatus with unrounded Decimal figures.

    Raises:
        InvalidBudgetConfiguration: If the budget amount or duration is not positive.
    """
    validate_budget(budget)
    spent = _to_decimal(total_expenses)
    total = budget.total_amount

    remaining = total - spent
    percent_used = spent / total * 100
    elapsed = count_days_elapsed(budget.start_date, now)
    days_remaining = max(0, budget.duration - elapsed)
    daily_budget = total / budget.duration
    expected_spent = daily_budget * elapsed

    # Strict comparison; nothing is expected on day zero, so nothing is over.
    is_over_budget = expected_spent > 0 and spent > expected_spent

    return DerivedBudgetStatus(
        remaining=remaining,
        percent_used=percent_used,
        days_elapsed=elapsed,
        days_remaining=days_remaining,
        daily_budget=daily_budget,
        expected_spent=expected_spent,
        is_over_budget=is_over_budget,
        daily_remaining=remaining / max(1, days_remaining),
    )


def calculate_overspend_percent(total_expenses: Decimal, expected_spent: Decimal) -> Decimal | None:
    """How far spending exceeds the expected amount, in percent (one decimal).

    Returns:
        Overspend percentage, or None when nothing is expected yet.
    """
    if expected_spent <= 0:
        return None
    return quantize((_to_decimal(total_expenses) / expected_spent - 1) * 100, TENTHS)


def build_tips(
    budget: Budget,
    status: DerivedBudgetStatus,
    total_expenses: Decimal,
    currency: str = "INR",
) -> list[Tip]:
    """Build advisory tips for a computed status.

    Order is fixed: overspend, daily allowance, under-spend, exhaustion.
    Tips never feed back into the status.
    """
    tips: list[Tip] = []

    if status.is_over_budget:
        overspend = calculate_overspend_percent(total_expenses, status.expected_spent)
        if overspend is not None:
            tips.append(
                Tip(
                    kind=TipKind.WARNING,
                    title="Over Budget Alert",
                    message=(
                        f"You're spending {overspend}% more than planned. "
                        "Consider reducing discretionary expenses."
                    ),
                )
            )

    if status.days_remaining > 0:
        tips.append(
            Tip(
                kind=TipKind.INFO,
                title="Daily Budget Tip",
                message=(
                    f"You have {format_currency(status.daily_remaining, currency)} to spend "
                    f"per day for the remaining {status.days_remaining} days."
                ),
            )
        )

    # days_elapsed > duration * 0.5, kept in integers
    if status.percent_used < UNDERSPEND_PERCENT and status.days_elapsed * 2 > budget.duration:
        tips.append(
            Tip(
                kind=TipKind.SUCCESS,
                title="Great Progress!",
                message=(
                    "You're doing well with your budget. "
                    "You might even have some savings this period."
                ),
            )
        )

    if status.percent_used > EXHAUSTION_PERCENT:
        tips.append(
            Tip(
                kind=TipKind.WARNING,
                title="Budget Warning",
                message=(
                    f"You've used {quantize(status.percent_used, TENTHS)}% of your budget. "
                    "Time to be more careful with spending."
                ),
            )
        )

    return tips


def evaluate_budget(
    budget: Budget | None,
    total_expenses: Decimal,
    now: datetime,
    currency: str = "INR",
) -> BudgetEvaluation:
    """Evaluate a budget: derived status plus advisory tips.

    Args:
        budget: Active budget, or None if none is configured.
        total_expenses: Sum of all expense amounts.
        now: Evaluation timestamp.
        currency: Currency code used in tip messages.

    Returns:
        BudgetEvaluation; status is None and tips empty without a budget.
    """
    if budget is None:
        return BudgetEvaluation()

    spent = _to_decimal(total_expenses)
    status = calculate_budget_status(budget, spent, now)
    return BudgetEvaluation(
        status=status,
        tips=build_tips(budget, status, spent, currency),
    )


def evaluate_snapshot(snapshot: Snapshot, now: datetime, currency: str = "INR") -> BudgetEvaluation:
    """Evaluate the budget of a snapshot against all of its expenses."""
    return evaluate_budget(snapshot.budget, snapshot.total_expenses, now, currency)


def calculate_window_budget(budget: Budget, window: AlertWindow) -> Decimal:
    """Share of the budget allotted to one week or one 30-day month."""
    validate_budget(budget)
    # total / (duration / days), multiplied first to stay exact
    return budget.total_amount * _WINDOW_DAYS[window] / budget.duration


def check_spending_alert(
    budget: Budget | None,
    window_total: Decimal,
    new_amount: Decimal,
    window: AlertWindow = AlertWindow.WEEK,
) -> Tip | None:
    """Warn when a new expense pushes window spending past 90% of its share.

    Args:
        budget: Active budget, or None.
        window_total: Spending already recorded in the window.
        new_amount: Amount of the expense being added.
        window: Week or month.

    Returns:
        Warning tip, or None if below the threshold or no budget exists.
    """
    if budget is None:
        return None

    limit = calculate_window_budget(budget, window)
    if _to_decimal(window_total) + _to_decimal(new_amount) > limit * ALERT_RATIO:
        label = "weekly" if window == AlertWindow.WEEK else "monthly"
        return Tip(
            kind=TipKind.WARNING,
            title="Budget Warning",
            message=f"You're approaching your {label} budget limit!",
        )
    return None
