"""Tests for the budget status engine."""

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from paisaplan.core.exceptions import InvalidBudgetConfiguration
from paisaplan.core.models import AlertWindow, Budget, Expense, Snapshot, TipKind
from paisaplan.engine.calculator import (
    calculate_budget_status,
    calculate_overspend_percent,
    calculate_window_budget,
    check_spending_alert,
    evaluate_budget,
    evaluate_snapshot,
)

T0 = datetime(2024, 1, 1, tzinfo=timezone.utc)


def make_budget(total: str = "3000", duration: int = 30, start: datetime = T0) -> Budget:
    return Budget(total_amount=Decimal(total), duration=duration, start_date=start)


class TestCalculateBudgetStatus:
    """Tests for calculate_budget_status function."""

    def test_on_pace_scenario(self) -> None:
        """3000 over 30 days, 1000 spent after 10 days is exactly on pace."""
        status = calculate_budget_status(make_budget(), Decimal("1000"), T0 + timedelta(days=10))

        assert status.daily_budget == Decimal("100")
        assert status.expected_spent == Decimal("1000")
        assert status.is_over_budget is False  # not strictly greater
        assert status.remaining == Decimal("2000")
        assert status.days_elapsed == 10
        assert status.days_remaining == 20
        assert status.daily_remaining == Decimal("100.00")

    def test_over_pace_scenario(self) -> None:
        """Spending more than expected marks the budget as over."""
        status = calculate_budget_status(make_budget(), Decimal("1500"), T0 + timedelta(days=10))
        assert status.is_over_budget is True
        assert status.remaining == Decimal("1500")

    def test_percent_used(self) -> None:
        status = calculate_budget_status(make_budget("1000", 10), Decimal("250"), T0)
        assert status.percent_used == Decimal("25")

    def test_partial_days_are_floored(self) -> None:
        """10 days and 23 hours counts as 10 elapsed days."""
        now = T0 + timedelta(days=10, hours=23)
        status = calculate_budget_status(make_budget(), Decimal("0"), now)
        assert status.days_elapsed == 10

    def test_days_elapsed_clamped_before_start(self) -> None:
        """A budget starting in the future has zero elapsed days."""
        status = calculate_budget_status(make_budget(), Decimal("0"), T0 - timedelta(hours=1))
        assert status.days_elapsed == 0
        assert status.days_remaining == 30
        assert status.expected_spent == Decimal(0)

    def test_period_ended(self) -> None:
        """Past the end, days_remaining floors at 0 and daily_remaining divides by 1."""
        now = T0 + timedelta(days=45)
        status = calculate_budget_status(make_budget(), Decimal("3100"), now)

        assert status.days_elapsed == 45
        assert status.days_remaining == 0
        assert status.remaining == Decimal("-100")
        assert status.daily_remaining == Decimal("-100")

    def test_zero_expected_is_not_over_budget(self) -> None:
        """On day zero nothing is expected, so spending is never 'over'."""
        status = calculate_budget_status(make_budget(), Decimal("50"), T0)
        assert status.expected_spent == Decimal(0)
        assert status.is_over_budget is False

    def test_naive_start_date_treated_as_utc(self) -> None:
        """Naive and aware timestamps can be mixed."""
        budget = make_budget(start=datetime(2024, 1, 1))
        status = calculate_budget_status(budget, Decimal("0"), T0 + timedelta(days=3))
        assert status.days_elapsed == 3

    def test_accepts_int_total(self) -> None:
        status = calculate_budget_status(make_budget(), 1000, T0 + timedelta(days=10))
        assert status.remaining == Decimal("2000")

    def test_remaining_non_negative_within_budget(self) -> None:
        """remaining = total - spent and stays >= 0 while spent <= total."""
        budget = make_budget()
        for spent in ("0", "0.01", "1500", "2999.99", "3000"):
            status = calculate_budget_status(budget, Decimal(spent), T0 + timedelta(days=5))
            assert status.remaining == Decimal("3000") - Decimal(spent)
            assert status.remaining >= 0

    def test_percent_used_monotonic(self) -> None:
        budget = make_budget()
        now = T0 + timedelta(days=5)
        percents = [
            calculate_budget_status(budget, Decimal(spent), now).percent_used
            for spent in ("0", "10", "999.99", "1000", "2500", "4000")
        ]
        assert percents == sorted(percents)
        assert len(set(percents)) == len(percents)

    def test_days_remaining_never_negative(self) -> None:
        budget = make_budget()
        for days in (0, 29, 30, 31, 365, 10_000):
            status = calculate_budget_status(budget, Decimal("0"), T0 + timedelta(days=days))
            assert status.days_remaining >= 0


class TestInvalidBudget:
    """Budgets that cannot produce a status raise instead of returning NaN."""

    @pytest.mark.parametrize(
        ("total", "duration"),
        [("0", 30), ("-100", 30), ("3000", 0), ("3000", -5)],
    )
    def test_raises(self, total: str, duration: int) -> None:
        with pytest.raises(InvalidBudgetConfiguration):
            calculate_budget_status(make_budget(total, duration), Decimal("0"), T0)

    def test_evaluate_budget_raises(self) -> None:
        with pytest.raises(InvalidBudgetConfiguration):
            evaluate_budget(make_budget("0", 30), Decimal("10"), T0)

    def test_is_value_error(self) -> None:
        """Callers catching ValueError also see invalid budgets."""
        assert issubclass(InvalidBudgetConfiguration, ValueError)


class TestEvaluateBudget:
    """Tests for evaluate_budget: status plus ordered tips."""

    def test_no_budget(self) -> None:
        """Without a budget there is no status and no tips."""
        evaluation = evaluate_budget(None, Decimal("500"), T0)
        assert evaluation.status is None
        assert evaluation.tips == []

    def test_on_pace_only_daily_tip(self) -> None:
        evaluation = evaluate_budget(make_budget(), Decimal("1000"), T0 + timedelta(days=10))

        assert [t.kind for t in evaluation.tips] == [TipKind.INFO]
        tip = evaluation.tips[0]
        assert tip.title == "Daily Budget Tip"
        assert "₹100.00" in tip.message
        assert "remaining 20 days" in tip.message

    def test_overspend_tip(self) -> None:
        """1500 spent vs 1000 expected is 50.0% over."""
        evaluation = evaluate_budget(make_budget(), Decimal("1500"), T0 + timedelta(days=10))

        assert [t.kind for t in evaluation.tips] == [TipKind.WARNING, TipKind.INFO]
        assert evaluation.tips[0].title == "Over Budget Alert"
        assert "50.0%" in evaluation.tips[0].message

    def test_success_tip_when_under_spending(self) -> None:
        """10% used after 6 of 10 days earns a success tip."""
        evaluation = evaluate_budget(make_budget("1000", 10), Decimal("100"), T0 + timedelta(days=6))

        assert evaluation.status is not None
        assert evaluation.status.percent_used == Decimal("10")
        assert [t.kind for t in evaluation.tips] == [TipKind.INFO, TipKind.SUCCESS]
        assert evaluation.tips[1].title == "Great Progress!"

    def test_no_success_tip_at_exact_half(self) -> None:
        """days_elapsed must be strictly more than half the duration."""
        evaluation = evaluate_budget(make_budget("1000", 10), Decimal("100"), T0 + timedelta(days=5))
        assert TipKind.SUCCESS not in [t.kind for t in evaluation.tips]

    def test_exhaustion_warning_while_on_pace(self) -> None:
        """85% used triggers the exhaustion warning even when under the expected pace."""
        evaluation = evaluate_budget(make_budget("1000", 10), Decimal("850"), T0 + timedelta(days=9))

        assert evaluation.status is not None
        assert evaluation.status.is_over_budget is False
        assert [t.title for t in evaluation.tips] == ["Daily Budget Tip", "Budget Warning"]
        assert "85.0%" in evaluation.tips[1].message

    def test_exhaustion_warning_while_over_pace(self) -> None:
        """All matching tips appear, in fixed order."""
        evaluation = evaluate_budget(make_budget("1000", 10), Decimal("850"), T0 + timedelta(days=2))

        assert [t.title for t in evaluation.tips] == [
            "Over Budget Alert",
            "Daily Budget Tip",
            "Budget Warning",
        ]
        assert "325.0%" in evaluation.tips[0].message

    def test_no_daily_tip_after_period_end(self) -> None:
        evaluation = evaluate_budget(make_budget(), Decimal("100"), T0 + timedelta(days=30))
        assert "Daily Budget Tip" not in [t.title for t in evaluation.tips]

    def test_no_overspend_tip_on_day_zero(self) -> None:
        evaluation = evaluate_budget(make_budget(), Decimal("2900"), T0)
        assert "Over Budget Alert" not in [t.title for t in evaluation.tips]
        assert "Budget Warning" in [t.title for t in evaluation.tips]

    def test_currency_in_message(self) -> None:
        evaluation = evaluate_budget(make_budget(), Decimal("0"), T0, currency="USD")
        assert "$100.00" in evaluation.tips[0].message

    def test_tips_do_not_change_status(self) -> None:
        now = T0 + timedelta(days=2)
        status = calculate_budget_status(make_budget("1000", 10), Decimal("850"), now)
        evaluation = evaluate_budget(make_budget("1000", 10), Decimal("850"), now)
        assert evaluation.status == status

    def test_idempotent(self) -> None:
        """Same inputs, same output."""
        budget = make_budget()
        now = T0 + timedelta(days=12)
        first = evaluate_budget(budget, Decimal("1337.25"), now)
        second = evaluate_budget(budget, Decimal("1337.25"), now)
        assert first == second


class TestEvaluateSnapshot:
    """Tests for evaluate_snapshot function."""

    def test_sums_expenses(self) -> None:
        snapshot = Snapshot(
            budget=make_budget(),
            expenses=[
                Expense(title="Rent", amount=Decimal("900"), category="bills", date=T0),
                Expense(title="Food", amount=Decimal("100"), category="food", date=T0),
            ],
        )
        evaluation = evaluate_snapshot(snapshot, T0 + timedelta(days=10))
        assert evaluation.status is not None
        assert evaluation.status.remaining == Decimal("2000")

    def test_without_budget(self) -> None:
        assert evaluate_snapshot(Snapshot.empty(), T0).status is None


class TestCalculateOverspendPercent:
    """Tests for calculate_overspend_percent function."""

    def test_rounds_to_one_decimal(self) -> None:
        assert calculate_overspend_percent(Decimal("1234"), Decimal("1000")) == Decimal("23.4")

    def test_zero_expected(self) -> None:
        assert calculate_overspend_percent(Decimal("10"), Decimal("0")) is None


class TestSpendingAlert:
    """Tests for check_spending_alert: the warning shown when adding an expense."""

    def test_weekly_window_budget(self) -> None:
        """3000 over 30 days allots 700 per week."""
        assert calculate_window_budget(make_budget(), AlertWindow.WEEK) == Decimal("700")

    def test_monthly_window_budget(self) -> None:
        assert calculate_window_budget(make_budget("6000", 60), AlertWindow.MONTH) == Decimal("3000")

    def test_alert_above_ninety_percent(self) -> None:
        tip = check_spending_alert(make_budget(), Decimal("600"), Decimal("40"))
        assert tip is not None
        assert tip.kind == TipKind.WARNING
        assert "weekly" in tip.message

    def test_no_alert_at_threshold(self) -> None:
        """Exactly 90% (630 of 700) does not alert."""
        assert check_spending_alert(make_budget(), Decimal("600"), Decimal("30")) is None

    def test_monthly_alert(self) -> None:
        tip = check_spending_alert(make_budget(), Decimal("2700"), Decimal("1"), AlertWindow.MONTH)
        assert tip is not None
        assert "monthly" in tip.message

    def test_no_budget(self) -> None:
        assert check_spending_alert(None, Decimal("99999"), Decimal("1")) is None
