"""Tests for shopledger.domain.ledger pure functions."""

from decimal import Decimal

from shopledger.domain.ledger import (
    daily_balance,
    dashboard_summary,
    earnings_for_date,
    format_money,
    period_totals,
)
from shopledger.domain.models import ClockTime, DailyEarning, IsoDate, Money, Payment


def make_payment(payment_id: int, date: str, amount: str, time: str = "12:00") -> Payment:
    return Payment(
        id=payment_id,
        date=IsoDate(date),
        time=ClockTime(time),
        amount=Money(Decimal(amount)),
        purpose="Stock",
    )


def make_earning(date: str, amount: str) -> DailyEarning:
    return DailyEarning(date=IsoDate(date), earnings_amount=Money(Decimal(amount)))


PAYMENTS = [make_payment(1, "2024-03-01", "200"), make_payment(2, "2024-03-02", "50")]
EARNINGS = [make_earning("2024-03-01", "300")]


class TestPeriodTotals:
    """Tests for period_totals."""

    def test_example_totals(self) -> None:
        """Should total payments and earnings and net them."""
        totals = period_totals(PAYMENTS, EARNINGS)

        assert totals.total_payments == Decimal("250")
        assert totals.total_earnings == Decimal("300")
        assert totals.net_balance == Decimal("50")

    def test_net_is_exact_difference(self) -> None:
        """Should keep exact decimal arithmetic (no float drift)."""
        payments = [make_payment(i, "2024-01-01", "0.10") for i in range(3)]
        earnings = [make_earning("2024-01-01", "0.30")]

        totals = period_totals(payments, earnings)

        assert totals.total_payments == Decimal("0.30")
        assert totals.net_balance == totals.total_earnings - totals.total_payments
        assert totals.net_balance == Decimal("0")

    def test_empty_collections(self) -> None:
        """Should return zeros for empty input."""
        totals = period_totals([], [])

        assert totals.total_payments == 0
        assert totals.total_earnings == 0
        assert totals.net_balance == 0

    def test_does_not_round(self) -> None:
        """Should leave sub-cent precision alone."""
        totals = period_totals([], [make_earning("2024-01-01", "1.005")])
        assert totals.total_earnings == Decimal("1.005")


class TestDailyBalance:
    """Tests for daily_balance."""

    def test_day_with_earnings(self) -> None:
        """Should subtract that day's payments from that day's earnings."""
        assert daily_balance(IsoDate("2024-03-01"), PAYMENTS, EARNINGS) == Decimal("100")

    def test_day_without_earnings_is_negative_payments(self) -> None:
        """Should treat missing earnings as zero."""
        assert daily_balance(IsoDate("2024-03-02"), PAYMENTS, EARNINGS) == Decimal("-50")

    def test_day_with_nothing(self) -> None:
        """Should be zero when there is no activity."""
        assert daily_balance(IsoDate("2024-04-01"), PAYMENTS, EARNINGS) == 0

    def test_multiple_payments_same_day(self) -> None:
        """Should sum every payment on the day."""
        payments = [
            make_payment(1, "2024-03-01", "10.25", "09:00"),
            make_payment(2, "2024-03-01", "4.75", "17:00"),
        ]
        assert daily_balance(IsoDate("2024-03-01"), payments, EARNINGS) == Decimal("285.00")


class TestEarningsForDate:
    """Tests for earnings_for_date."""

    def test_found(self) -> None:
        """Should return the recorded amount."""
        assert earnings_for_date(IsoDate("2024-03-01"), EARNINGS) == Decimal("300")

    def test_missing_is_zero(self) -> None:
        """Should return zero when no record exists."""
        assert earnings_for_date(IsoDate("2024-03-02"), EARNINGS) == 0


class TestDashboardSummary:
    """Tests for dashboard_summary."""

    def test_summary_for_day(self) -> None:
        """Should combine today's figures with the all-time payment total."""
        summary = dashboard_summary(IsoDate("2024-03-01"), PAYMENTS, EARNINGS)

        assert summary.today_earnings == Decimal("300")
        assert summary.today_payments == Decimal("200")
        assert summary.remaining_balance == Decimal("100")
        assert summary.total_payments == Decimal("250")

    def test_summary_without_earnings(self) -> None:
        """Should show a negative balance when nothing was earned."""
        summary = dashboard_summary(IsoDate("2024-03-02"), PAYMENTS, [])

        assert summary.today_earnings == 0
        assert summary.remaining_balance == Decimal("-50")


class TestFormatMoney:
    """Tests for format_money."""

    def test_positive(self) -> None:
        """Should format with symbol, separators and two places."""
        assert format_money(Money(Decimal("1234.5"))) == "₹1,234.50"

    def test_negative(self) -> None:
        """Should put the sign before the symbol."""
        assert format_money(Money(Decimal("-50")), "£") == "-£50.00"
