"""Pure functions for ledger balances.

This module contains the functional core for reconciliation:
- No I/O operations (no database, no console, no files)
- No side effects
- Exact Decimal arithmetic, never rounded here

A missing earnings record for a date is a zero, not an error.
"""

from collections.abc import Iterable
from dataclasses import dataclass

from shopledger.domain.models import ZERO, DailyEarning, IsoDate, Money, Payment


@dataclass(frozen=True)
class PeriodTotals:
    """Immutable totals over a set of payments and earnings."""

    total_payments: Money
    total_earnings: Money
    net_balance: Money


@dataclass(frozen=True)
class DashboardSummary:
    """Immutable figures for the dashboard view."""

    today_earnings: Money
    today_payments: Money
    remaining_balance: Money
    total_payments: Money


def sum_amounts(amounts: Iterable[Money]) -> Money:
    """Sum amounts exactly, starting from a Decimal zero."""
    return Money(sum(amounts, ZERO))


def earnings_for_date(date: IsoDate, earnings: Iterable[DailyEarning]) -> Money:
    """Find the earnings amount recorded for a date.

    Args:
        date: Date to look up.
        earnings: Earnings records.

    Returns:
        The earnings amount, or zero when no record exists.
    """
    for earning in earnings:
        if earning.date == date:
            return earning.earnings_amount
    return ZERO


def payments_for_date(date: IsoDate, payments: Iterable[Payment]) -> Money:
    """Sum the payments made on a date."""
    return sum_amounts(payment.amount for payment in payments if payment.date == date)


def daily_balance(date: IsoDate, payments: Iterable[Payment], earnings: Iterable[DailyEarning]) -> Money:
    """Calculate what is left of a day's earnings after that day's payments.

    Args:
        date: Date to balance.
        payments: Payment records (any dates; only matching ones count).
        earnings: Earnings records.

    Returns:
        Earnings for the date minus payments on the date (may be negative).
    """
    return Money(earnings_for_date(date, earnings) - payments_for_date(date, payments))


def period_totals(payments: Iterable[Payment], earnings: Iterable[DailyEarning]) -> PeriodTotals:
    """Calculate totals over whole collections of payments and earnings.

    Args:
        payments: Payment records.
        earnings: Earnings records.

    Returns:
        PeriodTotals where net_balance is total_earnings - total_payments.
    """
    total_payments = sum_amounts(payment.amount for payment in payments)
    total_earnings = sum_amounts(earning.earnings_amount for earning in earnings)
    return PeriodTotals(
        total_payments=total_payments,
        total_earnings=total_earnings,
        net_balance=Money(total_earnings - total_payments),
    )


def dashboard_summary(
    today: IsoDate,
    payments: list[Payment],
    earnings: list[DailyEarning],
) -> DashboardSummary:
    """Build the dashboard figures for a given day.

    Args:
        today: The day the dashboard is shown for.
        payments: All payment records.
        earnings: Earnings records (only today's is used).

    Returns:
        DashboardSummary with today's figures and the all-time payment total.
    """
    today_earnings = earnings_for_date(today, earnings)
    today_payments = payments_for_date(today, payments)
    return DashboardSummary(
        today_earnings=today_earnings,
        today_payments=today_payments,
        remaining_balance=Money(today_earnings - today_payments),
        total_payments=sum_amounts(payment.amount for payment in payments),
    )


def format_money(amount: Money, symbol: str = "₹") -> str:
    """Format an amount for display, rounded to two places.

    Args:
        amount: Amount to display.
        symbol: Currency symbol prefix.

    Returns:
        Formatted string (e.g., "₹1,234.50" or "-₹50.00").
    """
    formatted = f"{symbol}{abs(amount):,.2f}"
    return f"-{formatted}" if amount < 0 else formatted
