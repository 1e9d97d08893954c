"""Pure functions for the payment history view.

This module contains the functional core behind `shopledger history`:
- No I/O operations (no database, no console, no files)
- No side effects, no state kept between calls
- Pure data transformations

The pipeline is filter -> sort -> join. Filtering is a conjunction of
independently optional bounds; an unset bound imposes no constraint.
The store applies the same semantics in SQL (see store.queries), and the
two must stay observably equivalent.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

from shopledger.domain.errors import ValidationError
from shopledger.domain.models import DailyEarning, IsoDate, Money, Payment, from_minor_units


# Two places, like stored amounts
NO_EARNINGS = from_minor_units(0)


class SortKey(str, Enum):
    """Named field + direction combinations for ordering history."""

    DATE_ASC = "date-asc"
    DATE_DESC = "date-desc"
    AMOUNT_ASC = "amount-asc"
    AMOUNT_DESC = "amount-desc"

    @property
    def field(self) -> str:
        return self.value.split("-")[0]

    @property
    def descending(self) -> bool:
        return self.value.endswith("-desc")

    @classmethod
    def parse(cls, value: "str | SortKey") -> "SortKey":
        """Parse a sort key name such as 'date-desc'.

        Raises:
            ValidationError: If the name is not a known sort key.
        """
        try:
            return cls(value)
        except ValueError as e:
            choices = ", ".join(key.value for key in cls)
            raise ValidationError(f"Unknown sort key '{value}' (choose from: {choices})") from e


DEFAULT_SORT = SortKey.DATE_DESC


@dataclass(frozen=True)
class FilterSpec:
    """Independently optional bounds, combined with AND.

    Date bounds are inclusive ISO dates, amount bounds are inclusive, and
    purpose_substring matches case-insensitively anywhere in the purpose.
    """

    date_from: IsoDate | None = None
    date_to: IsoDate | None = None
    min_amount: Money | None = None
    max_amount: Money | None = None
    purpose_substring: str | None = None

    def is_empty(self) -> bool:
        """True when no bound is set."""
        return all(
            value is None
            for value in (self.date_from, self.date_to, self.min_amount, self.max_amount, self.purpose_substring)
        )


@dataclass(frozen=True)
class HistoryRow:
    """A payment paired with the earnings recorded for its date."""

    payment: Payment
    daily_earnings: Money


def normalize_purpose_query(text: str) -> str:
    """Normalize purpose text for case-insensitive substring matching."""
    return text.casefold()


def matches_filter(payment: Payment, spec: FilterSpec) -> bool:
    """Check whether a payment satisfies every bound set in a filter.

    Args:
        payment: Payment to test.
        spec: Filter specification.

    Returns:
        True if all set bounds hold (always True for an empty spec).
    """
    if spec.date_from is not None and payment.date < spec.date_from:
        return False
    if spec.date_to is not None and payment.date > spec.date_to:
        return False
    if spec.min_amount is not None and payment.amount < spec.min_amount:
        return False
    if spec.max_amount is not None and payment.amount > spec.max_amount:
        return False
    if spec.purpose_substring is not None:
        needle = normalize_purpose_query(spec.purpose_substring)
        if needle not in normalize_purpose_query(payment.purpose):
            return False
    return True


def filter_payments(payments: Iterable[Payment], spec: FilterSpec) -> list[Payment]:
    """Select payments matching a filter, preserving input order."""
    return [payment for payment in payments if matches_filter(payment, spec)]


def sort_payments(payments: Iterable[Payment], sort_key: SortKey) -> list[Payment]:
    """Order payments by a sort key.

    Date keys break ties by time, then id, in the same direction, so
    date-desc is exactly the reverse of date-asc. Equal amounts keep their
    input order in both directions (Python's sort is stable even with
    reverse=True).

    Args:
        payments: Payments to order.
        sort_key: Sort key to apply.

    Returns:
        New sorted list.
    """
    if sort_key.field == "date":
        return sorted(payments, key=lambda p: (p.date, p.time, p.id), reverse=sort_key.descending)
    return sorted(payments, key=lambda p: p.amount, reverse=sort_key.descending)


def join_daily_earnings(payments: Iterable[Payment], earnings: Iterable[DailyEarning]) -> list[HistoryRow]:
    """Pair each payment with its date's earnings (zero when none).

    Args:
        payments: Ordered payments.
        earnings: Earnings records, unique by date.

    Returns:
        HistoryRow list in payment order.
    """
    earnings_by_date = {earning.date: earning.earnings_amount for earning in earnings}
    return [
        HistoryRow(payment=payment, daily_earnings=earnings_by_date.get(payment.date, NO_EARNINGS))
        for payment in payments
    ]


def run_history_query(
    payments: Iterable[Payment],
    earnings: Iterable[DailyEarning],
    spec: FilterSpec,
    sort_key: SortKey = DEFAULT_SORT,
) -> list[HistoryRow]:
    """Run the full filter -> sort -> join pipeline over a snapshot.

    Args:
        payments: Payment snapshot (either the whole collection or the
            result of a store query with the same filter).
        earnings: Earnings snapshot.
        spec: Filter specification.
        sort_key: Sort key.

    Returns:
        Ordered HistoryRow list.
    """
    selected = filter_payments(payments, spec)
    ordered = sort_payments(selected, sort_key)
    return join_daily_earnings(ordered, earnings)
