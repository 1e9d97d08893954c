"""Tests for shopledger.domain.history pure functions."""

from decimal import Decimal

import pytest

from shopledger.domain.errors import ValidationError
from shopledger.domain.history import (
    FilterSpec,
    SortKey,
    filter_payments,
    join_daily_earnings,
    matches_filter,
    run_history_query,
    sort_payments,
)
from shopledger.domain.models import ClockTime, DailyEarning, IsoDate, Money, Payment


def make_payment(payment_id: int, date: str, time: str, amount: str, purpose: str = "Stock") -> Payment:
    return Payment(
        id=payment_id,
        date=IsoDate(date),
        time=ClockTime(time),
        amount=Money(Decimal(amount)),
        purpose=purpose,
    )


PAYMENTS = [
    make_payment(1, "2024-01-02", "09:00", "100.00", "Rent"),
    make_payment(2, "2024-01-01", "18:30", "25.50", "Tea and snacks"),
    make_payment(3, "2024-01-02", "08:15", "40.00", "Electricity bill"),
    make_payment(4, "2024-01-03", "12:00", "25.50", "Stock: RICE"),
    make_payment(5, "2024-01-01", "07:45", "5.00", "Bus fare"),
]

EARNINGS = [
    DailyEarning(date=IsoDate("2024-01-01"), earnings_amount=Money(Decimal("500.00"))),
    DailyEarning(date=IsoDate("2024-01-03"), earnings_amount=Money(Decimal("320.00"))),
]


def ids(payments: list[Payment]) -> list[int]:
    return [payment.id for payment in payments]


class TestSortKey:
    """Tests for SortKey."""

    def test_parse_known_keys(self) -> None:
        """Should parse every documented key name."""
        assert SortKey.parse("date-asc") is SortKey.DATE_ASC
        assert SortKey.parse("date-desc") is SortKey.DATE_DESC
        assert SortKey.parse("amount-asc") is SortKey.AMOUNT_ASC
        assert SortKey.parse("amount-desc") is SortKey.AMOUNT_DESC

    def test_parse_member_passes_through(self) -> None:
        """Should accept an existing SortKey."""
        assert SortKey.parse(SortKey.AMOUNT_ASC) is SortKey.AMOUNT_ASC

    def test_parse_unknown_raises(self) -> None:
        """Should raise ValidationError for unknown names."""
        with pytest.raises(ValidationError, match="Unknown sort key"):
            SortKey.parse("purpose-asc")

    def test_field_and_direction(self) -> None:
        """Should expose field and direction."""
        assert SortKey.AMOUNT_DESC.field == "amount"
        assert SortKey.AMOUNT_DESC.descending
        assert SortKey.DATE_ASC.field == "date"
        assert not SortKey.DATE_ASC.descending


class TestMatchesFilter:
    """Tests for matches_filter."""

    def test_empty_spec_matches_everything(self) -> None:
        """Should impose no constraint when no bound is set."""
        spec = FilterSpec()
        assert spec.is_empty()
        assert all(matches_filter(payment, spec) for payment in PAYMENTS)

    def test_date_bounds_are_inclusive(self) -> None:
        """Should include payments on both boundary dates."""
        spec = FilterSpec(date_from=IsoDate("2024-01-01"), date_to=IsoDate("2024-01-02"))
        assert ids(filter_payments(PAYMENTS, spec)) == [1, 2, 3, 5]

    def test_amount_bounds_are_inclusive(self) -> None:
        """Should include payments equal to either amount bound."""
        spec = FilterSpec(min_amount=Money(Decimal("25.50")), max_amount=Money(Decimal("40")))
        assert ids(filter_payments(PAYMENTS, spec)) == [2, 3, 4]

    def test_purpose_is_case_insensitive_substring(self) -> None:
        """Should match purpose text anywhere, ignoring case."""
        spec = FilterSpec(purpose_substring="rice")
        assert ids(filter_payments(PAYMENTS, spec)) == [4]

    def test_purpose_with_like_wildcards_is_literal(self) -> None:
        """Should treat % and _ as ordinary characters."""
        spec = FilterSpec(purpose_substring="%")
        assert filter_payments(PAYMENTS, spec) == []

    def test_bounds_combine_with_and(self) -> None:
        """Should require every set bound to hold."""
        spec = FilterSpec(date_from=IsoDate("2024-01-02"), min_amount=Money(Decimal("30")))
        assert ids(filter_payments(PAYMENTS, spec)) == [1, 3]

    def test_adding_bounds_never_widens(self) -> None:
        """Should only narrow results as bounds are added."""
        specs = [
            FilterSpec(),
            FilterSpec(date_to=IsoDate("2024-01-02")),
            FilterSpec(date_to=IsoDate("2024-01-02"), min_amount=Money(Decimal("10"))),
            FilterSpec(date_to=IsoDate("2024-01-02"), min_amount=Money(Decimal("10")), purpose_substring="e"),
        ]
        counts = [len(filter_payments(PAYMENTS, spec)) for spec in specs]
        assert counts == sorted(counts, reverse=True)
        assert counts[-1] < counts[0]


class TestSortPayments:
    """Tests for sort_payments."""

    def test_date_ascending_breaks_ties_by_time_ascending(self) -> None:
        """Should order by date then time, oldest first."""
        assert ids(sort_payments(PAYMENTS, SortKey.DATE_ASC)) == [5, 2, 3, 1, 4]

    def test_date_descending_breaks_ties_by_time_descending(self) -> None:
        """Should order by date then time, newest first."""
        assert ids(sort_payments(PAYMENTS, SortKey.DATE_DESC)) == [4, 1, 3, 2, 5]

    def test_descending_is_reverse_of_ascending_for_distinct_keys(self) -> None:
        """Should give the same elements in reverse order."""
        ascending = sort_payments(PAYMENTS, SortKey.DATE_ASC)
        descending = sort_payments(PAYMENTS, SortKey.DATE_DESC)
        assert descending == list(reversed(ascending))

    def test_date_descending_reverses_full_ties(self) -> None:
        """Should order payments with the same date and time by id in the sort direction."""
        tied = [make_payment(payment_id, "2024-01-01", "09:00", "10.00") for payment_id in (2, 1, 3)]

        ascending = sort_payments(tied, SortKey.DATE_ASC)
        descending = sort_payments(tied, SortKey.DATE_DESC)

        assert ids(ascending) == [1, 2, 3]
        assert descending == list(reversed(ascending))

    def test_amount_ascending_is_stable(self) -> None:
        """Should keep input order among equal amounts."""
        assert ids(sort_payments(PAYMENTS, SortKey.AMOUNT_ASC)) == [5, 2, 4, 3, 1]

    def test_amount_descending_is_stable(self) -> None:
        """Should keep input order among equal amounts when descending."""
        assert ids(sort_payments(PAYMENTS, SortKey.AMOUNT_DESC)) == [1, 3, 2, 4, 5]

    def test_does_not_mutate_input(self) -> None:
        """Should return a new list."""
        original = list(PAYMENTS)
        sort_payments(PAYMENTS, SortKey.AMOUNT_ASC)
        assert PAYMENTS == original


class TestJoinDailyEarnings:
    """Tests for join_daily_earnings."""

    def test_resolves_earnings_by_date(self) -> None:
        """Should attach the day's earnings, or zero when none recorded."""
        rows = join_daily_earnings(PAYMENTS, EARNINGS)

        resolved = {row.payment.id: row.daily_earnings for row in rows}
        assert resolved == {
            1: Decimal("0"),
            2: Decimal("500.00"),
            3: Decimal("0"),
            4: Decimal("320.00"),
            5: Decimal("500.00"),
        }

    def test_missing_earnings_have_two_places(self) -> None:
        """Should render a missing day like a stored amount."""
        rows = join_daily_earnings(PAYMENTS, EARNINGS)
        assert str(rows[0].daily_earnings) == "0.00"

    def test_keeps_payment_order(self) -> None:
        """Should not reorder payments."""
        rows = join_daily_earnings(PAYMENTS, EARNINGS)
        assert [row.payment for row in rows] == PAYMENTS


class TestRunHistoryQuery:
    """Tests for run_history_query."""

    def test_filter_sort_join(self) -> None:
        """Should filter, then sort, then join."""
        spec = FilterSpec(date_from=IsoDate("2024-01-01"), date_to=IsoDate("2024-01-01"))

        rows = run_history_query(PAYMENTS, EARNINGS, spec, SortKey.DATE_ASC)

        assert [row.payment.id for row in rows] == [5, 2]
        assert all(row.daily_earnings == Decimal("500.00") for row in rows)

    def test_default_sort_is_newest_first(self) -> None:
        """Should default to date-desc."""
        rows = run_history_query(PAYMENTS, EARNINGS, FilterSpec())
        assert rows[0].payment.id == 4

    def test_no_hidden_state_between_calls(self) -> None:
        """Should give identical results for identical queries."""
        spec = FilterSpec(purpose_substring="e")
        first = run_history_query(PAYMENTS, EARNINGS, spec, SortKey.AMOUNT_DESC)
        second = run_history_query(PAYMENTS, EARNINGS, spec, SortKey.AMOUNT_DESC)
        assert first == second

    def test_empty_result(self) -> None:
        """Should return an empty list when nothing matches."""
        assert run_history_query(PAYMENTS, EARNINGS, FilterSpec(purpose_substring="zzz")) == []
