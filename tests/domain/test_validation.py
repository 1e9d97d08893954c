"""Tests for shopledger.domain.validation."""

from decimal import Decimal

import pytest

from shopledger.domain.errors import ValidationError
from shopledger.domain.models import ClockTime, IsoDate, Money, PaymentInput
from shopledger.domain.validation import (
    clean_optional_text,
    validate_amount,
    validate_date,
    validate_payment,
    validate_text,
    validate_time,
)


def make_input(**overrides: object) -> PaymentInput:
    fields: dict[str, object] = {
        "date": IsoDate("2024-01-01"),
        "time": ClockTime("09:00"),
        "amount": Money(Decimal("10.00")),
        "purpose": "Rent",
        "notes": None,
    }
    fields.update(overrides)
    return PaymentInput(**fields)  # type: ignore[arg-type]


class TestValidatePayment:
    """Tests for validate_payment."""

    def test_valid_payment_is_normalized(self) -> None:
        """Should trim purpose and map blank notes to None."""
        clean = validate_payment(make_input(purpose="  Rent  ", notes="   "))

        assert clean.purpose == "Rent"
        assert clean.notes is None

    def test_zero_amount_allowed(self) -> None:
        """Should accept a zero amount."""
        assert validate_payment(make_input(amount=Money(Decimal("0")))).amount == 0

    def test_negative_amount_rejected(self) -> None:
        """Should reject negative amounts."""
        with pytest.raises(ValidationError, match="negative"):
            validate_payment(make_input(amount=Money(Decimal("-1"))))

    def test_empty_purpose_rejected(self) -> None:
        """Should reject blank purpose."""
        with pytest.raises(ValidationError, match="purpose"):
            validate_payment(make_input(purpose="   "))

    def test_malformed_date_rejected(self) -> None:
        """Should reject dates that are not YYYY-MM-DD."""
        with pytest.raises(ValidationError):
            validate_payment(make_input(date="01/01/2024"))


class TestFieldValidators:
    """Tests for the single-field validators."""

    def test_impossible_date_rejected(self) -> None:
        """Should reject dates that do not exist."""
        with pytest.raises(ValidationError):
            validate_date("2023-02-29")

    def test_unpadded_date_rejected(self) -> None:
        """Should reject dates without zero padding."""
        with pytest.raises(ValidationError):
            validate_date("2024-1-5")

    def test_time_must_be_padded(self) -> None:
        """Should require HH:MM."""
        assert validate_time("07:05") == "07:05"
        with pytest.raises(ValidationError):
            validate_time("7:05")

    def test_amount_precision(self) -> None:
        """Should allow two decimal places and reject more."""
        assert validate_amount(Decimal("1.25")) == Decimal("1.25")
        with pytest.raises(ValidationError):
            validate_amount(Decimal("1.255"))

    def test_amount_must_be_finite(self) -> None:
        """Should reject NaN and infinity."""
        with pytest.raises(ValidationError):
            validate_amount(Decimal("NaN"))
        with pytest.raises(ValidationError):
            validate_amount(Decimal("Infinity"))

    def test_amount_must_fit_store(self) -> None:
        """Should reject amounts beyond the 64-bit minor-unit range."""
        assert validate_amount(Decimal("92233720368547758.07")) == Decimal("92233720368547758.07")
        with pytest.raises(ValidationError, match="too large"):
            validate_amount(Decimal("92233720368547758.08"))
        with pytest.raises(ValidationError, match="too large"):
            validate_amount(Decimal("1e30"))

    def test_text_trimmed(self) -> None:
        """Should trim required text."""
        assert validate_text("  hello ", "content") == "hello"

    def test_optional_text(self) -> None:
        """Should keep None and map blank text to None."""
        assert clean_optional_text(None) is None
        assert clean_optional_text(" \n") is None
        assert clean_optional_text(" note ") == "note"
