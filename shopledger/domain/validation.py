"""Entity invariant checks.

Pure functions that raise ValidationError before any store interaction.
Callers (the CLI) pass already-parsed primitives; these checks guard the
invariants the store relies on.
"""

import re
from datetime import datetime
from decimal import Decimal

from shopledger.domain.errors import ValidationError
from shopledger.domain.models import (
    MAX_MINOR_UNITS,
    MINOR_UNIT_DIGITS,
    ClockTime,
    IsoDate,
    Money,
    PaymentInput,
    to_minor_units,
)

_TIME_PATTERN = re.compile(r"^\d{2}:\d{2}$")


def validate_date(value: str) -> IsoDate:
    """Check that a value is a real calendar date in YYYY-MM-DD format.

    Raises:
        ValidationError: If the value is malformed or not a real date.
    """
    try:
        parsed = datetime.strptime(value, "%Y-%m-%d")
    except (TypeError, ValueError) as e:
        raise ValidationError(f"Invalid date '{value}': expected YYYY-MM-DD") from e
    if parsed.strftime("%Y-%m-%d") != value:
        raise ValidationError(f"Invalid date '{value}': expected YYYY-MM-DD")
    return IsoDate(value)


def validate_time(value: str) -> ClockTime:
    """Check that a value is a zero-padded 24-hour HH:MM time.

    Raises:
        ValidationError: If the value is malformed or out of range.
    """
    if not isinstance(value, str) or not _TIME_PATTERN.match(value):
        raise ValidationError(f"Invalid time '{value}': expected HH:MM")
    hours, minutes = (int(part) for part in value.split(":"))
    if hours > 23 or minutes > 59:
        raise ValidationError(f"Invalid time '{value}': expected HH:MM")
    return ClockTime(value)


def validate_amount(value: Decimal, field: str = "amount") -> Money:
    """Check that an amount is a finite, non-negative, two-place decimal.

    Args:
        value: Amount to check.
        field: Field name used in the error message.

    Returns:
        The amount as Money.

    Raises:
        ValidationError: If the amount is negative, not finite, too large to
            store, or has more than two fractional digits.
    """
    if not isinstance(value, Decimal) or not value.is_finite():
        raise ValidationError(f"{field} must be a decimal number")
    if value < 0:
        raise ValidationError(f"{field} must not be negative")
    exponent = value.as_tuple().exponent
    if isinstance(exponent, int) and exponent < -MINOR_UNIT_DIGITS:
        raise ValidationError(f"{field} must have at most {MINOR_UNIT_DIGITS} decimal places")
    if to_minor_units(Money(value)) > MAX_MINOR_UNITS:
        raise ValidationError(f"{field} is too large")
    return Money(value)


def validate_text(value: str, field: str) -> str:
    """Check that required text is non-empty after trimming; returns it trimmed."""
    trimmed = value.strip() if isinstance(value, str) else ""
    if not trimmed:
        raise ValidationError(f"{field} must not be empty")
    return trimmed


def clean_optional_text(value: str | None) -> str | None:
    """Trim optional text, mapping blank values to None."""
    if value is None:
        return None
    trimmed = value.strip()
    return trimmed or None


def validate_payment(data: PaymentInput) -> PaymentInput:
    """Validate every field of a payment create/replace request.

    Returns:
        A normalized copy (purpose trimmed, blank notes mapped to None).

    Raises:
        ValidationError: On the first violated invariant.
    """
    return PaymentInput(
        date=validate_date(data.date),
        time=validate_time(data.time),
        amount=validate_amount(data.amount),
        purpose=validate_text(data.purpose, "purpose"),
        notes=clean_optional_text(data.notes),
    )
