"""Domain type definitions for shopledger.

These NewTypes provide semantic clarity and help with type checking:
- Money: Currency amount as an exact Decimal (never float)
- IsoDate: Calendar date in YYYY-MM-DD format
- ClockTime: Local time of day in HH:MM format

The store keeps money as integer minor units (paise/pence); the helpers
at the bottom of this module convert between the two representations.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import NewType

Money = NewType("Money", Decimal)

# Dates are always YYYY-MM-DD so lexical order equals calendar order
IsoDate = NewType("IsoDate", str)

# Times are always zero-padded HH:MM for the same reason
ClockTime = NewType("ClockTime", str)

MINOR_UNITS = 100
MINOR_UNIT_DIGITS = 2

# Largest value the store's 64-bit INTEGER column can hold
MAX_MINOR_UNITS = 2**63 - 1

ZERO = Money(Decimal("0"))


@dataclass(frozen=True)
class PaymentInput:
    """Mutable fields of a payment, as supplied on create or full replace."""

    date: IsoDate
    time: ClockTime
    amount: Money
    purpose: str
    notes: str | None = None


@dataclass(frozen=True)
class Payment:
    """Immutable payment (one discrete expense event)."""

    id: int
    date: IsoDate
    time: ClockTime
    amount: Money
    purpose: str
    notes: str | None = None


@dataclass(frozen=True)
class DailyEarning:
    """Immutable earnings record, at most one per date."""

    date: IsoDate
    earnings_amount: Money
    notes: str | None = None


@dataclass(frozen=True)
class Note:
    """Immutable dated free-text note."""

    id: int
    date: IsoDate
    content: str


def to_minor_units(amount: Money) -> int:
    """Convert a Decimal amount to integer minor units.

    Args:
        amount: Amount with at most two fractional digits.

    Returns:
        Amount in minor units (e.g. 12.34 -> 1234).
    """
    return int(amount * MINOR_UNITS)


def from_minor_units(value: int) -> Money:
    """Convert integer minor units back to a two-place Decimal amount."""
    return Money(Decimal(value).scaleb(-MINOR_UNIT_DIGITS))
