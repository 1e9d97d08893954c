"""Domain models and types for shopledger.

This package contains the functional core:
- Pure functions with no side effects
- No I/O operations
- Easy to test
- Business logic separated from infrastructure
"""

from shopledger.domain.errors import ConfigError, LedgerError, NotFoundError, StoreError, ValidationError
from shopledger.domain.models import ClockTime, DailyEarning, IsoDate, Money, Note, Payment, PaymentInput

__all__ = [
    "ClockTime",
    "ConfigError",
    "DailyEarning",
    "IsoDate",
    "LedgerError",
    "Money",
    "Note",
    "NotFoundError",
    "Payment",
    "PaymentInput",
    "StoreError",
    "ValidationError",
]
