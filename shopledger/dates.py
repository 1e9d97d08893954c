"""Date, time and amount input utilities for shopledger.

Normalises what people type at the command line into the canonical forms
the store expects. Everything here raises ValidationError on bad input.
"""

import calendar
from datetime import date, datetime
from decimal import Decimal, InvalidOperation

import pandas as pd

from shopledger.domain.errors import ValidationError
from shopledger.domain.models import ClockTime, IsoDate, Money
from shopledger.domain.validation import validate_amount, validate_time


def normalize_date(raw_date: str) -> IsoDate:
    """Normalize a date string to ISO format (YYYY-MM-DD).

    ISO input is taken as-is. Anything else goes through pandas.to_datetime
    with dayfirst=True, so 01/03/2024 is the 1st of March.

    Args:
        raw_date: Raw date string.

    Returns:
        Normalized date in YYYY-MM-DD format.

    Raises:
        ValidationError: If date cannot be parsed.
    """
    text = raw_date.strip()
    try:
        return IsoDate(datetime.strptime(text, "%Y-%m-%d").strftime("%Y-%m-%d"))
    except ValueError:
        pass

    try:
        parsed_date = pd.to_datetime(text, dayfirst=True)
    except (ValueError, OverflowError, pd.errors.ParserError) as e:
        raise ValidationError(f"Could not parse date '{raw_date}': {e}") from e
    if pd.isna(parsed_date):
        raise ValidationError(f"Could not parse date '{raw_date}'")
    return IsoDate(parsed_date.strftime("%Y-%m-%d"))


def normalize_time(raw_time: str) -> ClockTime:
    """Normalize a time string to zero-padded HH:MM.

    Accepts H:MM, HH:MM and HH:MM:SS (seconds are dropped).

    Raises:
        ValidationError: If the time cannot be parsed.
    """
    parts = raw_time.strip().split(":")
    if len(parts) not in (2, 3) or not all(part.isdigit() for part in parts):
        raise ValidationError(f"Invalid time '{raw_time}': expected HH:MM")
    return validate_time(f"{int(parts[0]):02d}:{int(parts[1]):02d}")


def parse_amount(raw_amount: str, field: str = "amount") -> Money:
    """Parse amount text such as "1,250.50" or "₹99" into an exact Decimal.

    Raises:
        ValidationError: If the text is not a valid non-negative amount.
    """
    cleaned = raw_amount.strip().replace(",", "").lstrip("₹£$€").strip()
    try:
        value = Decimal(cleaned)
    except InvalidOperation as e:
        raise ValidationError(f"Invalid {field} '{raw_amount}'") from e
    return validate_amount(value, field)


def today_iso() -> IsoDate:
    """Today's date as YYYY-MM-DD."""
    return IsoDate(date.today().isoformat())


def current_time() -> ClockTime:
    """The current local time as HH:MM."""
    return ClockTime(datetime.now().strftime("%H:%M"))


def month_bounds(month: str) -> tuple[IsoDate, IsoDate, str]:
    """Calculate inclusive date bounds and a label for a month.

    Args:
        month: Month in YYYY-MM format.

    Returns:
        Tuple of (first_day, last_day, label) where:
        - first_day: First day of month (YYYY-MM-DD)
        - last_day: Last day of month (YYYY-MM-DD)
        - label: Human-readable month (e.g., "January 2025")

    Raises:
        ValidationError: If the month is malformed.
    """
    try:
        dt = datetime.strptime(month, "%Y-%m")
    except ValueError as e:
        raise ValidationError(f"Invalid month '{month}': expected YYYY-MM") from e
    last_day = calendar.monthrange(dt.year, dt.month)[1]
    first = IsoDate(dt.strftime("%Y-%m-01"))
    last = IsoDate(dt.replace(day=last_day).strftime("%Y-%m-%d"))
    return first, last, dt.strftime("%B %Y")
