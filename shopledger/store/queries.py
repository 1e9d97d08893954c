"""Database query functions.

Every function opens its own short-lived connection, so each call works
on a fresh snapshot. sqlite3 errors are logged and re-raised as
StoreError; update/delete of a missing id raises NotFoundError.
"""

import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager
from decimal import ROUND_CEILING, ROUND_FLOOR
from pathlib import Path
from typing import Any

from shopledger.domain.errors import NotFoundError, StoreError, ValidationError
from shopledger.domain.history import DEFAULT_SORT, FilterSpec, SortKey, normalize_purpose_query
from shopledger.domain.models import (
    MAX_MINOR_UNITS,
    MINOR_UNITS,
    ClockTime,
    DailyEarning,
    IsoDate,
    Money,
    Note,
    Payment,
    PaymentInput,
    from_minor_units,
    to_minor_units,
)
from shopledger.domain.validation import (
    clean_optional_text,
    validate_amount,
    validate_date,
    validate_payment,
    validate_text,
)
from shopledger.logging_utils import get_logger
from shopledger.store.schema import get_db_path

logger = get_logger(__name__)

PAYMENT_COLUMNS = "id, date, time, amount, purpose, notes"

# Fixed ORDER BY clauses; id last so date ties follow the date direction
# and amount ties keep insertion order
_PAYMENT_ORDER_BY: dict[SortKey, str] = {
    SortKey.DATE_ASC: "date ASC, time ASC, id ASC",
    SortKey.DATE_DESC: "date DESC, time DESC, id DESC",
    SortKey.AMOUNT_ASC: "amount ASC, id ASC",
    SortKey.AMOUNT_DESC: "amount DESC, id ASC",
}

_EARNINGS_ORDER_BY: dict[SortKey, str] = {
    SortKey.DATE_ASC: "date ASC",
    SortKey.DATE_DESC: "date DESC",
    SortKey.AMOUNT_ASC: "earnings_amount ASC, date ASC",
    SortKey.AMOUNT_DESC: "earnings_amount DESC, date ASC",
}


def _connect(db_path: Path | None = None) -> sqlite3.Connection:
    """Create a database connection with row factory and SQL helpers.

    Registers ``casefold(text)`` so purpose matching in SQL uses the same
    case folding as the in-memory filter.

    Args:
        db_path: Path to the database file. If None, uses default location.

    Returns:
        Database connection with row_factory configured.
    """
    if db_path is None:
        db_path = get_db_path()
    conn = sqlite3.connect(db_path)
    conn.row_factory = sqlite3.Row
    conn.create_function("casefold", 1, _sql_casefold, deterministic=True)
    return conn


def _sql_casefold(value: str | None) -> str | None:
    return normalize_purpose_query(value) if value is not None else None


@contextmanager
def _session(action: str, db_path: Path | None = None) -> Iterator[sqlite3.Cursor]:
    """Run one unit of work: commit on success, roll back on failure.

    Args:
        action: Short description used in log and error messages.
        db_path: Path to the database file. If None, uses default location.

    Yields:
        A cursor on a fresh connection.

    Raises:
        StoreError: If any sqlite3 operation fails.
    """
    try:
        conn = _connect(db_path)
    except sqlite3.Error as e:
        logger.error("Could not open database for %s: %s", action, e)
        raise StoreError(f"Failed to {action}: {e}") from e

    try:
        yield conn.cursor()
        conn.commit()
        logger.debug("%s: ok", action)
    except sqlite3.Error as e:
        conn.rollback()
        logger.error("Failed to %s: %s", action, e)
        raise StoreError(f"Failed to {action}: {e}") from e
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def _row_to_payment(row: sqlite3.Row) -> Payment:
    return Payment(
        id=row["id"],
        date=IsoDate(row["date"]),
        time=ClockTime(row["time"]),
        amount=from_minor_units(row["amount"]),
        purpose=row["purpose"],
        notes=row["notes"],
    )


def _row_to_earning(row: sqlite3.Row) -> DailyEarning:
    return DailyEarning(
        date=IsoDate(row["date"]),
        earnings_amount=from_minor_units(row["earnings_amount"]),
        notes=row["notes"],
    )


def _row_to_note(row: sqlite3.Row) -> Note:
    return Note(id=row["id"], date=IsoDate(row["date"]), content=row["content"])


def _bound_to_minor_units(bound: Money, rounding: str, field: str) -> int:
    """Convert an amount bound to minor units, rounding toward the inside of the range.

    Raises:
        ValidationError: If the bound falls outside the store's INTEGER range.
    """
    value = int((bound * MINOR_UNITS).to_integral_value(rounding=rounding))
    if abs(value) > MAX_MINOR_UNITS:
        raise ValidationError(f"{field} is too large")
    return value


def build_payment_filter(spec: FilterSpec) -> tuple[str, list[Any]]:
    """Translate a filter specification into a parameterised WHERE clause.

    Only the bounds that are set contribute a condition; values are always
    bound as parameters.

    Args:
        spec: Filter specification.

    Returns:
        Tuple of (where_clause, params). where_clause is "" for an empty spec.

    Raises:
        ValidationError: If an amount bound is too large to compare in SQL.
    """
    conditions: list[str] = []
    params: list[Any] = []

    if spec.date_from is not None:
        conditions.append("date >= ?")
        params.append(spec.date_from)
    if spec.date_to is not None:
        conditions.append("date <= ?")
        params.append(spec.date_to)
    if spec.min_amount is not None:
        conditions.append("amount >= ?")
        params.append(_bound_to_minor_units(spec.min_amount, ROUND_CEILING, "min amount"))
    if spec.max_amount is not None:
        conditions.append("amount <= ?")
        params.append(_bound_to_minor_units(spec.max_amount, ROUND_FLOOR, "max amount"))
    if spec.purpose_substring is not None:
        conditions.append("instr(casefold(purpose), casefold(?)) > 0")
        params.append(spec.purpose_substring)

    if not conditions:
        return "", params
    return " WHERE " + " AND ".join(conditions), params


def insert_payment(data: PaymentInput, db_path: Path | None = None) -> Payment:
    """Insert a new payment.

    Args:
        data: Payment fields.
        db_path: Path to the database file. If None, uses default location.

    Returns:
        The stored payment with its assigned id.

    Raises:
        ValidationError: If the payment violates an invariant.
        StoreError: If database operation fails.
    """
    clean = validate_payment(data)
    with _session("insert payment", db_path) as cursor:
        cursor.execute(
            "INSERT INTO payments (date, time, amount, purpose, notes) VALUES (?, ?, ?, ?, ?)",
            (clean.date, clean.time, to_minor_units(clean.amount), clean.purpose, clean.notes),
        )
        payment_id = cursor.lastrowid
    assert payment_id is not None
    return Payment(
        id=payment_id,
        date=clean.date,
        time=clean.time,
        amount=clean.amount,
        purpose=clean.purpose,
        notes=clean.notes,
    )


def get_payment(payment_id: int, db_path: Path | None = None) -> Payment:
    """Get a single payment by id.

    Raises:
        NotFoundError: If no payment has this id.
        StoreError: If database operation fails.
    """
    with _session("get payment", db_path) as cursor:
        cursor.execute(f"SELECT {PAYMENT_COLUMNS} FROM payments WHERE id = ?", (payment_id,))
        row = cursor.fetchone()
    if row is None:
        raise NotFoundError(f"Payment {payment_id} not found")
    return _row_to_payment(row)


def update_payment(payment_id: int, data: PaymentInput, db_path: Path | None = None) -> None:
    """Replace all mutable fields of an existing payment.

    Args:
        payment_id: Payment id.
        data: New payment fields.
        db_path: Path to the database file. If None, uses default location.

    Raises:
        ValidationError: If the payment violates an invariant.
        NotFoundError: If no payment has this id.
        StoreError: If database operation fails.
    """
    clean = validate_payment(data)
    with _session("update payment", db_path) as cursor:
        cursor.execute(
            "UPDATE payments SET date = ?, time = ?, amount = ?, purpose = ?, notes = ? WHERE id = ?",
            (clean.date, clean.time, to_minor_units(clean.amount), clean.purpose, clean.notes, payment_id),
        )
        if cursor.rowcount == 0:
            raise NotFoundError(f"Payment {payment_id} not found")


def delete_payment(payment_id: int, db_path: Path | None = None) -> None:
    """Permanently delete a payment.

    Raises:
        NotFoundError: If no payment has this id.
        StoreError: If database operation fails.
    """
    with _session("delete payment", db_path) as cursor:
        cursor.execute("DELETE FROM payments WHERE id = ?", (payment_id,))
        if cursor.rowcount == 0:
            raise NotFoundError(f"Payment {payment_id} not found")


def query_payments(
    spec: FilterSpec | None = None,
    sort_key: SortKey = DEFAULT_SORT,
    db_path: Path | None = None,
) -> list[Payment]:
    """Get payments matching a filter, in sort-key order.

    Produces the same rows in the same order as
    ``sort_payments(filter_payments(all_payments, spec), sort_key)``.

    Args:
        spec: Filter specification. If None, returns all payments.
        sort_key: Sort key.
        db_path: Path to the database file. If None, uses default location.

    Returns:
        List of payments.

    Raises:
        ValidationError: If an amount bound is too large.
        StoreError: If database operation fails.
    """
    where, params = build_payment_filter(spec or FilterSpec())
    query = f"SELECT {PAYMENT_COLUMNS} FROM payments{where} ORDER BY {_PAYMENT_ORDER_BY[SortKey.parse(sort_key)]}"

    with _session("query payments", db_path) as cursor:
        cursor.execute(query, params)
        return [_row_to_payment(row) for row in cursor.fetchall()]


def upsert_daily_earning(
    date: str, amount: Money, notes: str | None = None, db_path: Path | None = None
) -> None:
    """Insert or overwrite the earnings record for a date.

    Args:
        date: Date (YYYY-MM-DD), the unique key.
        amount: Earnings amount.
        notes: Optional notes; blank text is stored as NULL.
        db_path: Path to the database file. If None, uses default location.

    Raises:
        ValidationError: If date or amount is invalid.
        StoreError: If database operation fails.
    """
    iso_date = validate_date(date)
    clean_amount = validate_amount(amount, "earnings_amount")
    with _session("upsert daily earning", db_path) as cursor:
        cursor.execute(
            """
            INSERT INTO daily_earnings (date, earnings_amount, notes) VALUES (?, ?, ?)
            ON CONFLICT(date) DO UPDATE SET
                earnings_amount = excluded.earnings_amount,
                notes = excluded.notes,
                updated_at = datetime('now')
            """,
            (iso_date, to_minor_units(clean_amount), clean_optional_text(notes)),
        )


def query_daily_earning(date: str, db_path: Path | None = None) -> DailyEarning | None:
    """Get the earnings record for a date.

    Returns:
        The record, or None if no earnings were recorded that day.

    Raises:
        StoreError: If database operation fails.
    """
    with _session("query daily earning", db_path) as cursor:
        cursor.execute("SELECT date, earnings_amount, notes FROM daily_earnings WHERE date = ?", (date,))
        row = cursor.fetchone()
    return _row_to_earning(row) if row else None


def query_all_daily_earnings(
    sort_key: SortKey = SortKey.DATE_DESC, db_path: Path | None = None
) -> list[DailyEarning]:
    """Get all earnings records.

    Args:
        sort_key: Ordering; amount keys order by earnings_amount.
        db_path: Path to the database file. If None, uses default location.

    Raises:
        StoreError: If database operation fails.
    """
    order_by = _EARNINGS_ORDER_BY[SortKey.parse(sort_key)]
    with _session("query daily earnings", db_path) as cursor:
        cursor.execute(f"SELECT date, earnings_amount, notes FROM daily_earnings ORDER BY {order_by}")
        return [_row_to_earning(row) for row in cursor.fetchall()]


def insert_note(date: str, content: str, db_path: Path | None = None) -> Note:
    """Append a dated note.

    Args:
        date: Date (YYYY-MM-DD).
        content: Note text; stored trimmed.
        db_path: Path to the database file. If None, uses default location.

    Returns:
        The stored note.

    Raises:
        ValidationError: If the date is invalid or content is blank.
        StoreError: If database operation fails.
    """
    iso_date = validate_date(date)
    text = validate_text(content, "content")
    with _session("insert note", db_path) as cursor:
        cursor.execute("INSERT INTO notes (date, content) VALUES (?, ?)", (iso_date, text))
        note_id = cursor.lastrowid
    assert note_id is not None
    return Note(id=note_id, date=iso_date, content=text)


def query_notes(
    date_from: str | None = None, date_to: str | None = None, db_path: Path | None = None
) -> list[Note]:
    """Get notes, optionally between two inclusive dates, oldest first.

    Raises:
        StoreError: If database operation fails.
    """
    query = "SELECT id, date, content FROM notes"
    conditions: list[str] = []
    params: list[Any] = []

    if date_from:
        conditions.append("date >= ?")
        params.append(date_from)
    if date_to:
        conditions.append("date <= ?")
        params.append(date_to)
    if conditions:
        query += " WHERE " + " AND ".join(conditions)
    query += " ORDER BY date ASC, id ASC"

    with _session("query notes", db_path) as cursor:
        cursor.execute(query, params)
        return [_row_to_note(row) for row in cursor.fetchall()]
