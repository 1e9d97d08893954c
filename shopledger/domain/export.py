"""CSV export of history results.

Turns the ordered rows from the history query into a UTF-8 CSV document.
Rows are written in the order given; nothing is re-sorted here. Fields
containing commas, quotes or line breaks are quoted per RFC 4180.
"""

import csv
import io
from collections.abc import Iterable
from datetime import date

from shopledger.domain.history import HistoryRow

EXPORT_COLUMNS = ("Date", "Time", "Amount", "Purpose", "Daily Earnings", "Notes")

EXPORT_ENCODING = "utf-8"


def history_row_to_fields(row: HistoryRow) -> list[str]:
    """Serialize one history row to its CSV fields, in column order."""
    payment = row.payment
    return [
        payment.date,
        payment.time,
        str(payment.amount),
        payment.purpose,
        str(row.daily_earnings),
        payment.notes or "",
    ]


def export_csv(rows: Iterable[HistoryRow]) -> bytes:
    """Export history rows as a CSV document.

    An empty input still produces the header row.

    Args:
        rows: Ordered history rows.

    Returns:
        UTF-8 encoded CSV bytes, header first.
    """
    text_buffer = io.StringIO()
    writer = csv.writer(text_buffer, lineterminator="\r\n")

    writer.writerow(EXPORT_COLUMNS)
    for row in rows:
        writer.writerow(history_row_to_fields(row))

    return text_buffer.getvalue().encode(EXPORT_ENCODING)


def export_filename(today: date) -> str:
    """Build the download file name for an export made on a given day."""
    return f"finance-records-{today.isoformat()}.csv"
