"""Database schema initialization and migrations."""

import os
import sqlite3
from pathlib import Path

from shopledger.domain.errors import StoreError
from shopledger.logging_utils import get_logger

logger = get_logger(__name__)


def get_xdg_data_home() -> Path:
    """Get XDG data directory, with fallback to ~/.local/share."""
    xdg_data = os.environ.get("XDG_DATA_HOME")
    if xdg_data:
        return Path(xdg_data)
    return Path.home() / ".local" / "share"


def get_db_path() -> Path:
    """Get the default database path (XDG compliant)."""
    return get_xdg_data_home() / "shopledger" / "shopledger.db"


def database_exists(db_path: Path | None = None) -> bool:
    """Check if the database file exists.

    Args:
        db_path: Path to check. If None, uses default location.

    Returns:
        True if database exists, False otherwise.
    """
    if db_path is None:
        db_path = get_db_path()
    return db_path.exists()


def init_database(db_path: Path | None = None) -> None:
    """Initialize the database with the required schema.

    Safe to run on an existing database; tables and indexes are only
    created when missing.

    Args:
        db_path: Path to the database file. If None, uses default location.

    Raises:
        StoreError: If database initialization fails.
    """
    if db_path is None:
        db_path = get_db_path()

    db_path.parent.mkdir(parents=True, exist_ok=True)

    conn = sqlite3.connect(db_path)
    cursor = conn.cursor()

    try:
        # Amounts are integer minor units (paise)
        cursor.execute(
            """
            CREATE TABLE IF NOT EXISTS payments (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                date TEXT NOT NULL,
                time TEXT NOT NULL,
                amount INTEGER NOT NULL CHECK (amount >= 0),
                purpose TEXT NOT NULL,
                notes TEXT,
                created_at TEXT NOT NULL DEFAULT (datetime('now'))
            )
        """
        )

        cursor.execute(
            """
            CREATE TABLE IF NOT EXISTS daily_earnings (
                date TEXT PRIMARY KEY,
                earnings_amount INTEGER NOT NULL CHECK (earnings_amount >= 0),
                notes TEXT,
                created_at TEXT NOT NULL DEFAULT (datetime('now')),
                updated_at TEXT NOT NULL DEFAULT (datetime('now'))
            )
        """
        )

        cursor.execute(
            """
            CREATE TABLE IF NOT EXISTS notes (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                date TEXT NOT NULL,
                content TEXT NOT NULL,
                created_at TEXT NOT NULL DEFAULT (datetime('now'))
            )
        """
        )

        cursor.execute("CREATE INDEX IF NOT EXISTS idx_payments_date_time ON payments(date, time)")
        cursor.execute("CREATE INDEX IF NOT EXISTS idx_payments_amount ON payments(amount)")
        cursor.execute("CREATE INDEX IF NOT EXISTS idx_notes_date ON notes(date)")

        conn.commit()
        logger.debug("Schema ready at %s", db_path)

    except sqlite3.Error as e:
        conn.rollback()
        logger.error("Schema initialization failed: %s", e)
        raise StoreError(f"Could not initialize database: {e}") from e
    finally:
        conn.close()
