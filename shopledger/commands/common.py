"""Shared helpers for CLI commands."""

import sys
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from rich.console import Console
from rich.markup import escape

from shopledger.domain.errors import ConfigError, NotFoundError, StoreError, ValidationError
from shopledger.store.schema import database_exists, get_db_path

console = Console()


def fail(message: str) -> None:
    """Print an error and exit with status 1."""
    console.print(f"[red]{escape(message)}[/red]", style="bold")
    sys.exit(1)


def require_database() -> Path:
    """Return the database path, exiting if it has not been initialized."""
    db_path = get_db_path()
    if not database_exists(db_path):
        console.print("[red]Database not found. Run 'shopledger init' first.[/red]", style="bold")
        sys.exit(1)
    return db_path


@contextmanager
def handle_errors() -> Iterator[None]:
    """Turn ledger errors into a red message and exit status 1."""
    try:
        yield
    except ValidationError as e:
        fail(f"Invalid input: {e}")
    except NotFoundError as e:
        fail(str(e))
    except StoreError as e:
        fail(f"Database error: {e}")
    except ConfigError as e:
        fail(f"Config error: {e}")
    except OSError as e:
        fail(f"Filesystem error: {e}")
