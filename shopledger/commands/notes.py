"""Note commands (add, list)."""

from rich.markup import escape
from rich.table import Table

from shopledger.commands.common import console, handle_errors, require_database
from shopledger.dates import normalize_date, today_iso
from shopledger.store.queries import insert_note, query_notes


def note_add_command(content: str, date: str | None = None) -> None:
    """Add a dated note (date defaults to today)."""
    db_path = require_database()

    with handle_errors():
        note = insert_note(normalize_date(date) if date else today_iso(), content, db_path)
        console.print(f"[green]✓[/green] Note added for {note.date}")


def note_list_command(date_from: str | None = None, date_to: str | None = None) -> None:
    """List notes, optionally between two dates."""
    db_path = require_database()

    with handle_errors():
        since = normalize_date(date_from) if date_from else None
        until = normalize_date(date_to) if date_to else None
        notes = query_notes(since, until, db_path)

        if not notes:
            console.print("[yellow]No notes found[/yellow]")
            return

        table = Table(title=f"Notes ({len(notes)})")
        table.add_column("Date", style="cyan")
        table.add_column("Note", style="white")

        for note in notes:
            table.add_row(note.date, escape(note.content))

        console.print(table)
