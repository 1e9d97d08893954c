"""CLI entry point for shopledger."""

import typer

from shopledger.commands.admin import config_set_command, config_show_command, init_command
from shopledger.commands.earnings import earn_command, earnings_list_command
from shopledger.commands.notes import note_add_command, note_list_command
from shopledger.commands.payments import add_payment_command, delete_payment_command, edit_payment_command
from shopledger.commands.report import balance_command, dashboard_command, history_command
from shopledger.config import DEFAULT_CONFIG, load_settings, validate_setting
from shopledger.domain.errors import LedgerError
from shopledger.logging_utils import configure_logging, get_logger

logger = get_logger(__name__)

app = typer.Typer(
    name="shopledger",
    help="Shop ledger - track daily earnings, payments and notes",
    add_completion=False,
)
pay_app = typer.Typer(help="Record, edit and delete payments.")
note_app = typer.Typer(help="Add and list dated notes.")
config_app = typer.Typer(help="Show and change settings.")

app.add_typer(pay_app, name="pay")
app.add_typer(note_app, name="note")
app.add_typer(config_app, name="config")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
) -> None:
    """Shop ledger - track daily earnings, payments and notes."""
    # A broken config must not block `config set` or `init --force`
    problem: LedgerError | None = None
    try:
        level = validate_setting("log_level", str(load_settings()["log_level"]))
    except LedgerError as e:
        level = DEFAULT_CONFIG["log_level"]
        problem = e

    configure_logging("DEBUG" if verbose else level)
    if problem is not None:
        logger.warning("Using log level %s: %s", level, problem)


@app.command(name="init")
def init(
    force: bool = typer.Option(False, "--force", "-f", help="Re-run initialization and reset config"),
) -> None:
    """Initialize shopledger database and configuration."""
    init_command(force)


@app.command()
def dashboard(
    date: str = typer.Option(None, "--date", "-d", help="Day to show (default: today)"),
) -> None:
    """Show today's earnings, payments and remaining balance."""
    dashboard_command(date)


@pay_app.command(name="add")
def pay_add(
    amount: str,
    purpose: str,
    date: str = typer.Option(None, "--date", "-d", help="Payment date (default: today)"),
    time: str = typer.Option(None, "--time", "-t", help="Payment time HH:MM (default: now)"),
    notes: str = typer.Option(None, "--notes", "-n", help="Additional notes"),
) -> None:
    """Record a payment."""
    add_payment_command(amount, purpose, date, time, notes)


@pay_app.command(name="edit")
def pay_edit(
    payment_id: int,
    date: str = typer.Option(None, "--date", "-d", help="New date"),
    time: str = typer.Option(None, "--time", "-t", help="New time (HH:MM)"),
    amount: str = typer.Option(None, "--amount", "-a", help="New amount"),
    purpose: str = typer.Option(None, "--purpose", "-p", help="New purpose"),
    notes: str = typer.Option(None, "--notes", "-n", help="New notes ('' to clear)"),
) -> None:
    """Edit a payment; options you leave out keep their current value."""
    edit_payment_command(payment_id, date, time, amount, purpose, notes)


@pay_app.command(name="delete")
def pay_delete(
    payment_id: int,
    yes: bool = typer.Option(False, "--yes", "-y", help="Delete without asking"),
) -> None:
    """Delete a payment permanently."""
    delete_payment_command(payment_id, yes)


@app.command()
def earn(
    amount: str,
    date: str = typer.Option(None, "--date", "-d", help="Date (default: today)"),
    notes: str = typer.Option(None, "--notes", "-n", help="Notes about the day's earnings"),
) -> None:
    """Save a day's earnings (replaces any earlier figure for that day)."""
    earn_command(amount, date, notes)


@app.command()
def earnings(
    oldest_first: bool = typer.Option(False, "--oldest-first", help="List oldest days first"),
) -> None:
    """List recorded daily earnings."""
    earnings_list_command(oldest_first)


@note_app.command(name="add")
def note_add(
    content: str,
    date: str = typer.Option(None, "--date", "-d", help="Date (default: today)"),
) -> None:
    """Add a dated note."""
    note_add_command(content, date)


@note_app.command(name="list")
def note_list(
    date_from: str = typer.Option(None, "--from", help="From date (inclusive)"),
    date_to: str = typer.Option(None, "--to", help="To date (inclusive)"),
) -> None:
    """List notes."""
    note_list_command(date_from, date_to)


@app.command()
def balance(date: str) -> None:
    """Show the balance (earnings minus payments) for a day."""
    balance_command(date)


@app.command()
def history(
    date_from: str = typer.Option(None, "--from", help="From date (inclusive)"),
    date_to: str = typer.Option(None, "--to", help="To date (inclusive)"),
    month: str = typer.Option(None, "--month", help="Specific month (YYYY-MM)"),
    min_amount: str = typer.Option(None, "--min", help="Minimum amount"),
    max_amount: str = typer.Option(None, "--max", help="Maximum amount"),
    purpose: str = typer.Option(None, "--purpose", "-p", help="Purpose contains (case-insensitive)"),
    sort: str = typer.Option(
        None, "--sort", "-s", help="date-desc, date-asc, amount-desc or amount-asc (default from config)"
    ),
    export: bool = typer.Option(False, "--export", "-e", help="Export results to a dated CSV file"),
    output: str = typer.Option(None, "--output", "-o", help="Export results to this CSV path"),
) -> None:
    """Show payment history with daily earnings."""
    history_command(date_from, date_to, month, min_amount, max_amount, purpose, sort, export, output)


@config_app.command(name="show")
def config_show() -> None:
    """Show effective settings."""
    config_show_command()


@config_app.command(name="set")
def config_set(key: str, value: str) -> None:
    """Change a setting."""
    config_set_command(key, value)


if __name__ == "__main__":
    app()
