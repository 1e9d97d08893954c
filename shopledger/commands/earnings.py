"""Daily earnings commands."""

from rich.markup import escape
from rich.table import Table

from shopledger.commands.common import console, handle_errors, require_database
from shopledger.config import load_settings
from shopledger.dates import normalize_date, parse_amount, today_iso
from shopledger.domain.history import SortKey
from shopledger.domain.ledger import format_money, sum_amounts
from shopledger.store.queries import query_all_daily_earnings, query_daily_earning, upsert_daily_earning


def earn_command(amount: str, date: str | None = None, notes: str | None = None) -> None:
    """Save the earnings for a day, replacing any earlier figure for it.

    Args:
        amount: Earnings amount text.
        date: Date; defaults to today.
        notes: Optional notes.
    """
    db_path = require_database()

    with handle_errors():
        symbol = load_settings()["currency_symbol"]
        day = normalize_date(date) if date else today_iso()
        earnings_amount = parse_amount(amount, "earnings amount")
        previous = query_daily_earning(day, db_path)

        upsert_daily_earning(day, earnings_amount, notes, db_path)

        if previous:
            console.print(
                f"[green]✓[/green] Earnings for {day} updated: "
                f"{format_money(previous.earnings_amount, symbol)} → {format_money(earnings_amount, symbol)}"
            )
        else:
            console.print(f"[green]✓[/green] Earnings for {day} saved: {format_money(earnings_amount, symbol)}")


def earnings_list_command(oldest_first: bool = False) -> None:
    """List all recorded daily earnings."""
    db_path = require_database()

    with handle_errors():
        symbol = load_settings()["currency_symbol"]
        sort_key = SortKey.DATE_ASC if oldest_first else SortKey.DATE_DESC
        earnings = query_all_daily_earnings(sort_key, db_path)

        if not earnings:
            console.print("[yellow]No earnings recorded yet[/yellow]")
            return

        table = Table(title=f"Daily earnings ({len(earnings)} days)")
        table.add_column("Date", style="cyan")
        table.add_column("Earnings", justify="right", style="green")
        table.add_column("Notes", style="dim")

        for earning in earnings:
            table.add_row(earning.date, format_money(earning.earnings_amount, symbol), escape(earning.notes or ""))

        console.print(table)
        total = sum_amounts(earning.earnings_amount for earning in earnings)
        console.print(f"\n[bold]Total:[/bold] {format_money(total, symbol)}")
