"""Dashboard, balance and history commands for viewing ledger data."""

from datetime import date as dt_date
from pathlib import Path

from rich.markup import escape
from rich.table import Table

from shopledger.commands.common import console, handle_errors, require_database
from shopledger.config import load_settings
from shopledger.dates import month_bounds, normalize_date, parse_amount, today_iso
from shopledger.domain.export import export_csv, export_filename
from shopledger.domain.history import FilterSpec, HistoryRow, SortKey, run_history_query
from shopledger.domain.ledger import daily_balance, dashboard_summary, format_money, period_totals
from shopledger.domain.models import Money
from shopledger.logging_utils import get_logger
from shopledger.store.queries import (
    query_all_daily_earnings,
    query_daily_earning,
    query_payments,
)

logger = get_logger(__name__)


def format_balance_with_color(amount: Money, symbol: str) -> str:
    """Format a balance green when non-negative, red when negative."""
    text = format_money(amount, symbol)
    return f"[red]{text}[/red]" if amount < 0 else f"[green]{text}[/green]"


def build_filter_spec(
    date_from: str | None = None,
    date_to: str | None = None,
    month: str | None = None,
    min_amount: str | None = None,
    max_amount: str | None = None,
    purpose: str | None = None,
) -> tuple[FilterSpec, str]:
    """Build a filter specification from raw command-line options.

    Args:
        date_from: Inclusive start date.
        date_to: Inclusive end date.
        month: Month (YYYY-MM); fills whichever date bound is not given.
        min_amount: Minimum amount text.
        max_amount: Maximum amount text.
        purpose: Purpose substring; blank text means no constraint.

    Returns:
        Tuple of (filter_spec, period_label).

    Raises:
        ValidationError: If any value cannot be parsed.
    """
    since = normalize_date(date_from) if date_from else None
    until = normalize_date(date_to) if date_to else None
    period = "All time"

    if month:
        first, last, period = month_bounds(month)
        since = since or first
        until = until or last
    elif since or until:
        period = f"{since or '…'} to {until or '…'}"

    spec = FilterSpec(
        date_from=since,
        date_to=until,
        min_amount=parse_amount(min_amount, "minimum amount") if min_amount else None,
        max_amount=parse_amount(max_amount, "maximum amount") if max_amount else None,
        purpose_substring=purpose.strip() if purpose and purpose.strip() else None,
    )
    return spec, period


def render_history_table(rows: list[HistoryRow], title: str, symbol: str) -> None:
    """Render history rows as a table."""
    table = Table(title=title)
    table.add_column("ID", style="dim", justify="right")
    table.add_column("Date", style="cyan")
    table.add_column("Time", style="cyan")
    table.add_column("Amount", justify="right", style="red")
    table.add_column("Purpose", style="white")
    table.add_column("Daily Earnings", justify="right", style="green")
    table.add_column("Notes", style="dim")

    for row in rows:
        payment = row.payment
        table.add_row(
            str(payment.id),
            payment.date,
            payment.time,
            format_money(payment.amount, symbol),
            escape(payment.purpose),
            format_money(row.daily_earnings, symbol),
            escape(payment.notes or ""),
        )

    console.print(table)


def write_export(rows: list[HistoryRow], output: str | None, export_dir: str) -> Path:
    """Write history rows to a CSV file and return its path.

    Args:
        rows: Ordered history rows.
        output: Explicit file path. If None, a dated file name is used in export_dir.
        export_dir: Directory for dated exports ("" means the current directory).
    """
    if output:
        path = Path(output).expanduser()
    else:
        path = Path(export_dir or ".").expanduser() / export_filename(dt_date.today())

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(export_csv(rows))
    logger.info("Exported %d rows to %s", len(rows), path)
    return path


def dashboard_command(date: str | None = None) -> None:
    """Show today's earnings, payments and remaining balance."""
    db_path = require_database()

    with handle_errors():
        symbol = load_settings()["currency_symbol"]
        day = normalize_date(date) if date else today_iso()
        payments = query_payments(db_path=db_path)
        earning = query_daily_earning(day, db_path)
        summary = dashboard_summary(day, payments, [earning] if earning else [])

        console.print(f"[bold cyan]Dashboard - {day}[/bold cyan]\n")
        console.print(f"  [bold]Earnings today:[/bold]    {format_money(summary.today_earnings, symbol)}")
        console.print(f"  [bold]Payments today:[/bold]    {format_money(summary.today_payments, symbol)}")
        console.print(
            f"  [bold]Remaining balance:[/bold] {format_balance_with_color(summary.remaining_balance, symbol)}"
        )
        console.print(f"  [bold]Total payments:[/bold]    {format_money(summary.total_payments, symbol)}")


def balance_command(date: str) -> None:
    """Show the earnings, payments and balance for a single day."""
    db_path = require_database()

    with handle_errors():
        symbol = load_settings()["currency_symbol"]
        day = normalize_date(date)
        payments = query_payments(FilterSpec(date_from=day, date_to=day), SortKey.DATE_ASC, db_path)
        earning = query_daily_earning(day, db_path)
        earnings = [earning] if earning else []
        totals = period_totals(payments, earnings)

        console.print(f"[bold cyan]{day}[/bold cyan]\n")
        console.print(f"  Earnings: {format_money(totals.total_earnings, symbol)}")
        console.print(f"  Payments: {format_money(totals.total_payments, symbol)} ({len(payments)})")
        balance = daily_balance(day, payments, earnings)
        console.print(f"  [bold]Balance:[/bold] {format_balance_with_color(balance, symbol)}")


def history_command(
    date_from: str | None = None,
    date_to: str | None = None,
    month: str | None = None,
    min_amount: str | None = None,
    max_amount: str | None = None,
    purpose: str | None = None,
    sort: str | None = None,
    export: bool = False,
    output: str | None = None,
) -> None:
    """Show filtered, sorted payment history with daily earnings; optionally export CSV."""
    db_path = require_database()

    with handle_errors():
        settings = load_settings()
        symbol = settings["currency_symbol"]
        spec, period = build_filter_spec(date_from, date_to, month, min_amount, max_amount, purpose)
        sort_key = SortKey.parse(sort or settings["default_sort"])

        payments = query_payments(spec, sort_key, db_path)
        earnings = query_all_daily_earnings(SortKey.DATE_DESC, db_path)
        rows = run_history_query(payments, earnings, spec, sort_key)

        if rows:
            render_history_table(rows, f"Payment history - {period} ({len(rows)} payments)", symbol)
            totals = period_totals(payments, earnings)
            console.print(f"\n  [bold]Total payments:[/bold] {format_money(totals.total_payments, symbol)}")
            console.print(f"  [bold]Total earnings:[/bold] {format_money(totals.total_earnings, symbol)}")
            console.print(f"  [bold]Net balance:[/bold]    {format_balance_with_color(totals.net_balance, symbol)}")
        else:
            console.print("[yellow]No payments match these filters[/yellow]")

        if export or output:
            path = write_export(rows, output, settings["export_dir"])
            console.print(f"\n[green]✓[/green] Exported {len(rows)} rows to {path}")
