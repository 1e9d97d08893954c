"""Payment commands (add, edit, delete)."""

import typer
from rich.markup import escape

from shopledger.commands.common import console, handle_errors, require_database
from shopledger.config import load_settings
from shopledger.dates import current_time, normalize_date, normalize_time, parse_amount, today_iso
from shopledger.domain.ledger import format_money
from shopledger.domain.models import Payment, PaymentInput
from shopledger.store.queries import delete_payment, get_payment, insert_payment, update_payment


def print_payment(payment: Payment, symbol: str) -> None:
    """Print payment details, one field per line."""
    console.print(f"  Date: {payment.date} {payment.time}")
    console.print(f"  Amount: {format_money(payment.amount, symbol)}")
    console.print(f"  Purpose: {escape(payment.purpose)}")
    if payment.notes:
        console.print(f"  Notes: {escape(payment.notes)}")


def add_payment_command(
    amount: str,
    purpose: str,
    date: str | None = None,
    time: str | None = None,
    notes: str | None = None,
) -> None:
    """Record a payment.

    Args:
        amount: Amount text (e.g. "250" or "1,250.50").
        purpose: What the payment was for.
        date: Payment date; defaults to today.
        time: Payment time (HH:MM); defaults to now.
        notes: Optional notes.
    """
    db_path = require_database()

    with handle_errors():
        symbol = load_settings()["currency_symbol"]
        data = PaymentInput(
            date=normalize_date(date) if date else today_iso(),
            time=normalize_time(time) if time else current_time(),
            amount=parse_amount(amount),
            purpose=purpose,
            notes=notes,
        )
        payment = insert_payment(data, db_path)

        console.print(f"[green]✓[/green] Payment {payment.id} added:")
        print_payment(payment, symbol)


def edit_payment_command(
    payment_id: int,
    date: str | None = None,
    time: str | None = None,
    amount: str | None = None,
    purpose: str | None = None,
    notes: str | None = None,
) -> None:
    """Replace a payment's fields; options left out keep their current value.

    Pass an empty string for notes to clear them.
    """
    db_path = require_database()

    with handle_errors():
        symbol = load_settings()["currency_symbol"]
        current = get_payment(payment_id, db_path)
        data = PaymentInput(
            date=normalize_date(date) if date is not None else current.date,
            time=normalize_time(time) if time is not None else current.time,
            amount=parse_amount(amount) if amount is not None else current.amount,
            purpose=purpose if purpose is not None else current.purpose,
            notes=notes if notes is not None else current.notes,
        )
        update_payment(payment_id, data, db_path)
        updated = get_payment(payment_id, db_path)

        console.print(f"[green]✓[/green] Payment {payment_id} updated:")
        print_payment(updated, symbol)


def delete_payment_command(payment_id: int, yes: bool = False) -> None:
    """Delete a payment permanently, asking first unless yes is set."""
    db_path = require_database()

    with handle_errors():
        symbol = load_settings()["currency_symbol"]
        payment = get_payment(payment_id, db_path)

        if not yes:
            console.print(f"Payment {payment_id}:")
            print_payment(payment, symbol)
            if not typer.confirm("Delete this payment? This cannot be undone", default=False):
                console.print("[yellow]Cancelled[/yellow]")
                return

        delete_payment(payment_id, db_path)
        console.print(f"[green]✓[/green] Payment {payment_id} deleted")
