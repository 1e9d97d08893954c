"""Admin commands for init and configuration."""

import sys
from pathlib import Path

from rich.markup import escape
from rich.table import Table

from shopledger.commands.common import console, handle_errors
from shopledger.config import create_default_config, get_config_path, load_settings, set_setting
from shopledger.store.schema import get_db_path, init_database


def run_full_init(db_path: Path, config_path: Path) -> None:
    """Initialize new database and config."""
    console.print(f"[cyan]Initializing database at {db_path}...[/cyan]")
    init_database(db_path)
    console.print("[green]✓[/green] Database initialized")

    console.print(f"[cyan]Creating config file at {config_path}...[/cyan]")
    create_default_config(config_path)
    console.print("[green]✓[/green] Config file created (permissions: 600)")

    console.print("\n[green]Initialization complete![/green]", style="bold")
    console.print(f"[dim]Database: {db_path}[/dim]")
    console.print(f"[dim]Config: {config_path}[/dim]")


def init_command(force: bool = False) -> None:
    """Initialize shopledger database and configuration.

    With force, an existing config is reset to defaults; existing records
    are kept (the schema is only created where missing).
    """
    db_path = get_db_path()
    config_path = get_config_path()

    db_exists = db_path.exists()
    config_exists = config_path.exists()

    # Guard: refuse to overwrite without force flag
    if not force and (db_exists or config_exists):
        console.print("[red]Initialization failed:[/red]", style="bold")
        if db_exists:
            console.print(f"  Database already exists: {db_path}")
        if config_exists:
            console.print(f"  Config already exists: {config_path}")
        console.print("\n[yellow]Use 'shopledger init --force' to re-run initialization[/yellow]")
        sys.exit(1)

    with handle_errors():
        run_full_init(db_path, config_path)


def config_show_command() -> None:
    """Show effective settings."""
    config_path = get_config_path()

    with handle_errors():
        settings = load_settings(config_path)

        table = Table(title=f"Settings ({config_path})")
        table.add_column("Key", style="cyan")
        table.add_column("Value", style="white")
        for key, value in settings.items():
            table.add_row(key, escape(str(value)) or "[dim]-[/dim]")

        console.print(table)


def config_set_command(key: str, value: str) -> None:
    """Update one setting in the config file."""
    with handle_errors():
        settings = set_setting(key, value)
        console.print(f"[green]✓[/green] {key} = {escape(str(settings[key]))}")
