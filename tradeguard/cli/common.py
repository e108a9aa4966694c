"""Helpers shared by the CLI command modules."""

from datetime import date, datetime
from pathlib import Path
from typing import Optional

import click
from pydantic import ValidationError
from rich.panel import Panel

from tradeguard.cli.main import console
from tradeguard.config import get_journal_path, load_config
from tradeguard.db.store import SnapshotError, SnapshotStore
from tradeguard.models import Account


journal_option = click.option(
    "--journal",
    "journal",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Journal snapshot file (defaults to the configured path).",
)

date_option = click.option(
    "--date",
    "on_date",
    type=click.DateTime(formats=["%Y-%m-%d"]),
    default=None,
    help="Session date, YYYY-MM-DD (defaults to today).",
)


def resolve_date(on_date: Optional[datetime]) -> date:
    """Resolve the session date at the CLI edge."""
    return on_date.date() if on_date else date.today()


def fail(message: str) -> None:
    """Print an error panel and exit."""
    console.print(Panel(
        f"[red]{message}[/red]",
        title="[bold red]Error[/bold red]",
        border_style="red",
    ))
    raise SystemExit(1)


def get_store(journal: Optional[Path]) -> SnapshotStore:
    """Get the snapshot store for the given or configured journal."""
    return SnapshotStore(journal or get_journal_path(load_config()))


def load_accounts(store: SnapshotStore, account_id: Optional[str]) -> list[Account]:
    """Load one account by ID, or all of them."""
    try:
        if account_id:
            account = store.get_account(account_id)
            if account is None:
                fail(f"Account not found: {account_id}")
            return [account]
        accounts = store.get_accounts()
    except (SnapshotError, ValidationError) as e:
        fail(str(e))

    if not accounts:
        fail("No accounts in journal snapshot.")
    return accounts


def money(value: float) -> str:
    """Format a dollar amount with a colored sign."""
    color = "green" if value >= 0 else "red"
    sign = "+" if value >= 0 else "-"
    return f"[{color}]{sign}${abs(value):,.2f}[/{color}]"
