"""Risk commands for TradeGuard CLI.

Handles position sizing, drawdown display and the max daily risk throttle.
"""

from pathlib import Path
from typing import Optional

import click
from pydantic import ValidationError
from rich.panel import Panel
from rich.table import Table

from tradeguard.cli.common import (
    console,
    date_option,
    fail,
    get_store,
    journal_option,
    load_accounts,
    money,
    resolve_date,
)
from tradeguard.db.store import SnapshotError
from tradeguard.engine import (
    calculate_drawdown,
    calculate_sizing,
    daily_exposure_pct,
    get_instrument,
    list_instruments,
)


@click.command()
@journal_option
@click.option("--account", "account_id", default=None, help="Account ID or name.")
@click.option(
    "--instrument",
    type=click.Choice(list_instruments(), case_sensitive=False),
    default=None,
    help="Override the preferred instrument.",
)
def size(journal: Optional[Path], account_id: Optional[str], instrument: Optional[str]) -> None:
    """Show the position size for each account.

    \b
    Examples:
      tradeguard size
      tradeguard size --account apex-1 --instrument ES
    """
    store = get_store(journal)
    accounts = load_accounts(store, account_id)

    table = Table(title="Position Sizing", show_header=True, header_style="bold cyan")
    table.add_column("Account", style="bold")
    table.add_column("Instrument")
    table.add_column("Risk/Trade", justify="right")
    table.add_column("Lots", justify="right")
    table.add_column("SL pts", justify="right")
    table.add_column("TP pts", justify="right")
    table.add_column("Comm.", justify="right")
    table.add_column("Target Net", justify="right")
    table.add_column("Daily Potential", justify="right")

    for account in accounts:
        spec = get_instrument(instrument) if instrument else None
        result = calculate_sizing(account.risk_settings, spec)
        table.add_row(
            account.name or account.id,
            result.instrument,
            f"[red]-${result.risk_per_trade:,}[/red]",
            str(result.lots),
            f"{result.sl_points:g}",
            f"{result.tp_points:g}",
            f"${result.commissions_per_trade:,.2f}",
            money(result.target_net),
            money(result.daily_potential),
        )

    console.print(table)


@click.command()
@journal_option
@date_option
@click.option("--account", "account_id", default=None, help="Account ID or name.")
def drawdown(journal: Optional[Path], on_date, account_id: Optional[str]) -> None:
    """Show equity, high-water mark and liquidation point.

    \b
    Examples:
      tradeguard drawdown
      tradeguard drawdown --account apex-1
    """
    today = resolve_date(on_date)
    store = get_store(journal)
    accounts = load_accounts(store, account_id)
    try:
        trades = store.get_trades()
    except (SnapshotError, ValidationError) as e:
        fail(str(e))

    table = Table(title="Equity & Drawdown", show_header=True, header_style="bold cyan")
    table.add_column("Account", style="bold")
    table.add_column("Type")
    table.add_column("Equity", justify="right")
    table.add_column("Peak (HWM)", justify="right")
    table.add_column("Liquidation", justify="right")
    table.add_column("Risk Buffer", justify="right")
    table.add_column("Today's Exposure", justify="right")
    table.add_column("Suggested Max Risk", justify="right")

    for account in accounts:
        result = calculate_drawdown(account, trades)
        own = [t for t in trades if account.owns(t.account_id)]
        exposure = daily_exposure_pct(own, today, account.effective_risk_settings)
        suggestion = result.suggested_max_daily_risk
        table.add_row(
            account.name or account.id,
            account.drawdown_type.value + (" PA" if account.is_pa else ""),
            f"${result.current_equity:,.2f}",
            f"${result.peak_equity:,.2f}",
            f"[red]${result.liquidation_point:,.2f}[/red]",
            f"${result.available_risk_buffer:,.2f}",
            f"{exposure:.0f}%",
            f"[yellow]${suggestion:,}[/yellow]" if suggestion is not None else "[dim]-[/dim]",
        )

    console.print(table)


@click.command()
@journal_option
@click.option("--account", "account_id", required=True, help="Account ID or name.")
@click.option("--apply", "apply_", is_flag=True, default=False, help="Write the suggestion to the journal.")
def throttle(journal: Optional[Path], account_id: str, apply_: bool) -> None:
    """Suggest max daily risk as 10% of the drawdown buffer.

    Without --apply nothing is written.

    \b
    Examples:
      tradeguard throttle --account apex-1
      tradeguard throttle --account apex-1 --apply
    """
    store = get_store(journal)
    account = load_accounts(store, account_id)[0]
    try:
        result = calculate_drawdown(account, store.get_trades(account=account))
    except (SnapshotError, ValidationError) as e:
        fail(str(e))

    current = account.effective_risk_settings.max_daily_risk
    suggestion = result.suggested_max_daily_risk

    if suggestion is None:
        console.print(Panel(
            f"Max daily risk ${current:,.0f} already matches the buffer "
            f"(${result.available_risk_buffer:,.2f}).",
            title="[bold green]Throttle[/bold green]",
            border_style="green",
        ))
        return

    if not apply_:
        console.print(Panel(
            f"Risk buffer: ${result.available_risk_buffer:,.2f}\n"
            f"Current max daily risk: ${current:,.0f}\n"
            f"Suggested max daily risk: [yellow]${suggestion:,}[/yellow]\n\n"
            f"[dim]Run with --apply to save it.[/dim]",
            title="[bold yellow]Throttle[/bold yellow]",
            border_style="yellow",
        ))
        return

    try:
        store.update_max_daily_risk(account.id, suggestion)
    except SnapshotError as e:
        fail(str(e))

    console.print(Panel(
        f"[green]Max daily risk updated: ${current:,.0f} -> ${suggestion:,}[/green]",
        title="[bold green]Throttle Applied[/bold green]",
        border_style="green",
    ))
