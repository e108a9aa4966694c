"""Challenge commands for TradeGuard CLI.

Handles the profit-goal projection of evaluation and payout accounts.
"""

from pathlib import Path
from typing import Optional

import click
from pydantic import ValidationError
from rich.panel import Panel
from rich.table import Table

from tradeguard.cli.common import (
    console,
    fail,
    get_store,
    journal_option,
    load_accounts,
    money,
)
from tradeguard.config import get_projection_defaults, load_config
from tradeguard.db.store import SnapshotError
from tradeguard.engine import project_challenge
from tradeguard.engine.projection import UNREACHABLE_DAYS


@click.command()
@journal_option
@click.option("--account", "account_id", required=True, help="Account ID or name.")
@click.option("--win-rate", type=float, default=None, help="What-if win rate in percent.")
@click.option("--days", type=int, default=None, help="What-if days to simulate.")
def project(
    journal: Optional[Path],
    account_id: str,
    win_rate: Optional[float],
    days: Optional[int],
) -> None:
    """Project the account's equity curve to its profit goal.

    \b
    Examples:
      tradeguard project --account apex-1
      tradeguard project --account apex-1 --win-rate 60 --days 30
    """
    default_rate, default_days = get_projection_defaults(load_config())
    store = get_store(journal)
    account = load_accounts(store, account_id)[0]

    try:
        trades = store.get_trades()
    except (SnapshotError, ValidationError) as e:
        fail(str(e))

    result = project_challenge(
        account,
        trades,
        manual_win_rate=default_rate if win_rate is None else win_rate,
        manual_days=default_days if days is None else days,
    )

    days_text = "unreachable" if result.days_to_target == UNREACHABLE_DAYS else f"{result.days_to_target} days"
    console.print(Panel(
        f"[bold]Equity:[/bold] ${result.current_equity:,.2f}   "
        f"[bold]Peak:[/bold] ${result.peak_equity:,.2f}\n"
        f"[bold]Liquidation:[/bold] [red]${result.liquidation_point:,.2f}[/red]   "
        f"[bold]Goal:[/bold] ${result.target_goal:,.2f}\n"
        f"[bold]Progress:[/bold] {result.profit_progress_pct:.1f}%\n\n"
        f"Historical win rate {result.historical_win_rate:.0f}%: "
        f"{money(result.historical_expectancy)}/day, target in {days_text}\n"
        f"What-if: {money(result.manual_expectancy)}/day",
        title=f"[bold cyan]Challenge: {account.name or account.id}[/bold cyan]",
        border_style="cyan",
    ))

    table = Table(title="Projection", show_header=True, header_style="bold")
    table.add_column("Day", justify="right")
    table.add_column("What-if Equity", justify="right")
    table.add_column("What-if Liq.", justify="right")
    table.add_column("Historical Equity", justify="right")
    table.add_column("Historical Liq.", justify="right")

    rows = max(len(result.manual_series), len(result.historical_series))
    for i in range(rows):
        manual = result.manual_series[i] if i < len(result.manual_series) else None
        hist = result.historical_series[i] if i < len(result.historical_series) else None
        table.add_row(
            str(i + 1),
            f"${manual.equity:,.0f}" if manual else "",
            f"${manual.liquidation:,.0f}" if manual else "",
            f"${hist.equity:,.0f}" if hist else "",
            f"${hist.liquidation:,.0f}" if hist else "",
        )
    console.print(table)

    if result.consistency_breaches:
        console.print("[bold dark_orange]Consistency rule (30%) breached on:[/bold dark_orange]")
        for breach in result.consistency_breaches:
            console.print(
                f"  {breach.date.isoformat()}  {money(breach.pnl)} > ${breach.limit:,.2f}"
            )
