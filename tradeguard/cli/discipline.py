"""Discipline commands for TradeGuard CLI.

Handles behavioral equity and the daily TG Score.
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
    resolve_date,
)
from tradeguard.db.store import SnapshotError
from tradeguard.engine import (
    calculate_be_score,
    calculate_reputation,
    calculate_tg_score,
    is_toxic_win,
    sentinel_audit,
    tg_score_series,
)


def _check(value: bool) -> str:
    return "[green]✓[/green]" if value else "[red]✗[/red]"


@click.command()
@journal_option
def be(journal: Optional[Path]) -> None:
    """Show recent-form behavioral equity and lifetime reputation.

    \b
    Examples:
      tradeguard be
    """
    try:
        trades = get_store(journal).get_trades()
    except (SnapshotError, ValidationError) as e:
        fail(str(e))

    form = calculate_be_score(trades)
    reputation = calculate_reputation(trades)
    toxic = sum(1 for t in trades if is_toxic_win(t))

    lock = "[red]LOCKED[/red]" if form.is_tier_a_locked else "[green]UNLOCKED[/green]"
    console.print(Panel(
        f"[bold]Score:[/bold] {form.score}/100   [bold]Tier:[/bold] {form.tier.value}\n"
        f"Size multiplier: {form.multiplier:.2f}x   Tier A setups: {lock}\n\n"
        f"[dim]{form.handicap_message}[/dim]",
        title="[bold cyan]Recent Form (last 10 trades)[/bold cyan]",
        border_style="cyan",
    ))

    console.print(Panel(
        f"[bold]Reputation:[/bold] {reputation.score:,} BE   [bold]Tier:[/bold] {reputation.tier.value}\n"
        f"Progress to {reputation.next_tier.value}: {reputation.progress_pct:.1f}%\n\n"
        f"[dim]SL violations: {reputation.violations} | Toxic wins: {toxic}[/dim]",
        title="[bold]Lifetime Reputation[/bold]",
        border_style="dim",
    ))


@click.command()
@journal_option
@date_option
@click.option("--days", type=int, default=7, show_default=True, help="History length.")
def score(journal: Optional[Path], on_date, days: int) -> None:
    """Show the day's TG Score, its audit and recent history.

    \b
    Examples:
      tradeguard score
      tradeguard score --date 2024-03-04 --days 30
    """
    today = resolve_date(on_date)
    store = get_store(journal)

    try:
        trades = store.get_trades()
        preps = store.get_daily_preps()
    except (SnapshotError, ValidationError) as e:
        fail(str(e))

    prep = preps.get(today)
    result = calculate_tg_score(today, trades, prep)
    audit = sentinel_audit([t for t in trades if t.date == today], prep)

    table = Table(title=f"TG Score {today.isoformat()}", show_header=True, header_style="bold cyan")
    table.add_column("Axis", style="bold")
    table.add_column("Score", justify="right")
    for axis in result.axes:
        table.add_row(axis.subject, f"{axis.value:.0f}")
    table.add_row("[bold]Total[/bold]", f"[bold]{result.total}[/bold]")
    console.print(table)

    if result.veto:
        console.print("[bold red]VETO: stop-loss sabotage or revenge trading today.[/bold red]")
    if prep is None:
        console.print("[dim]No prep filed for this day.[/dim]")

    console.print(Panel(
        f"{_check(audit.is_gatekeeper_done)} Gatekeeper scanned   "
        f"{_check(audit.is_pre_fight_signed)} Uncertainty signed\n"
        f"{_check(audit.has_trades)} Trades logged ({audit.trade_count})   "
        f"{_check(audit.tilt_control)} Discipline >= 4\n"
        f"{_check(audit.all_notes_done)} Post-mortems written   "
        f"{_check(audit.wrap_up_done)} Day wrap-up\n"
        f"{_check(audit.sl_integrity)} SL integrity   "
        f"{_check(audit.emotional_friction)} No revenge trading",
        title="[bold]Sentinel Audit[/bold]",
        border_style="dim",
    ))

    history = tg_score_series(trades, preps, today, days)
    console.print(
        "[dim]History:[/dim] "
        + "  ".join(f"{day.strftime('%m-%d')}:{total}" for day, total in history)
    )
