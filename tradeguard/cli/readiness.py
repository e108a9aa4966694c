"""Readiness commands for TradeGuard CLI.

Handles the morning biometric gate and the intraday tilt gauge.
"""

from pathlib import Path
from typing import Optional

import click
from pydantic import ValidationError
from rich.panel import Panel

from tradeguard.cli.common import (
    console,
    date_option,
    fail,
    get_store,
    journal_option,
    money,
    resolve_date,
)
from tradeguard.db.store import SnapshotError
from tradeguard.engine import calculate_tilt_risk, can_deploy, evaluate_prep, evaluate_readiness
from tradeguard.models import TiltLevel, Verdict

VERDICT_COLORS = {
    Verdict.GREEN: "green",
    Verdict.YELLOW: "yellow",
    Verdict.RED: "red",
    Verdict.NONE: "dim",
}

TILT_COLORS = {
    TiltLevel.OPTIMAL: "cyan",
    TiltLevel.MILD: "yellow",
    TiltLevel.FRICTION: "dark_orange",
    TiltLevel.OVERLOAD: "red",
}


@click.command()
@journal_option
@date_option
@click.option("--hrv", type=float, default=None, help="Morning HRV reading (ms).")
@click.option("--baseline", type=float, default=None, help="HRV baseline (ms).")
@click.option("--sleep", "sleep_hours", type=float, default=None, help="Hours slept.")
@click.option("--physical", type=float, default=None, help="Physical energy 1-10.")
@click.option("--mental", type=float, default=None, help="Mental clarity 1-10.")
@click.option("--emotional", type=float, default=None, help="Emotional calm 1-10.")
@click.option("--process", "process_", type=float, default=None, help="Process confidence 1-10.")
def gate(
    journal: Optional[Path],
    on_date,
    hrv: Optional[float],
    baseline: Optional[float],
    sleep_hours: Optional[float],
    physical: Optional[float],
    mental: Optional[float],
    emotional: Optional[float],
    process_: Optional[float],
) -> None:
    """Score morning readiness into a Green/Yellow/Red verdict.

    With no readings given, the day's prep record from the journal is scored.

    \b
    Examples:
      tradeguard gate --hrv 45 --baseline 45 --sleep 8 --physical 8 --mental 8 --emotional 8 --process 8
      tradeguard gate --date 2024-03-04
    """
    readings = (hrv, baseline, sleep_hours, physical, mental, emotional, process_)

    if all(value is None for value in readings):
        today = resolve_date(on_date)
        try:
            prep = get_store(journal).get_daily_prep(today)
        except (SnapshotError, ValidationError) as e:
            fail(str(e))
        if prep is None:
            fail(f"No prep record for {today.isoformat()}. Pass readings as options.")
        result = evaluate_prep(prep)
    else:
        subjective = tuple(v or 0 for v in (physical, mental, emotional, process_))
        result = evaluate_readiness(hrv, baseline, sleep_hours, subjective)

    color = VERDICT_COLORS[result.verdict]
    status = "[green]CLEARED TO DEPLOY[/green]" if can_deploy(result.verdict) else "[red]DEPLOY BLOCKED[/red]"

    console.print(Panel(
        f"[bold]Readiness Score:[/bold] [{color}]{result.score}/100[/{color}]\n\n"
        f"HRV:        {result.hrv_points} pts\n"
        f"Sleep:      {result.sleep_points} pts\n"
        f"Subjective: {result.subj_points:.1f} pts\n"
        f"{'─' * 30}\n"
        f"Verdict: [bold {color}]{result.verdict.value.upper()}[/bold {color}]  {status}",
        title="[bold cyan]Gatekeeper[/bold cyan]",
        border_style=color,
    ))


@click.command()
@journal_option
@date_option
@click.option("--account", "account_id", default=None, help="Account ID or name.")
def tilt(journal: Optional[Path], on_date, account_id: Optional[str]) -> None:
    """Show today's tilt risk.

    \b
    Examples:
      tradeguard tilt
      tradeguard tilt --account apex-1 --date 2024-03-04
    """
    today = resolve_date(on_date)
    store = get_store(journal)

    try:
        account = store.get_account(account_id) if account_id else None
        if account_id and account is None:
            fail(f"Account not found: {account_id}")
        trades = store.get_trades(account=account, trade_date=today)
        prep = store.get_daily_prep(today)
    except (SnapshotError, ValidationError) as e:
        fail(str(e))

    result = calculate_tilt_risk(trades, today, account, prep)
    today_pnl = sum(t.pnl_net for t in trades)
    color = TILT_COLORS[result.level]

    console.print(Panel(
        f"[bold]Tilt Score:[/bold] [{color}]{result.score}/100[/{color}]\n"
        f"[bold {color}]{result.level.value}[/bold {color}] - {result.description}\n\n"
        f"[dim]Trades: {len(trades)} | P&L: {money(today_pnl)} | "
        f"Prep: {'filed' if prep else 'missing'}[/dim]",
        title=f"[bold]Tilt Gauge ({today.isoformat()})[/bold]",
        border_style=color,
    ))
