"""Daily discipline composite (TG Score).

Five axes, each 0-100: Prep, Execution, Review, Risk Integrity and
Consistency. The total is their rounded mean. The veto flag is reported next
to the total and does not change it.
"""

from datetime import date, timedelta
from typing import Iterable, Mapping, Optional

from tradeguard.engine.utils import clamp, round_half_up
from tradeguard.models import (
    DailyPrepData,
    ExecutionError,
    SentinelAudit,
    TGAxis,
    TGScoreResult,
    Trade,
    VETO_ERRORS,
    Verdict,
)

AXES = ("Prep", "Execution", "Review", "Risk Integrity", "Consistency")

NOTES_MIN_LENGTH = 15
AUDIT_NOTES_MIN_LENGTH = 10
DEFAULT_DAILY_RISK = 1000

MAX_DISCIPLINE = 5


def _axes(*values: float) -> list[TGAxis]:
    return [TGAxis(subject=s, value=clamp(v, 0, 100)) for s, v in zip(AXES, values)]


def prep_axis(prep: DailyPrepData) -> float:
    return prep.gk_total_score * 0.6 + (40 if prep.gk_uncertainty_accepted else 0)


def execution_axis(day_trades: list[Trade]) -> float:
    if not day_trades:
        return 100
    scores = [clamp(t.discipline_score or 0, 0, MAX_DISCIPLINE) for t in day_trades]
    return sum(scores) / len(scores) * 20


def review_axis(day_trades: list[Trade], prep: DailyPrepData) -> float:
    if day_trades:
        noted = sum(1 for t in day_trades if t.notes_length >= NOTES_MIN_LENGTH)
        notes = noted / len(day_trades) * 50
    else:
        notes = 50
    wrap = 50 if prep.hab_journal_completed else 0
    return notes + wrap


def has_veto_error(day_trades: list[Trade]) -> bool:
    return any(t.execution_error in VETO_ERRORS for t in day_trades)


def consistency_axis(day_trades: list[Trade], prep: DailyPrepData) -> float:
    day_pnl = sum(t.pnl_net for t in day_trades)
    allowed = prep.gk_daily_risk_amount or DEFAULT_DAILY_RISK
    if day_pnl < 0 and abs(day_pnl) > allowed:
        return 20
    return 90


def calculate_tg_score(
    day: date,
    trades: Iterable[Trade],
    prep: Optional[DailyPrepData],
) -> TGScoreResult:
    """Score one calendar day's discipline.

    Args:
        day: Calendar day to score.
        trades: Trades of any days; only those on ``day`` count.
        prep: That day's prep record, if one was filed.

    Returns:
        TGScoreResult with the total, the five axes and the veto flag.
    """
    if prep is None:
        return TGScoreResult(total=0, axes=_axes(0, 0, 0, 0, 0), veto=False)

    day_trades = [t for t in trades if t.date == day]
    veto = has_veto_error(day_trades)

    axes = _axes(
        prep_axis(prep),
        execution_axis(day_trades),
        review_axis(day_trades, prep),
        0 if veto else 100,
        consistency_axis(day_trades, prep),
    )
    total = round_half_up(sum(a.value for a in axes) / len(axes))

    return TGScoreResult(total=int(clamp(total, 0, 100)), axes=axes, veto=veto)


def tg_score_series(
    trades: Iterable[Trade],
    preps: Mapping[date, DailyPrepData],
    end: date,
    days: int = 30,
) -> list[tuple[date, int]]:
    """TG totals for the ``days`` calendar days ending at ``end``, oldest first."""
    trades = list(trades)
    series = []
    for offset in range(days - 1, -1, -1):
        day = end - timedelta(days=offset)
        series.append((day, calculate_tg_score(day, trades, preps.get(day)).total))
    return series


def sentinel_audit(day_trades: Iterable[Trade], prep: Optional[DailyPrepData]) -> SentinelAudit:
    """Checklist of the day's protocol steps."""
    day_trades = list(day_trades)
    has_trades = bool(day_trades)
    avg_discipline = (
        sum(t.discipline_score for t in day_trades) / len(day_trades) if has_trades else 0
    )
    return SentinelAudit(
        is_gatekeeper_done=prep is not None and prep.gk_verdict != Verdict.NONE,
        is_pre_fight_signed=prep is not None and prep.gk_uncertainty_accepted,
        has_trades=has_trades,
        trade_count=len(day_trades),
        all_notes_done=has_trades and all(t.notes_length > AUDIT_NOTES_MIN_LENGTH for t in day_trades),
        tilt_control=avg_discipline >= 4,
        wrap_up_done=prep is not None and prep.hab_journal_completed,
        sl_integrity=not any(t.execution_error == ExecutionError.STOP_LOSS_SABOTAGE for t in day_trades),
        emotional_friction=not any(t.execution_error == ExecutionError.REVENGE_TRADING for t in day_trades),
    )
