"""Intraday tilt risk gauge.

Heat score of the probability of an execution error today, built from the
day's losses against the risk budget, the current losing streak and whether
the morning prep was done.
"""

from datetime import date
from typing import Iterable, Optional

from tradeguard.engine.ordering import most_recent_first
from tradeguard.engine.utils import clamp, round_half_up, safe_denominator
from tradeguard.models import (
    Account,
    DailyPrepData,
    TiltLevel,
    TiltResult,
    Trade,
    TradeStatus,
)

DEFAULT_MAX_DAILY_RISK = 1000

LOSS_WEIGHT = 50
STREAK_STEP = 15
STREAK_CAP = 30
NO_PREP_PENALTY = 20
LOW_DISCIPLINE_PENALTY = 15
LOW_DISCIPLINE_THRESHOLD = 5

# (exclusive lower bound, level, label, description), high to low
TILT_LEVELS = (
    (75, TiltLevel.OVERLOAD, "Overload", "Stop trading immediately."),
    (40, TiltLevel.FRICTION, "Friction", "Reduce size."),
    (15, TiltLevel.MILD, "Mild", "Stay alert."),
    (-1, TiltLevel.OPTIMAL, "Optimal", "Stable flow."),
)


def losing_streak(trades: Iterable[Trade]) -> int:
    """Count consecutive losses from the most recent trade backwards."""
    streak = 0
    for trade in most_recent_first(trades):
        if trade.status != TradeStatus.LOSS:
            break
        streak += 1
    return streak


def tilt_level(score: int) -> tuple[TiltLevel, str, str]:
    for threshold, level, label, description in TILT_LEVELS:
        if score > threshold:
            return level, label, description
    _, level, label, description = TILT_LEVELS[-1]
    return level, label, description


def calculate_tilt_risk(
    trades: Iterable[Trade],
    today: date,
    account: Optional[Account] = None,
    prep: Optional[DailyPrepData] = None,
) -> TiltResult:
    """Score today's tilt risk.

    Args:
        trades: Trades of any days; only those dated ``today`` count.
        today: The session date.
        account: Active account; its max daily risk scales the loss factor.
        prep: Today's prep record, if filed.

    Returns:
        TiltResult with the 0-100 score and its band.
    """
    today_trades = [t for t in trades if t.date == today]
    today_pnl = sum(t.pnl_net for t in today_trades)

    max_daily_risk = DEFAULT_MAX_DAILY_RISK
    if account is not None and account.risk_settings is not None:
        max_daily_risk = account.risk_settings.max_daily_risk or DEFAULT_MAX_DAILY_RISK

    score = 0.0
    if today_pnl < 0:
        score += min(abs(today_pnl) / safe_denominator(max_daily_risk) * LOSS_WEIGHT, LOSS_WEIGHT)

    score += min(losing_streak(today_trades) * STREAK_STEP, STREAK_CAP)

    if prep is None:
        score += NO_PREP_PENALTY
    elif prep.hab_discipline_score is not None and prep.hab_discipline_score < LOW_DISCIPLINE_THRESHOLD:
        score += LOW_DISCIPLINE_PENALTY

    final = int(clamp(round_half_up(score), 0, 100))
    level, label, description = tilt_level(final)

    return TiltResult(score=final, level=level, label=label, description=description)
