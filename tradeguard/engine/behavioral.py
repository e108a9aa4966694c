"""Behavioral equity scoring.

Two separate metrics live here and are never blended:

* Recent-form BE: a bounded 0-100 score over the last 10 trades that picks
  the tier and the position-size multiplier.
* Lifetime reputation: an unbounded score built from total P&L and average
  discipline, shown with a tier label and progress to the next tier only.
"""

from typing import Iterable

from tradeguard.engine.ordering import most_recent_first
from tradeguard.engine.utils import clamp, round_half_up
from tradeguard.models import (
    BEResult,
    ExecutionError,
    PlanAdherence,
    ReputationResult,
    Tier,
    Trade,
)

WINDOW_SIZE = 10
BASE_SCORE = 50

DISCIPLINE_BONUS = 5
DISCIPLINE_PENALTY = 5
SL_SABOTAGE_PENALTY = 25
PLAN_BONUS = 2

PROBATION = BEResult(
    score=50,
    tier=Tier.RECRUIT,
    multiplier=0.5,
    is_tier_a_locked=True,
    handicap_message="No data. Probation mode.",
)

# (min score, tier, size multiplier, tier A locked, message), high to low
FORM_TIERS = (
    (80, Tier.SENTINEL, 1.0, False, "Status alpha confirmed. Full market access."),
    (50, Tier.BUILDER, 0.75, True, "Builder status. Max size locked. Earn your way up."),
    (0, Tier.RECRUIT, 0.25, True, "Reputation critical. Micro-size only."),
)

REPUTATION_TIERS = (
    (Tier.RECRUIT, 0),
    (Tier.BUILDER, 5000),
    (Tier.OPERATOR, 10000),
    (Tier.SENTINEL, 25000),
)

DEFAULT_LIFETIME_DISCIPLINE = 5


def trade_form_delta(trade: Trade) -> int:
    """Score contribution of a single trade to recent form."""
    delta = 0
    if trade.discipline_score >= 4:
        delta += DISCIPLINE_BONUS
    if trade.discipline_score <= 2:
        delta -= DISCIPLINE_PENALTY
    if trade.execution_error == ExecutionError.STOP_LOSS_SABOTAGE:
        delta -= SL_SABOTAGE_PENALTY
    if trade.is_according_to_plan == PlanAdherence.DA:
        delta += PLAN_BONUS
    return delta


def calculate_be_score(trades: Iterable[Trade]) -> BEResult:
    """Score recent form over the 10 most recent trades across all accounts."""
    window = most_recent_first(trades)[:WINDOW_SIZE]
    if not window:
        return PROBATION

    raw = BASE_SCORE + sum(trade_form_delta(t) for t in window)
    score = int(clamp(raw, 0, 100))

    for min_score, tier, multiplier, locked, message in FORM_TIERS:
        if score >= min_score:
            break

    return BEResult(
        score=score,
        tier=tier,
        multiplier=multiplier,
        is_tier_a_locked=locked,
        handicap_message=message,
    )


def is_toxic_win(trade: Trade) -> bool:
    """A profitable trade that was only profitable because the stop was moved."""
    return trade.pnl_net > 0 and trade.execution_error == ExecutionError.STOP_LOSS_SABOTAGE


def calculate_reputation(trades: Iterable[Trade]) -> ReputationResult:
    """Lifetime reputation from total P&L and average discipline."""
    trades = list(trades)
    total_pnl = sum(t.pnl_net for t in trades)
    if trades:
        avg_discipline = sum(t.discipline_score for t in trades) / len(trades)
    else:
        avg_discipline = DEFAULT_LIFETIME_DISCIPLINE

    score = max(0, round_half_up(max(0, total_pnl * 0.1) + avg_discipline * 150))

    index = 0
    for i, (_, threshold) in enumerate(REPUTATION_TIERS):
        if score >= threshold:
            index = i
    tier, floor = REPUTATION_TIERS[index]

    if index + 1 < len(REPUTATION_TIERS):
        next_tier, ceiling = REPUTATION_TIERS[index + 1]
        progress = (score - floor) / (ceiling - floor) * 100
    else:
        next_tier = tier
        progress = 100.0

    violations = sum(1 for t in trades if t.execution_error == ExecutionError.STOP_LOSS_SABOTAGE)

    return ReputationResult(
        score=score,
        tier=tier,
        next_tier=next_tier,
        progress_pct=clamp(progress, 0, 100),
        violations=violations,
    )
