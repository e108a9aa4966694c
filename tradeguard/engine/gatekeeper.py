"""Biometric readiness gate.

Scores the morning's HRV deviation, sleep and four subjective 1-10 ratings
into a 0-100 readiness score and a Green/Yellow/Red verdict. A Red verdict
blocks deploying capital for the session.
"""

from typing import Optional

from tradeguard.engine.utils import clamp, round_half_up, safe_denominator
from tradeguard.models import DailyPrepData, GatekeeperResult, Verdict

# (max deviation from baseline, points), evaluated in order
HRV_BANDS = ((0.06, 50), (0.12, 35), (0.20, 15))
# (min hours, points), evaluated in order
SLEEP_BANDS = ((7.5, 30), (6.5, 20), (5.5, 10))

SUBJECTIVE_MAX = 10
SUBJECTIVE_WEIGHT = 20

GREEN_THRESHOLD = 80
YELLOW_THRESHOLD = 50


def hrv_points(hrv_value: Optional[float], hrv_baseline: Optional[float]) -> int:
    deviation = abs(safe_denominator(hrv_value) / safe_denominator(hrv_baseline) - 1)
    for max_deviation, points in HRV_BANDS:
        if deviation <= max_deviation:
            return points
    return 0


def sleep_points(sleep_hours: Optional[float]) -> int:
    hours = sleep_hours or 0
    for min_hours, points in SLEEP_BANDS:
        if hours >= min_hours:
            return points
    return 0


def subjective_points(scores: tuple[float, ...]) -> float:
    total = sum(clamp(s or 0, 0, SUBJECTIVE_MAX) for s in scores)
    return total / (SUBJECTIVE_MAX * 4) * SUBJECTIVE_WEIGHT


def verdict_for(score: float) -> Verdict:
    if score >= GREEN_THRESHOLD:
        return Verdict.GREEN
    if score >= YELLOW_THRESHOLD:
        return Verdict.YELLOW
    return Verdict.RED


def evaluate_readiness(
    hrv_value: Optional[float],
    hrv_baseline: Optional[float],
    sleep_hours: Optional[float],
    subjective: tuple[float, float, float, float],
) -> GatekeeperResult:
    """Score readiness from raw inputs.

    Args:
        hrv_value: Morning HRV reading.
        hrv_baseline: Personal HRV baseline.
        sleep_hours: Hours slept.
        subjective: Physical, mental, emotional and process scores (1-10).

    Returns:
        GatekeeperResult with the score, verdict and point components.
    """
    hrv = hrv_points(hrv_value, hrv_baseline)
    sleep = sleep_points(sleep_hours)
    subj = subjective_points(subjective)
    score = int(clamp(round_half_up(hrv + sleep + subj), 0, 100))

    return GatekeeperResult(
        score=score,
        verdict=verdict_for(score),
        hrv_points=hrv,
        sleep_points=sleep,
        subj_points=subj,
    )


def evaluate_prep(prep: DailyPrepData) -> GatekeeperResult:
    """Score readiness from a day's prep record."""
    return evaluate_readiness(
        prep.gk_hrv_value,
        prep.gk_hrv_baseline,
        prep.gk_sleep_hours,
        prep.subjective_scores,
    )


def apply_gatekeeper(prep: DailyPrepData) -> DailyPrepData:
    """Return a copy of the prep with its gatekeeper score and verdict filled in."""
    result = evaluate_prep(prep)
    return prep.model_copy(update={"gk_total_score": result.score, "gk_verdict": result.verdict})


def can_deploy(verdict: Verdict) -> bool:
    """Whether a session with this verdict may commit capital.

    Red blocks; an unscored day (None) blocks as well.
    """
    return verdict in (Verdict.GREEN, Verdict.YELLOW)
