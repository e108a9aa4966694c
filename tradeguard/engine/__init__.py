"""Trading discipline and risk protocol engine.

Every function here is pure: results depend only on the snapshot passed in
and an explicit ``today`` where one is needed. Nothing is cached or written.
"""

from tradeguard.engine.instruments import INSTRUMENT_REGISTRY, get_instrument, list_instruments
from tradeguard.engine.sizing import calculate_risk_per_trade, calculate_sizing
from tradeguard.engine.drawdown import (
    apply_risk_suggestion,
    calculate_drawdown,
    daily_exposure_pct,
    liquidation_threshold,
    suggest_risk_setting,
)
from tradeguard.engine.gatekeeper import (
    apply_gatekeeper,
    can_deploy,
    evaluate_prep,
    evaluate_readiness,
)
from tradeguard.engine.behavioral import (
    calculate_be_score,
    calculate_reputation,
    is_toxic_win,
)
from tradeguard.engine.discipline import (
    calculate_tg_score,
    sentinel_audit,
    tg_score_series,
)
from tradeguard.engine.tilt import calculate_tilt_risk
from tradeguard.engine.projection import (
    find_consistency_breaches,
    historical_win_rate,
    project_challenge,
)

__all__ = [
    "INSTRUMENT_REGISTRY",
    "apply_gatekeeper",
    "apply_risk_suggestion",
    "calculate_be_score",
    "calculate_drawdown",
    "calculate_reputation",
    "calculate_risk_per_trade",
    "calculate_sizing",
    "calculate_tg_score",
    "calculate_tilt_risk",
    "can_deploy",
    "daily_exposure_pct",
    "evaluate_prep",
    "evaluate_readiness",
    "find_consistency_breaches",
    "get_instrument",
    "historical_win_rate",
    "is_toxic_win",
    "liquidation_threshold",
    "list_instruments",
    "project_challenge",
    "sentinel_audit",
    "suggest_risk_setting",
    "tg_score_series",
]
