"""Position sizing engine.

Turns an account's risk settings into a concrete trade plan: contracts,
stop distance, target distance, commissions and net expectancy of a winner.
"""

import logging
import math
from typing import Optional

from tradeguard.engine.instruments import get_instrument
from tradeguard.engine.utils import round_half_up, safe_denominator, snap_to_tick
from tradeguard.models import (
    AccountRiskSettings,
    CalcMode,
    DEFAULT_RISK_SETTINGS,
    InstrumentSpec,
    SizingResult,
    TargetMode,
)

logger = logging.getLogger(__name__)


def calculate_risk_per_trade(max_daily_risk: float, trades_per_day: Optional[int]) -> int:
    """Split the daily risk budget evenly across the allowed trades."""
    return round_half_up(max_daily_risk / safe_denominator(trades_per_day))


def calculate_sizing(
    settings: Optional[AccountRiskSettings],
    instrument: Optional[InstrumentSpec] = None,
) -> SizingResult:
    """Calculate the position size for one trade.

    Args:
        settings: Account risk settings. None selects the fallback profile.
        instrument: Instrument to size. Defaults to the settings' preferred
            instrument from the registry.

    Returns:
        SizingResult with lots, stop/target distances and dollar figures.
    """
    if settings is None:
        logger.debug("No risk settings, using fallback sizing profile")
        settings = DEFAULT_RISK_SETTINGS

    spec = instrument or get_instrument(settings.preferred_instrument)
    multiplier = safe_denominator(spec.multiplier)
    tick = spec.tick

    risk_per_trade = calculate_risk_per_trade(settings.max_daily_risk, settings.max_trades_per_day)

    if settings.calc_mode == CalcMode.FIXED_CONTRACTS:
        lots = max(settings.max_contracts_per_trade or 1, 1)
        raw_sl = risk_per_trade / (lots * multiplier)
        sl_points = snap_to_tick(raw_sl, tick)
    else:
        sl_points = settings.fixed_sl_points or DEFAULT_RISK_SETTINGS.fixed_sl_points
        lots = math.floor(risk_per_trade / (safe_denominator(sl_points) * multiplier)) or 1
    lots = max(int(lots), 1)

    # Unset (zero) fields fall back to the default profile's value
    if settings.target_mode == TargetMode.FIXED_RR:
        rr_ratio = settings.rr_ratio or DEFAULT_RISK_SETTINGS.rr_ratio
        tp_points = snap_to_tick(sl_points * rr_ratio, tick)
    else:
        tp_points = settings.fixed_target_points or DEFAULT_RISK_SETTINGS.fixed_target_points

    comm_per_contract = settings.comm_per_contract or DEFAULT_RISK_SETTINGS.comm_per_contract
    commissions = lots * comm_per_contract * 2
    target_net = tp_points * multiplier * lots - commissions
    daily_potential = target_net * settings.max_trades_per_day

    return SizingResult(
        instrument=spec.symbol,
        risk_per_trade=risk_per_trade,
        lots=lots,
        sl_points=sl_points,
        tp_points=tp_points,
        commissions_per_trade=commissions,
        target_net=target_net,
        daily_potential=daily_potential,
    )
