"""Equity and drawdown model.

Replays an account's trade history into running equity, a high-water mark and
the liquidation threshold, and derives the auto-throttle suggestion for the
account's max daily risk.

The suggestion is only ever returned. Writing it back is a separate step the
caller takes with :func:`apply_risk_suggestion`.
"""

import logging
import math
from datetime import date
from typing import Iterable, Optional

from tradeguard.engine.ordering import chronological
from tradeguard.engine.utils import clamp, safe_denominator
from tradeguard.models import (
    Account,
    AccountRiskSettings,
    DEFAULT_RISK_SETTINGS,
    DrawdownResult,
    DrawdownType,
    Trade,
)

logger = logging.getLogger(__name__)

THROTTLE_BUFFER_SHARE = 0.10
THROTTLE_MIN_RISK = 50
THROTTLE_MIN_BUFFER = 500


def account_trades(account: Account, trades: Iterable[Trade]) -> list[Trade]:
    """Select an account's trades in chronological order."""
    return chronological(t for t in trades if account.owns(t.account_id))


def liquidation_threshold(account: Account, peak_equity: float) -> float:
    """Equity level at which the account is breached.

    Static drawdown is anchored to the initial balance. Trailing drawdown
    follows the high-water mark and, on payout accounts, stops trailing once it
    reaches initial balance plus the stop threshold.
    """
    if account.drawdown_type == DrawdownType.STATIC:
        return account.initial_balance - account.max_drawdown

    threshold = peak_equity - account.max_drawdown
    if account.is_pa:
        threshold = min(threshold, account.initial_balance + account.stop_threshold_offset)
    return threshold


def replay_equity(account: Account, trades: Iterable[Trade]) -> tuple[float, float]:
    """Replay trades onto the initial balance.

    Returns:
        Tuple of (current_equity, peak_equity).
    """
    equity = account.initial_balance
    peak = account.initial_balance
    for trade in account_trades(account, trades):
        equity += trade.pnl_net
        peak = max(peak, equity)
    return equity, peak


def recommended_max_daily_risk(buffer: float) -> int:
    """Max daily risk the throttle rule allows for a given risk buffer."""
    recommended = math.floor(buffer * THROTTLE_BUFFER_SHARE)
    if recommended < THROTTLE_MIN_RISK and buffer > THROTTLE_MIN_BUFFER:
        return THROTTLE_MIN_RISK
    return recommended


def _suggest_from_buffer(account: Account, buffer: float) -> Optional[int]:
    target = recommended_max_daily_risk(buffer)
    current = account.effective_risk_settings.max_daily_risk
    if target == current:
        return None
    logger.debug(f"Account {account.id}: suggest max daily risk {current} -> {target}")
    return target


def calculate_drawdown(account: Account, trades: Iterable[Trade]) -> DrawdownResult:
    """Calculate equity, high-water mark, liquidation point and risk buffer.

    Args:
        account: Account snapshot.
        trades: Trades of any accounts; only this account's are replayed.

    Returns:
        DrawdownResult including the throttle suggestion, if any.
    """
    equity, peak = replay_equity(account, trades)
    threshold = liquidation_threshold(account, peak)
    buffer = max(equity - threshold, 0)

    return DrawdownResult(
        current_equity=equity,
        peak_equity=peak,
        liquidation_point=threshold,
        available_risk_buffer=buffer,
        suggested_max_daily_risk=_suggest_from_buffer(account, buffer),
    )


def suggest_risk_setting(account: Account, trades: Iterable[Trade]) -> Optional[int]:
    """Return the throttled max daily risk, or None when no change is needed."""
    return calculate_drawdown(account, trades).suggested_max_daily_risk


def apply_risk_suggestion(account: Account, max_daily_risk: float) -> Account:
    """Return a copy of the account with a new max daily risk.

    The input account is not modified. Accounts without risk settings get
    the fallback profile with the new value.
    """
    settings: AccountRiskSettings = account.risk_settings or DEFAULT_RISK_SETTINGS
    updated = settings.model_copy(update={"max_daily_risk": max_daily_risk})
    return account.model_copy(update={"risk_settings": updated})


def daily_exposure_pct(
    trades: Iterable[Trade],
    today: date,
    settings: Optional[AccountRiskSettings] = None,
) -> float:
    """Share of today's risk budget already lost, as a percentage 0-100."""
    settings = settings or DEFAULT_RISK_SETTINGS
    today_pnl = sum(t.pnl_net for t in trades if t.date == today)
    loss = abs(min(today_pnl, 0))
    return clamp(loss / safe_denominator(settings.max_daily_risk) * 100, 0, 100)
