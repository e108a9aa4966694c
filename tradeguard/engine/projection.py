"""Challenge projection engine.

Forward-simulates an account's equity curve under a constant daily
expectancy to estimate days to the profit goal, and flags days that break
the consistency rule.
"""

import logging
import math
from collections import defaultdict
from datetime import date
from typing import Iterable, Optional

from tradeguard.engine.drawdown import account_trades, liquidation_threshold, replay_equity
from tradeguard.engine.sizing import calculate_risk_per_trade
from tradeguard.engine.utils import clamp, safe_denominator
from tradeguard.models import (
    Account,
    ConsistencyBreach,
    ProjectionPoint,
    ProjectionResult,
    Trade,
    TradeStatus,
)

logger = logging.getLogger(__name__)

UNREACHABLE_DAYS = 999
MAX_SIMULATION_DAYS = 100
DEFAULT_WIN_RATE = 50.0
DEFAULT_MANUAL_WIN_RATE = 55.0
DEFAULT_MANUAL_DAYS = 20
CONSISTENCY_SHARE = 0.30


def historical_win_rate(trades: Iterable[Trade]) -> float:
    """Percentage of WIN trades, 50 when there is no history."""
    trades = list(trades)
    if not trades:
        return DEFAULT_WIN_RATE
    wins = sum(1 for t in trades if t.status == TradeStatus.WIN)
    return wins / len(trades) * 100


def expectancy_per_day(account: Account, win_rate: float) -> float:
    """Expected daily P&L at a win rate given in percent."""
    settings = account.effective_risk_settings
    trades_per_day = safe_denominator(settings.max_trades_per_day)
    risk = calculate_risk_per_trade(settings.max_daily_risk, settings.max_trades_per_day)
    reward = risk * settings.rr_ratio
    p = clamp(win_rate, 0, 100) / 100
    return trades_per_day * (p * reward - (1 - p) * risk)


def days_to_target(remaining_profit: float, expectancy: float) -> int:
    if expectancy <= 0:
        return UNREACHABLE_DAYS
    return math.ceil(remaining_profit / expectancy)


def simulate_equity(
    account: Account,
    start_equity: float,
    start_peak: float,
    expectancy: float,
    days: int,
    target: Optional[float] = None,
) -> list[ProjectionPoint]:
    """Step equity forward one expectancy per day.

    Stops after ``days`` (capped at 100) or once equity reaches ``target``.
    """
    equity = start_equity
    peak = start_peak
    series = []
    for day in range(1, min(days, MAX_SIMULATION_DAYS) + 1):
        equity += expectancy
        peak = max(peak, equity)
        threshold = liquidation_threshold(account, peak)
        series.append(ProjectionPoint(
            day=day,
            equity=equity,
            liquidation=threshold,
            breached=equity <= threshold,
        ))
        if target is not None and equity >= target:
            break
    return series


def daily_pnl(trades: Iterable[Trade]) -> dict[date, float]:
    totals: dict[date, float] = defaultdict(float)
    for trade in trades:
        totals[trade.date] += trade.pnl_net
    return dict(sorted(totals.items()))


def history_series(account: Account, trades: Iterable[Trade]) -> list[ProjectionPoint]:
    """Realized end-of-day equity curve of the account."""
    equity = account.initial_balance
    peak = account.initial_balance
    series = []
    for day, (when, pnl) in enumerate(daily_pnl(account_trades(account, trades)).items(), 1):
        equity += pnl
        peak = max(peak, equity)
        threshold = liquidation_threshold(account, peak)
        series.append(ProjectionPoint(
            day=day,
            equity=equity,
            liquidation=threshold,
            breached=equity <= threshold,
            date=when,
        ))
    return series


def find_consistency_breaches(
    trades: Iterable[Trade],
    share: float = CONSISTENCY_SHARE,
) -> list[ConsistencyBreach]:
    """Days whose profit exceeds ``share`` of the total account profit."""
    totals = daily_pnl(trades)
    total_profit = sum(totals.values())
    if total_profit <= 0:
        return []
    limit = total_profit * share
    return [
        ConsistencyBreach(date=day, pnl=pnl, limit=limit)
        for day, pnl in totals.items()
        if pnl > 0 and pnl > limit
    ]


def project_challenge(
    account: Account,
    trades: Iterable[Trade],
    manual_win_rate: float = DEFAULT_MANUAL_WIN_RATE,
    manual_days: int = DEFAULT_MANUAL_DAYS,
    win_rate_trades: Optional[Iterable[Trade]] = None,
) -> ProjectionResult:
    """Project the account's path to its profit goal.

    Args:
        account: Challenge account.
        trades: Trade history; only this account's trades move its equity.
        manual_win_rate: What-if win rate in percent.
        manual_days: Number of what-if days to simulate.
        win_rate_trades: Trades the historical win rate is measured on.
            Defaults to ``trades``.

    Returns:
        ProjectionResult with the real history and both projected series.
    """
    trades = list(trades)
    own_trades = account_trades(account, trades)

    history = history_series(account, own_trades)
    equity, peak = replay_equity(account, own_trades)
    threshold = liquidation_threshold(account, peak)

    target = account.profit_goal
    win_rate = historical_win_rate(trades if win_rate_trades is None else win_rate_trades)
    manual_expectancy = expectancy_per_day(account, manual_win_rate)
    hist_expectancy = expectancy_per_day(account, win_rate)

    remaining = max(target - equity, 0)
    days = days_to_target(remaining, hist_expectancy)
    logger.debug(f"Account {account.id}: {days} days to target at {win_rate:.1f}% win rate")

    current_pnl = equity - account.initial_balance
    progress = current_pnl / safe_denominator(target - account.initial_balance) * 100

    return ProjectionResult(
        days_to_target=days,
        target_goal=target,
        current_equity=equity,
        peak_equity=peak,
        liquidation_point=threshold,
        historical_win_rate=win_rate,
        manual_expectancy=manual_expectancy,
        historical_expectancy=hist_expectancy,
        history_series=history,
        manual_series=simulate_equity(account, equity, peak, manual_expectancy, manual_days, target),
        historical_series=simulate_equity(account, equity, peak, hist_expectancy, days, target),
        profit_progress_pct=clamp(progress, 0, 100),
        consistency_breaches=find_consistency_breaches(own_trades),
    )
