"""Canonical recency ordering of trades.

Every recency-based rule in the engine (the rolling behavioral equity window
and the intraday loss streak) ranks trades the same way: most recent calendar
day first, and within a day by trade ID compared lexically, highest first.
"""

from typing import Iterable

from tradeguard.models import Trade


def recency_key(trade: Trade) -> tuple:
    return (trade.date, trade.id)


def most_recent_first(trades: Iterable[Trade]) -> list[Trade]:
    """Return a new list of trades ordered most recent first."""
    return sorted(trades, key=recency_key, reverse=True)


def chronological(trades: Iterable[Trade]) -> list[Trade]:
    """Return a new list of trades ordered oldest first."""
    return sorted(trades, key=recency_key)
