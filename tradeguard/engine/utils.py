"""Numeric helpers shared by the engine.

Rounding follows the journal's half-up convention rather than Python's
banker's rounding, so 2.5 rounds to 3 and -2.5 rounds to -2.
"""

import math
from typing import Optional


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves towards positive infinity."""
    return math.floor(value + 0.5)


def snap_to_tick(value: float, tick: float) -> float:
    """Snap a price distance to the nearest multiple of tick."""
    tick = safe_denominator(tick)
    # Strip float noise such as 2.3000000000000003 for 0.1 ticks
    return round(round_half_up(value / tick) * tick, 10)


def clamp(value: float, lower: float, upper: float) -> float:
    """Clamp value into [lower, upper]."""
    return max(lower, min(upper, value))


def safe_denominator(value: Optional[float]) -> float:
    """Return value, or 1 when it is zero, None or NaN."""
    if not value or math.isnan(value):
        return 1
    return value
