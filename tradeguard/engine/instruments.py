"""Static registry of supported futures instruments."""

import logging
from types import MappingProxyType

from tradeguard.models import InstrumentSpec

logger = logging.getLogger(__name__)

DEFAULT_INSTRUMENT = "MNQ"

INSTRUMENT_REGISTRY = MappingProxyType({
    "MNQ": InstrumentSpec(symbol="MNQ", multiplier=2, tick=0.25),
    "NQ": InstrumentSpec(symbol="NQ", multiplier=20, tick=0.25),
    "MES": InstrumentSpec(symbol="MES", multiplier=5, tick=0.25),
    "ES": InstrumentSpec(symbol="ES", multiplier=50, tick=0.25),
    "GC": InstrumentSpec(symbol="GC", multiplier=100, tick=0.10),
    "BTCUSDT": InstrumentSpec(symbol="BTCUSDT", multiplier=1, tick=0.01),
})


def get_instrument(symbol: str | None) -> InstrumentSpec:
    """Look up an instrument, falling back to MNQ for unknown symbols."""
    spec = INSTRUMENT_REGISTRY.get((symbol or "").upper())
    if spec is None:
        logger.debug(f"Unknown instrument {symbol!r}, sizing with {DEFAULT_INSTRUMENT}")
        return INSTRUMENT_REGISTRY[DEFAULT_INSTRUMENT]
    return spec


def list_instruments() -> list[str]:
    """List registered instrument symbols."""
    return list(INSTRUMENT_REGISTRY.keys())
