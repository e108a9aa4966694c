"""TradeGuard - trading discipline and risk protocol engine for a futures journal."""

__version__ = "0.1.0"
