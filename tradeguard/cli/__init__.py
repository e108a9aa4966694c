"""CLI commands for TradeGuard.

The CLI is a thin rendering layer over the protocol engine: it loads a
journal snapshot, resolves "today" and prints engine results.
"""

from tradeguard.cli.main import cli, main

__all__ = ["cli", "main"]
