"""Journal snapshot storage for TradeGuard."""

from tradeguard.db.store import SnapshotError, SnapshotStore

__all__ = ["SnapshotError", "SnapshotStore"]
