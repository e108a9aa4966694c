"""TOML journal snapshot store.

The engine only ever sees immutable models. This store is the collaborator
that turns a journal snapshot file into those models and, as a separate
explicit command, writes a new max daily risk back to it.

Snapshot layout::

    [[accounts]]
    id = "apex-1"
    initial_balance = 50000
    max_drawdown = 2500
    drawdown_type = "Trailing"

    [accounts.risk_settings]
    max_daily_risk = 500

    [[trades]]
    id = "t-001"
    account_id = "apex-1"
    date = 2024-03-04
    pnl_net = -500
    status = "LOSS"

    [preps.2024-03-04]
    gk_hrv_value = 45
"""

import logging
from datetime import date
from pathlib import Path
from typing import Any, Optional

import toml

from tradeguard.models import Account, DailyPrepData, Trade

logger = logging.getLogger(__name__)


class SnapshotError(Exception):
    """Raised when a journal snapshot cannot be read or parsed."""


class SnapshotStore:
    """File-backed journal snapshot."""

    def __init__(self, path: Path):
        """Initialize the store.

        Args:
            path: Path to the TOML snapshot file.
        """
        self.path = path

    def _load(self) -> dict[str, Any]:
        if not self.path.exists():
            raise SnapshotError(f"Journal snapshot not found: {self.path}")
        try:
            return toml.load(self.path)
        except (OSError, toml.TomlDecodeError) as e:
            raise SnapshotError(f"Failed to read journal snapshot {self.path}: {e}") from e

    def _save(self, data: dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w") as f:
            toml.dump(data, f)

    def get_accounts(self) -> list[Account]:
        """Get all accounts."""
        return [Account.model_validate(raw) for raw in self._load().get("accounts", [])]

    def get_account(self, account_id: str) -> Optional[Account]:
        """Get an account by ID or name."""
        for account in self.get_accounts():
            if account.owns(account_id):
                return account
        return None

    def get_trades(
        self,
        account: Optional[Account] = None,
        trade_date: Optional[date] = None,
    ) -> list[Trade]:
        """Get trades, optionally filtered by account and day."""
        trades = [Trade.model_validate(raw) for raw in self._load().get("trades", [])]
        if account is not None:
            trades = [t for t in trades if account.owns(t.account_id)]
        if trade_date is not None:
            trades = [t for t in trades if t.date == trade_date]
        return trades

    def get_daily_preps(self) -> dict[date, DailyPrepData]:
        """Get prep records keyed by calendar date.

        Raises:
            SnapshotError: If a prep key is not an ISO date.
        """
        preps = {}
        for key, raw in self._load().get("preps", {}).items():
            if isinstance(key, date):
                day = key
            else:
                try:
                    day = date.fromisoformat(str(key))
                except ValueError as e:
                    raise SnapshotError(f"Invalid prep date {key!r} in {self.path}") from e
            preps[day] = DailyPrepData.model_validate(raw)
        return preps

    def get_daily_prep(self, day: date) -> Optional[DailyPrepData]:
        """Get the prep record of one day."""
        return self.get_daily_preps().get(day)

    def update_max_daily_risk(self, account_id: str, max_daily_risk: float) -> Account:
        """Persist a new max daily risk for an account.

        Returns:
            The updated account.

        Raises:
            SnapshotError: If the account does not exist.
        """
        data = self._load()
        for raw in data.get("accounts", []):
            account = Account.model_validate(raw)
            if account.owns(account_id):
                raw.setdefault("risk_settings", {})["max_daily_risk"] = max_daily_risk
                self._save(data)
                logger.info(f"Account {account.id}: max daily risk set to {max_daily_risk}")
                return Account.model_validate(raw)
        raise SnapshotError(f"Account not found: {account_id}")

