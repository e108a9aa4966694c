"""Configuration loading for TradeGuard.

Settings live in ``~/.config/tradeguard/config.toml``::

    [journal]
    path = "~/journal/snapshot.toml"

    [projection]
    manual_win_rate = 55
    manual_days = 20
"""

from pathlib import Path
from typing import Optional


def get_config_dir() -> Path:
    """Get the configuration directory."""
    return Path.home() / ".config" / "tradeguard"


def get_config_path() -> Path:
    """Get the configuration file path."""
    return get_config_dir() / "config.toml"


def load_config(config_path: Optional[Path] = None) -> Optional[dict]:
    """Load configuration, or None when the file is missing or unreadable."""
    import toml

    config_path = config_path or get_config_path()

    if not config_path.exists():
        return None

    try:
        return toml.load(config_path)
    except (OSError, toml.TomlDecodeError):
        return None


def get_journal_path(config: Optional[dict] = None) -> Path:
    """Resolve the journal snapshot path from config."""
    configured = (config or {}).get("journal", {}).get("path")
    if configured:
        return Path(configured).expanduser()
    return get_config_dir() / "journal.toml"


def get_projection_defaults(config: Optional[dict] = None) -> tuple[float, int]:
    """Manual what-if win rate (percent) and day count."""
    projection = (config or {}).get("projection", {})
    return (
        float(projection.get("manual_win_rate", 55.0)),
        int(projection.get("manual_days", 20)),
    )
