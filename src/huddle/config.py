"""Configuration management for Huddle."""

import logging
import os
from dataclasses import dataclass
from datetime import timezone, tzinfo
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

logger = logging.getLogger(__name__)

HUDDLE_HOME = Path(os.environ.get("HUDDLE_HOME", Path.home() / "huddle"))
CONFIG_FILE = HUDDLE_HOME / "config" / "huddle.conf"
DATA_DIR = HUDDLE_HOME / "data"


@dataclass
class Config:
    """Huddle configuration."""

    snapshot_file: str = ""
    snapshot_url: str = ""
    snapshot_token: str = ""
    timezone: str = "UTC"
    currency: str = "$"

    @property
    def tz(self) -> tzinfo:
        """Timezone used for timestamps without an offset."""
        if self.timezone.upper() == "UTC":
            return timezone.utc
        try:
            return ZoneInfo(self.timezone)
        except (ZoneInfoNotFoundError, ValueError):
            logger.warning(f"Unknown timezone {self.timezone!r}, using UTC")
            return timezone.utc

    @property
    def snapshot_path(self) -> Path:
        """Snapshot file location, defaulting to the data directory."""
        if self.snapshot_file:
            return Path(self.snapshot_file).expanduser()
        return DATA_DIR / "snapshot.json"


def _unquote(value: str) -> str:
    """Strip quotes, or an inline comment from an unquoted value."""
    for quote in ('"', "'"):
        if value.startswith(quote):
            end_quote = value.find(quote, 1)
            return value[1:end_quote] if end_quote != -1 else value[1:]
    if "#" in value:
        value = value.split("#")[0].strip()
    return value


def load_config() -> Config:
    """Load configuration from huddle.conf file."""
    config = Config()

    if not CONFIG_FILE.exists():
        return config

    for line in CONFIG_FILE.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue

        if "=" not in line:
            continue

        key, _, value = line.partition("=")
        key = key.strip().lower()
        value = _unquote(value.strip())

        match key:
            case "snapshot_file":
                config.snapshot_file = value
            case "snapshot_url":
                config.snapshot_url = value
            case "snapshot_token":
                config.snapshot_token = value
            case "timezone":
                config.timezone = value
            case "currency":
                config.currency = value
            case _:
                logger.debug(f"Ignoring unknown config key {key!r}")

    return config
