"""Configuration management for touchbase."""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from .core.cadence import is_recognized_cadence

logger = logging.getLogger(__name__)

TOUCHBASE_HOME = Path(os.environ.get("TOUCHBASE_HOME", Path.home() / "touchbase"))
CONFIG_FILE = TOUCHBASE_HOME / "config" / "touchbase.conf"
DATA_DIR = TOUCHBASE_HOME / "data"


@dataclass
class Config:
    """touchbase configuration."""

    data_file: Path = field(default_factory=lambda: DATA_DIR / "records.json")
    overdue_limit: int = 8
    recent_limit: int = 10
    default_cadence: str = "monthly"
    default_channel: str = "Email"


def _parse_int(key: str, value: str, default: int) -> int:
    try:
        parsed = int(value)
    except ValueError:
        logger.warning(f"Ignoring {key.upper()}={value!r}: not an integer")
        return default
    if parsed < 1:
        logger.warning(f"Ignoring {key.upper()}={value!r}: must be positive")
        return default
    return parsed


def _strip_value(value: str) -> str:
    """Handle quoted values with inline comments: "value" # comment"""
    if value.startswith('"') or value.startswith("'"):
        quote = value[0]
        end_quote = value.find(quote, 1)
        if end_quote != -1:
            return value[1:end_quote]
        return value[1:]
    # Unquoted: strip inline comments
    if "#" in value:
        return value.split("#")[0].strip()
    return value


def load_config(config_file: Path | None = None) -> Config:
    """Load configuration from touchbase.conf file."""
    config = Config()
    config_file = config_file or CONFIG_FILE

    if not config_file.exists():
        return config

    for line in config_file.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue

        if "=" not in line:
            continue

        key, _, value = line.partition("=")
        key = key.strip().lower()
        value = _strip_value(value.strip())

        match key:
            case "data_file":
                config.data_file = Path(value).expanduser()
            case "overdue_limit":
                config.overdue_limit = _parse_int(key, value, config.overdue_limit)
            case "recent_limit":
                config.recent_limit = _parse_int(key, value, config.recent_limit)
            case "default_cadence":
                if is_recognized_cadence(value):
                    config.default_cadence = value
                else:
                    logger.warning(f"Ignoring DEFAULT_CADENCE={value!r}: unknown cadence")
            case "default_channel":
                config.default_channel = value
            case _:
                logger.debug(f"Unknown config key: {key}")

    return config
