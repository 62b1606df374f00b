"""Configuration management for Almanac."""

import calendar
import logging
import os
from dataclasses import dataclass
from datetime import date
from pathlib import Path

from .core.recurrence import UNBOUNDED_UNTIL

logger = logging.getLogger(__name__)

ALMANAC_HOME = Path(os.environ.get("ALMANAC_HOME", Path.home() / "almanac"))
CONFIG_FILE = ALMANAC_HOME / "config" / "almanac.conf"
DATA_DIR = ALMANAC_HOME / "data"

WEEKDAYS = {name.lower(): i for i, name in enumerate(calendar.day_name)}


@dataclass
class Config:
    """Almanac configuration."""

    events_file: str = str(DATA_DIR / "events.json")
    # Event API base URL; when set it takes priority over events_file
    api_base_url: str = ""
    request_timeout: int = 10
    week_start: int = calendar.SUNDAY
    unbounded_until: date = UNBOUNDED_UNTIL


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
    """Load configuration from almanac.conf file."""
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
            case "events_file":
                config.events_file = value
            case "api_base_url":
                config.api_base_url = value
            case "request_timeout":
                try:
                    config.request_timeout = int(value)
                except ValueError:
                    logger.warning(f"Invalid REQUEST_TIMEOUT: {value}")
            case "week_start":
                if value.lower() in WEEKDAYS:
                    config.week_start = WEEKDAYS[value.lower()]
                else:
                    logger.warning(f"Invalid WEEK_START: {value}")
            case "unbounded_until":
                try:
                    config.unbounded_until = date.fromisoformat(value)
                except ValueError:
                    logger.warning(f"Invalid UNBOUNDED_UNTIL date: {value}")

    return config
