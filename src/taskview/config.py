"""Configuration management for taskview."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from .core.query import DateMode, SortField, StatusMode

logger = logging.getLogger(__name__)

TASKVIEW_HOME = Path(os.environ.get("TASKVIEW_HOME", Path.home() / "taskview"))
CONFIG_FILE = TASKVIEW_HOME / "config" / "taskview.conf"
DEFAULT_TASKS_FILE = Path.home() / ".todo-list.json"

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


@dataclass
class Config:
    """taskview configuration."""

    timezone: str = "UTC"
    tasks_file: str = str(DEFAULT_TASKS_FILE)
    default_status: StatusMode = StatusMode.ALL
    default_date: DateMode = DateMode.ALL
    default_sort: SortField = SortField.NONE
    default_ascending: bool = True


def _unquote(value: str) -> str:
    """Strip surrounding quotes, or an inline comment from unquoted values."""
    for quote in ('"', "'"):
        if value.startswith(quote):
            end_quote = value.find(quote, 1)
            return value[1:end_quote] if end_quote != -1 else value[1:]
    if "#" in value:
        value = value.split("#")[0].strip()
    return value


def _parse_enum(enum_cls, raw: str, key: str, default):
    """Parse a config value into an enum member, warning on unknown values."""
    parsed = enum_cls.parse(raw)
    fallback = enum_cls.parse(None)
    if raw and parsed is fallback and raw.lower() != fallback.value:
        logger.warning(f"Invalid {key.upper()} value '{raw}', using '{default.value}'")
        return default
    return parsed


def load_config(path: Path | None = None) -> Config:
    """Load configuration from taskview.conf file."""
    config = Config()
    path = path or CONFIG_FILE

    if not path.exists():
        return config

    for line in path.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue

        if "=" not in line:
            continue

        key, _, value = line.partition("=")
        key = key.strip().lower()
        value = _unquote(value.strip())

        match key:
            case "timezone":
                config.timezone = value
            case "tasks_file":
                config.tasks_file = value
            case "default_status":
                config.default_status = _parse_enum(StatusMode, value, key, config.default_status)
            case "default_date":
                config.default_date = _parse_enum(DateMode, value, key, config.default_date)
            case "default_sort":
                config.default_sort = _parse_enum(SortField, value, key, config.default_sort)
            case "default_ascending":
                if value.lower() in _TRUE:
                    config.default_ascending = True
                elif value.lower() in _FALSE:
                    config.default_ascending = False
                else:
                    logger.warning(f"Invalid DEFAULT_ASCENDING value '{value}', expected true/false")
            case _:
                logger.debug(f"Ignoring unknown config key '{key}'")

    return config
