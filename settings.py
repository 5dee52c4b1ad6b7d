"""JSON-based settings persistence for the date range picker."""

import json
import logging
import os
from datetime import date

_SETTINGS_PATH = os.path.join(os.path.expanduser("~"), ".date-range-picker-settings.json")

_DEFAULTS = {
    "log_level": "INFO",
    "date_format": "%Y-%m-%d",
    "window_x": None,
    "window_y": None,
    "last_applied": None,
}

_LOG_LEVEL_ENV = "DATE_RANGE_PICKER_LOG_LEVEL"


def _parse_range(value) -> list[str] | None:
    if not isinstance(value, list) or len(value) != 2:
        return None
    try:
        start, end = (date.fromisoformat(v) for v in value)
    except (TypeError, ValueError):
        return None
    if start > end:
        return None
    return [start.isoformat(), end.isoformat()]


def load_settings(path: str | None = None) -> dict:
    """Load settings from disk, returning defaults for missing keys."""
    settings = dict(_DEFAULTS)
    try:
        with open(path or _SETTINGS_PATH, "r", encoding="utf-8") as f:
            stored = json.load(f)
    except (FileNotFoundError, json.JSONDecodeError, OSError):
        return settings
    if not isinstance(stored, dict):
        return settings

    level = stored.get("log_level")
    if isinstance(level, str) and isinstance(logging.getLevelName(level.upper()), int):
        settings["log_level"] = level.upper()
    if isinstance(stored.get("date_format"), str) and stored["date_format"]:
        settings["date_format"] = stored["date_format"]
    for key in ("window_x", "window_y"):
        if isinstance(stored.get(key), int) and not isinstance(stored[key], bool):
            settings[key] = stored[key]
    settings["last_applied"] = _parse_range(stored.get("last_applied"))
    return settings


def save_settings(settings: dict, path: str | None = None) -> None:
    """Persist settings to disk."""
    with open(path or _SETTINGS_PATH, "w", encoding="utf-8") as f:
        json.dump(settings, f, indent=2)


def log_level(settings: dict) -> int:
    """Effective log level: environment override first, then settings."""
    name = os.environ.get(_LOG_LEVEL_ENV) or settings.get("log_level") or "INFO"
    level = logging.getLevelName(name.upper())
    return level if isinstance(level, int) else logging.INFO
