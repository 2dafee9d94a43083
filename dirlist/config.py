"""Persistent JSON display settings.

Stores theme, color mode, time-locale preferences, and an optional cap on the
number of requested paths. All access is defensive: malformed or missing
config falls back to defaults, one key at a time.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, replace
from pathlib import Path

from platformdirs import user_config_dir

from .theme import DEFAULT_THEME
from .timefmt import DEFAULT_FALLBACK_LOCALE, DEFAULT_TIME_LOCALE, DEFAULT_TIME_PATTERN

APP_NAME = "dirlist"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME

COLOR_MODES = ("auto", "always", "never")


@dataclass(frozen=True)
class DisplaySettings:
    """Presentation settings that sit beside the ``ListingRequest``."""

    theme: str = DEFAULT_THEME.name
    color: str = "auto"
    time_locale: str = DEFAULT_TIME_LOCALE
    time_fallback_locale: str = DEFAULT_FALLBACK_LOCALE
    time_pattern: str = DEFAULT_TIME_PATTERN
    max_paths: int | None = None

    def use_color(self, is_tty: bool) -> bool:
        if self.color == "always":
            return True
        if self.color == "never":
            return False
        return is_tty


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except Exception:
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON.

    Any filesystem/serialization error is ignored so an unwritable config
    directory never breaks a listing.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except Exception:
        pass


def _nonempty_string(value: object) -> str | None:
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped if stripped else None


def _positive_int(value: object) -> int | None:
    """Booleans and non-integers are treated as invalid."""
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value if value > 0 else None


def load_display_settings() -> DisplaySettings:
    """Build ``DisplaySettings`` from the config file, keeping defaults for bad keys."""
    data = load_config()
    settings = DisplaySettings()

    theme = _nonempty_string(data.get("theme"))
    if theme is not None:
        settings = replace(settings, theme=theme.lower())

    color = _nonempty_string(data.get("color"))
    if color is not None and color.lower() in COLOR_MODES:
        settings = replace(settings, color=color.lower())

    time_locale = _nonempty_string(data.get("time_locale"))
    if time_locale is not None:
        settings = replace(settings, time_locale=time_locale)

    fallback = _nonempty_string(data.get("time_fallback_locale"))
    if fallback is not None:
        settings = replace(settings, time_fallback_locale=fallback)

    pattern = _nonempty_string(data.get("time_pattern"))
    if pattern is not None:
        settings = replace(settings, time_pattern=pattern)

    max_paths = _positive_int(data.get("max_paths"))
    if max_paths is not None:
        settings = replace(settings, max_paths=max_paths)

    return settings


def save_display_settings(settings: DisplaySettings) -> None:
    """Persist ``settings`` over the existing config, keeping unrelated keys."""
    config = load_config()
    config["theme"] = settings.theme
    config["color"] = settings.color
    config["time_locale"] = settings.time_locale
    config["time_fallback_locale"] = settings.time_fallback_locale
    config["time_pattern"] = settings.time_pattern
    if settings.max_paths is None:
        config.pop("max_paths", None)
    else:
        config["max_paths"] = settings.max_paths
    save_config(config)


__all__ = [
    "APP_NAME",
    "CONFIG_PATH",
    "COLOR_MODES",
    "DisplaySettings",
    "load_config",
    "save_config",
    "load_display_settings",
    "save_display_settings",
]
