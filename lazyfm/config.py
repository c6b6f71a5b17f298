"""User JSON config helpers.

Reads editor command, hidden-entry preference, theme and preview length.
All access is defensive: malformed or missing config falls back safely.
The file is never written by the application.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_config_dir

APP_NAME = "lazyfm"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
DEFAULT_PREVIEW_LINES = 40


@dataclass(frozen=True)
class BrowserConfig:
    """Effective settings after merging config file and defaults."""

    editor: str | None = None
    show_hidden: bool = True
    theme: str | None = None
    preview_lines: int = DEFAULT_PREVIEW_LINES


def load_config() -> dict[str, object]:
    """Load the JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return {}
    return data if isinstance(data, dict) else {}


def _load_string(data: dict[str, object], key: str) -> str | None:
    value = data.get(key)
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped if stripped else None


def _load_preview_lines(data: dict[str, object]) -> int:
    """Accept only non-negative integers; booleans are rejected."""
    value = data.get("preview_lines")
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        return DEFAULT_PREVIEW_LINES
    return value


def load_browser_config() -> BrowserConfig:
    """Build ``BrowserConfig`` from the config file, validating each key."""
    data = load_config()
    show_hidden = data.get("show_hidden")
    return BrowserConfig(
        editor=_load_string(data, "editor"),
        show_hidden=show_hidden if isinstance(show_hidden, bool) else True,
        theme=_load_string(data, "theme"),
        preview_lines=_load_preview_lines(data),
    )
