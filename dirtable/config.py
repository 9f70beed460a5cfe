"""Read-only JSON config helpers.

Supplies the default theme and color preference. The browser never writes
this file; malformed or missing config falls back to built-in defaults.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from platformdirs import user_config_dir

APP_NAME = "dirtable"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME

logger = logging.getLogger(__name__)


def load_config() -> dict[str, object]:
    """Load the user JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        logger.warning("ignoring config %s: %s", CONFIG_PATH, exc)
        return {}
    return data if isinstance(data, dict) else {}


def load_theme_name() -> str | None:
    """Load configured UI theme name, returning ``None`` when unset/invalid."""
    value = load_config().get("theme")
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped if stripped else None


def load_no_color() -> bool:
    """Return configured color preference; only explicit booleans count."""
    value = load_config().get("no_color")
    return value if isinstance(value, bool) else False


__all__ = [
    "APP_NAME",
    "CONFIG_PATH",
    "load_config",
    "load_theme_name",
    "load_no_color",
]
