"""Persistent JSON config helpers.

Stores the API endpoint, listing URL base, request timeout, and UI theme.
Malformed or missing config falls back to defaults.
"""

from __future__ import annotations

import json
from pathlib import Path

from platformdirs import user_config_dir

APP_NAME = "nyaaview"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME

DEFAULT_API_URL = "https://nyaa-api.fly.dev"
DEFAULT_VIEW_URL = "https://nyaa.si/view/"
DEFAULT_REQUEST_TIMEOUT = 15.0


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON.

    Filesystem errors are ignored to keep runtime behavior non-fatal when
    config cannot be written.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except OSError:
        pass


def _load_url(key: str, default: str) -> str:
    value = load_config().get(key)
    if not isinstance(value, str):
        return default
    stripped = value.strip()
    if not stripped.startswith(("http://", "https://")):
        return default
    return stripped


def load_api_url() -> str:
    """Return the search API base URL."""
    return _load_url("api_url", DEFAULT_API_URL)


def load_view_url() -> str:
    """Return the listing detail URL prefix (the record id is appended)."""
    return _load_url("view_url", DEFAULT_VIEW_URL)


def load_request_timeout() -> float:
    """Return the request timeout in seconds.

    Booleans, non-numbers, and non-positive values fall back to the default.
    """
    value = load_config().get("request_timeout")
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return DEFAULT_REQUEST_TIMEOUT
    if value <= 0:
        return DEFAULT_REQUEST_TIMEOUT
    return float(value)


def load_theme_name() -> str | None:
    """Load persisted UI theme name, returning ``None`` when unset/invalid."""
    value = load_config().get("theme")
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped if stripped else None


def save_theme_name(theme_name: str) -> None:
    """Persist selected UI theme name."""
    stripped = str(theme_name).strip()
    if not stripped:
        return
    config = load_config()
    config["theme"] = stripped
    save_config(config)
