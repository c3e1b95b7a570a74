"""Persistent JSON config helpers.

Stores the ``hg`` executable, capture timeout and locator depth.
All access is defensive: malformed or missing config falls back safely.
"""

from __future__ import annotations

import json
from pathlib import Path

from platformdirs import user_config_dir

from .command import HG_EXECUTABLE, StatusCommand
from .locate import DEFAULT_MAX_DEPTH

APP_NAME = "hgstatus"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME


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

    Filesystem errors are ignored so an unwritable config never breaks a
    status query.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except OSError:
        pass


def load_hg_executable() -> str:
    value = load_config().get("hg_executable")
    if not isinstance(value, str):
        return HG_EXECUTABLE
    stripped = value.strip()
    return stripped if stripped else HG_EXECUTABLE


def save_hg_executable(executable: str) -> None:
    stripped = str(executable).strip()
    if not stripped:
        return
    config = load_config()
    config["hg_executable"] = stripped
    save_config(config)


def load_timeout_seconds() -> float | None:
    """Return the capture timeout, or ``None`` to block until ``hg`` exits.

    Booleans and non-positive numbers are treated as unset.
    """
    value = load_config().get("timeout_seconds")
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if value <= 0:
        return None
    return float(value)


def load_max_depth() -> int:
    value = load_config().get("max_depth")
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        return DEFAULT_MAX_DEPTH
    return value


def build_status_command() -> StatusCommand:
    """Build the status collaborator from persisted settings."""
    return StatusCommand(
        executable=load_hg_executable(),
        timeout_seconds=load_timeout_seconds(),
    )
