"""Persistent JSON config helpers.

Reads the default output directory used by ``-encode`` and the maximum
path length from a user-edited JSON file. Malformed or missing config falls
back to built-in defaults.
"""

from __future__ import annotations

import json
from pathlib import Path

from platformdirs import user_config_dir

from .codec import PATH_MAX

APP_NAME = "filinator"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME

DEFAULT_OUTPUT_DIR = "output"
MIN_PATH_LENGTH = 2
MAX_PATH_LENGTH = 65536

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

def load_default_output_dir() -> str:
    """Return the configured default output directory, or ``output``."""
    value = load_config().get("default_output_dir")
    if isinstance(value, str) and value.strip():
        return value
    return DEFAULT_OUTPUT_DIR

def load_max_path_length() -> int:
    """Return the configured path-length bound.

    Booleans, non-integers and values outside ``[2, 65536]`` fall back to
    ``PATH_MAX``.
    """
    value = load_config().get("max_path_length")
    if isinstance(value, bool) or not isinstance(value, int):
        return PATH_MAX
    if value < MIN_PATH_LENGTH or value > MAX_PATH_LENGTH:
        return PATH_MAX
    return value
