"""Configuration file management for filetools."""

from __future__ import annotations

import copy
import logging
import sys
from pathlib import Path
from typing import Any, Dict

try:
    import tomllib  # Python 3.11+
except ModuleNotFoundError:
    import tomli as tomllib  # type: ignore

import tomli_w

from .byte_size import DEFAULT_LOCALE

# Default configuration file location
CONFIG_FILE = Path.home() / ".filetools.toml"

# Default configuration
DEFAULT_CONFIG = {
    "display": {
        "locale": DEFAULT_LOCALE,
    },
    "logging": {
        "level": "WARNING",
    },
}


def load_config() -> Dict[str, Any]:
    """Load configuration from file or return defaults."""
    if not CONFIG_FILE.exists():
        return copy.deepcopy(DEFAULT_CONFIG)

    try:
        with open(CONFIG_FILE, "rb") as f:
            config = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError):
        # If config is corrupted, return defaults
        return copy.deepcopy(DEFAULT_CONFIG)
    # Merge with defaults to ensure all keys exist
    return _merge_config(DEFAULT_CONFIG, config)


def save_config(config: Dict[str, Any]) -> None:
    """Save configuration to file."""
    try:
        CONFIG_FILE.parent.mkdir(parents=True, exist_ok=True)
        with open(CONFIG_FILE, "wb") as f:
            tomli_w.dump(config, f)
    except (OSError, TypeError) as err:
        # Don't break the caller if config save fails, but inform the user
        print(f"Warning: Failed to save configuration to {CONFIG_FILE}: {err}", file=sys.stderr)


def _merge_config(default: Dict[str, Any], user: Dict[str, Any]) -> Dict[str, Any]:
    """Merge user config with defaults, preserving user values."""
    result = copy.deepcopy(default)
    for key, value in user.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _merge_config(result[key], value)
        else:
            result[key] = value
    return result


def get_display_locale() -> str:
    """Get the locale used when rendering byte counts."""
    config = load_config()
    return str(config.get("display", {}).get("locale", DEFAULT_LOCALE))


def get_log_level() -> int:
    """Get the configured log level, falling back to ``WARNING`` for unknown names."""
    config = load_config()
    name = str(config.get("logging", {}).get("level", "WARNING")).upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.WARNING


__all__ = [
    "CONFIG_FILE",
    "DEFAULT_CONFIG",
    "load_config",
    "save_config",
    "get_display_locale",
    "get_log_level",
]
