from __future__ import annotations

"""
Configuration Domain Management.

Handles the default runtime configuration and the persistent storage of
user listing preferences using JSON. Persisted preferences sit between the
built-in defaults and the command-line flags in the resolution order.
"""

import json
import logging
import os
from typing import Any, Dict

from dirlist.infra.fs import get_user_data_dir

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# Constants & Defaults
# -----------------------------------------------------------------------------
CONFIG_FILE_NAME = "config.json"
CURRENT_CONFIG_VERSION = "1.0.0"

DEFAULT_TIME_FORMAT = "%b %d %H:%M"
COLOR_CHOICES = ("auto", "always", "never")
SORT_CHOICES = ("name", "size", "time")

# Keys that may be stored as persistent preferences (paths never are)
PREFERENCE_KEYS = (
    "show_hidden", "recursive", "long_format", "human_readable",
    "sort_by", "reverse", "color", "grid_width", "time_format",
)


# -----------------------------------------------------------------------------
# Configuration Models (Dict-based)
# -----------------------------------------------------------------------------
def get_default_config() -> Dict[str, Any]:
    """
    Generate the default runtime configuration.
    This dictionary drives the behavior of the listing engine.

    Returns:
        Dict[str, Any]: Default configuration values.
    """
    return {
        # Targets
        "paths": [],

        # Collection
        "show_hidden": False,
        "recursive": False,

        # Ordering
        "sort_by": "name",
        "reverse": False,

        # Presentation
        "long_format": False,
        "human_readable": False,
        "color": "auto",
        "grid_width": 0,
        "time_format": DEFAULT_TIME_FORMAT,
    }


def get_default_app_state() -> Dict[str, Any]:
    """
    Generate the complete default structure of config.json.

    Returns:
        Dict[str, Any]: Versioned state with empty preferences.
    """
    return {
        "version": CURRENT_CONFIG_VERSION,
        "preferences": {},
    }


def get_config_file() -> str:
    """Absolute path of the persistent configuration file."""
    return os.path.join(get_user_data_dir(), CONFIG_FILE_NAME)


# -----------------------------------------------------------------------------
# Persistence Logic
# -----------------------------------------------------------------------------
def load_app_state() -> Dict[str, Any]:
    """
    Load application state from disk.

    Returns:
        Dict[str, Any]: The loaded state or a default structure on failure.
    """
    default_state = get_default_app_state()
    config_file = get_config_file()

    if not os.path.exists(config_file):
        logger.debug("Config file not found. Returning defaults.")
        return default_state

    try:
        with open(config_file, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.error(f"Failed to load config: {e}. Using defaults.")
        return default_state

    if not isinstance(data, dict):
        logger.warning("Corrupted config file. Resetting to defaults.")
        return default_state

    state = default_state
    prefs = data.get("preferences")
    if isinstance(prefs, dict):
        state["preferences"].update(
            {k: v for k, v in prefs.items() if k in PREFERENCE_KEYS}
        )
    state["version"] = CURRENT_CONFIG_VERSION
    return state


def save_app_state(state: Dict[str, Any]) -> bool:
    """
    Persist application state to disk.

    Args:
        state: The state dictionary to save.

    Returns:
        bool: True when the file was written.
    """
    config_file = get_config_file()
    try:
        os.makedirs(os.path.dirname(config_file), exist_ok=True)
        state["version"] = CURRENT_CONFIG_VERSION
        with open(config_file, "w", encoding="utf-8") as f:
            json.dump(state, f, ensure_ascii=False, indent=4)
        logger.debug(f"Configuration saved to {config_file}")
        return True
    except OSError as e:
        logger.error(f"Failed to save configuration: {e}")
        return False


# -----------------------------------------------------------------------------
# Facade API
# -----------------------------------------------------------------------------
def load_config() -> Dict[str, Any]:
    """
    Retrieve the defaults overlaid with the persisted preferences.
    """
    config = get_default_config()
    config.update(load_app_state().get("preferences", {}))
    return config


def save_preferences(config: Dict[str, Any]) -> bool:
    """
    Store the preference subset of a configuration as the new defaults.
    """
    state = load_app_state()
    state["preferences"] = {k: config[k] for k in PREFERENCE_KEYS if k in config}
    return save_app_state(state)
