from __future__ import annotations

"""
Configuration Domain Management.

Handles the default extraction settings and the persistent storage of the
last session in the user data directory using JSON.
"""

import json
import logging
import os
from typing import Any, Dict

from deptree4ai.domain.constants import (
    CURRENT_CONFIG_VERSION,
    DEFAULT_ALIASES,
    DEFAULT_EXCLUDE_PATTERNS,
    DEFAULT_EXTENSIONS,
    DEFAULT_MAX_CONTENT_LENGTH,
    DEFAULT_MODEL_KEY,
    DEFAULT_OUTPUT_FORMAT,
)
from deptree4ai.infra.fs import get_user_data_dir

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = "config.json"


def get_config_file() -> str:
    """Resolve the absolute path of the persisted configuration file."""
    return os.path.join(get_user_data_dir(), CONFIG_FILE_NAME)

# -----------------------------------------------------------------------------
# Configuration Models (Dict-based)
# -----------------------------------------------------------------------------

def get_default_config() -> Dict[str, Any]:
    """
    Generate the default runtime configuration.

    Returns:
        Dict[str, Any]: Default configuration values.
    """
    return {
        # Traversal
        "target_file": "",
        "root_dir": "",
        "max_depth": None,
        "include_external": False,
        "max_content_length": DEFAULT_MAX_CONTENT_LENGTH,

        # Resolution surface
        "extensions": list(DEFAULT_EXTENSIONS),
        "exclude_patterns": list(DEFAULT_EXCLUDE_PATTERNS),
        "aliases": dict(DEFAULT_ALIASES),

        # Output
        "output_format": DEFAULT_OUTPUT_FORMAT,
        "output_file": "",
        "show_size": False,
        "show_external": True,
        "count_tokens": False,
        "target_model": DEFAULT_MODEL_KEY,

        # Diagnostics
        "debug": False,
    }


def get_default_app_state() -> Dict[str, Any]:
    """
    Generate the complete default persisted state.

    Returns:
        Dict[str, Any]: The full JSON structure for config.json.
    """
    return {
        "version": CURRENT_CONFIG_VERSION,
        "last_session": get_default_config(),
    }

# -----------------------------------------------------------------------------
# Persistence Logic
# -----------------------------------------------------------------------------

def load_app_state() -> Dict[str, Any]:
    """
    Load the persisted state from disk, merged over defaults.

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
    session = data.get("last_session")
    if isinstance(session, dict):
        state["last_session"].update(session)

    state["version"] = CURRENT_CONFIG_VERSION
    return state


def save_app_state(state: Dict[str, Any]) -> None:
    """
    Persist the state to disk.

    Args:
        state: The state dictionary to save.
    """
    config_file = get_config_file()
    try:
        os.makedirs(os.path.dirname(config_file), exist_ok=True)
        state["version"] = CURRENT_CONFIG_VERSION
        with open(config_file, "w", encoding="utf-8") as f:
            json.dump(state, f, ensure_ascii=False, indent=4)
        logger.debug(f"Configuration saved to {config_file}")
    except OSError as e:
        logger.error(f"Failed to save configuration: {e}")

# -----------------------------------------------------------------------------
# Facade API
# -----------------------------------------------------------------------------

def load_config() -> Dict[str, Any]:
    """Retrieve the last session merged over the defaults."""
    defaults = get_default_config()
    defaults.update(load_app_state().get("last_session", {}))
    return defaults


def save_config(config: Dict[str, Any]) -> None:
    """Save the provided config as the last session."""
    state = load_app_state()
    session = dict(config)
    # Per-run target is never remembered
    session["target_file"] = ""
    state["last_session"] = session
    save_app_state(state)
