from __future__ import annotations

"""
Configuration Domain Management.

Handles persistent storage of the last session and application settings as
JSON in the user data directory, with default fallback and type validation.
"""

import json
import logging
import os
from typing import Any, Dict, List, Tuple

from listify.domain.constants import CURRENT_CONFIG_VERSION, DEFAULT_OUTPUT_FILE_NAME
from listify.infra.fs import get_user_data_dir

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = "config.json"


def get_config_file() -> str:
    return os.path.join(get_user_data_dir(), CONFIG_FILE_NAME)

# -----------------------------------------------------------------------------
# Configuration Models (Dict-based)
# -----------------------------------------------------------------------------

def get_default_config() -> Dict[str, Any]:
    """
    Generate the default session configuration driving an aggregation run.

    Returns:
        Dict[str, Any]: Default configuration values.
    """
    return {
        "input_path": "",
        "prefix_filter": "",
        "filter_enabled": False,
        "include_tree": True,
        "output_file_name": DEFAULT_OUTPUT_FILE_NAME,
    }


def get_default_app_state() -> Dict[str, Any]:
    """Full default structure of config.json."""
    return {
        "version": CURRENT_CONFIG_VERSION,
        "app_settings": {
            "appearance_mode": "System",
            "locale": "en",
        },
        "last_session": get_default_config(),
    }


def validate_config(config: Any) -> Tuple[Dict[str, Any], List[str]]:
    """
    Normalize an untrusted configuration dictionary.

    Unknown keys are dropped, missing keys are filled from defaults and
    values of the wrong type are replaced by their default.

    Returns:
        Tuple[Dict[str, Any], List[str]]: Normalized config and warnings.
    """
    defaults = get_default_config()
    warnings: List[str] = []

    if not isinstance(config, dict):
        warnings.append(
            f"Invalid config type: expected dict, received {type(config).__name__}. Using defaults."
        )
        return defaults, warnings

    clean: Dict[str, Any] = dict(defaults)
    for key, default in defaults.items():
        if key not in config or config[key] is None:
            continue
        value = config[key]
        if isinstance(default, bool):
            if isinstance(value, bool):
                clean[key] = value
            elif isinstance(value, (int, str)):
                clean[key] = str(value).strip().lower() in ("1", "true", "yes", "on")
            else:
                warnings.append(f"Invalid value for '{key}': {value!r}. Using default.")
        elif isinstance(default, str):
            if isinstance(value, str):
                clean[key] = value.strip()
            else:
                warnings.append(f"Invalid value for '{key}': {value!r}. Using default.")

    if not clean["output_file_name"]:
        clean["output_file_name"] = DEFAULT_OUTPUT_FILE_NAME

    return clean, warnings

# -----------------------------------------------------------------------------
# Persistence Logic
# -----------------------------------------------------------------------------

def load_app_state() -> Dict[str, Any]:
    """
    Load application state from disk, merged over the defaults.

    Returns:
        Dict[str, Any]: Loaded state, or the default structure when the file
        is missing or corrupt.
    """
    state = get_default_app_state()
    config_file = get_config_file()

    if not os.path.exists(config_file):
        logger.debug("Config file not found. Returning defaults.")
        return state

    try:
        with open(config_file, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.error(f"Failed to load config: {e}. Using defaults.")
        return state

    if not isinstance(data, dict):
        logger.warning("Corrupted config file. Resetting to defaults.")
        return state

    if isinstance(data.get("app_settings"), dict):
        state["app_settings"].update(data["app_settings"])
    if "last_session" in data:
        session, warnings = validate_config(data["last_session"])
        for w in warnings:
            logger.warning(f"Stored session: {w}")
        state["last_session"] = session

    state["version"] = CURRENT_CONFIG_VERSION
    return state


def save_app_state(state: Dict[str, Any]) -> None:
    """Persist application state to disk; failures are logged, not raised."""
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
    """Retrieve the last session configuration."""
    return load_app_state()["last_session"]


def save_config(config: Dict[str, Any]) -> None:
    """Save the provided config as the last session."""
    state = load_app_state()
    state["last_session"], _ = validate_config(config)
    save_app_state(state)
