"""
Settings Module for the strategy study

Run configuration kept as JSON, by default in config.json in the working
directory. Keys missing from the file take their DEFAULT_SETTINGS value.
"""

import json
import logging
from pathlib import Path
from typing import Dict, Any, Optional, Union

logger = logging.getLogger(__name__)

SETTINGS_FILE = Path("config.json")

DEFAULT_SETTINGS: Dict[str, Any] = {
    "data_dir": "data",
    "corpus_size": 100,
    "orders": [9],
    "max_combination_size": 2,
    "seed": None,
    "strategies": None,  # None = every registered strategy
}


def _resolve(path: Optional[Union[str, Path]]) -> Path:
    return Path(path) if path is not None else SETTINGS_FILE


def load_settings(path: Optional[Union[str, Path]] = None) -> Dict[str, Any]:
    """
    Read run settings.

    Args:
        path: Settings file, SETTINGS_FILE if omitted

    Returns:
        DEFAULT_SETTINGS overlaid with the file's keys; the defaults alone
        when the file is absent or unreadable
    """
    path = _resolve(path)
    settings = dict(DEFAULT_SETTINGS)
    if not path.exists():
        logger.debug(f"No settings at {path}, running with defaults")
        return settings

    try:
        with open(path, 'r', encoding='utf-8') as f:
            stored = json.load(f)
        if not isinstance(stored, dict):
            raise ValueError("top level must be an object")
    except (json.JSONDecodeError, IOError, ValueError) as e:
        logger.warning(f"Ignoring settings in {path}: {e}")
        return settings

    settings.update(stored)
    logger.debug(f"Loaded settings from {path}: {settings}")
    return settings


def save_settings(settings: Dict[str, Any], path: Optional[Union[str, Path]] = None) -> None:
    """
    Write run settings as JSON.

    Args:
        settings: Values to store
        path: Settings file, SETTINGS_FILE if omitted
    """
    path = _resolve(path)
    try:
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(settings, f, indent=2)
    except IOError as e:
        logger.error(f"Could not write settings to {path}: {e}")
        return
    logger.info(f"Settings written to {path}")
