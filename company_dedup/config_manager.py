import json
import os
import logging
from typing import Any, Dict

CONFIG_FILE = os.path.join(os.path.expanduser("~"), ".company_dedup_config.json")
logger = logging.getLogger(__name__)


def load_config() -> Dict[str, Any]:
    """Load saved user settings from JSON. Returns empty dict on error."""
    if not os.path.exists(CONFIG_FILE):
        return {}
    try:
        with open(CONFIG_FILE, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        logger.warning(f"Config file corrupted, using defaults: {e}")
        return {}
    except OSError as e:
        logger.error(f"Failed to load config: {e}")
        return {}
    if not isinstance(data, dict):
        logger.warning(f"Config file {CONFIG_FILE} does not hold an object, using defaults")
        return {}
    return data


def save_config(cfg: Dict[str, Any]) -> None:
    """Save user settings to JSON. Logs errors but doesn't raise."""
    try:
        with open(CONFIG_FILE, "w", encoding="utf-8") as f:
            json.dump(cfg, f, indent=2)
    except PermissionError as e:
        logger.error(f"Permission denied saving config: {e}")
    except (OSError, TypeError) as e:
        logger.error(f"Failed to save config: {e}")


def saved_preset_and_overrides(cfg: Dict[str, Any]):
    """(preset, overrides) stored by the GUI, or (None, {}) when absent."""
    preset = cfg.get("preset")
    overrides = cfg.get("overrides") or {}
    if not isinstance(overrides, dict):
        logger.warning("Ignoring saved overrides: not an object")
        overrides = {}
    return preset, dict(overrides)
