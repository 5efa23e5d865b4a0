"""
RenParse Settings Module
Handles loading and saving of user settings.
"""

import json
import renparse_config as config
from renparse_enums import TabPolicy
from renparse_logger import get_logger
logger = get_logger("settings")


def default_settings():
    """Settings used when no file exists or a value is invalid."""
    return {
        "tab_policy": config.TAB_POLICY,
        "tab_width": config.TAB_WIDTH,
        "show_source": False,
        "strict": False,
    }


def load_settings(settings_file=None):
    """Load settings from JSON file, or return defaults if not found."""

    settings_file = settings_file or config.SETTINGS_FILE_PATH
    defaults = default_settings()

    if not settings_file.is_file():
        logger.debug(f"Settings file not found ({settings_file}). Using defaults.")
        return defaults

    try:
        logger.debug(f"Loading settings: {settings_file}")
        with settings_file.open('r', encoding='utf-8') as f:
            loaded_data = json.load(f)
    except json.JSONDecodeError:
        logger.error(f"Settings file ({settings_file}) is corrupt (invalid JSON). Using defaults.")
        return defaults
    except OSError as e:
        logger.error(f"Error reading settings ({settings_file}): {e}. Using defaults.")
        return defaults

    if not isinstance(loaded_data, dict):
        logger.warning("Settings file format is invalid (not an object). Using defaults.")
        return defaults

    settings = defaults.copy()
    settings.update(loaded_data)

    valid_policies = [p.value for p in TabPolicy]
    if settings.get("tab_policy") not in valid_policies:
        logger.warning(f"Invalid 'tab_policy' value ({settings.get('tab_policy')}). Using default.")
        settings["tab_policy"] = defaults["tab_policy"]

    tab_width = settings.get("tab_width")
    if not isinstance(tab_width, int) or isinstance(tab_width, bool) or tab_width < 1:
        logger.warning(f"Invalid 'tab_width' value ({tab_width}). Using default.")
        settings["tab_width"] = defaults["tab_width"]

    for key in ("show_source", "strict"):
        if not isinstance(settings.get(key), bool):
            logger.warning(f"Invalid '{key}' value. Using default.")
            settings[key] = defaults[key]

    logger.debug("Settings loaded.")
    return settings


def save_settings(settings_data, settings_file=None):
    """Save settings to JSON file."""

    settings_file = settings_file or config.SETTINGS_FILE_PATH
    try:
        logger.debug(f"Saving settings: {settings_file}")

        settings_file.parent.mkdir(parents=True, exist_ok=True)

        with settings_file.open('w', encoding='utf-8') as f:
            json.dump(settings_data, f, indent=4, ensure_ascii=False)
        logger.info("Settings saved.")
        return True
    except OSError as e:
        logger.critical(f"Could not save settings ({settings_file}): {e}")
        return False
