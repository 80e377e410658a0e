"""
settings.py - Persisted Settings

Contains:
- Max name length (env var, config file, default)
- GUI settings: click behavior and the global rules switch
"""

from dataclasses import dataclass, asdict
from typing import Optional
import json
import logging
import os

from .app_home import AppHome
from .errors import ConfigurationError
from .models_rules import validate_max_name_length
from .pane_routing import ClickBehavior, DEFAULT_CLICK_BEHAVIOR

logger = logging.getLogger(__name__)

DEFAULT_MAX_NAME_LENGTH = 50
MAX_NAME_LENGTH_ENV = "IMGRENAME_MAX_NAME_LENGTH"
MAX_NAME_LENGTH_FILE = "max_name_length.txt"
SETTINGS_FILE = "settings.json"


def load_max_name_length(home: AppHome) -> int:
    """
    Resolve the max name length

    1. $IMGRENAME_MAX_NAME_LENGTH when it holds a positive integer (file untouched)
    2. max_name_length.txt when it holds a positive integer
    3. The default, which is written to max_name_length.txt

    Invalid values are logged and skipped.

    Args:
        home: Application home

    Returns:
        Max name length
    """
    env_value = os.environ.get(MAX_NAME_LENGTH_ENV)
    if env_value is not None:
        try:
            return validate_max_name_length(env_value)
        except ConfigurationError:
            logger.warning("Invalid %s '%s', falling back to file/default", MAX_NAME_LENGTH_ENV, env_value)

    path = home.file_path(MAX_NAME_LENGTH_FILE)
    if path.exists():
        text = path.read_text(encoding="utf-8").strip()
        try:
            return validate_max_name_length(text)
        except ConfigurationError:
            logger.warning("Invalid %s contents: '%s', resetting to default", path, text)

    save_max_name_length(home, DEFAULT_MAX_NAME_LENGTH)
    return DEFAULT_MAX_NAME_LENGTH


def save_max_name_length(home: AppHome, value) -> int:
    """Validate and persist the max name length (raises ConfigurationError)"""
    length = validate_max_name_length(value)
    home.ensure_dir()
    home.file_path(MAX_NAME_LENGTH_FILE).write_text(str(length), encoding="utf-8")
    logger.debug("Max name length set to %d", length)
    return length


def reset_max_name_length(home: AppHome) -> int:
    return save_max_name_length(home, DEFAULT_MAX_NAME_LENGTH)


@dataclass
class GuiSettings:
    """Settings the GUI edits at runtime"""
    click_behavior: ClickBehavior = DEFAULT_CLICK_BEHAVIOR
    rules_enabled: bool = True

    def to_dict(self) -> dict:
        data = asdict(self)
        data["click_behavior"] = self.click_behavior.value
        return data


def load_gui_settings(home: AppHome) -> GuiSettings:
    """Load settings.json, falling back to defaults for missing or bad values"""
    path = home.file_path(SETTINGS_FILE)
    settings = GuiSettings()
    if not path.exists():
        return settings

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        logger.warning("Cannot read %s (%s), using defaults", path, e)
        return settings
    if not isinstance(data, dict):
        logger.warning("Ignoring %s: expected a JSON object", path)
        return settings

    behavior: Optional[str] = data.get("click_behavior")
    if behavior is not None:
        try:
            settings.click_behavior = ClickBehavior(behavior)
        except ValueError:
            logger.warning("Unknown click behavior '%s', using %s", behavior, settings.click_behavior.value)
    if isinstance(data.get("rules_enabled"), bool):
        settings.rules_enabled = data["rules_enabled"]
    return settings


def save_gui_settings(home: AppHome, settings: GuiSettings) -> None:
    home.ensure_dir()
    with open(home.file_path(SETTINGS_FILE), 'w', encoding='utf-8') as f:
        json.dump(settings.to_dict(), f, ensure_ascii=False, indent=2)
