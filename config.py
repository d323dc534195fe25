"""
Configuration settings for Verto
Paths, themes and the persisted user preferences
"""
import json
import logging
import os
import sys
from enum import Enum
from pathlib import Path
from typing import Dict, Optional

from storage import write_json_atomic

logger = logging.getLogger(__name__)

APP_NAME = "Verto"


def get_data_dir() -> Path:
    """Per-user application data directory (not created here)"""
    if sys.platform.startswith("win"):
        base = os.environ.get("APPDATA")
        if base:
            return Path(base) / APP_NAME
        return Path.home() / "AppData" / "Roaming" / APP_NAME

    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / APP_NAME

    base = os.environ.get("XDG_DATA_HOME")
    if base:
        return Path(base) / APP_NAME.lower()
    return Path.home() / ".local" / "share" / APP_NAME.lower()


# Base paths
DATA_DIR = get_data_dir()
LOG_DIR = DATA_DIR

# Data files
TASKS_FILE = DATA_DIR / "tasks.json"
SETTINGS_FILE = DATA_DIR / "settings.json"


class Theme(str, Enum):
    """Accent theme; the first member is the default"""

    INDIGO = "indigo"
    GREEN = "green"
    ORANGE = "orange"
    PINK = "pink"

    @classmethod
    def default(cls) -> "Theme":
        return cls.INDIGO

    @classmethod
    def from_value(cls, raw) -> "Theme":
        """Parse a persisted value, falling back to the default when unrecognized"""
        if not isinstance(raw, str) or not raw.strip():
            return cls.default()
        try:
            return cls(raw.strip().lower())
        except ValueError:
            logger.info("Unknown theme %r, using %s", raw, cls.default().value)
            return cls.default()

    @property
    def accent(self) -> str:
        return THEMES[self]["accent"]

    @property
    def hover(self) -> str:
        return THEMES[self]["hover"]

    @property
    def color_scheme(self) -> Optional[str]:
        """Appearance override: "light", "dark", or None for the system default"""
        return THEMES[self]["color_scheme"]


# Theme definitions
THEMES: Dict[Theme, Dict] = {
    Theme.INDIGO: {
        "name": "Indigo",
        "accent": "#5856D6",
        "hover": "#4240B0",
        "color_scheme": None,
    },
    Theme.GREEN: {
        "name": "Green",
        "accent": "#34C759",
        "hover": "#28A047",
        "color_scheme": None,
    },
    Theme.ORANGE: {
        "name": "Orange",
        "accent": "#FF9500",
        "hover": "#D67D00",
        "color_scheme": None,
    },
    Theme.PINK: {
        "name": "Pink",
        "accent": "#FF2D55",
        "hover": "#D62447",
        "color_scheme": None,
    },
}

# Default settings
DEFAULT_SETTINGS = {
    "theme": Theme.default().value,
}


def load_settings(path: Optional[Path] = None) -> Dict:
    """Load user settings from file, defaults filled in for missing keys"""
    path = Path(path) if path is not None else SETTINGS_FILE
    settings = DEFAULT_SETTINGS.copy()

    if not path.exists():
        return settings

    try:
        with open(path, "r", encoding="utf-8") as f:
            saved = json.load(f)
    except (OSError, ValueError, RecursionError) as e:
        logger.warning("Could not read settings from %s (%s), using defaults", path, e)
        return settings

    if isinstance(saved, dict):
        settings.update(saved)
    else:
        logger.warning("Settings file %s is not an object, using defaults", path)
    return settings


def save_settings(settings: Dict, path: Optional[Path] = None) -> bool:
    """Save user settings to file"""
    path = Path(path) if path is not None else SETTINGS_FILE
    try:
        write_json_atomic(path, settings)
        return True
    except (OSError, TypeError, ValueError):
        logger.exception("Failed to save settings to %s", path)
        return False


def load_theme(path: Optional[Path] = None) -> Theme:
    """Current theme preference, validated"""
    return Theme.from_value(load_settings(path).get("theme"))


def save_theme(theme: Theme, path: Optional[Path] = None) -> bool:
    settings = load_settings(path)
    settings["theme"] = Theme(theme).value
    return save_settings(settings, path)
