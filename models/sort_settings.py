"""
Persistent defaults for the command line sorter.
Uses a JSON file for storage across sessions.

Includes:
- Fan-out (number of segments / threads)
- Small-input threshold
- Partition strategy
"""
import json
import logging
from pathlib import Path
from typing import Optional, Dict, Any

from sorting.config import SortConfig, PARTITION_STRATEGIES

# Set up module logger
logger = logging.getLogger(__name__)


class SortSettings:
    """
    Singleton class for the sorter's persisted defaults.

    Settings are read from ~/.parsort/settings.json when present. The file
    is only written by set() and reset_to_defaults().
    """

    _instance: Optional['SortSettings'] = None

    # Settings file location
    SETTINGS_DIR = Path.home() / '.parsort'
    SETTINGS_FILE = SETTINGS_DIR / 'settings.json'

    def __new__(cls):
        """Singleton pattern - only one instance exists."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self):
        """Initialize settings (only once due to singleton)."""
        if self._initialized:
            return

        self._defaults = {
            'n_segments': 4,                 # Threads used by the parallel sort
            'threshold': 10,                 # Min elements per segment
            'partition_strategy': 'balanced',
        }

        # Current settings (loaded from file or defaults)
        self._settings: Dict[str, Any] = {}
        self._load_settings()

        self._initialized = True
        logger.debug(f"SortSettings initialized from {self.SETTINGS_FILE}")

    def _load_settings(self):
        """Load settings from JSON file."""
        if self.SETTINGS_FILE.exists():
            try:
                with open(self.SETTINGS_FILE, 'r', encoding='utf-8') as f:
                    self._settings = json.load(f)
                logger.debug(f"Loaded settings from {self.SETTINGS_FILE}")
            except (OSError, ValueError) as e:
                logger.warning(f"Could not load settings file: {e}")
                self._settings = {}
        else:
            self._settings = {}
            logger.debug("No settings file found, using defaults")

    def _save_settings(self):
        """Save settings to JSON file."""
        try:
            self.SETTINGS_DIR.mkdir(parents=True, exist_ok=True)
            with open(self.SETTINGS_FILE, 'w', encoding='utf-8') as f:
                json.dump(self._settings, f, indent=2)
            logger.debug(f"Saved settings to {self.SETTINGS_FILE}")
        except OSError as e:
            logger.error(f"Could not save settings: {e}")

    def get(self, key: str):
        """Get a setting value, falling back to defaults."""
        return self._settings.get(key, self._defaults.get(key))

    def set(self, key: str, value: Any, save: bool = True):
        """
        Set a setting value and optionally save to file.

        Raises:
            KeyError: If key is not a known setting
            ValueError: If value is not valid for the key
        """
        if key not in self._defaults:
            raise KeyError(f"Unknown setting: {key}")
        if key == 'partition_strategy' and value not in PARTITION_STRATEGIES:
            raise ValueError(f"Invalid partition strategy: {value}")
        if key in ('n_segments', 'threshold') and not isinstance(value, int):
            raise ValueError(f"{key} must be an integer, got {value!r}")
        self._settings[key] = value
        if save:
            self._save_settings()

    def reset_to_defaults(self):
        """Reset all settings to default values."""
        self._settings = self._defaults.copy()
        self._save_settings()
        logger.info("Settings reset to defaults")

    def to_config(self) -> SortConfig:
        """
        Build a SortConfig from the current settings.

        Invalid persisted values are replaced by defaults with a warning.
        """
        config = SortConfig(
            n_segments=self.get('n_segments'),
            threshold=self.get('threshold'),
            partition_strategy=self.get('partition_strategy'),
        )
        try:
            config.validate()
        except (TypeError, ValueError) as e:
            logger.warning(f"Invalid sort settings ({e}), using defaults")
            config = SortConfig()
        return config


def get_settings() -> SortSettings:
    """Get the global settings instance."""
    return SortSettings()
