"""
Configuration management for Gemini Translation.
Handles the API key, translation direction and keyboard shortcut.
"""
import os
import sys
import json
import logging
from typing import Optional, Dict, Any, Callable

from gemini_translation.constants import (
    APP_NAME,
    DEFAULT_SHORTCUT,
    DEFAULT_TRANSLATION_DIRECTION,
    TRANSLATION_DIRECTIONS,
)


def _default_config_dir() -> str:
    """Per-user settings directory (Application Support on macOS)."""
    home = os.path.expanduser('~')
    if sys.platform == 'darwin':
        return os.path.join(home, 'Library', 'Application Support', APP_NAME)
    return os.path.join(os.environ.get('XDG_CONFIG_HOME', os.path.join(home, '.config')), APP_NAME)


class Config:
    """Manages application settings stored in config.json inside CONFIG_DIR."""

    CONFIG_DIR = _default_config_dir()
    CONFIG_FILE = os.path.join(CONFIG_DIR, 'config.json')

    SETTINGS_KEYS = ('api_key', 'translation_direction', 'shortcut')
    VALID_DIRECTIONS = tuple(value for value, _ in TRANSLATION_DIRECTIONS)

    DEFAULT_CONFIG = {
        "api_key": "",
        "translation_direction": DEFAULT_TRANSLATION_DIRECTION,
        "shortcut": DEFAULT_SHORTCUT,
    }

    def __init__(self, on_api_key_change: Optional[Callable[[str], None]] = None):
        self._config: Dict[str, Any] = {}
        self.on_api_key_change = on_api_key_change
        self._ensure_config_dir()
        self.load()

    def _ensure_config_dir(self):
        """Create config directory if it doesn't exist."""
        if not os.path.exists(self.CONFIG_DIR):
            os.makedirs(self.CONFIG_DIR)

    def load(self) -> Dict[str, Any]:
        """Load configuration from file."""
        if os.path.exists(self.CONFIG_FILE):
            try:
                with open(self.CONFIG_FILE, 'r', encoding='utf-8') as f:
                    self._config = json.load(f)
            except (json.JSONDecodeError, IOError) as e:
                logging.warning(f"Failed to read settings, using defaults: {e}")
                self._config = self.DEFAULT_CONFIG.copy()
        else:
            self._config = self.DEFAULT_CONFIG.copy()

        if not isinstance(self._config, dict):
            self._config = self.DEFAULT_CONFIG.copy()

        # Merge with defaults for any missing keys
        for key, value in self.DEFAULT_CONFIG.items():
            if key not in self._config:
                self._config[key] = value

        return self._config

    def save(self):
        """Save configuration to file."""
        self._ensure_config_dir()
        with open(self.CONFIG_FILE, 'w', encoding='utf-8') as f:
            json.dump(self._config, f, indent=2, ensure_ascii=False)
            f.flush()
            os.fsync(f.fileno())

    # Settings form
    def get_settings(self) -> Dict[str, str]:
        """Get the values shown in the Settings window."""
        return {
            'api_key': self._config.get('api_key', ''),
            'translation_direction': self.get_saved_translation_direction(),
            'shortcut': self.get_saved_shortcut(),
        }

    def save_settings(self, settings: Dict[str, Any]) -> Dict[str, bool]:
        """Persist only the keys present in settings.

        A non-empty api_key is handed to on_api_key_change so the
        translator can be re-initialized right away.
        """
        if settings.get('api_key') is not None:
            api_key = settings['api_key']
            self._config['api_key'] = api_key
            if api_key and self.on_api_key_change:
                self.on_api_key_change(api_key)

        if settings.get('translation_direction') is not None:
            self._config['translation_direction'] = settings['translation_direction']

        if settings.get('shortcut') is not None:
            self._config['shortcut'] = settings['shortcut']

        self.save()
        return {'success': True}

    # API key
    def get_saved_api_key(self) -> str:
        """Get the saved API key, falling back to GEMINI_API_KEY."""
        api_key = self._config.get('api_key', '')
        if api_key:
            return api_key
        return os.environ.get('GEMINI_API_KEY', '')

    def set_api_key(self, api_key: str):
        self.save_settings({'api_key': api_key})

    # Translation direction
    def get_saved_translation_direction(self) -> str:
        """Get translation direction preference ('auto', 'en-to-ja' or 'ja-to-en')."""
        direction = self._config.get('translation_direction', DEFAULT_TRANSLATION_DIRECTION)
        if direction not in self.VALID_DIRECTIONS:
            logging.warning(f"Unknown translation direction '{direction}', using auto")
            return DEFAULT_TRANSLATION_DIRECTION
        return direction

    def set_translation_direction(self, direction: str):
        self.save_settings({'translation_direction': direction})

    # Shortcut
    def get_saved_shortcut(self) -> str:
        """Get the global translation shortcut, e.g. 'Command+Option+T'."""
        return self._config.get('shortcut') or DEFAULT_SHORTCUT

    def set_shortcut(self, shortcut: str):
        self.save_settings({'shortcut': shortcut})

    def restore_defaults(self):
        """Restore all settings to defaults except the API key."""
        api_key = self._config.get('api_key', '')
        self._config = self.DEFAULT_CONFIG.copy()
        self._config['api_key'] = api_key
        self.save()

    # Generic getter/setter
    def get(self, key: str, default: Any = None) -> Any:
        """Get a config value."""
        return self._config.get(key, default)

    def set(self, key: str, value: Any):
        """Set a config value."""
        self._config[key] = value
        self.save()
