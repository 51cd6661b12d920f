"""
UI components for Gemini Translation.
"""
from gemini_translation.ui.settings import SettingsWindow
from gemini_translation.ui.status_window import StatusWindow

__all__ = ['SettingsWindow', 'StatusWindow']
