"""
Core modules for Gemini Translation.
"""
from gemini_translation.core.clipboard import ClipboardManager
from gemini_translation.core.gemini import GeminiTranslator, TranslationError
from gemini_translation.core.translation import TranslationService, TranslationResult
from gemini_translation.core.hotkey import HotkeyManager

__all__ = ['ClipboardManager', 'GeminiTranslator', 'TranslationError',
           'TranslationService', 'TranslationResult', 'HotkeyManager']
