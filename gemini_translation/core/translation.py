"""
Translation Service for Gemini Translation.
Runs the selection -> translate -> clipboard workflow.
"""
import logging
from dataclasses import dataclass
from typing import Optional, Callable

from gemini_translation.constants import LOG_PREVIEW_CHARS
from gemini_translation.core.clipboard import ClipboardManager
from gemini_translation.core.gemini import GeminiTranslator, get_translator
from gemini_translation.core.language import AUTO, get_translation_direction, get_language_code
from gemini_translation.core.selection import get_selected_text

StatusCallback = Callable[[str, str], None]

STATUS_TRANSLATING = "translating"
STATUS_SUCCESS = "success"
STATUS_ERROR = "error"


@dataclass
class TranslationResult:
    """Outcome of one shortcut-triggered translation."""
    success: bool
    original_text: Optional[str] = None
    translated_text: Optional[str] = None
    error: Optional[str] = None


class TranslationService:
    """Handles the selected-text translation workflow."""

    def __init__(self, status_callback: Optional[StatusCallback] = None,
                 translator: Optional[GeminiTranslator] = None) -> None:
        self.status_callback: Optional[StatusCallback] = status_callback
        self._translator: Optional[GeminiTranslator] = translator

    @property
    def translator(self) -> GeminiTranslator:
        return self._translator or get_translator()

    def _show_status(self, message: str, status_type: str):
        if self.status_callback:
            self.status_callback(message, status_type)

    def translate_selected_text(self, preference: str = AUTO) -> TranslationResult:
        """Translate the current selection and copy the result to the clipboard.

        Args:
            preference: Translation direction preference

        Returns:
            TranslationResult describing what happened
        """
        try:
            selected_text = get_selected_text()

            if not selected_text or not selected_text.strip():
                logging.info("No text selected")
                return TranslationResult(success=False, error='No text selected')

            source, target = get_translation_direction(selected_text, preference)

            logging.info(f"Translating from {source.value} to {target.value}")
            logging.info(f"Original text: {selected_text[:LOG_PREVIEW_CHARS]}...")

            self._show_status(
                f"Translating {get_language_code(source)} → {get_language_code(target)}...",
                STATUS_TRANSLATING
            )

            translator = self.translator
            if not translator.is_initialized():
                self._show_status("Please set API key", STATUS_ERROR)
                return TranslationResult(
                    success=False,
                    original_text=selected_text,
                    error='Gemini API not initialized. Please set your API key in settings.'
                )

            translated_text = translator.translate(selected_text, target)
            logging.info(f"Translated text: {translated_text[:LOG_PREVIEW_CHARS]}...")

            ClipboardManager.set_text(translated_text)

            self._show_status("✓ Copied to clipboard", STATUS_SUCCESS)

            return TranslationResult(
                success=True,
                original_text=selected_text,
                translated_text=translated_text
            )
        except Exception as e:
            logging.error(f"Translation error: {e}")
            self._show_status("Translation failed", STATUS_ERROR)
            return TranslationResult(success=False, error=str(e) or 'Unknown error occurred')
