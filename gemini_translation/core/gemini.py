"""
Gemini API client for Gemini Translation.
Wraps the google-generativeai SDK with a translation prompt and friendly errors.
"""
import logging
from typing import Optional

import google.generativeai as genai

from gemini_translation.constants import GEMINI_MODEL
from gemini_translation.core.language import Language, get_language_name


class TranslationError(Exception):
    """Translation failure with a message suitable for the user."""


class GeminiTranslator:
    """Translates text with the Gemini API."""

    MODEL_NAME: str = GEMINI_MODEL

    def __init__(self, api_key: Optional[str] = None) -> None:
        self.api_key: str = ""
        self.model = None
        if api_key:
            self.initialize(api_key)

    def initialize(self, api_key: str) -> None:
        """Initialize the Gemini client with an API key."""
        self.api_key = api_key
        genai.configure(api_key=api_key)
        self.model = genai.GenerativeModel(self.MODEL_NAME)
        logging.info(f"Gemini translator initialized with model {self.MODEL_NAME}")

    def is_initialized(self) -> bool:
        return self.model is not None

    @staticmethod
    def build_prompt(text: str, target_language: Language) -> str:
        """Build the translation prompt for the target language."""
        target_name = get_language_name(target_language)
        return f"""You are a professional translator.
Translate the following text to {target_name}.
Output only the translated text without any explanations or additional comments.

SOURCE:
{text}"""

    def translate(self, text: str, target_language: Language) -> str:
        """Translate text using the Gemini API.

        Args:
            text: The text to translate
            target_language: The target language

        Returns:
            The translated text with surrounding whitespace removed

        Raises:
            TranslationError: If the translator is not initialized or the API call fails
        """
        if not self.is_initialized():
            raise TranslationError("Gemini translator is not initialized. Please set an API key.")

        prompt = self.build_prompt(text, target_language)

        try:
            # configure() is process-global; a connection test may have replaced the key
            genai.configure(api_key=self.api_key)
            response = self.model.generate_content(prompt)
            return response.text.strip()
        except Exception as e:
            logging.error(f"Gemini API error: {e}")
            raise self._map_error(e) from e

    @staticmethod
    def _map_error(error: Exception) -> TranslationError:
        """Convert an SDK error into a user-facing TranslationError."""
        message = str(error)
        if "API key" in message or "API_KEY_INVALID" in message:
            return TranslationError("Invalid API key. Please check your Gemini API key in settings.")
        if "quota" in message:
            return TranslationError("API quota exceeded. Please check your Gemini API usage.")
        if "network" in message:
            return TranslationError("Network error. Please check your internet connection.")
        return TranslationError(f"Translation failed: {message or 'Unknown error'}")

    def test_connection(self, api_key: str) -> bool:
        """Check that api_key can reach the model.

        Raises:
            TranslationError: If the key is rejected or the request fails
        """
        try:
            genai.configure(api_key=api_key)
            genai.GenerativeModel(self.MODEL_NAME).generate_content("Say OK")
            return True
        except Exception as e:
            logging.warning(f"API key test failed: {e}")
            raise self._map_error(e) from e
        finally:
            if self.api_key:
                genai.configure(api_key=self.api_key)


_translator_instance: Optional[GeminiTranslator] = None


def get_translator() -> GeminiTranslator:
    """Get the shared translator instance."""
    global _translator_instance
    if _translator_instance is None:
        _translator_instance = GeminiTranslator()
    return _translator_instance


def initialize_translator(api_key: str) -> None:
    """Initialize the shared translator with an API key."""
    get_translator().initialize(api_key)
