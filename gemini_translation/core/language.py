"""
Language detection and translation direction for Gemini Translation.
Only Japanese <-> English is supported.
"""
import re
import logging
from enum import Enum
from typing import Tuple


class Language(Enum):
    """Languages the translator can produce."""
    JAPANESE = "japanese"
    ENGLISH = "english"


AUTO = "auto"
EN_TO_JA = "en-to-ja"
JA_TO_EN = "ja-to-en"

# Hiragana, Katakana and common Kanji
JAPANESE_PATTERN = re.compile(r'[ぁ-んァ-ン一-龥]')

LANGUAGE_NAMES = {
    Language.JAPANESE: "Japanese",
    Language.ENGLISH: "English",
}

LANGUAGE_CODES = {
    Language.JAPANESE: "JP",
    Language.ENGLISH: "EN",
}


def contains_japanese(text: str) -> bool:
    """Check whether text contains any Japanese characters."""
    return bool(JAPANESE_PATTERN.search(text))


def detect_language(text: str) -> Language:
    """Detect the language of text (anything without Japanese is English)."""
    return Language.JAPANESE if contains_japanese(text) else Language.ENGLISH


def get_translation_direction(text: str, preference: str = AUTO) -> Tuple[Language, Language]:
    """Determine source and target languages.

    Args:
        text: The source text
        preference: User preference ('auto', 'en-to-ja' or 'ja-to-en')

    Returns:
        (source, target) tuple
    """
    if preference == EN_TO_JA:
        return Language.ENGLISH, Language.JAPANESE
    if preference == JA_TO_EN:
        return Language.JAPANESE, Language.ENGLISH
    if preference != AUTO:
        logging.warning(f"Unknown translation direction '{preference}', detecting automatically")

    if detect_language(text) == Language.JAPANESE:
        return Language.JAPANESE, Language.ENGLISH
    return Language.ENGLISH, Language.JAPANESE


def get_language_name(lang: Language) -> str:
    """Human-readable language name, e.g. 'Japanese'."""
    return LANGUAGE_NAMES[lang]


def get_language_code(lang: Language) -> str:
    """Short badge shown in the status window, e.g. 'JP'."""
    return LANGUAGE_CODES[lang]
