"""
Clipboard management for Gemini Translation.
"""
import logging

import pyperclip


class ClipboardManager:
    """Reads and writes the plain-text clipboard."""

    @staticmethod
    def get_text() -> str:
        """Get text from clipboard ('' when unavailable)."""
        try:
            return pyperclip.paste() or ""
        except pyperclip.PyperclipException as e:
            logging.warning(f"Failed to read clipboard: {e}")
            return ""

    @staticmethod
    def set_text(text: str):
        """Set clipboard to text."""
        pyperclip.copy(text)

    @staticmethod
    def clear():
        """Empty the clipboard so a fresh copy can be detected."""
        pyperclip.copy("")
