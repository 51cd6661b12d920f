"""
Gemini Translation - translate the selected text from the macOS menu bar.
"""
from gemini_translation.constants import VERSION

__version__ = VERSION
