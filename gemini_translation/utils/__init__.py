"""
Utility modules for Gemini Translation.
"""
from gemini_translation.utils.logging_setup import setup_logging
from gemini_translation.utils.single_instance import is_already_running, notify_running_instance

__all__ = ['setup_logging', 'is_already_running', 'notify_running_instance']
