#!/usr/bin/env python3
"""
Gemini Translation - Main Entry Point

Select text anywhere, press the shortcut, and the translation lands on the clipboard.
"""
import sys
import os

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

import logging

from gemini_translation.utils.logging_setup import setup_logging
from gemini_translation.utils.single_instance import is_already_running, notify_running_instance


def main():
    """Main entry point for Gemini Translation."""
    setup_logging()

    already_running, lock_socket = is_already_running()
    if already_running:
        logging.info("Gemini Translation is already running, opening its settings")
        notify_running_instance()
        return 0

    try:
        from gemini_translation.app import TranslatorApp
        app = TranslatorApp(lock_socket)
        app.run()
        return 0
    except Exception as e:
        logging.critical(f"Failed to start application: {e}", exc_info=True)
        return 1
    finally:
        if lock_socket:
            lock_socket.close()


if __name__ == "__main__":
    sys.exit(main())
