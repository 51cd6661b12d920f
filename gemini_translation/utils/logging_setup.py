"""
Logging setup for Gemini Translation.
"""
import os
import sys
import logging
import traceback
from datetime import datetime
from typing import Optional

from gemini_translation.constants import VERSION, APP_DISPLAY_NAME


def setup_logging(log_dir: Optional[str] = None) -> str:
    """Setup logging to file and console for crash debugging.

    Args:
        log_dir: Directory for log files (defaults to the project 'logs' directory)

    Returns:
        Path of today's log file
    """
    if log_dir is None:
        log_dir = os.path.join(os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))), 'logs')
    os.makedirs(log_dir, exist_ok=True)

    log_file = os.path.join(log_dir, f'translator_{datetime.now().strftime("%Y%m%d")}.log')

    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s [%(levelname)s] %(message)s',
        handlers=[
            logging.FileHandler(log_file, encoding='utf-8'),
            logging.StreamHandler(sys.stdout)
        ]
    )

    def exception_handler(exc_type, exc_value, exc_tb):
        if issubclass(exc_type, KeyboardInterrupt):
            sys.__excepthook__(exc_type, exc_value, exc_tb)
            return
        logging.critical("Uncaught exception:", exc_info=(exc_type, exc_value, exc_tb))
        logging.critical("".join(traceback.format_exception(exc_type, exc_value, exc_tb)))

    sys.excepthook = exception_handler
    logging.info(f"{APP_DISPLAY_NAME} v{VERSION} started")
    logging.info(f"Log file: {log_file}")

    return log_file
