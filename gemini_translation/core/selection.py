"""
Selected-text capture for Gemini Translation.
Simulates Cmd+C through AppleScript (System Events) and reads the clipboard.
"""
import time
import logging
import subprocess
from typing import Optional

from gemini_translation.constants import CLIPBOARD_SETTLE_DELAY
from gemini_translation.core.clipboard import ClipboardManager

COPY_SCRIPT = 'tell application "System Events" to keystroke "c" using command down'
PROBE_SCRIPT = 'tell application "System Events" to keystroke ""'
ASSISTIVE_ACCESS_DENIED = "not allowed assistive access"
OSASCRIPT_TIMEOUT = 5


def run_applescript(script: str) -> subprocess.CompletedProcess:
    """Run an AppleScript snippet with osascript.

    Raises:
        subprocess.CalledProcessError: If osascript exits with an error
    """
    return subprocess.run(['osascript', '-e', script], check=True,
                          capture_output=True, text=True, timeout=OSASCRIPT_TIMEOUT)


def get_selected_text() -> Optional[str]:
    """Get selected text by simulating Cmd+C.

    The previous clipboard text is restored when nothing new was copied.

    Returns:
        The selected text, or None if no text is selected
    """
    try:
        old_clipboard = ClipboardManager.get_text()
        ClipboardManager.clear()

        run_applescript(COPY_SCRIPT)
        time.sleep(CLIPBOARD_SETTLE_DELAY)

        new_clipboard = ClipboardManager.get_text()

        if not new_clipboard or new_clipboard == old_clipboard:
            if old_clipboard:
                ClipboardManager.set_text(old_clipboard)
            return None

        return new_clipboard
    except Exception as e:
        logging.error(f"Error getting selected text: {e}")
        return None


def check_accessibility_permissions() -> bool:
    """Check whether the app may send keystrokes through System Events."""
    try:
        run_applescript(PROBE_SCRIPT)
        return True
    except subprocess.CalledProcessError as e:
        output = f"{e.stderr or ''}{e.stdout or ''}"
        if ASSISTIVE_ACCESS_DENIED in output:
            return False
        return True
    except (OSError, subprocess.TimeoutExpired) as e:
        logging.warning(f"Could not check accessibility permissions: {e}")
        return True


def _escape_applescript(text: str) -> str:
    return text.replace('\\', '\\\\').replace('"', '\\"')


def show_notification(title: str, body: str):
    """Show a native macOS notification."""
    script = f'display notification "{_escape_applescript(body)}" with title "{_escape_applescript(title)}"'
    try:
        run_applescript(script)
    except (OSError, subprocess.SubprocessError) as e:
        logging.error(f"Failed to show notification: {e}")
