"""
Status window for Gemini Translation.
A small frameless, always-on-top window shown near the mouse cursor while translating.
"""
import logging
import tkinter as tk
from typing import Optional

from gemini_translation.constants import (
    STATUS_ACCENT_COLORS,
    STATUS_AUTO_HIDE_MS,
    STATUS_BACKGROUND,
    STATUS_CURSOR_OFFSET,
    STATUS_FOREGROUND,
    STATUS_WINDOW_HEIGHT,
    STATUS_WINDOW_WIDTH,
)


class StatusWindow:
    """
    Transient status popup ("Translating...", "Copied", "Translation failed").

    One window is reused for every message. Types other than 'translating'
    hide themselves after STATUS_AUTO_HIDE_MS. Must be used from the Tk main thread.
    """

    ALPHA = 0.95

    def __init__(self, root: tk.Tk) -> None:
        self.root = root
        self.window: Optional[tk.Toplevel] = None
        self._accent: Optional[tk.Frame] = None
        self._label: Optional[tk.Label] = None
        self._hide_after_id: Optional[str] = None

    def _create_window(self):
        """Build the popup window (hidden)."""
        window = tk.Toplevel(self.root)
        window.withdraw()
        window.overrideredirect(True)
        window.attributes('-topmost', True)
        try:
            window.attributes('-alpha', self.ALPHA)
        except tk.TclError:
            pass  # Alpha not supported by this window manager
        window.configure(bg=STATUS_BACKGROUND)

        self._accent = tk.Frame(window, width=3, bg=STATUS_ACCENT_COLORS['translating'])
        self._accent.pack(side=tk.LEFT, fill=tk.Y)

        self._label = tk.Label(
            window,
            text="Translating...",
            bg=STATUS_BACKGROUND,
            fg=STATUS_FOREGROUND,
            font=('Helvetica Neue', 13, 'bold'),
            wraplength=STATUS_WINDOW_WIDTH - 24,
            justify=tk.CENTER
        )
        self._label.pack(side=tk.LEFT, fill=tk.BOTH, expand=True, padx=(12, 16), pady=12)

        self.window = window

    def _window_exists(self) -> bool:
        try:
            return self.window is not None and bool(self.window.winfo_exists())
        except tk.TclError:
            return False

    def _cursor_position(self):
        x, y = self.root.winfo_pointerxy()
        return x + STATUS_CURSOR_OFFSET, y + STATUS_CURSOR_OFFSET

    def show(self, message: str, status_type: str = 'translating'):
        """Show message near the cursor.

        Args:
            message: Text to display
            status_type: 'translating', 'success' or 'error'
        """
        self._cancel_hide()

        if not self._window_exists():
            self._create_window()

        accent = STATUS_ACCENT_COLORS.get(status_type, STATUS_ACCENT_COLORS['translating'])
        self._accent.configure(bg=accent)
        self._label.configure(text=message)

        x, y = self._cursor_position()
        self.window.geometry(f"{STATUS_WINDOW_WIDTH}x{STATUS_WINDOW_HEIGHT}+{x}+{y}")
        self.window.deiconify()
        self.window.lift()

        if status_type != 'translating':
            self._hide_after_id = self.root.after(STATUS_AUTO_HIDE_MS, self.hide)

    def _cancel_hide(self):
        if self._hide_after_id is not None:
            try:
                self.root.after_cancel(self._hide_after_id)
            except (tk.TclError, ValueError):
                pass  # Already fired
            self._hide_after_id = None

    def hide(self):
        """Hide the status window."""
        if self._window_exists():
            self.window.withdraw()
        self._cancel_hide()

    def destroy(self):
        """Destroy the status window."""
        self._cancel_hide()
        if self._window_exists():
            try:
                self.window.destroy()
            except tk.TclError as e:
                logging.warning(f"Error destroying status window: {e}")
        self.window = None
