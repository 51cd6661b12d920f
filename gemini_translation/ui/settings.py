"""
Settings window for Gemini Translation.
"""
import logging
import threading
import webbrowser
from typing import Callable, Dict, Optional

import tkinter as tk
from tkinter import X, W, LEFT, RIGHT

try:
    import ttkbootstrap as ttk
    HAS_TTKBOOTSTRAP = True
except ImportError:
    from tkinter import ttk
    HAS_TTKBOOTSTRAP = False

from gemini_translation.constants import (
    API_KEY_URL,
    APP_DISPLAY_NAME,
    DEFAULT_SHORTCUT,
    SAVED_LABEL_MS,
    TRANSLATION_DIRECTIONS,
    VERSION,
)
from gemini_translation.core.hotkey import format_shortcut

ACCESSIBILITY_NOTE = ("Note: This app requires Accessibility permissions. Grant access in "
                      "System Settings → Privacy & Security → Accessibility")


class SettingsWindow:
    """Settings form: API key, translation direction and shortcut."""

    WIDTH = 600
    HEIGHT = 640

    def __init__(self, parent, config,
                 on_save_callback: Optional[Callable[[Dict[str, str]], None]] = None,
                 test_api_key: Optional[Callable[[str], bool]] = None):
        """Initialize the Settings window.

        Args:
            parent: Parent tkinter window
            config: Config object for reading settings
            on_save_callback: Called with the form values when Save is clicked
            test_api_key: Called with a key to validate it; raises on failure
        """
        self.config = config
        self.on_save_callback = on_save_callback
        self.test_api_key = test_api_key
        self._saved_after_id = None

        settings = config.get_settings()
        self._direction_labels = {value: label for value, label in TRANSLATION_DIRECTIONS}
        self._direction_values = {label: value for value, label in TRANSLATION_DIRECTIONS}

        self.window = tk.Toplevel(parent)
        self.window.title(f"{APP_DISPLAY_NAME} Settings")
        self.window.resizable(False, False)

        # Center on screen
        self.window.update_idletasks()
        x = (self.window.winfo_screenwidth() - self.WIDTH) // 2
        y = (self.window.winfo_screenheight() - self.HEIGHT) // 2
        self.window.geometry(f"{self.WIDTH}x{self.HEIGHT}+{x}+{y}")

        # Closing only destroys this window; the app keeps running in the menu bar
        self.window.protocol("WM_DELETE_WINDOW", self.window.destroy)

        self.api_key_var = tk.StringVar(value=settings['api_key'])
        self.direction_var = tk.StringVar(value=self._direction_labels.get(
            settings['translation_direction'], TRANSLATION_DIRECTIONS[0][1]))
        self.shortcut_var = tk.StringVar(value=settings['shortcut'])
        self.shortcut_var.trace_add('write', lambda *_: self._refresh_usage())

        self._create_widgets()
        self.window.focus_force()

    def _create_widgets(self):
        frame = ttk.Frame(self.window, padding=24) if HAS_TTKBOOTSTRAP else ttk.Frame(self.window)
        frame.pack(fill=tk.BOTH, expand=True, padx=(0 if HAS_TTKBOOTSTRAP else 24),
                   pady=(0 if HAS_TTKBOOTSTRAP else 24))

        ttk.Label(frame, text="Translation Settings", font=('Helvetica Neue', 18, 'bold')).pack(anchor=W)

        # API key
        ttk.Label(frame, text="Gemini API Key", font=('Helvetica Neue', 12, 'bold')).pack(anchor=W, pady=(20, 4))
        key_row = ttk.Frame(frame)
        key_row.pack(fill=X)
        ttk.Entry(key_row, textvariable=self.api_key_var, show='*').pack(side=LEFT, fill=X, expand=True)
        self.test_btn = ttk.Button(key_row, text="Test", command=self._on_test_click, width=8)
        self.test_btn.pack(side=LEFT, padx=(8, 0))

        status_row = ttk.Frame(frame)
        status_row.pack(fill=X, pady=(4, 0))
        self.test_status_label = ttk.Label(status_row, text="", font=('Helvetica Neue', 11))
        self.test_status_label.pack(side=LEFT)
        if HAS_TTKBOOTSTRAP:
            ttk.Button(status_row, text="Get an API key", bootstyle="link",
                       command=lambda: webbrowser.open(API_KEY_URL)).pack(side=RIGHT)
        else:
            ttk.Button(status_row, text="Get an API key",
                       command=lambda: webbrowser.open(API_KEY_URL)).pack(side=RIGHT)

        # Translation direction
        ttk.Label(frame, text="Translation Direction", font=('Helvetica Neue', 12, 'bold')).pack(anchor=W, pady=(16, 4))
        ttk.Combobox(frame, textvariable=self.direction_var, state='readonly',
                     values=[label for _, label in TRANSLATION_DIRECTIONS]).pack(fill=X)

        # Shortcut
        ttk.Label(frame, text="Keyboard Shortcut", font=('Helvetica Neue', 12, 'bold')).pack(anchor=W, pady=(16, 4))
        ttk.Entry(frame, textvariable=self.shortcut_var).pack(fill=X)
        ttk.Label(frame, text=f"Default: {format_shortcut(DEFAULT_SHORTCUT)}",
                  font=('Helvetica Neue', 11)).pack(anchor=W, pady=(4, 0))

        # Save
        save_row = ttk.Frame(frame)
        save_row.pack(fill=X, pady=(20, 0))
        if HAS_TTKBOOTSTRAP:
            ttk.Button(save_row, text="Save Settings", command=self._on_save_click,
                       bootstyle="primary").pack(side=LEFT)
        else:
            ttk.Button(save_row, text="Save Settings", command=self._on_save_click).pack(side=LEFT)
        self.saved_label = ttk.Label(save_row, text="", foreground='#16a34a')
        self.saved_label.pack(side=LEFT, padx=(12, 0))

        # Usage instructions
        ttk.Separator(frame).pack(fill=X, pady=20)
        ttk.Label(frame, text="How to Use", font=('Helvetica Neue', 14, 'bold')).pack(anchor=W)
        self.usage_label = ttk.Label(frame, text="", justify=LEFT)
        self.usage_label.pack(anchor=W, pady=(6, 0))
        ttk.Label(frame, text=ACCESSIBILITY_NOTE, wraplength=self.WIDTH - 60,
                  font=('Helvetica Neue', 11)).pack(anchor=W, pady=(12, 0))
        ttk.Label(frame, text=f"{APP_DISPLAY_NAME} v{VERSION}",
                  font=('Helvetica Neue', 10)).pack(anchor=W, pady=(12, 0))

        self._refresh_usage()

    def _refresh_usage(self):
        """Update the How to Use steps with the shortcut being edited."""
        if not hasattr(self, 'usage_label'):
            return
        shortcut = format_shortcut(self.shortcut_var.get().strip() or DEFAULT_SHORTCUT)
        self.usage_label.configure(text=(
            "1. Select any text in any application\n"
            f"2. Press {shortcut}\n"
            "3. Translated text will be copied to clipboard\n"
            "4. Paste it anywhere with ⌘V"
        ))

    def get_form_values(self) -> Dict[str, str]:
        """Current form values in settings-store form."""
        return {
            'api_key': self.api_key_var.get().strip(),
            'translation_direction': self._direction_values.get(self.direction_var.get(), 'auto'),
            'shortcut': self.shortcut_var.get().strip() or DEFAULT_SHORTCUT,
        }

    def _on_save_click(self):
        settings = self.get_form_values()
        try:
            if self.on_save_callback:
                self.on_save_callback(settings)
        except Exception as e:
            logging.error(f"Failed to save settings: {e}")
            self.saved_label.configure(text=f"Save failed: {e}", foreground='#dc2626')
            return

        self.saved_label.configure(text="Settings saved successfully!", foreground='#16a34a')
        if self._saved_after_id:
            self.window.after_cancel(self._saved_after_id)
        self._saved_after_id = self.window.after(SAVED_LABEL_MS, self._clear_saved_label)

    def _clear_saved_label(self):
        self._saved_after_id = None
        if self.window.winfo_exists():
            self.saved_label.configure(text="")

    def _on_test_click(self):
        """Validate the API key on a worker thread."""
        api_key = self.api_key_var.get().strip()
        if not api_key:
            self.test_status_label.configure(text="Enter an API key first", foreground='#dc2626')
            return
        if not self.test_api_key:
            return

        self.test_btn.configure(state='disabled')
        self.test_status_label.configure(text="Testing...", foreground='')

        def run_test():
            try:
                self.test_api_key(api_key)
                result = ("✓ API key works", '#16a34a')
            except Exception as e:
                result = (str(e), '#dc2626')
            self.window.after(0, lambda: self._show_test_result(*result))

        threading.Thread(target=run_test, daemon=True).start()

    def _show_test_result(self, text: str, color: str):
        try:
            if self.window.winfo_exists():
                self.test_btn.configure(state='normal')
                self.test_status_label.configure(text=text, foreground=color)
        except tk.TclError:
            pass  # Window closed while testing

    def focus(self):
        """Bring the window to the front."""
        self.window.deiconify()
        self.window.attributes('-topmost', True)
        self.window.update()
        self.window.attributes('-topmost', False)
        self.window.lift()
        self.window.focus_force()
