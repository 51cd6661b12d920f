"""
Main Application for Gemini Translation.
"""
import os
import sys
import logging
import threading
from typing import Dict, Optional

import tkinter as tk

try:
    import ttkbootstrap as ttk
    HAS_TTKBOOTSTRAP = True
except ImportError:
    HAS_TTKBOOTSTRAP = False

from config import Config
from gemini_translation.constants import APP_DISPLAY_NAME, VERSION
from gemini_translation.core.gemini import get_translator, initialize_translator
from gemini_translation.core.hotkey import HotkeyManager, format_shortcut
from gemini_translation.core.selection import check_accessibility_permissions, show_notification
from gemini_translation.core.translation import TranslationService
from gemini_translation.ui.settings import SettingsWindow
from gemini_translation.ui.status_window import StatusWindow
from gemini_translation.ui.tray import TrayManager
from gemini_translation.utils.macos import hide_dock_icon
from gemini_translation.utils.single_instance import listen_for_second_instance


class TranslatorApp:
    """Main application class."""

    def __init__(self, lock_socket=None):
        self.config = Config(on_api_key_change=initialize_translator)
        self.lock_socket = lock_socket

        # Create root window (never shown; hosts the settings and status windows)
        if HAS_TTKBOOTSTRAP:
            self.root = ttk.Window(themename="litera")
        else:
            self.root = tk.Tk()
        self.root.withdraw()
        self.root.protocol("WM_DELETE_WINDOW", self.quit_app)

        self.running = True
        self.settings_window: Optional[SettingsWindow] = None

        # Status popup near the cursor
        self.status_window = StatusWindow(self.root)

        # Services
        self.translation_service = TranslationService(status_callback=self._show_status)
        self.hotkey_manager = HotkeyManager(self._on_shortcut_translate)

        # Menu bar
        self.tray_manager = TrayManager()
        self.tray_manager.configure_callbacks(
            on_show_settings=self.show_settings,
            on_quit=self.quit_app
        )
        self.tray_icon = None

    def _show_status(self, message: str, status_type: str):
        """Show the status window from any thread."""
        self.root.after(0, lambda: self.status_window.show(message, status_type))

    def _on_shortcut_translate(self):
        """Run the translation workflow with the saved direction preference."""
        direction = self.config.get_saved_translation_direction()
        result = self.translation_service.translate_selected_text(direction)
        if not result.success:
            logging.info(f"Translation not completed: {result.error}")

    def _set_tray_translating(self):
        self.root.after(0, self.tray_manager.set_translating)

    def _set_tray_normal(self):
        self.root.after(0, self.tray_manager.set_normal)

    def show_settings(self, icon=None, item=None):
        """Show settings window."""
        # Ensure runs on main thread
        if threading.current_thread() is not threading.main_thread():
            self.root.after(0, lambda: self.show_settings(icon, item))
            return

        # Check if already open
        if self.settings_window and self.settings_window.window.winfo_exists():
            self.settings_window.focus()
            return

        self.settings_window = SettingsWindow(
            self.root, self.config,
            on_save_callback=self._on_settings_save,
            test_api_key=get_translator().test_connection
        )
        self.settings_window.focus()

    def _on_settings_save(self, settings: Dict[str, str]):
        """Persist settings and apply a changed shortcut.

        An invalid shortcut is rejected before anything is written.

        Raises:
            ValueError: If the new shortcut is invalid or could not be registered
        """
        requested = settings.get('shortcut')
        if requested:
            try:
                HotkeyManager.parse_shortcut(requested)
            except ValueError as e:
                raise ValueError(f"Invalid shortcut '{requested}': {e}") from e

        old_shortcut = self.config.get_saved_shortcut()
        self.config.save_settings(settings)
        logging.info("Settings saved")

        new_shortcut = self.config.get_saved_shortcut()
        if new_shortcut != old_shortcut or not self.hotkey_manager.is_shortcut_registered(new_shortcut):
            if not self.hotkey_manager.register_translation_shortcut(new_shortcut):
                # Fall back to the previous shortcut, on disk and live
                self.config.save_settings({'shortcut': old_shortcut})
                self.hotkey_manager.register_translation_shortcut(old_shortcut)
                raise ValueError(f"Shortcut '{new_shortcut}' could not be registered")

    def _check_permissions(self):
        """Warn when Accessibility access is missing."""
        if not check_accessibility_permissions():
            logging.warning("Accessibility permissions not granted. AppleScript may not work.")
            show_notification(
                APP_DISPLAY_NAME,
                "Grant Accessibility access in System Settings to translate selected text."
            )

    def _start_tray(self):
        """Create the menu bar icon and start its event handling."""
        self.tray_icon = self.tray_manager.create()

        if sys.platform == 'darwin':
            # AppKit must stay on the main thread; Tk's main loop drives it
            self.tray_icon.run_detached()
            return

        def run_tray_safe():
            try:
                self.tray_icon.run()
            except Exception as e:
                logging.error(f"Tray icon error: {e}")

        threading.Thread(target=run_tray_safe, daemon=True, name="Tray").start()

    def initialize(self):
        """Set up the menu bar, translator and global shortcut."""
        try:
            hide_dock_icon()
        except ImportError as e:
            logging.warning(f"Cannot hide Dock icon: {e}")

        self._start_tray()

        self.hotkey_manager.set_translation_callbacks(self._set_tray_translating, self._set_tray_normal)

        threading.Thread(target=self._check_permissions, daemon=True, name="PermissionCheck").start()

        api_key = self.config.get_saved_api_key()
        if api_key:
            initialize_translator(api_key)
        else:
            logging.info("No API key saved yet")

        shortcut = self.config.get_saved_shortcut()
        if not self.hotkey_manager.register_translation_shortcut(shortcut):
            logging.error("Failed to register global shortcut")

        if self.lock_socket is not None:
            listen_for_second_instance(self.lock_socket, self.show_settings)

    def quit_app(self, icon=None, item=None):
        """Quit the application with proper cleanup."""
        if threading.current_thread() is not threading.main_thread():
            self.root.after(0, self.quit_app)
            return
        if not self.running:
            return

        logging.info("Quitting application...")
        self.running = False

        try:
            self.hotkey_manager.cleanup()
        except Exception as e:
            logging.error(f"Error cleaning up hotkeys: {e}")

        self.status_window.destroy()

        try:
            self.tray_manager.stop()
        except Exception as e:
            logging.warning(f"Error stopping tray: {e}")

        if self.lock_socket is not None:
            self.lock_socket.close()

        try:
            if self.root.winfo_exists():
                self.root.quit()
        except tk.TclError as e:
            logging.warning(f"Error quitting root: {e}")

        logging.info("Application shutdown complete")

    def run(self):
        """Run the application."""
        logging.info(f"{APP_DISPLAY_NAME} v{VERSION}")
        shortcut = self.config.get_saved_shortcut()
        print(f"{APP_DISPLAY_NAME} v{VERSION}")
        print(f"Select any text, then press {format_shortcut(shortcut)} ({shortcut}) to translate!")

        self.initialize()

        try:
            logging.info("Starting main loop")
            self.root.mainloop()
        except KeyboardInterrupt:
            logging.info("Keyboard interrupt received")
        finally:
            self.quit_app()
            os._exit(0)
