"""
Menu Bar Manager for Gemini Translation.
Handles the menu bar (tray) icon and its menu.
"""
import os
import sys
import logging
from typing import Callable, Optional

from pystray import Icon, MenuItem, Menu
from PIL import Image, ImageDraw

from gemini_translation.constants import APP_DISPLAY_NAME, TRAY_ICON_PATH, TRAY_ICON_SIZE


def get_resource_path(relative_path: str) -> str:
    """Get absolute path to resource, works for dev and PyInstaller bundle.

    Args:
        relative_path: Path relative to the app root

    Returns:
        Absolute path to the resource
    """
    if hasattr(sys, '_MEIPASS'):
        base_path = sys._MEIPASS
    else:
        # Running as script - go up from gemini_translation/ui/ to project root
        base_path = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
    return os.path.join(base_path, relative_path)


class TrayManager:
    """Manages the menu bar icon and menu."""

    def __init__(self):
        self.tray_icon: Optional[Icon] = None
        self.is_translating = False

        # Callbacks
        self._on_show_settings: Optional[Callable[[], None]] = None
        self._on_quit: Optional[Callable[[], None]] = None

    def configure_callbacks(self,
                            on_show_settings: Optional[Callable[[], None]] = None,
                            on_quit: Optional[Callable[[], None]] = None):
        """Configure callback functions for menu actions.

        Args:
            on_show_settings: Called when user clicks Settings or the icon
            on_quit: Called when user clicks Quit
        """
        self._on_show_settings = on_show_settings
        self._on_quit = on_quit

    def _load_base_image(self) -> Image.Image:
        """Load resources/icon.png, or draw a fallback icon."""
        icon_path = get_resource_path(os.path.join(*TRAY_ICON_PATH))

        if os.path.exists(icon_path):
            try:
                image = Image.open(icon_path)
                if image.mode != 'RGBA':
                    image = image.convert('RGBA')
                return image.resize(TRAY_ICON_SIZE, Image.Resampling.LANCZOS)
            except OSError as e:
                logging.warning(f"Failed to load tray icon {icon_path}: {e}")

        image = Image.new('RGBA', (64, 64), (0, 0, 0, 0))
        draw = ImageDraw.Draw(image)
        draw.rounded_rectangle((4, 4, 60, 60), radius=12, fill='black')
        draw.text((24, 22), "T", fill="white")
        return image.resize(TRAY_ICON_SIZE, Image.Resampling.LANCZOS)

    def _create_icon_image(self, is_translating: bool = False) -> Image.Image:
        """Create the menu bar icon image.

        Args:
            is_translating: Add an indicator dot while a translation runs

        Returns:
            PIL Image for the icon
        """
        image = self._load_base_image()
        if is_translating:
            image = image.copy()
            draw = ImageDraw.Draw(image)
            w, h = image.size
            d = max(4, w // 3)
            draw.ellipse((w - d, h - d, w - 1, h - 1), fill='#3b82f6')
        return image

    def _build_menu_items(self) -> list:
        """Build menu items list."""
        return [
            MenuItem('Settings', lambda: self._on_show_settings() if self._on_show_settings else None,
                     default=True),
            Menu.SEPARATOR,
            MenuItem('Quit', lambda: self._on_quit() if self._on_quit else None),
        ]

    def create(self) -> Icon:
        """Create and return the menu bar icon."""
        image = self._create_icon_image(False)
        menu = Menu(*self._build_menu_items())
        self.tray_icon = Icon("GeminiTranslation", image, APP_DISPLAY_NAME, menu)
        return self.tray_icon

    def set_translating(self):
        """Switch the icon to its translating state."""
        self.is_translating = True
        if self.tray_icon:
            self.tray_icon.icon = self._create_icon_image(True)
            self.tray_icon.title = f"{APP_DISPLAY_NAME} - Translating..."

    def set_normal(self):
        """Switch the icon back to its normal state."""
        self.is_translating = False
        if self.tray_icon:
            self.tray_icon.icon = self._create_icon_image(False)
            self.tray_icon.title = APP_DISPLAY_NAME

    def stop(self):
        """Stop and cleanup the menu bar icon."""
        if self.tray_icon:
            try:
                self.tray_icon.stop()
            except Exception as e:
                logging.warning(f"Error stopping tray icon: {e}")
            self.tray_icon = None
