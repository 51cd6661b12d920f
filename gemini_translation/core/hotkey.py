"""
Hotkey Manager for Gemini Translation.
Registers the global translation shortcut with pynput.

Keys are matched by macOS virtual keycode rather than by character: with
Option held, the darwin listener reports the composed character (Option+T
arrives as '†'), so a character match would never fire.
"""
import re
import time
import logging
import threading
from typing import Callable, List, Optional, Tuple

from pynput import keyboard

from gemini_translation.constants import HOTKEY_COOLDOWN


class HotkeyManager:
    """
    Manages the global translation shortcut.

    Shortcuts use accelerator syntax such as 'Command+Option+T' and are
    normalised to pynput's '<alt>+<cmd>+t' form. Only one shortcut is
    registered at a time.
    """

    # Modifier aliases -> pynput modifier tokens
    MOD_MAP = {
        'command': '<cmd>',
        'cmd': '<cmd>',
        'commandorcontrol': '<cmd>',
        'cmdorctrl': '<cmd>',
        'super': '<cmd>',
        'meta': '<cmd>',
        'option': '<alt>',
        'alt': '<alt>',
        'control': '<ctrl>',
        'ctrl': '<ctrl>',
        'shift': '<shift>',
    }

    # Named keys -> pynput key tokens
    KEY_MAP = {
        'space': '<space>',
        'enter': '<enter>',
        'return': '<enter>',
        'tab': '<tab>',
        'escape': '<esc>',
        'esc': '<esc>',
        'backspace': '<backspace>',
        'delete': '<delete>',
        'up': '<up>',
        'down': '<down>',
        'left': '<left>',
        'right': '<right>',
        'home': '<home>',
        'end': '<end>',
        'pageup': '<page_up>',
        'pagedown': '<page_down>',
    }
    KEY_MAP.update({f'f{i}': f'<f{i}>' for i in range(1, 13)})

    # Canonical modifier order for registration
    MOD_ORDER = ('<ctrl>', '<alt>', '<shift>', '<cmd>')

    # macOS virtual keycodes (kVK_*), ANSI layout
    MAC_MODIFIER_VK = {
        '<cmd>': 0x37,
        '<shift>': 0x38,
        '<alt>': 0x3A,
        '<ctrl>': 0x3B,
    }

    # Right-hand modifier -> left-hand modifier
    MAC_RIGHT_MODIFIER_VK = {
        0x36: 0x37,
        0x3C: 0x38,
        0x3D: 0x3A,
        0x3E: 0x3B,
    }

    MAC_KEY_VK = {
        'a': 0x00, 's': 0x01, 'd': 0x02, 'f': 0x03, 'h': 0x04, 'g': 0x05,
        'z': 0x06, 'x': 0x07, 'c': 0x08, 'v': 0x09, 'b': 0x0B, 'q': 0x0C,
        'w': 0x0D, 'e': 0x0E, 'r': 0x0F, 'y': 0x10, 't': 0x11, 'o': 0x1F,
        'u': 0x20, 'i': 0x22, 'p': 0x23, 'l': 0x25, 'j': 0x26, 'k': 0x28,
        'n': 0x2D, 'm': 0x2E,
        '1': 0x12, '2': 0x13, '3': 0x14, '4': 0x15, '5': 0x17, '6': 0x16,
        '7': 0x1A, '8': 0x1C, '9': 0x19, '0': 0x1D,
        '<enter>': 0x24, '<tab>': 0x30, '<space>': 0x31, '<backspace>': 0x33,
        '<esc>': 0x35, '<delete>': 0x75, '<home>': 0x73, '<end>': 0x77,
        '<page_up>': 0x74, '<page_down>': 0x79,
        '<left>': 0x7B, '<right>': 0x7C, '<down>': 0x7D, '<up>': 0x7E,
        '<f1>': 0x7A, '<f2>': 0x78, '<f3>': 0x63, '<f4>': 0x76,
        '<f5>': 0x60, '<f6>': 0x61, '<f7>': 0x62, '<f8>': 0x64,
        '<f9>': 0x65, '<f10>': 0x6D, '<f11>': 0x67, '<f12>': 0x6F,
    }

    def __init__(self, callback: Callable[[], None]):
        self.callback = callback
        self._listener: Optional[keyboard.Listener] = None
        self._hotkey: Optional[keyboard.HotKey] = None
        self._registered_shortcut: Optional[str] = None
        self._last_hotkey_time = 0.0
        self._hotkey_cooldown = HOTKEY_COOLDOWN
        self._on_start: Optional[Callable[[], None]] = None
        self._on_end: Optional[Callable[[], None]] = None

    def set_translation_callbacks(self, on_start: Callable[[], None], on_end: Callable[[], None]):
        """Set callbacks run before and after each triggered translation."""
        self._on_start = on_start
        self._on_end = on_end

    @classmethod
    def _split_shortcut(cls, shortcut: str) -> Tuple[List[str], str]:
        parts = [p for p in shortcut.lower().replace(' ', '').split('+') if p]
        modifiers = set()
        key = None

        for part in parts:
            if part in cls.MOD_MAP:
                modifiers.add(cls.MOD_MAP[part])
            elif part in cls.KEY_MAP or re.fullmatch(r'[a-z0-9]', part):
                if key is not None:
                    raise ValueError(f"More than one key in shortcut: {shortcut}")
                key = cls.KEY_MAP.get(part, part)
            else:
                raise ValueError(f"Unknown key in shortcut: {part}")

        if not modifiers:
            raise ValueError(f"No modifier in shortcut: {shortcut}")
        if key is None:
            raise ValueError(f"No main key in shortcut: {shortcut}")

        return [m for m in cls.MOD_ORDER if m in modifiers], key

    @classmethod
    def parse_shortcut(cls, shortcut: str) -> str:
        """Parse 'Command+Option+T' into pynput form '<alt>+<cmd>+t'.

        Raises:
            ValueError: If the shortcut has no modifier, no key, or an unknown part
        """
        modifiers, key = cls._split_shortcut(shortcut)
        return '+'.join(modifiers + [key])

    @classmethod
    def virtual_keys(cls, shortcut: str) -> List[int]:
        """macOS virtual keycodes of every key in the shortcut.

        Raises:
            ValueError: If the shortcut cannot be parsed
        """
        modifiers, key = cls._split_shortcut(shortcut)
        return [cls.MAC_MODIFIER_VK[m] for m in modifiers] + [cls.MAC_KEY_VK[key]]

    @classmethod
    def _virtual_key(cls, key) -> Optional[int]:
        """Keycode of a listener key, with right-hand modifiers folded left."""
        if isinstance(key, keyboard.Key):
            key = key.value
        vk = getattr(key, 'vk', None)
        return cls.MAC_RIGHT_MODIFIER_VK.get(vk, vk)

    def register_translation_shortcut(self, shortcut: str) -> bool:
        """Register the global shortcut for translation.

        An invalid shortcut is rejected before the current one is removed.

        Returns:
            True if registration was successful
        """
        try:
            combo = self.parse_shortcut(shortcut)
            hotkey = keyboard.HotKey(
                [keyboard.KeyCode.from_vk(vk) for vk in self.virtual_keys(shortcut)],
                self._on_hotkey
            )
        except ValueError as e:
            logging.error(f"Invalid shortcut {shortcut}: {e}")
            return False

        self.unregister_all_shortcuts()
        self._hotkey = hotkey

        try:
            listener = keyboard.Listener(on_press=self._on_press, on_release=self._on_release)
            listener.daemon = True
            listener.start()
        except Exception as e:
            logging.error(f"Failed to register global shortcut {shortcut}: {e}")
            self._hotkey = None
            return False

        self._listener = listener
        self._registered_shortcut = shortcut
        logging.info(f"Global shortcut {shortcut} registered successfully ({combo})")
        return True

    def unregister_all_shortcuts(self):
        """Unregister the global shortcut, if any."""
        if self._listener is not None:
            try:
                self._listener.stop()
            except Exception as e:
                logging.warning(f"Error stopping hotkey listener: {e}")
            self._listener = None
        self._hotkey = None
        self._registered_shortcut = None

    def is_shortcut_registered(self, shortcut: str) -> bool:
        """Check if shortcut is the one currently registered."""
        if self._registered_shortcut is None:
            return False
        try:
            return self.parse_shortcut(shortcut) == self.parse_shortcut(self._registered_shortcut)
        except ValueError:
            return False

    def _on_press(self, key):
        vk = self._virtual_key(key)
        if vk is not None and self._hotkey is not None:
            self._hotkey.press(keyboard.KeyCode.from_vk(vk))

    def _on_release(self, key):
        vk = self._virtual_key(key)
        if vk is not None and self._hotkey is not None:
            self._hotkey.release(keyboard.KeyCode.from_vk(vk))

    def _on_hotkey(self):
        """Handle shortcut press with debounce."""
        current_time = time.time()
        if current_time - self._last_hotkey_time < self._hotkey_cooldown:
            return

        self._last_hotkey_time = current_time
        logging.info(f"Shortcut {self._registered_shortcut} triggered")

        threading.Thread(target=self._run_translation, daemon=True).start()

    def _run_translation(self):
        """Run the translation callback between the start/end notifications."""
        if self._on_start:
            self._on_start()
        try:
            self.callback()
        except Exception as e:
            logging.error(f"Shortcut handler error: {e}")
        finally:
            if self._on_end:
                self._on_end()

    def cleanup(self):
        """Full cleanup - stop the listener."""
        logging.info("Cleaning up hotkey manager...")
        self.unregister_all_shortcuts()


SHORTCUT_SYMBOLS = [
    ('Command', '⌘'),
    ('Cmd', '⌘'),
    ('Option', '⌥'),
    ('Alt', '⌥'),
    ('Shift', '⇧'),
    ('Control', '⌃'),
    ('Ctrl', '⌃'),
]


def format_shortcut(shortcut: str) -> str:
    """Convert 'Command+Option+T' to macOS symbols '⌘⌥T'."""
    for name, symbol in SHORTCUT_SYMBOLS:
        shortcut = shortcut.replace(name, symbol)
    return shortcut.replace('+', '')
