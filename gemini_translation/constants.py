"""
Constants and configuration values for Gemini Translation.
"""

# ============== VERSION ==============
VERSION = "1.0.0"
APP_NAME = "GeminiTranslation"
APP_DISPLAY_NAME = "Gemini Translation"

# ============== NETWORK ==============
LOCK_PORT = 47824  # Port for single instance lock
SHOW_SETTINGS_MESSAGE = b"show-settings"

# ============== GEMINI ==============
GEMINI_MODEL = "gemini-2.5-flash"
API_KEY_URL = "https://aistudio.google.com/app/apikey"

# ============== SHORTCUT ==============
DEFAULT_SHORTCUT = "Command+Option+T"
HOTKEY_COOLDOWN = 0.3  # Debounce between shortcut triggers in seconds

# ============== TRANSLATION DIRECTIONS ==============
# Format: (value, label shown in Settings)
TRANSLATION_DIRECTIONS = [
    ("auto", "Auto Detect (Recommended)"),
    ("en-to-ja", "English → Japanese"),
    ("ja-to-en", "Japanese → English"),
]
DEFAULT_TRANSLATION_DIRECTION = "auto"

# ============== TIMING ==============
CLIPBOARD_SETTLE_DELAY = 0.1  # Wait for the copy keystroke to land, seconds
STATUS_AUTO_HIDE_MS = 2000
SAVED_LABEL_MS = 2000
LOG_PREVIEW_CHARS = 50

# ============== STATUS WINDOW ==============
STATUS_WINDOW_WIDTH = 200
STATUS_WINDOW_HEIGHT = 60
STATUS_CURSOR_OFFSET = 20
STATUS_BACKGROUND = "#1e1e1e"
STATUS_FOREGROUND = "#ffffff"
STATUS_ACCENT_COLORS = {
    "translating": "#3b82f6",
    "success": "#10b981",
    "error": "#ef4444",
}

# ============== TRAY ==============
TRAY_ICON_SIZE = (16, 16)
TRAY_ICON_PATH = ("resources", "icon.png")
