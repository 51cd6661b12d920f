"""
Shared pytest fixtures for Gemini Translation tests.
"""
import os
import sys
import tempfile
import pytest
from unittest.mock import MagicMock, patch

# Headless test runs have no keyboard/display backend for pynput or pystray
os.environ.setdefault('PYNPUT_BACKEND', 'dummy')
os.environ.setdefault('PYSTRAY_BACKEND', 'dummy')

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


@pytest.fixture
def temp_config_dir():
    """Create temporary config directory."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield tmpdir


@pytest.fixture
def isolated_config(temp_config_dir):
    """Config class pointed at a temporary directory."""
    from config import Config
    config_file = os.path.join(temp_config_dir, 'config.json')
    with patch.object(Config, 'CONFIG_DIR', temp_config_dir), \
            patch.object(Config, 'CONFIG_FILE', config_file):
        yield Config


@pytest.fixture
def sample_config_json():
    """Sample config.json content."""
    return {
        "api_key": "test-key-123",
        "translation_direction": "ja-to-en",
        "shortcut": "Command+Shift+Y"
    }


@pytest.fixture
def mock_translator():
    """Initialized translator returning a fixed translation."""
    translator = MagicMock()
    translator.is_initialized.return_value = True
    translator.translate.return_value = "こんにちは世界"
    return translator


@pytest.fixture
def fake_clipboard():
    """In-memory replacement for pyperclip."""
    state = {'text': ''}

    def copy(text):
        state['text'] = text

    def paste():
        return state['text']

    with patch('gemini_translation.core.clipboard.pyperclip.copy', side_effect=copy), \
            patch('gemini_translation.core.clipboard.pyperclip.paste', side_effect=paste):
        yield state
