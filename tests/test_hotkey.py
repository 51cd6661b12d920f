"""
Unit tests for hotkey.py - Global shortcut registration.
"""
import pytest
from unittest.mock import MagicMock, patch

from pynput.keyboard import KeyCode

from gemini_translation.core.hotkey import HotkeyManager, format_shortcut

# macOS keycodes as the darwin listener reports them
CMD, CMD_R, OPTION, SHIFT = 0x37, 0x36, 0x3A, 0x38
T_KEY = 0x11


@pytest.fixture
def mock_listener():
    with patch('gemini_translation.core.hotkey.keyboard.Listener') as mock:
        yield mock


class TestParseShortcut:
    """Tests for accelerator parsing."""

    @pytest.mark.parametrize('shortcut, expected', [
        ('Command+Option+T', '<alt>+<cmd>+t'),
        ('Cmd+Shift+Y', '<shift>+<cmd>+y'),
        ('Control+Alt+Space', '<ctrl>+<alt>+<space>'),
        ('CommandOrControl+F5', '<cmd>+<f5>'),
        ('ctrl + 1', '<ctrl>+1'),
    ])
    def test_valid(self, shortcut, expected):
        assert HotkeyManager.parse_shortcut(shortcut) == expected

    @pytest.mark.parametrize('shortcut', [
        'T',                    # no modifier
        'Command+Option',       # no key
        'Command+A+B',          # two keys
        'Command+Hyper+T',      # unknown part
        '',
    ])
    def test_invalid(self, shortcut):
        with pytest.raises(ValueError):
            HotkeyManager.parse_shortcut(shortcut)


class TestVirtualKeys:
    """Tests for macOS keycode mapping."""

    @pytest.mark.parametrize('shortcut, expected', [
        ('Command+Option+T', [OPTION, CMD, T_KEY]),
        ('Cmd+Shift+1', [SHIFT, CMD, 0x12]),
        ('Control+Space', [0x3B, 0x31]),
        ('Command+F5', [CMD, 0x60]),
    ])
    def test_keycodes(self, shortcut, expected):
        assert HotkeyManager.virtual_keys(shortcut) == expected

    def test_every_key_has_keycode(self):
        keys = set(HotkeyManager.KEY_MAP.values())
        keys.update('abcdefghijklmnopqrstuvwxyz0123456789')
        assert keys <= set(HotkeyManager.MAC_KEY_VK)


class TestRegistration:
    """Tests for register/unregister."""

    def test_register_starts_listener(self, mock_listener):
        manager = HotkeyManager(MagicMock())

        assert manager.register_translation_shortcut('Command+Option+T') is True

        kwargs = mock_listener.call_args.kwargs
        assert kwargs['on_press'] == manager._on_press
        assert kwargs['on_release'] == manager._on_release
        mock_listener.return_value.start.assert_called_once()
        assert manager.is_shortcut_registered('Cmd+Alt+T')

    def test_rejected_shortcut_keeps_current(self, mock_listener):
        manager = HotkeyManager(MagicMock())
        manager.register_translation_shortcut('Command+Option+T')

        assert manager.register_translation_shortcut('Command+Hyper') is False

        mock_listener.return_value.stop.assert_not_called()
        assert mock_listener.call_count == 1
        assert manager.is_shortcut_registered('Command+Option+T')

    def test_register_replaces_previous(self, mock_listener):
        first, second = MagicMock(), MagicMock()
        mock_listener.side_effect = [first, second]
        manager = HotkeyManager(MagicMock())

        manager.register_translation_shortcut('Command+Option+T')
        manager.register_translation_shortcut('Command+Shift+Y')

        first.stop.assert_called_once()
        assert manager.is_shortcut_registered('Command+Shift+Y')
        assert not manager.is_shortcut_registered('Command+Option+T')

    def test_invalid_shortcut_returns_false(self, mock_listener):
        manager = HotkeyManager(MagicMock())

        assert manager.register_translation_shortcut('Nonsense') is False
        mock_listener.assert_not_called()
        assert not manager.is_shortcut_registered('Nonsense')

    def test_listener_failure_returns_false(self, mock_listener):
        mock_listener.return_value.start.side_effect = OSError("no access")
        manager = HotkeyManager(MagicMock())

        assert manager.register_translation_shortcut('Command+Option+T') is False

    def test_unregister_all(self, mock_listener):
        manager = HotkeyManager(MagicMock())
        manager.register_translation_shortcut('Command+Option+T')

        manager.unregister_all_shortcuts()

        mock_listener.return_value.stop.assert_called_once()
        assert not manager.is_shortcut_registered('Command+Option+T')


class TestKeyMatching:
    """Tests for matching listener key events against the shortcut."""

    @pytest.fixture
    def manager(self, mock_listener):
        manager = HotkeyManager(MagicMock())
        manager.register_translation_shortcut('Command+Option+T')
        on_hotkey = MagicMock()
        manager._hotkey._on_activate = on_hotkey
        return manager, on_hotkey

    def test_option_composed_character_fires(self, manager):
        manager, on_hotkey = manager

        manager._on_press(KeyCode.from_vk(CMD))
        manager._on_press(KeyCode.from_vk(OPTION))
        manager._on_press(KeyCode.from_char('†', vk=T_KEY))

        on_hotkey.assert_called_once()

    def test_right_command_fires(self, manager):
        manager, on_hotkey = manager

        manager._on_press(KeyCode.from_vk(CMD_R))
        manager._on_press(KeyCode.from_vk(OPTION))
        manager._on_press(KeyCode.from_char('†', vk=T_KEY))

        on_hotkey.assert_called_once()

    def test_missing_modifier_does_not_fire(self, manager):
        manager, on_hotkey = manager

        manager._on_press(KeyCode.from_vk(CMD))
        manager._on_press(KeyCode.from_char('t', vk=T_KEY))

        on_hotkey.assert_not_called()

    def test_release_resets_state(self, manager):
        manager, on_hotkey = manager
        t_key = KeyCode.from_char('†', vk=T_KEY)

        manager._on_press(KeyCode.from_vk(CMD))
        manager._on_press(KeyCode.from_vk(OPTION))
        manager._on_press(t_key)
        manager._on_release(t_key)
        manager._on_press(t_key)

        assert on_hotkey.call_count == 2

    def test_unknown_key_ignored(self, manager):
        manager, on_hotkey = manager

        manager._on_press(None)

        on_hotkey.assert_not_called()


class TestTrigger:
    """Tests for shortcut handling."""

    def test_callbacks_wrap_translation(self):
        calls = []
        manager = HotkeyManager(lambda: calls.append('translate'))
        manager.set_translation_callbacks(lambda: calls.append('start'), lambda: calls.append('end'))

        manager._run_translation()

        assert calls == ['start', 'translate', 'end']

    def test_end_called_when_translation_raises(self):
        on_end = MagicMock()
        manager = HotkeyManager(MagicMock(side_effect=RuntimeError("boom")))
        manager.set_translation_callbacks(MagicMock(), on_end)

        manager._run_translation()

        on_end.assert_called_once()

    @patch('gemini_translation.core.hotkey.threading.Thread')
    def test_debounce(self, mock_thread):
        manager = HotkeyManager(MagicMock())

        with patch('gemini_translation.core.hotkey.time.time', side_effect=[100.0, 100.1, 101.0]):
            manager._on_hotkey()
            manager._on_hotkey()
            manager._on_hotkey()

        assert mock_thread.call_count == 2
        assert mock_thread.call_args.kwargs['target'] == manager._run_translation


class TestFormatShortcut:
    """Tests for macOS symbol formatting."""

    @pytest.mark.parametrize('shortcut, expected', [
        ('Command+Option+T', '⌘⌥T'),
        ('Cmd+Shift+Y', '⌘⇧Y'),
        ('Control+Alt+K', '⌃⌥K'),
        ('Ctrl+Shift+1', '⌃⇧1'),
    ])
    def test_symbols(self, shortcut, expected):
        assert format_shortcut(shortcut) == expected
