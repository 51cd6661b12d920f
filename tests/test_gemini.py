"""
Unit tests for gemini.py - Gemini API client.
"""
import pytest
from unittest.mock import MagicMock, patch

from gemini_translation.core import gemini
from gemini_translation.core.gemini import GeminiTranslator, TranslationError
from gemini_translation.core.language import Language


@pytest.fixture
def mock_genai():
    with patch('gemini_translation.core.gemini.genai') as mock:
        model = MagicMock()
        response = MagicMock()
        response.text = "  翻訳されたテキスト \n"
        model.generate_content.return_value = response
        mock.GenerativeModel.return_value = model
        yield mock


class TestInitialization:
    """Tests for translator initialization."""

    def test_not_initialized_without_key(self):
        assert not GeminiTranslator().is_initialized()

    def test_initialize_configures_sdk(self, mock_genai):
        translator = GeminiTranslator('test-key')

        assert translator.is_initialized()
        mock_genai.configure.assert_called_with(api_key='test-key')
        mock_genai.GenerativeModel.assert_called_with('gemini-2.5-flash')

    def test_translate_uninitialized_raises(self):
        with pytest.raises(TranslationError) as exc:
            GeminiTranslator().translate("Hello", Language.JAPANESE)

        assert "not initialized" in str(exc.value)


class TestTranslate:
    """Tests for translate()."""

    def test_translate_returns_stripped_text(self, mock_genai):
        translator = GeminiTranslator('test-key')

        assert translator.translate("Translated text", Language.JAPANESE) == "翻訳されたテキスト"

    def test_prompt_names_target_and_source(self, mock_genai):
        translator = GeminiTranslator('test-key')
        translator.translate("Hello world", Language.JAPANESE)

        prompt = mock_genai.GenerativeModel.return_value.generate_content.call_args[0][0]
        assert "Translate the following text to Japanese." in prompt
        assert "Output only the translated text" in prompt
        assert prompt.endswith("SOURCE:\nHello world")

    def test_prompt_english_target(self):
        prompt = GeminiTranslator.build_prompt("こんにちは", Language.ENGLISH)
        assert "to English." in prompt

    @pytest.mark.parametrize('message, expected', [
        ("API key not valid. Please pass a valid API key.", "Invalid API key"),
        ("400 API_KEY_INVALID", "Invalid API key"),
        ("429 Resource has been exhausted (e.g. check quota).", "API quota exceeded"),
        ("network unreachable", "Network error"),
        ("500 Internal error", "Translation failed: 500 Internal error"),
    ])
    def test_error_mapping(self, mock_genai, message, expected):
        """SDK errors are turned into user-facing messages."""
        translator = GeminiTranslator('test-key')
        mock_genai.GenerativeModel.return_value.generate_content.side_effect = Exception(message)

        with pytest.raises(TranslationError) as exc:
            translator.translate("Hello", Language.JAPANESE)

        assert expected in str(exc.value)

    def test_empty_error_message(self, mock_genai):
        translator = GeminiTranslator('test-key')
        mock_genai.GenerativeModel.return_value.generate_content.side_effect = Exception()

        with pytest.raises(TranslationError) as exc:
            translator.translate("Hello", Language.JAPANESE)

        assert str(exc.value) == "Translation failed: Unknown error"


class TestConnection:
    """Tests for test_connection()."""

    def test_connection_success_restores_key(self, mock_genai):
        translator = GeminiTranslator('current-key')

        assert translator.test_connection('candidate-key') is True
        configured = [c.kwargs['api_key'] for c in mock_genai.configure.call_args_list]
        assert configured[-2:] == ['candidate-key', 'current-key']

    def test_connection_failure_raises(self, mock_genai):
        mock_genai.GenerativeModel.return_value.generate_content.side_effect = Exception("API key not valid")

        with pytest.raises(TranslationError) as exc:
            GeminiTranslator().test_connection('bad-key')

        assert "Invalid API key" in str(exc.value)


class TestSingleton:
    """Tests for the shared translator."""

    def test_get_translator_is_shared(self):
        with patch.object(gemini, '_translator_instance', None):
            assert gemini.get_translator() is gemini.get_translator()

    def test_initialize_translator(self, mock_genai):
        with patch.object(gemini, '_translator_instance', None):
            gemini.initialize_translator('shared-key')
            assert gemini.get_translator().is_initialized()
