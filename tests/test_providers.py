"""Tests for the provider registry, connect() and the cloud providers."""
from unittest.mock import MagicMock, patch

import pytest

from gauge.errors import (
    ProviderAuthError,
    ProviderError,
    ProviderModelError,
    ProviderQuotaError,
    ProviderUnavailableError,
)
from gauge.providers import (
    PROVIDERS,
    UnavailableProvider,
    connect,
    get_provider,
    get_provider_names,
)
from gauge.providers.base import AIProvider


class TestRegistry:
    def test_builtin_names(self):
        assert {"gemini", "anthropic", "ollama"} <= set(get_provider_names())

    def test_unknown_provider_raises(self):
        with pytest.raises(ProviderUnavailableError, match="Unknown provider 'nope'"):
            get_provider("nope")

    def test_default_comes_from_config(self, monkeypatch):
        monkeypatch.setenv("GAUGE_PROVIDER", "anthropic")
        assert get_provider().name == "anthropic"


class TestUnavailableProvider:
    def test_shape(self):
        provider = UnavailableProvider("gemini", "no key")
        assert isinstance(provider, AIProvider)
        assert provider.is_available() is False
        assert provider.model == ""
        assert "no key" in repr(provider)

    def test_chat_raises(self):
        with pytest.raises(ProviderUnavailableError, match="no key"):
            UnavailableProvider("gemini", "no key").chat("sys", "user")


class TestConnect:
    def test_unknown_name(self):
        provider = connect("nope")
        assert isinstance(provider, UnavailableProvider)
        assert "Unknown provider 'nope'" in provider.reason

    def test_missing_key(self):
        provider = connect("gemini")
        assert isinstance(provider, UnavailableProvider)
        assert provider.reason == "Provider 'gemini' requires GOOGLE_API_KEY to be set."

    def test_missing_anthropic_key_by_default_name(self, monkeypatch):
        monkeypatch.setenv("GAUGE_PROVIDER", "anthropic")
        provider = connect()
        assert isinstance(provider, UnavailableProvider)
        assert provider.name == "anthropic"
        assert "ANTHROPIC_API_KEY" in provider.reason

    def test_unreachable_ollama(self):
        from gauge.providers.ollama_provider import OllamaProvider

        with patch.object(OllamaProvider, "is_available", return_value=False):
            provider = connect("ollama")
        assert isinstance(provider, UnavailableProvider)
        assert provider.reason == "Provider 'ollama' is not reachable."

    def test_constructor_failure_is_captured(self, monkeypatch):
        class Broken:
            def __init__(self):
                raise RuntimeError("cannot build")

        get_provider_names()
        monkeypatch.setitem(PROVIDERS, "broken", Broken)
        provider = connect("broken")
        assert isinstance(provider, UnavailableProvider)
        assert provider.reason == "cannot build"

    def test_available_provider(self, monkeypatch):
        monkeypatch.setenv("GOOGLE_API_KEY", "g-123")
        provider = connect("gemini")
        assert not isinstance(provider, UnavailableProvider)
        assert provider.name == "gemini"
        assert provider.model == "gemini-2.0-flash"


class TestGeminiProvider:
    def _provider(self, monkeypatch):
        from gauge.providers.gemini_provider import GeminiProvider

        monkeypatch.setenv("GOOGLE_API_KEY", "g-123")
        provider = GeminiProvider()
        provider._client = MagicMock()
        return provider

    def test_chat_returns_text(self, monkeypatch):
        provider = self._provider(monkeypatch)
        provider._client.models.generate_content.return_value = MagicMock(text='{"rating": 7}')
        assert provider.chat("sys", "code", max_tokens=50) == '{"rating": 7}'
        kwargs = provider._client.models.generate_content.call_args.kwargs
        assert kwargs["model"] == "gemini-2.0-flash"
        assert kwargs["contents"] == "code"
        assert kwargs["config"].max_output_tokens == 50
        assert kwargs["config"].system_instruction == "sys"

    def test_empty_text(self, monkeypatch):
        provider = self._provider(monkeypatch)
        provider._client.models.generate_content.return_value = MagicMock(text=None)
        assert provider.chat("sys", "code") == ""

    @pytest.mark.parametrize(
        "message, error",
        [
            ("429 RESOURCE_EXHAUSTED", ProviderQuotaError),
            ("400 API key not valid. Please pass a valid API key.", ProviderAuthError),
            ("models/x is not found", ProviderModelError),
            ("something else", ProviderError),
        ],
    )
    def test_error_mapping(self, monkeypatch, message, error):
        provider = self._provider(monkeypatch)
        provider._client.models.generate_content.side_effect = RuntimeError(message)
        with pytest.raises(error):
            provider.chat("sys", "code")


class TestAnthropicProvider:
    def test_chat_joins_text_blocks(self, monkeypatch):
        from gauge.providers.anthropic_provider import AnthropicProvider

        monkeypatch.setenv("ANTHROPIC_API_KEY", "a-1")
        provider = AnthropicProvider()
        message = MagicMock()
        message.content = [
            MagicMock(type="text", text='{"rating":'),
            MagicMock(type="tool_use", text="ignored"),
            MagicMock(type="text", text=" 4}"),
        ]
        with patch("anthropic.Anthropic") as client_cls:
            client_cls.return_value.messages.create.return_value = message
            assert provider.chat("sys", "code", max_tokens=77) == '{"rating": 4}'
            kwargs = client_cls.return_value.messages.create.call_args.kwargs
        assert kwargs["max_tokens"] == 77
        assert kwargs["system"] == "sys"
        assert kwargs["messages"] == [{"role": "user", "content": "code"}]
