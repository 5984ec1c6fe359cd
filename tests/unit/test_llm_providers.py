"""Unit tests for LLM provider adapters: OpenAI, Anthropic, Ollama."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock, patch

import anthropic
import openai
import pytest

from ragdocs.config.settings import Settings
from ragdocs.utils.errors import ConfigurationError, GenerationError, ProviderError


def _settings(**overrides) -> Settings:
    defaults = {
        "_env_file": None,
        "openai_api_key": "sk-test",
        "openai_base_url": "",
        "openai_text_model": "",
        "anthropic_api_key": "test-anthropic",
        "anthropic_model": "",
        "ollama_base_url": "http://localhost:11434",
        "ollama_text_model": "llama3.1",
    }
    defaults.update(overrides)
    return Settings(**defaults)


def _chat_response(content: str | None) -> MagicMock:
    response = MagicMock()
    response.choices = [MagicMock(message=MagicMock(content=content))]
    response.usage = MagicMock(total_tokens=42)
    return response


# ======================================================================
# OpenAI LLM Provider
# ======================================================================


class TestOpenAILLMProvider:
    _CLIENT = "ragdocs.providers.llm.openai_provider.openai.AsyncOpenAI"

    def test_provider_label(self) -> None:
        from ragdocs.providers.llm.openai_provider import OpenAILLMProvider

        assert OpenAILLMProvider(_settings()).get_provider_name() == "openai"
        compatible = OpenAILLMProvider(_settings(openai_base_url="https://api.groq.com/openai/v1"))
        assert compatible.get_provider_name() == "openai-compatible"

    def test_is_available(self) -> None:
        from ragdocs.providers.llm.openai_provider import OpenAILLMProvider

        assert OpenAILLMProvider(_settings()).is_available() is True
        keyless = OpenAILLMProvider(
            _settings(openai_api_key="", openai_base_url="http://localhost:8001/v1")
        )
        assert keyless.is_available() is True

    def test_missing_key_and_endpoint_raises_configuration_error(self) -> None:
        from ragdocs.providers.llm.openai_provider import OpenAILLMProvider

        with pytest.raises(ConfigurationError) as exc_info:
            OpenAILLMProvider(_settings(openai_api_key="", openai_base_url=""))
        assert exc_info.value.provider_name == "openai"

    def test_keyless_endpoint_gets_placeholder_key(self) -> None:
        from ragdocs.providers.llm.openai_provider import OpenAILLMProvider

        with patch(self._CLIENT) as mock_cls:
            OpenAILLMProvider(_settings(openai_api_key="", openai_base_url="http://localhost:8001/v1"))
        assert mock_cls.call_args.kwargs["api_key"]
        assert mock_cls.call_args.kwargs["base_url"] == "http://localhost:8001/v1"

    @pytest.mark.asyncio
    async def test_complete_success(self) -> None:
        from ragdocs.providers.llm.openai_provider import OpenAILLMProvider

        mock_client = AsyncMock()
        mock_client.chat.completions.create = AsyncMock(return_value=_chat_response("Paris."))

        with patch(self._CLIENT, return_value=mock_client):
            provider = OpenAILLMProvider(_settings())
            result = await provider.complete("system", "user", temperature=0.1, max_tokens=64)

        assert result == "Paris."
        kwargs = mock_client.chat.completions.create.call_args.kwargs
        assert kwargs["model"] == "gpt-4o-mini"
        assert kwargs["max_tokens"] == 64
        assert kwargs["temperature"] == 0.1
        assert kwargs["messages"] == [
            {"role": "system", "content": "system"},
            {"role": "user", "content": "user"},
        ]

    @pytest.mark.asyncio
    async def test_complete_empty_content(self) -> None:
        from ragdocs.providers.llm.openai_provider import OpenAILLMProvider

        mock_client = AsyncMock()
        mock_client.chat.completions.create = AsyncMock(return_value=_chat_response(None))

        with patch(self._CLIENT, return_value=mock_client):
            provider = OpenAILLMProvider(_settings())
            with pytest.raises(GenerationError):
                await provider.complete("system", "user")

    @pytest.mark.asyncio
    async def test_complete_api_error(self) -> None:
        from ragdocs.providers.llm.openai_provider import OpenAILLMProvider

        mock_client = AsyncMock()
        mock_client.chat.completions.create = AsyncMock(
            side_effect=openai.APIError(message="Rate limit exceeded", request=MagicMock(), body=None)
        )

        with patch(self._CLIENT, return_value=mock_client):
            provider = OpenAILLMProvider(_settings())
            with pytest.raises(ProviderError) as exc_info:
                await provider.complete("system", "user")

        assert isinstance(exc_info.value, GenerationError)
        assert exc_info.value.provider_name == "openai"

# ======================================================================
# Anthropic LLM Provider
# ======================================================================


class TestAnthropicLLMProvider:
    _CLIENT = "ragdocs.providers.llm.anthropic_provider.anthropic.AsyncAnthropic"

    def test_name_and_availability(self) -> None:
        from ragdocs.providers.llm.anthropic_provider import AnthropicLLMProvider

        provider = AnthropicLLMProvider(_settings())
        assert provider.get_provider_name() == "anthropic"
        assert provider.is_available() is True
        assert AnthropicLLMProvider(_settings(anthropic_api_key="")).is_available() is False

    @pytest.mark.asyncio
    async def test_complete_joins_text_blocks(self) -> None:
        from ragdocs.providers.llm.anthropic_provider import AnthropicLLMProvider

        response = MagicMock()
        response.content = [
            MagicMock(type="text", text="Paris is"),
            MagicMock(type="tool_use", text="ignored"),
            MagicMock(type="text", text="the capital."),
        ]
        response.usage = MagicMock(input_tokens=10, output_tokens=5)
        mock_client = AsyncMock()
        mock_client.messages.create = AsyncMock(return_value=response)

        with patch(self._CLIENT, return_value=mock_client):
            provider = AnthropicLLMProvider(_settings())
            result = await provider.complete("be brief", "capital?", max_tokens=100)

        assert result == "Paris is\nthe capital."
        kwargs = mock_client.messages.create.call_args.kwargs
        assert kwargs["system"] == "be brief"
        assert kwargs["messages"] == [{"role": "user", "content": "capital?"}]
        assert kwargs["max_tokens"] == 100

    @pytest.mark.asyncio
    async def test_complete_without_text(self) -> None:
        from ragdocs.providers.llm.anthropic_provider import AnthropicLLMProvider

        response = MagicMock()
        response.content = []
        mock_client = AsyncMock()
        mock_client.messages.create = AsyncMock(return_value=response)

        with patch(self._CLIENT, return_value=mock_client):
            with pytest.raises(GenerationError):
                await AnthropicLLMProvider(_settings()).complete("s", "u")

    @pytest.mark.asyncio
    async def test_complete_api_error(self) -> None:
        from ragdocs.providers.llm.anthropic_provider import AnthropicLLMProvider

        mock_client = AsyncMock()
        mock_client.messages.create = AsyncMock(
            side_effect=anthropic.APIError(message="overloaded", request=MagicMock(), body=None)
        )

        with patch(self._CLIENT, return_value=mock_client):
            with pytest.raises(GenerationError) as exc_info:
                await AnthropicLLMProvider(_settings()).complete("s", "u")

        assert "overloaded" in exc_info.value.message


# ======================================================================
# Ollama LLM Provider
# ======================================================================


class TestOllamaLLMProvider:
    _CLIENT = "ragdocs.providers.llm.ollama_provider.openai.AsyncOpenAI"

    def test_name(self) -> None:
        from ragdocs.providers.llm.ollama_provider import OllamaLLMProvider

        assert OllamaLLMProvider(_settings()).get_provider_name() == "ollama"

    @pytest.mark.asyncio
    async def test_complete_uses_configured_model(self) -> None:
        from ragdocs.providers.llm.ollama_provider import OllamaLLMProvider

        mock_client = AsyncMock()
        mock_client.chat.completions.create = AsyncMock(return_value=_chat_response("Local answer."))

        with patch(self._CLIENT, return_value=mock_client) as mock_cls:
            provider = OllamaLLMProvider(_settings(ollama_text_model="mistral"))
            result = await provider.complete("system", "user")

        assert result == "Local answer."
        assert mock_cls.call_args.kwargs["base_url"] == "http://localhost:11434/v1"
        assert mock_client.chat.completions.create.call_args.kwargs["model"] == "mistral"

    @pytest.mark.asyncio
    async def test_complete_api_error(self) -> None:
        from ragdocs.providers.llm.ollama_provider import OllamaLLMProvider

        mock_client = AsyncMock()
        mock_client.chat.completions.create = AsyncMock(
            side_effect=openai.APIError(message="connection refused", request=MagicMock(), body=None)
        )

        with patch(self._CLIENT, return_value=mock_client):
            with pytest.raises(GenerationError):
                await OllamaLLMProvider(_settings()).complete("system", "user")


# ======================================================================
# Interface contract
# ======================================================================


class TestLLMProviderContract:
    def test_abstract_surface(self) -> None:
        from ragdocs.interfaces.llm_provider import ILLMProvider

        assert ILLMProvider.__abstractmethods__ == frozenset(
            {"complete", "get_provider_name", "is_available"}
        )

    @pytest.mark.parametrize(
        "module_path, class_name",
        [
            ("ragdocs.providers.llm.openai_provider", "OpenAILLMProvider"),
            ("ragdocs.providers.llm.anthropic_provider", "AnthropicLLMProvider"),
            ("ragdocs.providers.llm.ollama_provider", "OllamaLLMProvider"),
        ],
    )
    def test_providers_expose_only_the_contract(self, module_path: str, class_name: str) -> None:
        import importlib

        provider_cls = getattr(importlib.import_module(module_path), class_name)
        public = {name for name in vars(provider_cls) if not name.startswith("_")}
        assert public == {"complete", "get_provider_name", "is_available"}
