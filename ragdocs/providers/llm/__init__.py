"""LLM provider adapters.

Three concrete implementations of ILLMProvider (ragdocs/interfaces/llm_provider.py):
    - AnthropicLLMProvider - Claude via the Messages API
    - OpenAILLMProvider    - gpt-4o-mini, or any OpenAI-compatible endpoint
    - OllamaLLMProvider    - local models via an Ollama server

main.py picks one from LLM_PROVIDER (or the first configured key) and
injects it into the AnswerGenerator.
"""

from ragdocs.providers.llm.anthropic_provider import AnthropicLLMProvider
from ragdocs.providers.llm.ollama_provider import OllamaLLMProvider
from ragdocs.providers.llm.openai_provider import OpenAILLMProvider

__all__ = ["OpenAILLMProvider", "AnthropicLLMProvider", "OllamaLLMProvider"]
