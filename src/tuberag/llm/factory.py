"""LLM provider factory."""

from __future__ import annotations

from tuberag.llm.base import LLMProvider
from tuberag.registry import Registry

_PROVIDERS: Registry[LLMProvider] = Registry("LLM provider", [
    ("openai", "tuberag.llm.openai_provider", "OpenAILLMProvider"),
    ("anthropic", "tuberag.llm.anthropic_provider", "AnthropicLLMProvider"),
    ("ollama", "tuberag.llm.ollama_provider", "OllamaLLMProvider"),
])


def get_llm_provider(provider: str = "openai", **kwargs) -> LLMProvider:
    """Get an LLM provider by name (``openai``, ``anthropic``, ``ollama``)."""
    return _PROVIDERS.create(provider, **kwargs)


def available_providers() -> list[str]:
    return _PROVIDERS.names()


def clear_cache() -> None:
    _PROVIDERS.clear()
