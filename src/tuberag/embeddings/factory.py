"""Embedding provider factory."""

from __future__ import annotations

from tuberag.embeddings.base import EmbeddingProvider
from tuberag.registry import Registry

_PROVIDERS: Registry[EmbeddingProvider] = Registry("embedding provider", [
    ("openai", "tuberag.embeddings.openai_provider", "OpenAIEmbeddingProvider"),
    ("ollama", "tuberag.embeddings.ollama_provider", "OllamaEmbeddingProvider"),
    ("huggingface", "tuberag.embeddings.huggingface_provider", "HuggingFaceEmbeddingProvider"),
])


def get_embedding_provider(provider: str = "openai", **kwargs) -> EmbeddingProvider:
    """Get an embedding provider by name.

    Args:
        provider: One of ``openai``, ``ollama``, ``huggingface``. Must match
            the model the stored chunk embeddings were made with.
        **kwargs: Passed to the provider constructor.
    """
    return _PROVIDERS.create(provider, **kwargs)


def available_providers() -> list[str]:
    return _PROVIDERS.names()


def clear_cache() -> None:
    """Forget cached provider instances (for testing)."""
    _PROVIDERS.clear()
