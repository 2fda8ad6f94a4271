"""Query embedding providers — OpenAI, Ollama, HuggingFace."""

from tuberag.embeddings.base import EmbeddingProvider
from tuberag.embeddings.factory import available_providers, get_embedding_provider

__all__ = [
    "EmbeddingProvider",
    "available_providers",
    "get_embedding_provider",
]
