"""Abstract base class for embedding providers."""

from __future__ import annotations

from abc import ABC, abstractmethod


class EmbeddingProvider(ABC):
    """Interface for turning a search query into a vector.

    Chunk embeddings are computed at ingestion time and arrive precomputed
    from the chunk store, so only query embedding is needed here. The vector
    must come from the same model that embedded the chunks.
    """

    model: str = ""

    @abstractmethod
    def embed_query(self, query: str) -> list[float]:
        """Embed a single query string.

        Args:
            query: The search query.

        Returns:
            Embedding vector of length ``dimension``.

        Raises:
            EmbeddingError: The provider could not produce a vector.
        """

    @property
    @abstractmethod
    def dimension(self) -> int:
        """Return the embedding dimensionality."""

    @classmethod
    def provider_name(cls) -> str:
        """Return human-readable provider name."""
        return cls.__name__
