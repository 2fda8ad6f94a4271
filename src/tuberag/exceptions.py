"""Error taxonomy for the retrieval core.

Callers must be able to tell "the search ran and found nothing" (an empty
list) apart from "the search could not run" (an exception from here).
"""

from __future__ import annotations


class TubeRAGError(Exception):
    """Base class for all tube-rag errors."""


class InvalidQueryError(TubeRAGError, ValueError):
    """Missing or malformed search input. Raised before any store access."""


class StoreUnavailableError(TubeRAGError):
    """A chunk store or blob store could not be read."""

    def __init__(self, message: str, backend: str | None = None):
        super().__init__(message)
        self.backend = backend


class EmbeddingError(TubeRAGError):
    """The embedding provider failed to embed a query."""


class LLMError(TubeRAGError):
    """The LLM provider failed to generate an answer."""
