"""Ollama embedding provider — local-first, no API keys needed.

Uses the Ollama REST API (http://localhost:11434). Only useful when the
chunk embeddings were produced by the same Ollama model.
"""

from __future__ import annotations

import logging

import httpx

from tuberag.embeddings.base import EmbeddingProvider
from tuberag.exceptions import EmbeddingError

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "nomic-embed-text"
DEFAULT_BASE_URL = "http://localhost:11434"
DEFAULT_DIM = 768


class OllamaEmbeddingProvider(EmbeddingProvider):
    """Embed queries via a local Ollama server."""

    def __init__(
        self,
        model: str = DEFAULT_MODEL,
        base_url: str = DEFAULT_BASE_URL,
        dimension: int = DEFAULT_DIM,
        timeout: float = 30.0,
        client: httpx.Client | None = None,
    ):
        self.model = model
        self.base_url = base_url.rstrip("/")
        self._dimension = dimension
        self._client = (
            client if client is not None else httpx.Client(base_url=self.base_url, timeout=timeout)
        )

    def embed_query(self, query: str) -> list[float]:
        try:
            resp = self._client.post(
                "/api/embeddings",
                json={"model": self.model, "prompt": query},
            )
            resp.raise_for_status()
            return resp.json()["embedding"]
        except (httpx.HTTPError, KeyError) as exc:
            raise EmbeddingError(f"Ollama embedding failed ({self.model}): {exc}") from exc

    @property
    def dimension(self) -> int:
        return self._dimension
