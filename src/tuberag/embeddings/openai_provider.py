"""OpenAI embedding provider.

Defaults to ``text-embedding-ada-002``, the model the transcript chunks are
embedded with at ingestion. Requires the ``openai`` extra and an API key via
``OPENAI_API_KEY``.
"""

from __future__ import annotations

import logging
from typing import Any

from tuberag.embeddings.base import EmbeddingProvider
from tuberag.exceptions import EmbeddingError

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "text-embedding-ada-002"

_DIMENSION_MAP = {
    "text-embedding-ada-002": 1536,
    "text-embedding-3-small": 1536,
    "text-embedding-3-large": 3072,
}


class OpenAIEmbeddingProvider(EmbeddingProvider):
    """Embed queries via the OpenAI Embeddings API."""

    def __init__(
        self,
        model: str = DEFAULT_MODEL,
        api_key: str | None = None,
        dimension: int | None = None,
        client: Any | None = None,
    ):
        if client is None:
            try:
                import openai
            except ImportError as exc:
                raise ImportError(
                    "openai package required: pip install tube-rag[openai]"
                ) from exc
            client = openai.OpenAI(api_key=api_key)

        self.model = model
        self._dimension = dimension or _DIMENSION_MAP.get(model, 1536)
        self._client: Any = client

    def embed_query(self, query: str) -> list[float]:
        try:
            resp = self._client.embeddings.create(model=self.model, input=query)
        except Exception as exc:
            raise EmbeddingError(f"OpenAI embedding failed ({self.model}): {exc}") from exc
        return list(resp.data[0].embedding)

    @property
    def dimension(self) -> int:
        return self._dimension
