"""HuggingFace/sentence-transformers embedding provider.

Runs locally via ``sentence-transformers``. Requires the ``huggingface`` extra.
"""

from __future__ import annotations

import logging
from typing import Any

from tuberag.embeddings.base import EmbeddingProvider
from tuberag.exceptions import EmbeddingError

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "all-MiniLM-L6-v2"


class HuggingFaceEmbeddingProvider(EmbeddingProvider):
    """Embed queries locally using sentence-transformers."""

    def __init__(self, model: str = DEFAULT_MODEL, device: str | None = None):
        try:
            from sentence_transformers import SentenceTransformer
        except ImportError as exc:
            raise ImportError(
                "sentence-transformers required: pip install tube-rag[huggingface]"
            ) from exc

        self.model = model
        self._model: Any = SentenceTransformer(model, device=device)
        self._dim: int = self._model.get_sentence_embedding_dimension()
        logger.info("Loaded HF model %s (dim=%d)", model, self._dim)

    def embed_query(self, query: str) -> list[float]:
        try:
            embedding = self._model.encode([query], show_progress_bar=False)
        except Exception as exc:
            raise EmbeddingError(f"HuggingFace embedding failed ({self.model}): {exc}") from exc
        return embedding[0].tolist()

    @property
    def dimension(self) -> int:
        return self._dim
