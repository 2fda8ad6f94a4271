"""Cosine similarity between a query vector and chunk embeddings."""

from __future__ import annotations

import logging
from collections.abc import Sequence

import numpy as np

from tuberag.store.schemas import Chunk

logger = logging.getLogger(__name__)


def cosine_similarity(
    query: Sequence[float] | np.ndarray,
    vector: Sequence[float] | np.ndarray | None,
) -> float:
    """Return ``(q·v) / (|q| |v|)``.

    Missing vectors, dimension mismatches and zero-norm vectors score 0.0
    instead of raising or producing NaN.
    """
    if vector is None or len(vector) == 0 or len(query) != len(vector):
        return 0.0

    q = np.asarray(query, dtype=np.float64)
    v = np.asarray(vector, dtype=np.float64)
    denom = float(np.linalg.norm(q) * np.linalg.norm(v))
    if denom == 0.0 or not np.isfinite(denom):
        return 0.0

    sim = float(np.dot(q, v) / denom)
    return sim if np.isfinite(sim) else 0.0


def score_chunks(query: Sequence[float], chunks: Sequence[Chunk]) -> list[float]:
    """Similarity of every chunk to ``query``, in input order."""
    q = np.asarray(query, dtype=np.float64)
    scores = [cosine_similarity(q, c.embedding) for c in chunks]

    missing = sum(1 for c in chunks if c.embedding is None)
    if missing:
        logger.debug("%d of %d chunks have no embedding (scored 0)", missing, len(chunks))
    return scores
