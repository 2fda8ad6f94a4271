"""Hybrid merge of semantic and keyword candidates.

1. Rank every chunk by similarity and keep the top ``top_k`` (semantic set).
2. Every keyword-matching chunk either boosts its semantic entry by
   ``hybrid_boost`` or joins at ``keyword_base_score``.
3. Re-rank and truncate to ``top_k``.

All sorts are stable, so equal scores keep discovery order and repeated
calls return the same sequence.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from tuberag.retrieval.schemas import ScoredChunk
from tuberag.store.schemas import Chunk

logger = logging.getLogger(__name__)

DEFAULT_HYBRID_BOOST = 0.3
DEFAULT_KEYWORD_BASE_SCORE = 0.5


def merge_hybrid(
    chunks: Sequence[Chunk],
    similarities: Sequence[float],
    keyword_scores: Sequence[int],
    top_k: int,
    hybrid_boost: float = DEFAULT_HYBRID_BOOST,
    keyword_base_score: float = DEFAULT_KEYWORD_BASE_SCORE,
) -> list[ScoredChunk]:
    """Merge semantic and keyword results into one ranked list.

    Args:
        chunks: All chunks of one video, in ``chunk_index`` order.
        similarities: Cosine similarity per chunk (same order).
        keyword_scores: Keyword match count per chunk (same order).
        top_k: Maximum results.
        hybrid_boost: Added to a semantic candidate that also matches keywords.
        keyword_base_score: Score given to keyword-only matches.

    Returns:
        At most ``top_k`` ``ScoredChunk`` with unique ids, best first.
    """
    if top_k <= 0 or not chunks:
        return []

    scored = [
        ScoredChunk(chunk=c, similarity=s, keyword_score=k)
        for c, s, k in zip(chunks, similarities, keyword_scores, strict=True)
    ]

    semantic = sorted(scored, key=lambda sc: sc.similarity, reverse=True)[:top_k]

    merged: dict[str, ScoredChunk] = {}
    for sc in semantic:
        if sc.id in merged:
            continue
        sc.score = sc.similarity
        merged[sc.id] = sc

    boosted = added = 0
    for sc in scored:
        if sc.keyword_score <= 0:
            continue
        existing = merged.get(sc.id)
        if existing is not None:
            if existing is sc:
                existing.score += hybrid_boost
                boosted += 1
            continue
        sc.score = keyword_base_score
        merged[sc.id] = sc
        added += 1

    ranked = sorted(merged.values(), key=lambda sc: sc.score, reverse=True)[:top_k]

    logger.debug(
        "Hybrid merge: %d chunks, %d semantic, %d boosted, %d keyword-only, %d kept",
        len(chunks),
        len(semantic),
        boosted,
        added,
        len(ranked),
    )
    return ranked
