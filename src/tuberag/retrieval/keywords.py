"""Keyword extraction and loose keyword matching.

Matching is bidirectional substring containment so that "chart" matches
"charts" and "charting" without a stemmer.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence

from tuberag.config import DEFAULT_STOP_WORDS

_PUNCT_RE = re.compile(r"[^\w\s]")


def extract_keywords(
    text: str,
    stop_words: Iterable[str] = DEFAULT_STOP_WORDS,
    min_length: int = 3,
) -> list[str]:
    """Lowercase, strip punctuation, split, and drop short and stop words.

    Args:
        text: Query (or chunk) text.
        stop_words: Words to discard.
        min_length: Tokens shorter than this are discarded.

    Returns:
        Unique keywords in first-occurrence order.
    """
    stops = set(stop_words)
    words = _PUNCT_RE.sub(" ", text.lower()).split()

    seen: dict[str, None] = {}
    for word in words:
        if len(word) >= min_length and word not in stops:
            seen.setdefault(word, None)
    return list(seen)


def keyword_match_count(
    query_keywords: Sequence[str],
    chunk_keywords: Sequence[str],
) -> int:
    """Count query keywords that overlap any chunk keyword."""
    if not query_keywords or not chunk_keywords:
        return 0

    chunk_lower = [k.lower() for k in chunk_keywords if k]
    count = 0
    for qk in query_keywords:
        q = qk.lower()
        if q and any(q in ck or ck in q for ck in chunk_lower):
            count += 1
    return count


def matches_keywords(query_keywords: Sequence[str], chunk_keywords: Sequence[str]) -> bool:
    return keyword_match_count(query_keywords, chunk_keywords) > 0
