"""Second-stage precision filter for channel-wide results.

Runs after text has been resolved, so it can look at the actual transcript
text and the video title rather than the precomputed chunk keywords.
"""

from __future__ import annotations

import dataclasses
import logging
import re
from collections.abc import Iterable, Sequence

from tuberag.config import DEFAULT_STOP_WORDS
from tuberag.retrieval.keywords import extract_keywords
from tuberag.retrieval.schemas import RetrievalResult

logger = logging.getLogger(__name__)

PHRASE_IN_TEXT_BOOST = 0.5
WORD_COVERAGE_WEIGHT = 0.3
ADJACENT_PAIR_BOOST = 0.4
PHRASE_IN_TITLE_BOOST = 0.3
TITLE_COVERAGE_WEIGHT = 0.2

_NON_WORD_RE = re.compile(r"[^\w\s]")


def _normalize(text: str) -> str:
    return " ".join(_NON_WORD_RE.sub(" ", text.lower()).split())


def content_score(
    result: RetrievalResult,
    phrase: str,
    keywords: Sequence[str],
) -> float:
    """Lexical relevance of a resolved chunk to the query.

    +0.5 for the whole query phrase in the text, +0.3 × share of query
    keywords in the text, +0.4 when two adjacent query keywords appear
    together, +0.3 for the phrase in the video title, +0.2 × share of
    keywords in the title.
    """
    text = _normalize(result.text)
    score = 0.0

    if phrase and phrase in text:
        score += PHRASE_IN_TEXT_BOOST

    if keywords:
        hits = sum(1 for k in keywords if k in text)
        score += (hits / len(keywords)) * WORD_COVERAGE_WEIGHT

        pairs = [f"{a} {b}" for a, b in zip(keywords, keywords[1:])]
        if any(p in text for p in pairs):
            score += ADJACENT_PAIR_BOOST

    if result.video is not None and result.video.title:
        title = _normalize(result.video.title)
        if phrase and phrase in title:
            score += PHRASE_IN_TITLE_BOOST
        if keywords:
            title_hits = sum(1 for k in keywords if k in title)
            score += (title_hits / len(keywords)) * TITLE_COVERAGE_WEIGHT

    return score


def filter_chunks_by_content(
    results: Sequence[RetrievalResult],
    query: str,
    similarity_floor: float = 0.75,
    stop_words: Iterable[str] = DEFAULT_STOP_WORDS,
    min_keyword_length: int = 3,
) -> list[RetrievalResult]:
    """Discard lexically unrelated chunks and rank the rest.

    A chunk is discarded when it has no lexical overlap with the query and
    its similarity is below ``similarity_floor``. Survivors carry their
    ``content_score`` and are sorted by ``final_score`` (stable).
    """
    phrase = _normalize(query)
    keywords = extract_keywords(query, stop_words=stop_words, min_length=min_keyword_length)

    kept: list[RetrievalResult] = []
    for result in results:
        cs = content_score(result, phrase, keywords)
        if cs <= 0.0 and result.similarity < similarity_floor:
            continue
        kept.append(dataclasses.replace(result, content_score=cs))

    kept.sort(key=lambda r: r.final_score, reverse=True)

    logger.info(
        "Content filter kept %d of %d chunks (floor=%.2f)",
        len(kept),
        len(results),
        similarity_floor,
    )
    return kept
