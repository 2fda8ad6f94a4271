"""Timestamp citation extraction and source mapping.

Parses [M:SS], [H:MM:SS] and [M:SS - M:SS] from LLM output and maps each
start time back to the retrieved chunk whose time range covers it.
"""

from __future__ import annotations

import re
from collections.abc import Sequence

from tuberag.pipeline.prompts import parse_timestamp
from tuberag.pipeline.schemas import Citation
from tuberag.retrieval.schemas import RetrievalResult

_TS = r"\d{1,3}:\d{2}(?::\d{2})?"
_CITATION_RE = re.compile(rf"\[({_TS})(?:\s*-\s*({_TS}))?\]")

# Timestamps are floored to whole seconds when formatted
_TOLERANCE_SECONDS = 1.0


def _covering(seconds: float, results: Sequence[RetrievalResult]) -> RetrievalResult | None:
    for result in results:
        if result.start_time - _TOLERANCE_SECONDS <= seconds < result.end_time + _TOLERANCE_SECONDS:
            return result
    return None


def video_url(youtube_id: str, seconds: float) -> str:
    return f"https://www.youtube.com/watch?v={youtube_id}&t={int(seconds)}s"


def extract_citations(
    answer: str,
    results: Sequence[RetrievalResult],
) -> list[Citation]:
    """Map timestamps cited in an answer to the results that contain them.

    When several results cover the same moment (different videos of a
    channel), the highest ranked one wins. Timestamps that match no result
    are ignored.
    """
    citations: list[Citation] = []
    seen: set[tuple[str, float]] = set()

    for match in _CITATION_RE.finditer(answer):
        stamp = match.group(1)
        seconds = parse_timestamp(stamp)
        result = _covering(seconds, results)
        if result is None:
            continue

        key = (result.video_id, seconds)
        if key in seen:
            continue
        seen.add(key)

        video = result.video
        citations.append(Citation(
            timestamp=stamp,
            seconds=seconds,
            video_id=result.video_id,
            chunk_id=result.id,
            video_title=video.title if video else None,
            url=video_url(video.youtube_id, seconds) if video and video.youtube_id else None,
        ))

    return citations


def format_citations(citations: list[Citation]) -> str:
    """Format citations as a markdown source list."""
    if not citations:
        return ""

    lines = ["\n---\n**Sources:**"]
    for c in citations:
        parts = [f"[{c.timestamp}]"]
        if c.video_title:
            parts.append(c.video_title)
        if c.url:
            parts.append(c.url)
        lines.append(f"- {' | '.join(parts)}")
    return "\n".join(lines)
