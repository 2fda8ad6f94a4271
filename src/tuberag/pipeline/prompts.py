"""Prompt templates and context formatting for transcript chat."""

from __future__ import annotations

from collections.abc import Sequence

from tuberag.retrieval.schemas import RetrievalResult

# ---------------------------------------------------------------------------
# System prompts
# ---------------------------------------------------------------------------

VIDEO_SYSTEM_PROMPT = """\
You are an assistant answering questions about a single YouTube video using \
ONLY the transcript excerpts provided. If the excerpts do not contain the \
answer, say so.

Citation rules:
1. Reference specific moments with timestamps in the form [M:SS] or [H:MM:SS].
2. Use the exact timestamps shown on the excerpts you draw from.
3. Do not invent timestamps that are not in the excerpts.
"""

CHANNEL_SYSTEM_PROMPT = """\
You are an assistant with knowledge of every video on this YouTube channel. \
Answer using ONLY the transcript excerpts provided, which are grouped by video.

Citation rules:
1. Reference specific moments with timestamps in the form [M:SS] or [H:MM:SS].
2. Use the exact timestamps shown on the excerpts you draw from.
3. Name the video each piece of information comes from.
4. If the excerpts do not contain the answer, say so.
"""

QUERY_TEMPLATE = """\
Transcript excerpts:
{context}

Question: {question}
"""

NO_RESULTS_ANSWER = "I couldn't find anything relevant to that question in the transcript."


def format_timestamp(seconds: float) -> str:
    """``75`` → ``1:15``; ``3725`` → ``1:02:05``."""
    total = max(0, int(seconds))
    hours, rem = divmod(total, 3600)
    mins, secs = divmod(rem, 60)
    if hours:
        return f"{hours}:{mins:02d}:{secs:02d}"
    return f"{mins}:{secs:02d}"


def parse_timestamp(value: str) -> float:
    """``1:15`` → ``75.0``; ``1:02:05`` → ``3725.0``."""
    seconds = 0
    for part in value.split(":"):
        seconds = seconds * 60 + int(part)
    return float(seconds)


def format_excerpt(result: RetrievalResult) -> str:
    start = format_timestamp(result.start_time)
    end = format_timestamp(result.end_time)
    return f"[{start} - {end}]\n{result.text.strip()}"


def format_video_context(results: Sequence[RetrievalResult]) -> str:
    """Excerpts of one video, in transcript order."""
    ordered = sorted(results, key=lambda r: r.start_time)
    return "\n\n".join(format_excerpt(r) for r in ordered)


def format_channel_context(results: Sequence[RetrievalResult]) -> str:
    """Excerpts grouped under a ``**Video: <title>**`` header per video.

    Videos appear in order of their first (best ranked) result.
    """
    groups: dict[str, list[RetrievalResult]] = {}
    titles: dict[str, str] = {}
    for r in results:
        groups.setdefault(r.video_id, []).append(r)
        titles.setdefault(r.video_id, r.video.title if r.video else r.video_id)

    sections = [
        f"**Video: {titles[vid]}**\n\n{format_video_context(group)}"
        for vid, group in groups.items()
    ]
    return "\n\n---\n\n".join(sections)


def build_prompt(question: str, context: str) -> str:
    return QUERY_TEMPLATE.format(context=context, question=question)
