"""Data models for answer assembly."""

from __future__ import annotations

from dataclasses import dataclass, field

from tuberag.retrieval.schemas import RetrievalResult


@dataclass
class Citation:
    """A timestamp reference in a generated answer, mapped to its source."""

    timestamp: str
    seconds: float
    video_id: str
    chunk_id: str
    video_title: str | None = None
    url: str | None = None


@dataclass
class ChatResponse:
    """Output of the answer pipeline."""

    question: str
    answer: str
    citations: list[Citation] = field(default_factory=list)
    results: list[RetrievalResult] = field(default_factory=list)
    model: str = ""

    @property
    def retrieval_count(self) -> int:
        return len(self.results)

    @property
    def video_count(self) -> int:
        return len({r.video_id for r in self.results})
