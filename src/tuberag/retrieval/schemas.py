"""Data models for retrieval operations."""

from __future__ import annotations

from dataclasses import dataclass

from tuberag.store.schemas import Chunk, VideoRef


@dataclass
class ScoredChunk:
    """A chunk annotated with its scores for the duration of one search."""

    chunk: Chunk
    similarity: float = 0.0
    keyword_score: int = 0
    score: float = 0.0

    @property
    def id(self) -> str:
        return self.chunk.id


@dataclass(frozen=True)
class RetrievalResult:
    """A ranked chunk together with its resolved transcript text."""

    chunk: Chunk
    text: str
    score: float
    similarity: float = 0.0
    keyword_score: int = 0
    content_score: float = 0.0
    video: VideoRef | None = None

    @property
    def id(self) -> str:
        return self.chunk.id

    @property
    def video_id(self) -> str:
        return self.chunk.video_id

    @property
    def start_time(self) -> float:
        return self.chunk.start_time

    @property
    def end_time(self) -> float:
        return self.chunk.end_time

    @property
    def final_score(self) -> float:
        """Ranking score after the channel content filter."""
        return self.score + self.content_score
