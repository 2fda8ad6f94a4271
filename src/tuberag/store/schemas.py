"""Data models for stored transcript chunks and videos."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class StoragePointer:
    """Byte range of a chunk's text inside its video's transcript blob."""

    byte_offset: int
    byte_length: int

    @property
    def end(self) -> int:
        return self.byte_offset + self.byte_length


@dataclass(frozen=True)
class Chunk:
    """A time-bounded slice of a video transcript — the unit of retrieval.

    The chunk text is not part of the record; it lives in the per-video blob
    at ``pointer``. ``embedding`` is ``None`` until the ingestion pipeline
    has computed it.
    """

    id: str
    video_id: str
    chunk_index: int
    start_time: float
    end_time: float
    pointer: StoragePointer
    embedding: tuple[float, ...] | None = None
    keywords: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class VideoRef:
    """A processed video belonging to a channel."""

    id: str
    title: str
    channel_id: str | None = None
    youtube_id: str | None = None
