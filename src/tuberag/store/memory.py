"""In-memory chunk and blob stores — for tests and local experiments."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from tuberag.exceptions import StoreUnavailableError
from tuberag.store.base import BlobStore, ChunkStore, slice_blob
from tuberag.store.schemas import Chunk, StoragePointer, VideoRef

logger = logging.getLogger(__name__)


class InMemoryChunkStore(ChunkStore):
    """Dict-backed chunk store."""

    def __init__(self) -> None:
        self._chunks: dict[str, list[Chunk]] = {}
        self._videos: dict[str, VideoRef] = {}
        self._texts: dict[str, str] = {}

    def add_video(
        self,
        video: VideoRef,
        chunks: Sequence[Chunk],
        texts: Sequence[str] | None = None,
    ) -> int:
        """Register a video and its chunks.

        Args:
            video: The owning video.
            chunks: Chunk records for the video.
            texts: Optional redundant chunk texts (same order as ``chunks``)
                served by ``read_chunk_text_fallback``.

        Returns:
            Number of chunks stored.
        """
        ordered = sorted(chunks, key=lambda c: c.chunk_index)
        self._videos[video.id] = video
        self._chunks[video.id] = ordered
        if texts is not None:
            for chunk, text in zip(chunks, texts, strict=True):
                self._texts[chunk.id] = text
        return len(ordered)

    def list_chunks(self, video_id: str) -> list[Chunk]:
        return list(self._chunks.get(video_id, []))

    def list_videos(self, channel_id: str) -> list[VideoRef]:
        return [v for v in self._videos.values() if v.channel_id == channel_id]

    def read_chunk_text_fallback(self, chunk_ids: Sequence[str]) -> dict[str, str]:
        return {cid: self._texts[cid] for cid in chunk_ids if cid in self._texts}


class InMemoryBlobStore(BlobStore):
    """Dict-backed blob store holding one UTF-8 blob per video."""

    def __init__(self) -> None:
        self._blobs: dict[str, bytes] = {}

    def put(self, video_id: str, content: str | bytes) -> int:
        data = content.encode("utf-8") if isinstance(content, str) else content
        self._blobs[video_id] = data
        return len(data)

    def read_range(self, video_id: str, offset: int, length: int) -> str:
        return slice_blob(self._get(video_id), StoragePointer(offset, length))

    def read_ranges(
        self,
        video_id: str,
        pointers: Sequence[StoragePointer],
    ) -> list[str]:
        data = self._get(video_id)
        return [slice_blob(data, p) for p in pointers]

    def _get(self, video_id: str) -> bytes:
        try:
            return self._blobs[video_id]
        except KeyError as exc:
            raise StoreUnavailableError(
                f"No transcript blob for video {video_id}", backend="memory"
            ) from exc
