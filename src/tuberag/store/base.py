"""Abstract base classes for the chunk store and the blob store."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence

from tuberag.store.schemas import Chunk, StoragePointer, VideoRef


class ChunkStore(ABC):
    """Read-only access to chunk records and the redundant text store."""

    @abstractmethod
    def list_chunks(self, video_id: str) -> list[Chunk]:
        """Return every chunk of a video ordered by ``chunk_index``.

        Raises:
            StoreUnavailableError: The backend could not be read.
        """

    @abstractmethod
    def list_videos(self, channel_id: str) -> list[VideoRef]:
        """Return the processed videos of a channel.

        Raises:
            StoreUnavailableError: The backend could not be read.
        """

    @abstractmethod
    def read_chunk_text_fallback(self, chunk_ids: Sequence[str]) -> dict[str, str]:
        """Slow per-chunk text lookup used when the blob store fails.

        Returns:
            Mapping of chunk id to text. Ids with no stored text are absent.
        """

    @classmethod
    def store_name(cls) -> str:
        """Return human-readable store name."""
        return cls.__name__


class BlobStore(ABC):
    """Per-video transcript blobs addressed by byte range."""

    @abstractmethod
    def read_range(self, video_id: str, offset: int, length: int) -> str:
        """Return ``length`` bytes at ``offset`` of a video's blob, decoded.

        Raises:
            StoreUnavailableError: The blob is missing or unreadable.
        """

    def read_ranges(
        self,
        video_id: str,
        pointers: Sequence[StoragePointer],
    ) -> list[str]:
        """Read several ranges of one blob, in the order given.

        Backends that can fetch the blob once should override this.
        """
        return [self.read_range(video_id, p.byte_offset, p.byte_length) for p in pointers]

    @classmethod
    def store_name(cls) -> str:
        """Return human-readable store name."""
        return cls.__name__


def slice_blob(data: bytes, pointer: StoragePointer) -> str:
    """Decode one pointer's bytes; out-of-range pointers yield ``""``."""
    if pointer.byte_offset < 0 or pointer.end > len(data):
        return ""
    return data[pointer.byte_offset : pointer.end].decode("utf-8", errors="replace")
