"""Filesystem blob store — ``<root>/<video_id>/transcript.txt``."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

from tuberag.exceptions import StoreUnavailableError
from tuberag.store.base import BlobStore, slice_blob
from tuberag.store.schemas import StoragePointer

logger = logging.getLogger(__name__)

BLOB_NAME = "transcript.txt"


class LocalBlobStore(BlobStore):
    """Read transcript blobs from a local directory tree."""

    def __init__(self, root: str | Path = "local_data/transcripts"):
        self.root = Path(root)

    def blob_path(self, video_id: str) -> Path:
        return self.root / video_id / BLOB_NAME

    def read_range(self, video_id: str, offset: int, length: int) -> str:
        path = self.blob_path(video_id)
        try:
            with open(path, "rb") as fh:
                fh.seek(offset)
                data = fh.read(length)
        except OSError as exc:
            raise StoreUnavailableError(
                f"Cannot read transcript blob {path}: {exc}", backend="local"
            ) from exc
        if len(data) < length:
            return ""
        return data.decode("utf-8", errors="replace")

    def read_ranges(
        self,
        video_id: str,
        pointers: Sequence[StoragePointer],
    ) -> list[str]:
        path = self.blob_path(video_id)
        try:
            data = path.read_bytes()
        except OSError as exc:
            raise StoreUnavailableError(
                f"Cannot read transcript blob {path}: {exc}", backend="local"
            ) from exc

        logger.debug("Read %d bytes from %s for %d ranges", len(data), path, len(pointers))
        return [slice_blob(data, p) for p in pointers]
