"""S3 blob store — one transcript object per video.

Requires the ``s3`` extra. Objects live at ``<prefix><video_id>/transcript.txt``.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from tuberag.exceptions import StoreUnavailableError
from tuberag.store.base import BlobStore, slice_blob
from tuberag.store.schemas import StoragePointer

logger = logging.getLogger(__name__)

BLOB_NAME = "transcript.txt"


class S3BlobStore(BlobStore):
    """Read transcript blobs from an S3 bucket."""

    def __init__(
        self,
        bucket: str,
        prefix: str = "",
        region: str | None = None,
        client: Any | None = None,
    ):
        if client is None:
            try:
                import boto3
            except ImportError as exc:
                raise ImportError("boto3 required: pip install tube-rag[s3]") from exc
            client = boto3.client("s3", region_name=region)

        self.bucket = bucket
        self.prefix = prefix
        self._client: Any = client

    def object_key(self, video_id: str) -> str:
        return f"{self.prefix}{video_id}/{BLOB_NAME}"

    def read_range(self, video_id: str, offset: int, length: int) -> str:
        if length <= 0:
            return ""
        data = self._get_object(video_id, Range=f"bytes={offset}-{offset + length - 1}")
        if len(data) < length:
            return ""
        return data.decode("utf-8", errors="replace")

    def read_ranges(
        self,
        video_id: str,
        pointers: Sequence[StoragePointer],
    ) -> list[str]:
        data = self._get_object(video_id)
        return [slice_blob(data, p) for p in pointers]

    # ------------------------------------------------------------------
    # Private
    # ------------------------------------------------------------------

    def _get_object(self, video_id: str, **kwargs: Any) -> bytes:
        key = self.object_key(video_id)
        try:
            response = self._client.get_object(Bucket=self.bucket, Key=key, **kwargs)
            return response["Body"].read()
        except Exception as exc:
            raise StoreUnavailableError(
                f"Cannot download s3://{self.bucket}/{key}: {exc}", backend="s3"
            ) from exc
