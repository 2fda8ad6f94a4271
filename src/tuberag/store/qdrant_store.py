"""Qdrant chunk store — one point per transcript chunk.

Requires the ``qdrant`` extra. Each point carries the chunk's embedding as
the named vector ``embedding`` (absent until computed) and a payload with
the chunk record, its owning video, and a redundant copy of the chunk text
used as the fallback text source.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from tuberag.exceptions import StoreUnavailableError
from tuberag.store.base import ChunkStore
from tuberag.store.schemas import Chunk, StoragePointer, VideoRef

logger = logging.getLogger(__name__)

VECTOR_NAME = "embedding"
SCROLL_PAGE_SIZE = 256


class QdrantChunkStore(ChunkStore):
    """Qdrant-backed chunk store."""

    def __init__(
        self,
        collection: str = "transcript_chunks",
        dimension: int = 1536,
        url: str | None = None,
        api_key: str | None = None,
        path: str | None = None,
    ):
        try:
            from qdrant_client import QdrantClient, models
        except ImportError as exc:
            raise ImportError(
                "qdrant-client required: pip install tube-rag[qdrant]"
            ) from exc

        self._models = models
        self._collection = collection
        self._dimension = dimension

        if url:
            self._client = QdrantClient(url=url, api_key=api_key)
        elif path:
            self._client = QdrantClient(path=path)
        else:
            # In-memory for testing
            self._client = QdrantClient(":memory:")

        collections = [c.name for c in self._client.get_collections().collections]
        if collection not in collections:
            self._client.create_collection(
                collection_name=collection,
                vectors_config={
                    VECTOR_NAME: models.VectorParams(
                        size=dimension,
                        distance=models.Distance.COSINE,
                    ),
                },
            )
            logger.info("Created Qdrant collection '%s' (dim=%d)", collection, dimension)

    # ------------------------------------------------------------------
    # Loading (used by ingestion tooling and tests)
    # ------------------------------------------------------------------

    def add_video(
        self,
        video: VideoRef,
        chunks: Sequence[Chunk],
        texts: Sequence[str] | None = None,
    ) -> int:
        if not chunks:
            return 0

        points = []
        for i, chunk in enumerate(chunks):
            payload = self._chunk_to_payload(chunk, video)
            if texts is not None:
                payload["text"] = texts[i]
            vector = {VECTOR_NAME: list(chunk.embedding)} if chunk.embedding else {}
            points.append(self._models.PointStruct(id=chunk.id, vector=vector, payload=payload))

        self._client.upsert(collection_name=self._collection, points=points)
        logger.info("QdrantChunkStore stored %d chunks for video %s", len(points), video.id)
        return len(points)

    # ------------------------------------------------------------------
    # ChunkStore API
    # ------------------------------------------------------------------

    def list_chunks(self, video_id: str) -> list[Chunk]:
        points = self._scroll("video_id", video_id, with_vectors=True)
        chunks = [self._point_to_chunk(p) for p in points]
        chunks.sort(key=lambda c: c.chunk_index)
        return chunks

    def list_videos(self, channel_id: str) -> list[VideoRef]:
        points = self._scroll("channel_id", channel_id, with_vectors=False)
        videos: dict[str, VideoRef] = {}
        for point in points:
            payload = point.payload or {}
            vid = payload.get("video_id")
            if vid and vid not in videos:
                videos[vid] = VideoRef(
                    id=vid,
                    title=payload.get("video_title") or "",
                    channel_id=channel_id,
                    youtube_id=payload.get("youtube_id"),
                )
        return list(videos.values())

    def read_chunk_text_fallback(self, chunk_ids: Sequence[str]) -> dict[str, str]:
        if not chunk_ids:
            return {}
        try:
            records = self._client.retrieve(
                collection_name=self._collection,
                ids=list(chunk_ids),
                with_payload=True,
                with_vectors=False,
            )
        except Exception as exc:
            raise StoreUnavailableError(
                f"Qdrant retrieve failed: {exc}", backend="qdrant"
            ) from exc

        texts: dict[str, str] = {}
        for record in records:
            text = (record.payload or {}).get("text")
            if text:
                texts[str(record.id)] = text
        return texts

    # ------------------------------------------------------------------
    # Private
    # ------------------------------------------------------------------

    def _scroll(self, field: str, value: str, with_vectors: bool) -> list[Any]:
        scroll_filter = self._models.Filter(
            must=[
                self._models.FieldCondition(
                    key=field,
                    match=self._models.MatchValue(value=value),
                )
            ]
        )

        points: list[Any] = []
        offset = None
        try:
            while True:
                page, offset = self._client.scroll(
                    collection_name=self._collection,
                    scroll_filter=scroll_filter,
                    limit=SCROLL_PAGE_SIZE,
                    offset=offset,
                    with_payload=True,
                    with_vectors=with_vectors,
                )
                points.extend(page)
                if offset is None:
                    break
        except Exception as exc:
            raise StoreUnavailableError(
                f"Qdrant scroll on {field}={value} failed: {exc}", backend="qdrant"
            ) from exc
        return points

    @staticmethod
    def _chunk_to_payload(chunk: Chunk, video: VideoRef) -> dict[str, Any]:
        return {
            "video_id": chunk.video_id,
            "channel_id": video.channel_id,
            "video_title": video.title,
            "youtube_id": video.youtube_id,
            "chunk_index": chunk.chunk_index,
            "start_time": chunk.start_time,
            "end_time": chunk.end_time,
            "byte_offset": chunk.pointer.byte_offset,
            "byte_length": chunk.pointer.byte_length,
            "keywords": list(chunk.keywords),
        }

    @staticmethod
    def _point_to_chunk(point: Any) -> Chunk:
        payload = point.payload or {}
        vector = point.vector
        if isinstance(vector, dict):
            vector = vector.get(VECTOR_NAME)
        return Chunk(
            id=str(point.id),
            video_id=payload["video_id"],
            chunk_index=int(payload.get("chunk_index", 0)),
            start_time=float(payload.get("start_time", 0.0)),
            end_time=float(payload.get("end_time", 0.0)),
            pointer=StoragePointer(
                byte_offset=int(payload.get("byte_offset", 0)),
                byte_length=int(payload.get("byte_length", 0)),
            ),
            embedding=tuple(vector) if vector else None,
            keywords=tuple(payload.get("keywords") or ()),
        )
