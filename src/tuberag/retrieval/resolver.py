"""Chunk text resolution — blob byte ranges first, redundant store second.

Output is positional: ``resolve(video_id, [A, B, C])`` returns
``[text_a, text_b, text_c]`` with ``None`` for anything neither path could
produce. ``attach`` then drops those chunks instead of returning them blank.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from tuberag.exceptions import StoreUnavailableError
from tuberag.result import Result
from tuberag.retrieval.schemas import RetrievalResult, ScoredChunk
from tuberag.store.base import BlobStore, ChunkStore
from tuberag.store.schemas import Chunk

logger = logging.getLogger(__name__)


def _usable(text: str | None) -> bool:
    return bool(text and text.strip())


class ChunkTextResolver:
    """Turns storage pointers into transcript text."""

    def __init__(self, blob_store: BlobStore, chunk_store: ChunkStore):
        self.blob_store = blob_store
        self.chunk_store = chunk_store

    def resolve(self, video_id: str, chunks: Sequence[Chunk]) -> list[str | None]:
        """Fetch text for ``chunks`` in input order.

        Raises:
            StoreUnavailableError: Both the blob store and the fallback store
                failed outright.
        """
        if not chunks:
            return []

        primary = self._read_blob(video_id, chunks)
        texts = primary.or_else(lambda exc: self._read_fallback(video_id, chunks, exc)).unwrap()

        if primary.is_ok:
            missing = [c for c, t in zip(chunks, texts, strict=True) if not _usable(t)]
            if missing:
                texts = self._fill_missing(chunks, texts, missing)
        return texts

    def attach(self, video_id: str, scored: Sequence[ScoredChunk]) -> list[RetrievalResult]:
        """Resolve text for scored chunks and drop the unresolvable ones."""
        texts = self.resolve(video_id, [sc.chunk for sc in scored])

        results: list[RetrievalResult] = []
        dropped: list[str] = []
        for sc, text in zip(scored, texts, strict=True):
            if not _usable(text):
                dropped.append(sc.id)
                continue
            results.append(RetrievalResult(
                chunk=sc.chunk,
                text=text,
                score=sc.score,
                similarity=sc.similarity,
                keyword_score=sc.keyword_score,
            ))

        if dropped:
            logger.warning(
                "Dropped %d of %d chunks for video %s with no resolvable text: %s",
                len(dropped),
                len(scored),
                video_id,
                dropped,
            )
        return results

    # ------------------------------------------------------------------
    # Private
    # ------------------------------------------------------------------

    def _read_blob(self, video_id: str, chunks: Sequence[Chunk]) -> Result[list[str | None]]:
        pointers = [c.pointer for c in chunks]
        return Result.capture(lambda: list(self.blob_store.read_ranges(video_id, pointers)))

    def _read_fallback(
        self,
        video_id: str,
        chunks: Sequence[Chunk],
        cause: Exception,
    ) -> Result[list[str | None]]:
        logger.warning(
            "Blob read failed for video %s, falling back to chunk store: %s",
            video_id,
            cause,
        )
        return Result.capture(lambda: self._fallback_texts(video_id, chunks))

    def _fallback_texts(self, video_id: str, chunks: Sequence[Chunk]) -> list[str | None]:
        try:
            found = self.chunk_store.read_chunk_text_fallback([c.id for c in chunks])
        except Exception as exc:
            raise StoreUnavailableError(
                f"Blob store and fallback store both failed for video {video_id}: {exc}"
            ) from exc
        return [found.get(c.id) for c in chunks]

    def _fill_missing(
        self,
        chunks: Sequence[Chunk],
        texts: list[str | None],
        missing: Sequence[Chunk],
    ) -> list[str | None]:
        """Retry individually missing slices against the fallback store."""
        try:
            found = self.chunk_store.read_chunk_text_fallback([c.id for c in missing])
        except Exception as exc:
            logger.warning("Fallback lookup for %d missing chunks failed: %s", len(missing), exc)
            return texts

        return [
            t if _usable(t) else found.get(c.id)
            for c, t in zip(chunks, texts, strict=True)
        ]
