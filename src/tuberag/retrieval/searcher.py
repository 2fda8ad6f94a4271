"""Single-video hybrid search — embed → score → keyword match → merge → resolve."""

from __future__ import annotations

import hashlib
import logging

from tuberag.cache.base import Cache, NullCache
from tuberag.config import CacheSettings, RetrievalSettings
from tuberag.embeddings.base import EmbeddingProvider
from tuberag.exceptions import InvalidQueryError
from tuberag.retrieval.keywords import extract_keywords, keyword_match_count
from tuberag.retrieval.merger import merge_hybrid
from tuberag.retrieval.resolver import ChunkTextResolver
from tuberag.retrieval.schemas import RetrievalResult
from tuberag.retrieval.similarity import score_chunks
from tuberag.store.base import BlobStore, ChunkStore
from tuberag.store.schemas import Chunk

logger = logging.getLogger(__name__)


class HybridSearcher:
    """Orchestrates hybrid retrieval over one video's chunks.

    Store and provider errors are not caught here: an exception means the
    search could not run, an empty list means it ran and found nothing.
    """

    def __init__(
        self,
        embedding_provider: EmbeddingProvider,
        chunk_store: ChunkStore,
        blob_store: BlobStore,
        settings: RetrievalSettings | None = None,
        cache: Cache | None = None,
        cache_settings: CacheSettings | None = None,
    ):
        self.embedding_provider = embedding_provider
        self.chunk_store = chunk_store
        self.settings = settings if settings is not None else RetrievalSettings()
        self.cache = cache if cache is not None else NullCache()
        self.cache_settings = cache_settings if cache_settings is not None else CacheSettings()
        self.resolver = ChunkTextResolver(blob_store=blob_store, chunk_store=chunk_store)

    def hybrid_chunk_search(
        self,
        video_id: str,
        query: str,
        top_k: int | None = None,
        query_embedding: list[float] | None = None,
    ) -> list[RetrievalResult]:
        """Return the most relevant chunks of a video with their text.

        Args:
            video_id: The video to search.
            query: The user's question.
            top_k: Maximum results (defaults to ``settings.top_k``).
            query_embedding: Precomputed query vector; embedded here when omitted.

        Returns:
            At most ``top_k`` results, unique ids, all from ``video_id``,
            every one with non-empty text.

        Raises:
            InvalidQueryError: Blank video id or query, or ``top_k`` not an int >= 1.
            StoreUnavailableError: The chunk store (or both text stores)
                could not be read.
            EmbeddingError: The query could not be embedded.
        """
        k = self.settings.top_k if top_k is None else top_k
        self._validate(video_id, query, k)

        if query_embedding is None:
            query_embedding = self.embed_query(query)
        query_keywords = extract_keywords(
            query,
            stop_words=self.settings.stop_words,
            min_length=self.settings.min_keyword_length,
        )

        chunks = [c for c in self.list_chunks(video_id) if c.video_id == video_id]
        if not chunks:
            logger.info("Video %s has no chunks", video_id)
            return []

        similarities = score_chunks(query_embedding, chunks)
        keyword_scores = [keyword_match_count(query_keywords, c.keywords) for c in chunks]

        ranked = merge_hybrid(
            chunks,
            similarities,
            keyword_scores,
            top_k=k,
            hybrid_boost=self.settings.hybrid_boost,
            keyword_base_score=self.settings.keyword_base_score,
        )
        results = self.resolver.attach(video_id, ranked)

        logger.info(
            "Hybrid search video=%s: %d chunks, keywords=%s, %d results (top scores: %s)",
            video_id,
            len(chunks),
            query_keywords,
            len(results),
            ", ".join(f"{r.score:.3f}" for r in results[:3]),
        )
        return results

    def embed_query(self, query: str) -> list[float]:
        """Embed a query, consulting the cache first."""
        digest = hashlib.sha256(query.strip().encode("utf-8")).hexdigest()
        key = f"embedding:{self.embedding_provider.model}:{digest}"

        cached = self.cache.get(key)
        if cached is not None:
            return cached

        embedding = self.embedding_provider.embed_query(query)
        self.cache.set(key, embedding, ttl_seconds=self.cache_settings.embedding_ttl_seconds)
        return embedding

    def list_chunks(self, video_id: str) -> list[Chunk]:
        """Load a video's chunks, consulting the cache first."""
        key = f"chunks:{video_id}"

        cached = self.cache.get(key)
        if cached is not None:
            return cached

        chunks = self.chunk_store.list_chunks(video_id)
        if chunks:
            self.cache.set(key, chunks, ttl_seconds=self.cache_settings.chunk_ttl_seconds)
        return chunks

    def invalidate_video(self, video_id: str) -> None:
        """Forget cached chunks for a video (e.g. after embeddings are added)."""
        self.cache.delete(f"chunks:{video_id}")

    @staticmethod
    def _validate(video_id: str, query: str, top_k: int) -> None:
        if not isinstance(video_id, str) or not video_id.strip():
            raise InvalidQueryError("video_id is required")
        if not isinstance(query, str) or not query.strip():
            raise InvalidQueryError("query is required")
        if isinstance(top_k, bool) or not isinstance(top_k, int) or top_k < 1:
            raise InvalidQueryError(f"top_k must be an int >= 1, got {top_k!r}")
