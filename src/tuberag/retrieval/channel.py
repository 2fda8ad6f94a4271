"""Channel-wide search — fan out per video, filter, balance.

One hybrid search runs per video on a thread pool and the call waits for
all of them. A video whose search raises contributes nothing; the others
are unaffected.
"""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor

from tuberag.config import ChannelSettings
from tuberag.exceptions import InvalidQueryError
from tuberag.retrieval.balancer import balance_chunks_by_video
from tuberag.retrieval.content_filter import filter_chunks_by_content
from tuberag.retrieval.schemas import RetrievalResult
from tuberag.retrieval.searcher import HybridSearcher
from tuberag.store.base import ChunkStore
from tuberag.store.schemas import VideoRef

logger = logging.getLogger(__name__)


def _is_cap(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 1


def is_general_query(query: str, phrases: Sequence[str]) -> bool:
    """True when the query asks about the channel as a whole."""
    q = " ".join(query.lower().split())
    return any(p.lower() in q for p in phrases)


class ChannelSearcher:
    """Runs hybrid search across every processed video of a channel."""

    def __init__(
        self,
        searcher: HybridSearcher,
        chunk_store: ChunkStore | None = None,
        settings: ChannelSettings | None = None,
    ):
        self.searcher = searcher
        self.chunk_store = chunk_store if chunk_store is not None else searcher.chunk_store
        self.settings = settings if settings is not None else ChannelSettings()

    def hybrid_channel_search(
        self,
        channel_id: str,
        query: str,
        per_video_k: int | None = None,
        total_k: int | None = None,
    ) -> list[RetrievalResult]:
        """Search a whole channel.

        Args:
            channel_id: The channel to search.
            query: The user's question.
            per_video_k: Max chunks any one video may contribute.
            total_k: Max chunks overall. Explicit caps always bound the
                output; general queries only change the configured defaults.

        Returns:
            Results tagged with their ``VideoRef``, balanced across videos.

        Raises:
            InvalidQueryError: Blank channel id or query, or a cap that is not
                an int >= 1.
            StoreUnavailableError: The channel's videos could not be listed.
        """
        cfg = self.settings
        per_video = cfg.max_chunks_per_video if per_video_k is None else per_video_k
        total = cfg.max_total_chunks if total_k is None else total_k

        if not isinstance(channel_id, str) or not channel_id.strip():
            raise InvalidQueryError("channel_id is required")
        if not isinstance(query, str) or not query.strip():
            raise InvalidQueryError("query is required")
        if not (_is_cap(per_video) and _is_cap(total)):
            raise InvalidQueryError(
                f"per_video_k and total_k must be ints >= 1, got {per_video!r}, {total!r}"
            )

        general = is_general_query(query, cfg.general_query_phrases)
        if general:
            per_video = min(per_video, cfg.general_max_chunks_per_video)
            if total_k is None:
                total = max(total, cfg.general_max_total_chunks)

        videos = self.chunk_store.list_videos(channel_id)
        if not videos:
            logger.info("Channel %s has no processed videos", channel_id)
            return []

        query_embedding = self.searcher.embed_query(query)
        candidates = self._search_videos(videos, query, query_embedding)

        if general:
            # general queries skip the content filter and rank by score alone
            candidates.sort(key=lambda r: r.final_score, reverse=True)
        else:
            candidates = filter_chunks_by_content(
                candidates,
                query,
                similarity_floor=cfg.similarity_floor,
                stop_words=self.searcher.settings.stop_words,
                min_keyword_length=self.searcher.settings.min_keyword_length,
            )

        results = balance_chunks_by_video(candidates, per_video, total)

        logger.info(
            "Channel search %s: %d videos, %d candidates, %d results (general=%s)",
            channel_id,
            len(videos),
            len(candidates),
            len(results),
            general,
        )
        return results

    # ------------------------------------------------------------------
    # Private
    # ------------------------------------------------------------------

    def _search_videos(
        self,
        videos: Sequence[VideoRef],
        query: str,
        query_embedding: list[float],
    ) -> list[RetrievalResult]:
        workers = len(videos)
        if self.settings.max_workers:
            workers = min(workers, self.settings.max_workers)

        with ThreadPoolExecutor(max_workers=workers) as executor:
            per_video = list(executor.map(
                lambda v: self._search_one(v, query, query_embedding), videos
            ))

        return [r for results in per_video for r in results]

    def _search_one(
        self,
        video: VideoRef,
        query: str,
        query_embedding: list[float],
    ) -> list[RetrievalResult]:
        try:
            results = self.searcher.hybrid_chunk_search(
                video.id, query, top_k=self.settings.search_k, query_embedding=query_embedding
            )
        except Exception:
            logger.exception("Search failed for video %s (%s)", video.id, video.title)
            return []
        return [dataclasses.replace(r, video=video) for r in results]
