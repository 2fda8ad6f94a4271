"""Answer pipeline — question → hybrid retrieval → LLM → timestamp citations."""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Sequence

from tuberag.llm.base import ChatTurn, LLMProvider
from tuberag.pipeline.citations import extract_citations
from tuberag.pipeline.prompts import (
    CHANNEL_SYSTEM_PROMPT,
    NO_RESULTS_ANSWER,
    VIDEO_SYSTEM_PROMPT,
    build_prompt,
    format_channel_context,
    format_video_context,
)
from tuberag.pipeline.schemas import ChatResponse
from tuberag.retrieval.channel import ChannelSearcher
from tuberag.retrieval.schemas import RetrievalResult
from tuberag.retrieval.searcher import HybridSearcher
from tuberag.store.schemas import VideoRef

logger = logging.getLogger(__name__)


class ChatPipeline:
    """Orchestrates retrieve → prompt → generate → cite.

    An empty retrieval short-circuits with ``NO_RESULTS_ANSWER`` and no LLM
    call; retrieval exceptions propagate to the caller.
    """

    def __init__(
        self,
        searcher: HybridSearcher,
        llm_provider: LLMProvider,
        channel_searcher: ChannelSearcher | None = None,
    ):
        self.searcher = searcher
        self.llm_provider = llm_provider
        self.channel_searcher = (
            channel_searcher if channel_searcher is not None else ChannelSearcher(searcher)
        )

    def ask_video(
        self,
        video_id: str,
        question: str,
        video: VideoRef | None = None,
        history: Sequence[ChatTurn] | None = None,
        top_k: int | None = None,
    ) -> ChatResponse:
        """Answer a question about one video."""
        results = self.searcher.hybrid_chunk_search(video_id, question, top_k=top_k)
        if video is not None:
            results = [dataclasses.replace(r, video=video) for r in results]

        return self._answer(
            question,
            results,
            context=format_video_context(results),
            system=VIDEO_SYSTEM_PROMPT,
            history=history,
        )

    def ask_channel(
        self,
        channel_id: str,
        question: str,
        history: Sequence[ChatTurn] | None = None,
        per_video_k: int | None = None,
        total_k: int | None = None,
    ) -> ChatResponse:
        """Answer a question about a whole channel."""
        results = self.channel_searcher.hybrid_channel_search(
            channel_id, question, per_video_k=per_video_k, total_k=total_k
        )
        return self._answer(
            question,
            results,
            context=format_channel_context(results),
            system=CHANNEL_SYSTEM_PROMPT,
            history=history,
        )

    def _answer(
        self,
        question: str,
        results: list[RetrievalResult],
        context: str,
        system: str,
        history: Sequence[ChatTurn] | None,
    ) -> ChatResponse:
        model = getattr(self.llm_provider, "model", "unknown")
        if not results:
            return ChatResponse(question=question, answer=NO_RESULTS_ANSWER, model=model)

        answer = self.llm_provider.generate(
            build_prompt(question, context),
            system=system,
            history=history,
        )
        citations = extract_citations(answer, results)

        logger.info(
            "Answered with %d chunks from %d videos, %d citations",
            len(results),
            len({r.video_id for r in results}),
            len(citations),
        )
        return ChatResponse(
            question=question,
            answer=answer,
            citations=citations,
            results=results,
            model=model,
        )
