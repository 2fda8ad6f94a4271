"""Retrieval — hybrid search over transcript chunks, per video and per channel."""

from tuberag.retrieval.channel import ChannelSearcher, is_general_query
from tuberag.retrieval.schemas import RetrievalResult, ScoredChunk
from tuberag.retrieval.searcher import HybridSearcher

__all__ = [
    "ChannelSearcher",
    "HybridSearcher",
    "RetrievalResult",
    "ScoredChunk",
    "is_general_query",
]
