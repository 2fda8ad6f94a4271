"""Wire settings into searchers and the chat pipeline."""

from __future__ import annotations

import logging

from tuberag.cache.base import Cache, NullCache
from tuberag.cache.memory import InMemoryCache
from tuberag.config import Settings
from tuberag.embeddings.factory import get_embedding_provider
from tuberag.llm.factory import get_llm_provider
from tuberag.pipeline.chat import ChatPipeline
from tuberag.retrieval.channel import ChannelSearcher
from tuberag.retrieval.searcher import HybridSearcher
from tuberag.store.base import BlobStore, ChunkStore
from tuberag.store.factory import get_blob_store, get_chunk_store

logger = logging.getLogger(__name__)


def build_cache(settings: Settings) -> Cache:
    if not settings.cache.enabled:
        return NullCache()
    return InMemoryCache(
        default_ttl_seconds=settings.cache.embedding_ttl_seconds,
        max_entries=settings.cache.max_entries,
    )


def build_chunk_store(settings: Settings) -> ChunkStore:
    cfg = settings.chunk_store
    if cfg.backend == "qdrant":
        return get_chunk_store(
            "qdrant",
            collection=cfg.collection,
            dimension=settings.embedding.dimension,
            url=cfg.url,
            api_key=cfg.api_key,
            path=cfg.path,
        )
    return get_chunk_store(cfg.backend)


def build_blob_store(settings: Settings) -> BlobStore:
    cfg = settings.blob_store
    if cfg.backend == "local":
        return get_blob_store("local", root=cfg.root)
    if cfg.backend == "s3":
        return get_blob_store("s3", bucket=cfg.bucket, prefix=cfg.prefix, region=cfg.region)
    return get_blob_store(cfg.backend)


def build_searcher(settings: Settings, cache: Cache | None = None) -> HybridSearcher:
    emb = get_embedding_provider(settings.embedding.provider, model=settings.embedding.model)
    return HybridSearcher(
        embedding_provider=emb,
        chunk_store=build_chunk_store(settings),
        blob_store=build_blob_store(settings),
        settings=settings.retrieval,
        cache=cache if cache is not None else build_cache(settings),
        cache_settings=settings.cache,
    )


def build_pipeline(settings: Settings, cache: Cache | None = None) -> ChatPipeline:
    searcher = build_searcher(settings, cache=cache)
    llm = get_llm_provider(
        settings.llm.provider,
        model=settings.llm.model,
        temperature=settings.llm.temperature,
        max_tokens=settings.llm.max_tokens,
    )
    logger.info(
        "Built pipeline: embedding=%s chunks=%s blobs=%s llm=%s",
        settings.embedding.provider,
        settings.chunk_store.backend,
        settings.blob_store.backend,
        settings.llm.provider,
    )
    return ChatPipeline(
        searcher=searcher,
        llm_provider=llm,
        channel_searcher=ChannelSearcher(searcher, settings=settings.channel),
    )
