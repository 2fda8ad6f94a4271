"""Chunk store and blob store factories."""

from __future__ import annotations

from tuberag.registry import Registry
from tuberag.store.base import BlobStore, ChunkStore

_CHUNK_STORES: Registry[ChunkStore] = Registry("chunk store", [
    ("memory", "tuberag.store.memory", "InMemoryChunkStore"),
    ("qdrant", "tuberag.store.qdrant_store", "QdrantChunkStore"),
])

_BLOB_STORES: Registry[BlobStore] = Registry("blob store", [
    ("memory", "tuberag.store.memory", "InMemoryBlobStore"),
    ("local", "tuberag.store.local_blob", "LocalBlobStore"),
    ("s3", "tuberag.store.s3_blob", "S3BlobStore"),
])


def get_chunk_store(backend: str = "memory", **kwargs) -> ChunkStore:
    """Get a chunk store by name.

    Args:
        backend: One of ``memory``, ``qdrant``.
        **kwargs: Passed to the store constructor.
    """
    return _CHUNK_STORES.create(backend, **kwargs)


def get_blob_store(backend: str = "local", **kwargs) -> BlobStore:
    """Get a blob store by name.

    Args:
        backend: One of ``memory``, ``local``, ``s3``.
        **kwargs: Passed to the store constructor.
    """
    return _BLOB_STORES.create(backend, **kwargs)


def available_chunk_stores() -> list[str]:
    return _CHUNK_STORES.names()


def available_blob_stores() -> list[str]:
    return _BLOB_STORES.names()


def clear_cache() -> None:
    """Forget cached store instances (for testing)."""
    _CHUNK_STORES.clear()
    _BLOB_STORES.clear()
