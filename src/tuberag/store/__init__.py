"""Chunk and blob store backends — in-memory, Qdrant, local disk, S3."""

from tuberag.store.base import BlobStore, ChunkStore
from tuberag.store.factory import (
    available_blob_stores,
    available_chunk_stores,
    get_blob_store,
    get_chunk_store,
)
from tuberag.store.schemas import Chunk, StoragePointer, VideoRef

__all__ = [
    "BlobStore",
    "Chunk",
    "ChunkStore",
    "StoragePointer",
    "VideoRef",
    "available_blob_stores",
    "available_chunk_stores",
    "get_blob_store",
    "get_chunk_store",
]
