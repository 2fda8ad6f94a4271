"""Application settings loaded from YAML with profile overrides."""

from __future__ import annotations

import os
from pathlib import Path

import yaml
from pydantic import BaseModel, Field

# ---------------------------------------------------------------------------
# Tuning defaults
# ---------------------------------------------------------------------------

DEFAULT_STOP_WORDS: list[str] = [
    "the", "a", "an", "and", "or", "but", "in", "on", "at", "to", "for",
    "of", "with", "by", "from", "as", "is", "was", "are", "were", "been",
    "what", "when", "where", "who", "why", "how", "which", "that", "this",
]

DEFAULT_GENERAL_QUERY_PHRASES: list[str] = [
    "this channel",
    "the channel",
    "all videos",
    "all the videos",
    "every video",
    "across videos",
    "what topics",
    "main topics",
    "overview",
    "summarize everything",
    "what do you cover",
    "what do they talk about",
]

# ---------------------------------------------------------------------------
# Settings sections
# ---------------------------------------------------------------------------


class EmbeddingSettings(BaseModel):
    provider: str = "openai"
    model: str = "text-embedding-ada-002"
    dimension: int = 1536


class ChunkStoreSettings(BaseModel):
    backend: str = "qdrant"
    collection: str = "transcript_chunks"
    url: str | None = None
    api_key: str | None = None
    path: str | None = None


class BlobStoreSettings(BaseModel):
    backend: str = "local"
    root: str = "local_data/transcripts"
    bucket: str | None = None
    prefix: str = ""
    region: str | None = None


class LLMSettings(BaseModel):
    provider: str = "openai"
    model: str = "gpt-4o-mini"
    temperature: float = 0.3
    max_tokens: int = 1500


class RetrievalSettings(BaseModel):
    top_k: int = Field(5, ge=1)
    hybrid_boost: float = Field(0.3, gt=0)
    keyword_base_score: float = Field(0.5, ge=0)
    min_keyword_length: int = 3
    stop_words: list[str] = Field(default_factory=lambda: list(DEFAULT_STOP_WORDS))


class ChannelSettings(BaseModel):
    search_k: int = 10
    max_chunks_per_video: int = 3
    max_total_chunks: int = 50
    general_max_chunks_per_video: int = 2
    general_max_total_chunks: int = 60
    similarity_floor: float = 0.75
    max_workers: int | None = None
    general_query_phrases: list[str] = Field(
        default_factory=lambda: list(DEFAULT_GENERAL_QUERY_PHRASES)
    )


class CacheSettings(BaseModel):
    enabled: bool = True
    max_entries: int = 1000
    embedding_ttl_seconds: int = 2 * 60 * 60
    chunk_ttl_seconds: int = 7 * 24 * 60 * 60


# ---------------------------------------------------------------------------
# Root settings
# ---------------------------------------------------------------------------


class Settings(BaseModel):
    embedding: EmbeddingSettings = Field(default_factory=EmbeddingSettings)
    chunk_store: ChunkStoreSettings = Field(default_factory=ChunkStoreSettings)
    blob_store: BlobStoreSettings = Field(default_factory=BlobStoreSettings)
    llm: LLMSettings = Field(default_factory=LLMSettings)
    retrieval: RetrievalSettings = Field(default_factory=RetrievalSettings)
    channel: ChannelSettings = Field(default_factory=ChannelSettings)
    cache: CacheSettings = Field(default_factory=CacheSettings)


def _find_settings_file() -> Path | None:
    """Walk up from cwd looking for settings.yaml."""
    profile = os.getenv("TUBERAG_PROFILE", "")
    names = [f"settings-{profile}.yaml", "settings.yaml"] if profile else ["settings.yaml"]

    cwd = Path.cwd()
    for parent in [cwd, *cwd.parents]:
        for name in names:
            candidate = parent / name
            if candidate.exists():
                return candidate
    return None


def load_settings(path: Path | None = None) -> Settings:
    """Load settings from a YAML file, falling back to defaults.

    Args:
        path: Explicit settings file. When omitted the nearest
            ``settings.yaml`` (or profile variant) above the cwd is used.
    """
    path = path or _find_settings_file()
    if path is None:
        return Settings()

    with open(path, encoding="utf-8") as fh:
        raw = yaml.safe_load(fh) or {}

    return Settings(**raw)
