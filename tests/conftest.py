"""Shared fixtures for tests — synthetic transcripts, no network calls."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass

import numpy as np
import pytest

from tuberag.config import ChannelSettings, RetrievalSettings
from tuberag.embeddings.base import EmbeddingProvider
from tuberag.llm.base import ChatTurn, LLMProvider
from tuberag.retrieval.channel import ChannelSearcher
from tuberag.retrieval.searcher import HybridSearcher
from tuberag.store.memory import InMemoryBlobStore, InMemoryChunkStore
from tuberag.store.schemas import Chunk, StoragePointer, VideoRef

DIM = 16
# Axis no chunk fixture uses, so queries along it score 0 everywhere
NULL_AXIS = DIM - 1


def unit(axis: int, dim: int = DIM) -> list[float]:
    vec = [0.0] * dim
    vec[axis] = 1.0
    return vec


def mix(weights: dict[int, float], dim: int = DIM) -> list[float]:
    vec = np.zeros(dim)
    for axis, w in weights.items():
        vec[axis] = w
    return (vec / np.linalg.norm(vec)).tolist()


# ---------------------------------------------------------------------------
# Mock providers
# ---------------------------------------------------------------------------


class MockEmbedder(EmbeddingProvider):
    """Returns a registered vector per query, else the null axis."""

    def __init__(self, vectors: dict[str, list[float]] | None = None, dim: int = DIM):
        self.model = "mock-embed"
        self._dim = dim
        self.vectors = dict(vectors or {})
        self.calls: list[str] = []

    def embed_query(self, query: str) -> list[float]:
        self.calls.append(query)
        return self.vectors.get(query, unit(NULL_AXIS, self._dim))

    @property
    def dimension(self) -> int:
        return self._dim


class MockLLM(LLMProvider):
    """Echoes a canned answer and records the prompt."""

    def __init__(self, answer: str = "See [0:30] for details."):
        self.model = "mock-llm"
        self.answer = answer
        self.prompts: list[str] = []
        self.systems: list[str | None] = []
        self.histories: list[Sequence[ChatTurn] | None] = []

    def generate(self, prompt, system=None, history=None) -> str:
        self.prompts.append(prompt)
        self.systems.append(system)
        self.histories.append(history)
        return self.answer


# ---------------------------------------------------------------------------
# Synthetic videos
# ---------------------------------------------------------------------------


@dataclass
class VideoFixture:
    video: VideoRef
    chunks: list[Chunk]
    texts: list[str]
    blob: str


def build_video(
    video_id: str,
    texts: Sequence[str],
    keywords: Sequence[Sequence[str]] | None = None,
    embeddings: Sequence[list[float] | None] | None = None,
    title: str | None = None,
    channel_id: str | None = "chan-1",
    chunk_seconds: float = 30.0,
) -> VideoFixture:
    """Lay ``texts`` out back to back in one blob and build chunk records."""
    chunks: list[Chunk] = []
    offset = 0
    for i, text in enumerate(texts):
        length = len(text.encode("utf-8"))
        emb = embeddings[i] if embeddings is not None else unit(i % NULL_AXIS)
        chunks.append(Chunk(
            id=f"{video_id}-c{i}",
            video_id=video_id,
            chunk_index=i,
            start_time=i * chunk_seconds,
            end_time=(i + 1) * chunk_seconds,
            pointer=StoragePointer(byte_offset=offset, byte_length=length),
            embedding=tuple(emb) if emb is not None else None,
            keywords=tuple(keywords[i]) if keywords is not None else (),
        ))
        offset += length

    return VideoFixture(
        video=VideoRef(
            id=video_id,
            title=title or f"Video {video_id}",
            channel_id=channel_id,
            youtube_id=f"yt-{video_id}",
        ),
        chunks=chunks,
        texts=list(texts),
        blob="".join(texts),
    )


TELESCOPE_TEXTS = [
    "[0:00] Welcome back everyone, today we are out in the desert.\n",
    "[0:30] The weather tonight is clear with almost no clouds.\n",
    "[1:00] First you calibrate the telescope mount using the polar scope.\n",
    "[1:30] Let me show you the camera sensor and its cooling.\n",
    "[2:00] The battery pack lasts about six hours in the cold.\n",
    "[2:30] Guiding software keeps stars round during long exposures.\n",
    "[3:00] Processing happens later with stacking on the laptop.\n",
    "[3:30] Always recheck telescope balance after swapping the camera.\n",
    "[4:00] Light pollution maps help pick a dark site.\n",
    "[4:30] Thanks for watching and clear skies.\n",
]

TELESCOPE_KEYWORDS = [
    ["welcome", "desert"],
    ["weather", "clouds", "clear"],
    ["calibrate", "telescope", "polar"],
    ["camera", "sensor", "cooling"],
    ["battery", "hours", "cold"],
    ["guiding", "software", "stars"],
    ["processing", "stacking", "laptop"],
    ["recheck", "telescope", "balance"],
    ["light", "pollution", "maps"],
    ["thanks", "watching", "skies"],
]


@pytest.fixture
def telescope_video() -> VideoFixture:
    return build_video("vid-astro", TELESCOPE_TEXTS, TELESCOPE_KEYWORDS, title="Desert Astrophotography")


@pytest.fixture
def stores(telescope_video: VideoFixture) -> tuple[InMemoryChunkStore, InMemoryBlobStore]:
    chunk_store = InMemoryChunkStore()
    blob_store = InMemoryBlobStore()
    chunk_store.add_video(telescope_video.video, telescope_video.chunks, telescope_video.texts)
    blob_store.put(telescope_video.video.id, telescope_video.blob)
    return chunk_store, blob_store


@pytest.fixture
def embedder() -> MockEmbedder:
    return MockEmbedder()


@pytest.fixture
def make_searcher(stores, embedder) -> Callable[..., HybridSearcher]:
    def _make(**kwargs) -> HybridSearcher:
        chunk_store, blob_store = stores
        return HybridSearcher(
            embedding_provider=kwargs.pop("embedding_provider", embedder),
            chunk_store=kwargs.pop("chunk_store", chunk_store),
            blob_store=kwargs.pop("blob_store", blob_store),
            settings=kwargs.pop("settings", RetrievalSettings()),
            **kwargs,
        )

    return _make


@pytest.fixture
def channel_settings() -> ChannelSettings:
    return ChannelSettings(search_k=5, max_chunks_per_video=2, max_total_chunks=5)


@pytest.fixture
def make_channel_searcher(channel_settings) -> Callable[..., ChannelSearcher]:
    def _make(searcher: HybridSearcher, **kwargs) -> ChannelSearcher:
        return ChannelSearcher(searcher, settings=kwargs.pop("settings", channel_settings), **kwargs)

    return _make
