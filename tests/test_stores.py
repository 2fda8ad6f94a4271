"""Tests for chunk stores, blob stores, and their factories."""

from __future__ import annotations

import dataclasses
import io
import uuid
from unittest.mock import MagicMock

import pytest

from conftest import TELESCOPE_TEXTS, build_video
from tuberag.exceptions import StoreUnavailableError
from tuberag.store.base import slice_blob
from tuberag.store.factory import (
    available_blob_stores,
    available_chunk_stores,
    clear_cache,
    get_blob_store,
    get_chunk_store,
)
from tuberag.store.local_blob import LocalBlobStore
from tuberag.store.memory import InMemoryBlobStore, InMemoryChunkStore
from tuberag.store.s3_blob import S3BlobStore
from tuberag.store.schemas import StoragePointer


class TestSliceBlob:
    def test_slices_bytes(self):
        assert slice_blob(b"hello world", StoragePointer(6, 5)) == "world"

    def test_multibyte_utf8(self):
        data = "café ☕ time".encode("utf-8")
        start = len("café ".encode("utf-8"))
        assert slice_blob(data, StoragePointer(start, 3)) == "☕"

    def test_out_of_range(self):
        assert slice_blob(b"short", StoragePointer(3, 10)) == ""
        assert slice_blob(b"short", StoragePointer(-1, 2)) == ""

    def test_pointer_end(self):
        assert StoragePointer(10, 5).end == 15


class TestInMemoryStores:
    def test_list_chunks_ordered(self, telescope_video):
        store = InMemoryChunkStore()
        store.add_video(telescope_video.video, list(reversed(telescope_video.chunks)))
        assert [c.chunk_index for c in store.list_chunks("vid-astro")] == list(range(10))

    def test_list_chunks_unknown_video(self):
        assert InMemoryChunkStore().list_chunks("nope") == []

    def test_list_videos_by_channel(self):
        store = InMemoryChunkStore()
        a = build_video("a", ["x"], channel_id="chan-1")
        b = build_video("b", ["y"], channel_id="chan-2")
        store.add_video(a.video, a.chunks)
        store.add_video(b.video, b.chunks)
        assert [v.id for v in store.list_videos("chan-1")] == ["a"]

    def test_fallback_texts(self, telescope_video):
        store = InMemoryChunkStore()
        store.add_video(telescope_video.video, telescope_video.chunks, telescope_video.texts)
        found = store.read_chunk_text_fallback(["vid-astro-c1", "missing"])
        assert found == {"vid-astro-c1": TELESCOPE_TEXTS[1]}

    def test_blob_ranges(self, telescope_video):
        store = InMemoryBlobStore()
        store.put("vid-astro", telescope_video.blob)
        pointers = [c.pointer for c in telescope_video.chunks[:2]]
        assert store.read_ranges("vid-astro", pointers) == TELESCOPE_TEXTS[:2]

    def test_missing_blob_raises(self):
        with pytest.raises(StoreUnavailableError) as excinfo:
            InMemoryBlobStore().read_range("nope", 0, 5)
        assert excinfo.value.backend == "memory"


class TestLocalBlobStore:
    @pytest.fixture
    def store(self, tmp_path, telescope_video):
        blob_dir = tmp_path / "vid-astro"
        blob_dir.mkdir()
        (blob_dir / "transcript.txt").write_text(telescope_video.blob, encoding="utf-8")
        return LocalBlobStore(tmp_path)

    def test_blob_path(self, store, tmp_path):
        assert store.blob_path("v1") == tmp_path / "v1" / "transcript.txt"

    def test_read_range(self, store, telescope_video):
        p = telescope_video.chunks[3].pointer
        assert store.read_range("vid-astro", p.byte_offset, p.byte_length) == TELESCOPE_TEXTS[3]

    def test_read_ranges(self, store, telescope_video):
        pointers = [c.pointer for c in telescope_video.chunks]
        assert store.read_ranges("vid-astro", pointers) == TELESCOPE_TEXTS

    def test_short_read_is_empty(self, store):
        assert store.read_range("vid-astro", 100_000, 10) == ""

    def test_missing_file_raises(self, store):
        with pytest.raises(StoreUnavailableError) as excinfo:
            store.read_ranges("vid-missing", [StoragePointer(0, 5)])
        assert excinfo.value.backend == "local"


class TestS3BlobStore:
    @pytest.fixture
    def client(self, telescope_video):
        client = MagicMock()
        data = telescope_video.blob.encode("utf-8")

        def get_object(Bucket, Key, Range=None):
            body = data
            if Range:
                start, end = Range.removeprefix("bytes=").split("-")
                body = data[int(start) : int(end) + 1]
            return {"Body": io.BytesIO(body)}

        client.get_object.side_effect = get_object
        return client

    def test_object_key(self, client):
        store = S3BlobStore("bucket", prefix="transcripts/", client=client)
        assert store.object_key("v1") == "transcripts/v1/transcript.txt"

    def test_read_ranges_single_download(self, client, telescope_video):
        store = S3BlobStore("bucket", client=client)
        pointers = [c.pointer for c in telescope_video.chunks[:3]]

        assert store.read_ranges("vid-astro", pointers) == TELESCOPE_TEXTS[:3]
        client.get_object.assert_called_once_with(Bucket="bucket", Key="vid-astro/transcript.txt")

    def test_read_range_uses_range_header(self, client, telescope_video):
        store = S3BlobStore("bucket", client=client)
        p = telescope_video.chunks[2].pointer

        assert store.read_range("vid-astro", p.byte_offset, p.byte_length) == TELESCOPE_TEXTS[2]
        _, kwargs = client.get_object.call_args
        assert kwargs["Range"] == f"bytes={p.byte_offset}-{p.end - 1}"

    def test_zero_length(self, client):
        store = S3BlobStore("bucket", client=client)
        assert store.read_range("vid-astro", 0, 0) == ""
        client.get_object.assert_not_called()

    def test_client_error_wrapped(self):
        client = MagicMock()
        client.get_object.side_effect = RuntimeError("NoSuchKey")
        store = S3BlobStore("bucket", client=client)

        with pytest.raises(StoreUnavailableError, match="s3://bucket/v1/transcript.txt") as excinfo:
            store.read_ranges("v1", [StoragePointer(0, 4)])
        assert excinfo.value.backend == "s3"


class TestQdrantChunkStore:
    @pytest.fixture
    def store(self, telescope_video):
        pytest.importorskip("qdrant_client")
        from tuberag.store.qdrant_store import QdrantChunkStore

        store = QdrantChunkStore(collection="test_chunks", dimension=16)
        chunks = [
            dataclasses.replace(c, id=str(uuid.uuid5(uuid.NAMESPACE_URL, c.id)))
            for c in telescope_video.chunks
        ]
        store.add_video(telescope_video.video, chunks, telescope_video.texts)
        return store, chunks

    def test_list_chunks_round_trip(self, store):
        qdrant, chunks = store
        listed = qdrant.list_chunks("vid-astro")

        assert [c.id for c in listed] == [c.id for c in chunks]
        assert listed[2].keywords == ("calibrate", "telescope", "polar")
        assert listed[2].pointer == chunks[2].pointer
        assert listed[2].embedding == pytest.approx(chunks[2].embedding)

    def test_list_chunks_unknown_video(self, store):
        qdrant, _ = store
        assert qdrant.list_chunks("nope") == []

    def test_list_videos(self, store):
        qdrant, _ = store
        videos = qdrant.list_videos("chan-1")
        assert [(v.id, v.title, v.youtube_id) for v in videos] == [
            ("vid-astro", "Desert Astrophotography", "yt-vid-astro")
        ]
        assert qdrant.list_videos("chan-other") == []

    def test_fallback_texts(self, store):
        qdrant, chunks = store
        found = qdrant.read_chunk_text_fallback([chunks[4].id])
        assert found == {chunks[4].id: TELESCOPE_TEXTS[4]}
        assert qdrant.read_chunk_text_fallback([]) == {}


class TestStoreFactory:
    def setup_method(self):
        clear_cache()

    def test_available(self):
        assert available_chunk_stores() == ["memory", "qdrant"]
        assert available_blob_stores() == ["memory", "local", "s3"]

    def test_memory_singleton(self):
        assert get_chunk_store("memory") is get_chunk_store("MEMORY")

    def test_kwargs_build_fresh_instance(self, tmp_path):
        a = get_blob_store("local", root=tmp_path)
        b = get_blob_store("local", root=tmp_path)
        assert isinstance(a, LocalBlobStore)
        assert a is not b

    def test_unknown_backend(self):
        with pytest.raises(ValueError, match="Unknown chunk store 'mongo'"):
            get_chunk_store("mongo")
        with pytest.raises(ValueError, match="Unknown blob store 'gcs'"):
            get_blob_store("gcs")
