"""Tests for cosine similarity scoring."""

from __future__ import annotations

import math

import pytest

from conftest import build_video, unit
from tuberag.retrieval.similarity import cosine_similarity, score_chunks


class TestCosineSimilarity:
    def test_identical_vectors(self):
        assert cosine_similarity([1.0, 2.0, 3.0], [1.0, 2.0, 3.0]) == pytest.approx(1.0)

    def test_orthogonal_vectors(self):
        assert cosine_similarity([1.0, 0.0], [0.0, 1.0]) == pytest.approx(0.0)

    def test_opposite_vectors(self):
        assert cosine_similarity([1.0, 1.0], [-1.0, -1.0]) == pytest.approx(-1.0)

    def test_scale_invariant(self):
        assert cosine_similarity([1.0, 2.0], [10.0, 20.0]) == pytest.approx(1.0)

    def test_missing_vector_scores_zero(self):
        assert cosine_similarity([1.0, 0.0], None) == 0.0

    def test_empty_vector_scores_zero(self):
        assert cosine_similarity([1.0, 0.0], []) == 0.0

    def test_zero_query_norm(self):
        assert cosine_similarity([0.0, 0.0], [1.0, 0.0]) == 0.0

    def test_zero_chunk_norm(self):
        result = cosine_similarity([1.0, 0.0], [0.0, 0.0])
        assert result == 0.0
        assert not math.isnan(result)

    def test_dimension_mismatch_scores_zero(self):
        assert cosine_similarity([1.0, 0.0, 0.0], [1.0, 0.0]) == 0.0


class TestScoreChunks:
    def test_scores_in_input_order(self):
        fixture = build_video("v", ["a", "b", "c"])
        scores = score_chunks(unit(1), fixture.chunks)
        assert scores == pytest.approx([0.0, 1.0, 0.0])

    def test_null_embeddings_score_zero(self):
        fixture = build_video("v", ["a", "b"], embeddings=[None, None])
        assert score_chunks(unit(0), fixture.chunks) == [0.0, 0.0]
