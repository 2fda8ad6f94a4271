"""Tests for the hybrid semantic + keyword merge."""

from __future__ import annotations

import pytest

from conftest import build_video
from tuberag.retrieval.merger import merge_hybrid


@pytest.fixture
def chunks():
    return build_video("v", [f"text {i}" for i in range(6)]).chunks


def _ids(scored):
    return [sc.chunk.chunk_index for sc in scored]


class TestMergeHybrid:
    def test_semantic_only_ranking(self, chunks):
        sims = [0.1, 0.9, 0.3, 0.7, 0.0, 0.2]
        merged = merge_hybrid(chunks, sims, [0] * 6, top_k=3)
        assert _ids(merged) == [1, 3, 2]
        assert [sc.score for sc in merged] == pytest.approx([0.9, 0.7, 0.3])

    def test_keyword_only_match_inserted_at_base_score(self, chunks):
        sims = [0.1, 0.9, 0.3, 0.7, 0.0, 0.2]
        kw = [0, 0, 0, 0, 1, 0]
        merged = merge_hybrid(chunks, sims, kw, top_k=3, keyword_base_score=0.5)
        assert _ids(merged) == [1, 3, 4]
        assert merged[2].score == pytest.approx(0.5)
        assert merged[2].similarity == 0.0

    def test_hybrid_match_boosted(self, chunks):
        sims = [0.1, 0.9, 0.3, 0.7, 0.0, 0.2]
        kw = [0, 0, 1, 0, 0, 0]
        merged = merge_hybrid(chunks, sims, kw, top_k=3, hybrid_boost=0.3)
        assert _ids(merged) == [1, 3, 2]
        assert merged[2].score == pytest.approx(0.6)

    def test_boost_is_strictly_additive(self, chunks):
        sims = [0.1, 0.9, 0.3, 0.7, 0.0, 0.2]
        plain = {sc.id: sc.score for sc in merge_hybrid(chunks, sims, [0] * 6, top_k=6)}
        boosted = {sc.id: sc.score for sc in merge_hybrid(chunks, sims, [1] * 6, top_k=6)}
        for chunk_id, score in plain.items():
            assert boosted[chunk_id] > score

    def test_boost_can_reorder(self, chunks):
        sims = [0.1, 0.9, 0.3, 0.7, 0.0, 0.2]
        kw = [0, 0, 0, 1, 0, 0]
        merged = merge_hybrid(chunks, sims, kw, top_k=2)
        assert _ids(merged) == [3, 1]

    def test_keyword_match_outside_semantic_set_gets_base_not_boost(self, chunks):
        sims = [0.1, 0.9, 0.3, 0.7, 0.0, 0.2]
        kw = [1, 0, 0, 0, 0, 0]
        merged = merge_hybrid(chunks, sims, kw, top_k=2, keyword_base_score=0.5)
        # chunk 0 is not in the semantic top-2, so it joins at 0.5 and loses to 0.7
        assert _ids(merged) == [1, 3]

    def test_output_bounded_and_unique(self, chunks):
        merged = merge_hybrid(chunks, [0.5] * 6, [1] * 6, top_k=4)
        assert len(merged) == 4
        assert len({sc.id for sc in merged}) == 4

    def test_ties_keep_discovery_order(self, chunks):
        merged = merge_hybrid(chunks, [0.0] * 6, [0] * 6, top_k=6)
        assert _ids(merged) == [0, 1, 2, 3, 4, 5]

    def test_keyword_only_ties_keep_chunk_order(self, chunks):
        kw = [0, 0, 1, 0, 1, 1]
        merged = merge_hybrid(chunks, [0.0] * 6, kw, top_k=1 + 3)
        # semantic set is chunks 0..3 at 0.0; chunk 2 boosted, 4 and 5 join at 0.5
        assert _ids(merged) == [4, 5, 2, 0]

    def test_top_k_zero(self, chunks):
        assert merge_hybrid(chunks, [0.5] * 6, [0] * 6, top_k=0) == []

    def test_no_chunks(self):
        assert merge_hybrid([], [], [], top_k=5) == []

    def test_deterministic(self, chunks):
        sims = [0.3, 0.3, 0.1, 0.3, 0.0, 0.2]
        kw = [0, 1, 0, 0, 1, 0]
        first = _ids(merge_hybrid(chunks, sims, kw, top_k=4))
        second = _ids(merge_hybrid(chunks, sims, kw, top_k=4))
        assert first == second
