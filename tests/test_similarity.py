"""Tests for cosine similarity scoring and ranking."""

from __future__ import annotations

import math

import pytest

from protocols.errors import (
    DimensionMismatchError,
    InvalidTopKError,
    NonFiniteEmbeddingError,
    PreconditionError,
)
from providers.similarity import check_embeddings, cosine_similarity, rank
from schemas.documents import DocumentRecord


def _rec(doc_id: str, embedding: list[float]) -> DocumentRecord:
    return DocumentRecord(id=doc_id, text=f"text of {doc_id}", embedding=embedding)


def test_identical_vectors_score_one():
    assert cosine_similarity([1.0, 2.0, 3.0], [1.0, 2.0, 3.0]) == pytest.approx(1.0)


def test_orthogonal_vectors_score_zero():
    assert cosine_similarity([1.0, 0.0], [0.0, 1.0]) == 0.0


def test_opposite_vectors_score_minus_one():
    assert cosine_similarity([1.0, -2.0], [-1.0, 2.0]) == pytest.approx(-1.0)


def test_scale_invariant():
    assert cosine_similarity([1.0, 1.0], [10.0, 10.0]) == pytest.approx(1.0)


def test_zero_vector_scores_zero_not_nan():
    sim = cosine_similarity([0.0, 0.0, 0.0], [1.0, 2.0, 3.0])
    assert sim == 0.0
    assert not math.isnan(sim)
    assert cosine_similarity([0.0, 0.0], [0.0, 0.0]) == 0.0


def test_dimension_mismatch_raises():
    with pytest.raises(DimensionMismatchError) as exc_info:
        cosine_similarity([1.0, 2.0], [1.0, 2.0, 3.0])
    assert isinstance(exc_info.value, PreconditionError)
    assert exc_info.value.expected == 2
    assert exc_info.value.actual == 3


def test_rank_empty_records():
    result = rank([1.0, 0.0], [], k=5)
    assert result.documents == []
    assert result.ids == []
    assert result.distances == []


def test_rank_orders_by_descending_similarity():
    records = [
        _rec("far", [-1.0, 0.0]),
        _rec("near", [1.0, 0.1]),
        _rec("mid", [1.0, 1.0]),
    ]
    result = rank([1.0, 0.0], records, k=3)

    assert result.ids == ["near", "mid", "far"]
    assert result.documents == ["text of near", "text of mid", "text of far"]
    assert result.distances == sorted(result.distances)
    assert result.distances[-1] == pytest.approx(2.0)


def test_rank_truncates_to_k():
    records = [_rec(str(i), [1.0, float(i)]) for i in range(5)]
    assert len(rank([1.0, 0.0], records, k=2)) == 2
    assert len(rank([1.0, 0.0], records, k=0)) == 0
    assert len(rank([1.0, 0.0], records, k=50)) == 5


def test_rank_ties_keep_store_order():
    records = [_rec("a", [1.0, 0.0]), _rec("b", [2.0, 0.0]), _rec("c", [3.0, 0.0])]
    result = rank([1.0, 0.0], records, k=3)
    assert result.ids == ["a", "b", "c"]


def test_rank_negative_k_rejected():
    with pytest.raises(InvalidTopKError) as exc_info:
        rank([1.0], [_rec("a", [1.0])], k=-1)
    assert isinstance(exc_info.value, PreconditionError)


def test_rank_mismatch_on_any_record_raises():
    records = [_rec("ok", [1.0, 0.0]), _rec("bad", [1.0, 0.0, 0.0])]
    with pytest.raises(DimensionMismatchError):
        rank([1.0, 0.0], records, k=1)


def test_check_embeddings_returns_batch_dimension():
    assert check_embeddings([[1.0, 2.0], [3.0, 4.0]], ["a", "b"]) == 2
    assert check_embeddings([], []) is None
    assert check_embeddings([], [], dim=3) == 3


@pytest.mark.parametrize("bad", [float("nan"), float("inf"), float("-inf")])
def test_check_embeddings_rejects_non_finite(bad):
    with pytest.raises(NonFiniteEmbeddingError) as exc_info:
        check_embeddings([[1.0, 0.0], [bad, 1.0]], ["ok", "bad"])
    assert exc_info.value.doc_id == "bad"


def test_check_embeddings_rejects_mixed_dimensions():
    with pytest.raises(DimensionMismatchError):
        check_embeddings([[1.0, 0.0], [1.0, 0.0, 0.0]], ["a", "b"])
    with pytest.raises(DimensionMismatchError):
        check_embeddings([[1.0, 0.0]], ["a"], dim=3)
