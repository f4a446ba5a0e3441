"""Cosine similarity scoring and top-K ranking over stored records."""

from __future__ import annotations

import math
from collections.abc import Sequence

from protocols.errors import (
    DimensionMismatchError,
    InvalidTopKError,
    NonFiniteEmbeddingError,
)
from protocols.vector_store import RagResult
from schemas.documents import DocumentRecord


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """Cosine similarity of two equal-length vectors.

    Computed in one pass with a running dot product and two running sums of
    squares. Returns 0.0 when either vector has zero norm.

    Raises:
        DimensionMismatchError: If the vectors differ in length.
    """
    if len(a) != len(b):
        raise DimensionMismatchError(len(a), len(b))

    dot = 0.0
    sum_sq_a = 0.0
    sum_sq_b = 0.0
    for x, y in zip(a, b):
        dot += x * y
        sum_sq_a += x * x
        sum_sq_b += y * y

    norm_a = math.sqrt(sum_sq_a)
    norm_b = math.sqrt(sum_sq_b)
    if norm_a == 0 or norm_b == 0:
        return 0.0

    return dot / (norm_a * norm_b)


def rank(
    query_embedding: Sequence[float],
    records: Sequence[DocumentRecord],
    k: int,
) -> RagResult:
    """Score every record against the query and keep the k most similar.

    Ties keep their store order (list.sort is stable).
    """
    if k < 0:
        raise InvalidTopKError(k)
    if not records:
        return RagResult()

    scored = [
        (cosine_similarity(query_embedding, rec.embedding), rec)
        for rec in records
    ]
    scored.sort(key=lambda item: item[0], reverse=True)
    top = scored[:k]

    return RagResult(
        documents=[rec.text for _, rec in top],
        ids=[rec.id for _, rec in top],
        distances=[1 - sim for sim, _ in top],
    )


def check_embeddings(
    embeddings: Sequence[Sequence[float]],
    ids: Sequence[str],
    dim: int | None = None,
) -> int | None:
    """Reject a batch that would poison the collection.

    Every vector must be finite and share one length, equal to dim when the
    collection already has one. Returns the batch dimensionality (None for an
    empty batch).
    """
    for doc_id, embedding in zip(ids, embeddings):
        if not all(math.isfinite(x) for x in embedding):
            raise NonFiniteEmbeddingError(doc_id)
        if dim is None:
            dim = len(embedding)
        elif len(embedding) != dim:
            raise DimensionMismatchError(dim, len(embedding))
    return dim
