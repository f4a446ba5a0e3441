"""Tests for the Upstash backend against an in-memory fake index."""

from __future__ import annotations

from types import SimpleNamespace

import pytest

from protocols.errors import (
    DimensionMismatchError,
    InitializationError,
    InvalidTopKError,
    LengthMismatchError,
    NonFiniteEmbeddingError,
    NotInitializedError,
)
from protocols.vector_store import VectorDatabase
from providers.upstash_store import UpstashVectorDatabase


class FakeIndex:
    """Mimics the parts of upstash_vector.AsyncIndex the backend uses."""

    def __init__(self, page_size: int = 2) -> None:
        self.vectors: dict[str, tuple[list[float], dict]] = {}
        self.page_size = page_size
        self.queries: list[dict] = []

    async def upsert(self, vectors):
        for doc_id, vector, metadata in vectors:
            self.vectors[doc_id] = (vector, metadata)

    async def query(self, vector, top_k, include_metadata):
        self.queries.append({"vector": vector, "top_k": top_k})
        hits = [
            SimpleNamespace(id=doc_id, score=0.9 - 0.1 * i, metadata=meta)
            for i, (doc_id, (_, meta)) in enumerate(self.vectors.items())
        ]
        return hits[:top_k]

    async def range(self, cursor, limit):
        ids = sorted(self.vectors)
        start = int(cursor or 0)
        end = start + self.page_size
        next_cursor = str(end) if end < len(ids) else ""
        return SimpleNamespace(
            next_cursor=next_cursor,
            vectors=[SimpleNamespace(id=i) for i in ids[start:end]],
        )


@pytest.fixture
def fake_index() -> FakeIndex:
    return FakeIndex()


@pytest.fixture
async def upstash_store(fake_index) -> UpstashVectorDatabase:
    store = UpstashVectorDatabase(index=fake_index)
    await store.initialize()
    return store


def test_implements_protocol():
    assert isinstance(UpstashVectorDatabase(), VectorDatabase)


async def test_initialize_requires_credentials():
    with pytest.raises(InitializationError):
        await UpstashVectorDatabase(url="https://example.upstash.io").initialize()


async def test_operations_before_initialize_rejected():
    store = UpstashVectorDatabase(url="u", token="t")
    with pytest.raises(NotInitializedError):
        await store.query([1.0], 1)
    with pytest.raises(NotInitializedError):
        await store.list_ids()


async def test_upsert_stores_text_as_metadata(upstash_store, fake_index):
    await upstash_store.upsert(["alpha", "beta"], [[1.0, 0.0], [0.0, 1.0]], ["a", "b"])
    assert fake_index.vectors["a"] == ([1.0, 0.0], {"document": "alpha"})
    assert fake_index.vectors["b"] == ([0.0, 1.0], {"document": "beta"})


async def test_upsert_length_mismatch_rejected(upstash_store, fake_index):
    with pytest.raises(LengthMismatchError):
        await upstash_store.upsert(["alpha"], [], ["a"])
    assert fake_index.vectors == {}


async def test_query_maps_scores_to_distances(upstash_store, fake_index):
    await upstash_store.upsert(["alpha", "beta"], [[1.0, 0.0], [0.0, 1.0]], ["a", "b"])
    fake_index.vectors["c"] = ([1.0, 1.0], {})

    result = await upstash_store.query([1.0, 0.0], 3)

    assert result.ids == ["a", "b", "c"]
    assert result.documents == ["alpha", "beta", ""]
    assert result.distances == pytest.approx([0.1, 0.2, 0.3])
    assert fake_index.queries[-1]["top_k"] == 3


async def test_query_k_zero_skips_remote_call(upstash_store, fake_index):
    result = await upstash_store.query([1.0, 0.0], 0)
    assert len(result) == 0
    assert fake_index.queries == []


async def test_list_ids_pages_through_range(upstash_store):
    ids = [f"doc-{i}" for i in range(5)]
    await upstash_store.upsert(ids, [[float(i)] for i in range(5)], ids)
    assert await upstash_store.list_ids() == set(ids)


async def test_list_ids_empty_index(upstash_store):
    assert await upstash_store.list_ids() == set()


async def test_negative_k_rejected_without_remote_call(upstash_store, fake_index):
    with pytest.raises(InvalidTopKError):
        await upstash_store.query([1.0, 0.0], -1)
    assert fake_index.queries == []


async def test_invalid_batches_never_reach_index(upstash_store, fake_index):
    with pytest.raises(NonFiniteEmbeddingError):
        await upstash_store.upsert(["alpha"], [[float("nan"), 0.0]], ["a"])
    with pytest.raises(DimensionMismatchError):
        await upstash_store.upsert(["alpha", "beta"], [[1.0, 0.0], [1.0]], ["a", "b"])
    assert fake_index.vectors == {}
