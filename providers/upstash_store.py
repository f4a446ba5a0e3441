"""Upstash Vector backend (hosted, serverless)."""

from __future__ import annotations

from typing import Any

from tenacity import retry, stop_after_attempt, wait_exponential
from upstash_vector import AsyncIndex

from observability.logger import get_logger
from protocols.errors import (
    InitializationError,
    InvalidTopKError,
    LengthMismatchError,
    NotInitializedError,
)
from protocols.vector_store import RagResult
from providers.similarity import check_embeddings

log = get_logger(__name__)

_RANGE_PAGE_SIZE = 1000


class UpstashVectorDatabase:
    """Stores documents in an Upstash Vector index. Implements VectorDatabase protocol.

    Document text travels as the ``document`` metadata field. Scores returned by
    Upstash are similarities, so distance is ``1 - score``.
    """

    def __init__(
        self,
        url: str = "",
        token: str = "",
        *,
        index: Any | None = None,
    ) -> None:
        self.url = url
        self.token = token
        self._index = index

    async def initialize(self) -> None:
        if self._index is None:
            if not self.url or not self.token:
                raise InitializationError("Upstash Vector URL and TOKEN are required")
            self._index = AsyncIndex(url=self.url, token=self.token)
        log.info("upstash.initialized", url=self.url)

    async def upsert(
        self,
        documents: list[str],
        embeddings: list[list[float]],
        ids: list[str],
    ) -> None:
        if not (len(documents) == len(embeddings) == len(ids)):
            raise LengthMismatchError(len(documents), len(embeddings), len(ids))
        check_embeddings(embeddings, ids)
        index = self._require_index()

        vectors = [
            (doc_id, list(embedding), {"document": text})
            for doc_id, text, embedding in zip(ids, documents, embeddings)
        ]
        await self._upsert(index, vectors)
        log.info("upstash.upserted", added=len(vectors))

    async def query(self, query_embedding: list[float], k: int = 5) -> RagResult:
        index = self._require_index()
        if k < 0:
            raise InvalidTopKError(k)
        if k == 0:
            return RagResult()

        results = await self._query(index, query_embedding, k)
        return RagResult(
            documents=[(r.metadata or {}).get("document", "") for r in results],
            ids=[str(r.id) for r in results],
            distances=[1 - (r.score or 0.0) for r in results],
        )

    async def list_ids(self) -> set[str]:
        """Page through the whole index with range() and collect every id."""
        index = self._require_index()
        ids: set[str] = set()
        cursor = ""
        while True:
            page = await self._range(index, cursor)
            ids.update(str(v.id) for v in page.vectors)
            cursor = page.next_cursor
            if not cursor:
                break
        return ids

    def _require_index(self) -> Any:
        if self._index is None:
            raise NotInitializedError("Upstash Vector not initialized")
        return self._index

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=1, max=8),
        reraise=True,
    )
    async def _upsert(self, index: Any, vectors: list[tuple]) -> None:
        await index.upsert(vectors=vectors)

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=1, max=8),
        reraise=True,
    )
    async def _query(self, index: Any, vector: list[float], top_k: int) -> list:
        return await index.query(vector=vector, top_k=top_k, include_metadata=True)

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=1, max=8),
        reraise=True,
    )
    async def _range(self, index: Any, cursor: str) -> Any:
        return await index.range(cursor=cursor, limit=_RANGE_PAGE_SIZE)
