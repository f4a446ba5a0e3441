"""Vector store protocol for RAG."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from pydantic import BaseModel, Field, model_validator


class RagResult(BaseModel):
    """Ranked query results as three parallel lists (closest first)."""

    documents: list[str] = Field(default_factory=list)
    ids: list[str] = Field(default_factory=list)
    distances: list[float] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_parallel(self) -> RagResult:
        if not (len(self.documents) == len(self.ids) == len(self.distances)):
            raise ValueError("documents, ids and distances must have the same length")
        return self

    def __len__(self) -> int:
        return len(self.ids)


@runtime_checkable
class VectorDatabase(Protocol):
    """Any class that can store documents with embeddings and rank them by similarity."""

    async def initialize(self) -> None: ...

    async def upsert(
        self,
        documents: list[str],
        embeddings: list[list[float]],
        ids: list[str],
    ) -> None: ...

    async def query(
        self, query_embedding: list[float], k: int = 5,
    ) -> RagResult: ...

    async def list_ids(self) -> set[str]: ...
