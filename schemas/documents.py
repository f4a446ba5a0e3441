"""Document schemas for the vector store and ingestion."""

from __future__ import annotations

from pydantic import BaseModel, Field


class DocumentRecord(BaseModel):
    """A stored document with its embedding."""

    id: str
    text: str
    embedding: list[float]


class StoreSnapshot(BaseModel):
    """Entire persisted state of one collection."""

    documents: list[DocumentRecord] = Field(default_factory=list)


class SourceDocument(BaseModel):
    """A piece of raw text collected for indexing, before embedding."""

    source: str
    text: str
