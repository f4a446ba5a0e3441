"""Shared fixtures for tests — all using local/in-memory providers."""

from __future__ import annotations

import pytest

from pipeline.rag import RAGEngine
from providers.dummy_llm import DummyLLM
from providers.local_embeddings import LocalEmbeddings
from providers.simple_store import SimpleVectorDatabase
from schemas.documents import SourceDocument


class CountingEmbeddings(LocalEmbeddings):
    """LocalEmbeddings that remembers every text it was asked to embed."""

    def __init__(self, dim: int = 256):
        super().__init__(dim=dim)
        self.embedded: list[str] = []

    async def embed_batch(self, texts: list[str]) -> list[list[float]]:
        self.embedded.extend(texts)
        return await super().embed_batch(texts)


@pytest.fixture
def dummy_llm() -> DummyLLM:
    return DummyLLM()


@pytest.fixture
def embedder() -> CountingEmbeddings:
    return CountingEmbeddings()


@pytest.fixture
def db_path(tmp_path):
    return tmp_path / "simple_vector_db.json"


@pytest.fixture
async def vector_store(db_path) -> SimpleVectorDatabase:
    store = SimpleVectorDatabase(path=db_path)
    await store.initialize()
    return store


@pytest.fixture
def rag_engine(embedder, vector_store, dummy_llm) -> RAGEngine:
    return RAGEngine(embedder=embedder, store=vector_store, llm=dummy_llm, top_k=3)


@pytest.fixture
def sample_documents() -> list[SourceDocument]:
    return [
        SourceDocument(
            source="faq/shipping.md",
            text=(
                "Orders ship within two business days. "
                "Express shipping delivers overnight for an extra fee."
            ),
        ),
        SourceDocument(
            source="faq/returns.md",
            text=(
                "Returns are accepted within thirty days of delivery. "
                "Refunds go back to the original payment method."
            ),
        ),
        SourceDocument(
            source="faq/accounts.md",
            text=(
                "You can reset your password from the login page. "
                "Accounts are locked after five failed attempts."
            ),
        ),
    ]
