"""In-memory vector store persisted to a single JSON file.

Brute-force cosine similarity over every record. Meant for local development
and demos with a few thousand documents at most.
"""

from __future__ import annotations

import asyncio
from pathlib import Path

from observability.logger import get_logger
from protocols.errors import (
    LengthMismatchError,
    NotInitializedError,
    PersistenceError,
)
from protocols.vector_store import RagResult
from providers.similarity import check_embeddings, rank
from providers.snapshot import load_snapshot, save_snapshot
from schemas.documents import DocumentRecord

log = get_logger(__name__)

DEFAULT_DB_FILE = "simple_vector_db.json"


class SimpleVectorDatabase:
    """Single-collection document store. Implements VectorDatabase protocol.

    All reads and writes of the collection are serialized by one asyncio lock.
    """

    def __init__(self, path: Path | str = DEFAULT_DB_FILE) -> None:
        self.path = Path(path)
        self._documents: list[DocumentRecord] = []
        self._lock = asyncio.Lock()
        self._initialized = False

    def __len__(self) -> int:
        return len(self._documents)

    async def initialize(self) -> None:
        async with self._lock:
            records = load_snapshot(self.path)
            if records is None:
                self._documents = []
                log.info("store.initialized", file=str(self.path), documents=0, empty=True)
            else:
                self._documents = records
                log.info("store.initialized", file=str(self.path), documents=len(records))
            self._initialized = True

    async def upsert(
        self,
        documents: list[str],
        embeddings: list[list[float]],
        ids: list[str],
    ) -> None:
        """Insert or replace records by id, then rewrite the snapshot.

        A replaced record is removed and the new one appended at the end.
        Vectors must be finite and match the dimensionality of the records
        that stay in the store; a rejected batch leaves memory and disk untouched.
        If the snapshot write fails, PersistenceError propagates and the
        in-memory collection keeps the new records.
        """
        if not (len(documents) == len(embeddings) == len(ids)):
            raise LengthMismatchError(len(documents), len(embeddings), len(ids))

        async with self._lock:
            self._check_initialized()
            replacing = set(ids)
            kept = next((d for d in self._documents if d.id not in replacing), None)
            check_embeddings(embeddings, ids, len(kept.embedding) if kept else None)

            replaced = 0
            for doc_id, text, embedding in zip(ids, documents, embeddings):
                before = len(self._documents)
                self._documents = [d for d in self._documents if d.id != doc_id]
                replaced += before - len(self._documents)
                self._documents.append(
                    DocumentRecord(id=doc_id, text=text, embedding=list(embedding))
                )

            try:
                save_snapshot(self.path, self._documents)
            except PersistenceError as exc:
                log.error("store.save_failed", file=str(self.path), error=str(exc))
                raise
            total = len(self._documents)

        log.info("store.upserted", added=len(ids), replaced=replaced, total=total)

    async def query(self, query_embedding: list[float], k: int = 5) -> RagResult:
        async with self._lock:
            self._check_initialized()
            return rank(query_embedding, self._documents, k)

    async def list_ids(self) -> set[str]:
        async with self._lock:
            self._check_initialized()
            return {d.id for d in self._documents}

    def _check_initialized(self) -> None:
        if not self._initialized:
            raise NotInitializedError("Simple vector DB not initialized")
