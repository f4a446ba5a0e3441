"""Exceptions raised by vector store backends."""

from __future__ import annotations


class VectorStoreError(Exception):
    """Base exception for all vector store errors."""


class InitializationError(VectorStoreError):
    """Store could not be brought up.

    Raised when:
    - The snapshot file exists but cannot be read or parsed
    - The snapshot does not match the expected schema
    - A remote backend is missing required configuration
    """


class NotInitializedError(VectorStoreError):
    """An operation was attempted before initialize() completed."""


class PreconditionError(VectorStoreError):
    """Caller violated the store contract."""


class LengthMismatchError(PreconditionError):
    """documents, embeddings and ids passed to upsert differ in length."""

    def __init__(self, documents: int, embeddings: int, ids: int) -> None:
        super().__init__(
            "documents, embeddings and ids must have the same length: "
            f"{documents} != {embeddings} != {ids}"
        )
        self.lengths = (documents, embeddings, ids)


class DimensionMismatchError(PreconditionError):
    """Two vectors compared for similarity have different lengths."""

    def __init__(self, expected: int, actual: int) -> None:
        super().__init__(f"Vector dimensions must match: {expected} != {actual}")
        self.expected = expected
        self.actual = actual


class NonFiniteEmbeddingError(PreconditionError):
    """An embedding contains NaN or infinity."""

    def __init__(self, doc_id: str) -> None:
        super().__init__(f"Embedding for {doc_id!r} contains NaN or infinite values")
        self.doc_id = doc_id


class InvalidTopKError(PreconditionError):
    """Requested result count is negative."""

    def __init__(self, k: int) -> None:
        super().__init__(f"k must be >= 0, got {k}")
        self.k = k


class PersistenceError(VectorStoreError):
    """Snapshot write failed. The in-memory collection is already mutated."""
