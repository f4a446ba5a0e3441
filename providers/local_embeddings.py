"""Hashed bag-of-words embeddings for demo and testing (no external API needed)."""

from __future__ import annotations

import hashlib
import math
import re

EMBEDDING_DIM = 256

_TOKEN_RE = re.compile(r"[a-z0-9]+")


class LocalEmbeddings:
    """Deterministic embeddings via the hashing trick. Implements EmbeddingProvider protocol.

    Texts sharing words land close together, so retrieval over a small corpus
    behaves sensibly without a model.
    """

    model_id: str = "local-hash-bow"

    def __init__(self, dim: int = EMBEDDING_DIM):
        self.dim = dim

    async def embed(self, text: str) -> list[float]:
        return self._hash_embed(text)

    async def embed_batch(self, texts: list[str]) -> list[list[float]]:
        return [self._hash_embed(t) for t in texts]

    def _hash_embed(self, text: str) -> list[float]:
        """Project each token onto one signed bucket, then L2-normalize.

        Text without tokens yields the zero vector.
        """
        vec = [0.0] * self.dim
        for token in _TOKEN_RE.findall(text.lower()):
            h = hashlib.sha256(token.encode()).digest()
            bucket = int.from_bytes(h[:4], "big") % self.dim
            sign = 1.0 if h[4] & 1 else -1.0
            vec[bucket] += sign

        norm = math.sqrt(sum(x * x for x in vec))
        if norm == 0:
            return vec
        return [x / norm for x in vec]
