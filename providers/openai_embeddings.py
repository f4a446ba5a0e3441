"""Embeddings from any OpenAI-compatible endpoint (OpenAI, Ollama)."""

from __future__ import annotations

import time

from openai import AsyncOpenAI
from tenacity import retry, stop_after_attempt, wait_exponential

from observability.logger import get_logger

log = get_logger(__name__)


class OpenAIEmbeddings:
    """Remote embedding model. Implements EmbeddingProvider protocol."""

    def __init__(
        self,
        api_key: str,
        model: str = "text-embedding-3-small",
        *,
        base_url: str | None = None,
        batch_size: int = 64,
    ) -> None:
        self.model_id = model
        self.batch_size = batch_size
        self._client = AsyncOpenAI(api_key=api_key, base_url=base_url)

    async def embed(self, text: str) -> list[float]:
        vectors = await self._embed_chunk([text])
        return vectors[0]

    async def embed_batch(self, texts: list[str]) -> list[list[float]]:
        vectors: list[list[float]] = []
        for i in range(0, len(texts), self.batch_size):
            vectors.extend(await self._embed_chunk(texts[i : i + self.batch_size]))
        return vectors

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=1, max=8),
        reraise=True,
    )
    async def _embed_chunk(self, texts: list[str]) -> list[list[float]]:
        start = time.perf_counter()
        response = await self._client.embeddings.create(model=self.model_id, input=texts)
        latency_ms = (time.perf_counter() - start) * 1000

        # The API may return items out of order; index says where each belongs
        data = sorted(response.data, key=lambda d: d.index)

        log.info(
            "embeddings.batch.success",
            model=self.model_id,
            count=len(texts),
            latency_ms=round(latency_ms, 2),
        )
        return [list(d.embedding) for d in data]
