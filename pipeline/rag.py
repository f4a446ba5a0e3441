"""RAG engine: embeds questions, retrieves context, and asks the LLM."""

from __future__ import annotations

import time
from typing import TYPE_CHECKING

from observability.logger import get_logger
from pipeline.ingest import content_id
from protocols.vector_store import RagResult
from schemas.answers import Answer, AnswerSource

if TYPE_CHECKING:
    from protocols.embeddings import EmbeddingProvider
    from protocols.llm import LLMProvider
    from protocols.vector_store import VectorDatabase
    from schemas.documents import SourceDocument

log = get_logger(__name__)


class RAGEngine:
    """Retrieval-Augmented Generation engine.

    The store must already be initialized; the engine never owns its lifecycle.
    """

    def __init__(
        self,
        embedder: EmbeddingProvider,
        store: VectorDatabase,
        llm: LLMProvider,
        top_k: int = 3,
        *,
        temperature: float = 0.0,
        max_tokens: int = 1024,
    ) -> None:
        self.embedder = embedder
        self.store = store
        self.llm = llm
        self.top_k = top_k
        self.temperature = temperature
        self.max_tokens = max_tokens

    async def index_documents(self, documents: list[SourceDocument]) -> int:
        """Embed and store documents not yet in the store. Returns how many were new.

        Ids are content hashes, so anything already listed by the store is
        skipped without calling the embedder.
        """
        existing = await self.store.list_ids()

        pending: dict[str, str] = {}
        for doc in documents:
            doc_id = content_id(doc.source, doc.text)
            if doc_id not in existing:
                pending[doc_id] = doc.text

        if not pending:
            log.info("rag.index.up_to_date", total=len(documents))
            return 0

        ids = list(pending)
        texts = list(pending.values())
        embeddings = await self.embedder.embed_batch(texts)
        await self.store.upsert(texts, embeddings, ids)

        log.info(
            "rag.indexed",
            new=len(ids),
            skipped=len(documents) - len(ids),
            model=getattr(self.embedder, "model_id", "unknown"),
        )
        return len(ids)

    async def retrieve(self, question: str) -> RagResult:
        """Retrieve the top_k closest documents for a question."""
        embedding = await self.embedder.embed(question)
        result = await self.store.query(embedding, self.top_k)

        log.info(
            "rag.search",
            query=question[:80],
            results_count=len(result),
            best_distance=round(result.distances[0], 4) if result.distances else None,
        )
        return result

    async def retrieve_context(self, question: str, max_chars_per_doc: int = 500) -> str:
        """Retrieve and format context string for display or logging.

        Args:
            question: Search query.
            max_chars_per_doc: Max characters per document to avoid bloating output.
        """
        result = await self.retrieve(question)
        if not result.ids:
            return "No relevant documents found."

        sections: list[str] = []
        for i, (doc_id, text, distance) in enumerate(
            zip(result.ids, result.documents, result.distances), 1
        ):
            content = text[:max_chars_per_doc]
            if len(text) > max_chars_per_doc:
                content += "..."
            sections.append(f"[{i}] {doc_id} (distance: {distance:.3f})\n{content}\n")

        return "\n---\n".join(sections)

    async def answer(self, question: str) -> Answer:
        """Answer a question with the LLM, grounded on retrieved documents."""
        result = await self.retrieve(question)

        start = time.perf_counter()
        text = await self.llm.generate(
            question,
            result.documents,
            temperature=self.temperature,
            max_tokens=self.max_tokens,
        )
        latency_ms = (time.perf_counter() - start) * 1000

        log.info(
            "rag.answered",
            provider=getattr(self.llm, "provider_name", "unknown"),
            sources=len(result),
            latency_ms=round(latency_ms, 2),
        )

        return Answer(
            question=question,
            answer=text,
            sources=[
                AnswerSource(doc_id=doc_id, distance=distance, content=doc)
                for doc_id, doc, distance in zip(result.ids, result.documents, result.distances)
            ],
            provider=getattr(self.llm, "provider_name", "unknown"),
            model_id=getattr(self.llm, "model_id", "unknown"),
            latency_ms=round(latency_ms, 2),
        )
