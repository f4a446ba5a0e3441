"""Index the documents under the data directory into the configured vector store."""

from __future__ import annotations

import asyncio

from config.settings import Settings, get_settings
from observability.logger import setup_logging
from pipeline.ingest import collect_documents
from pipeline.rag import RAGEngine
from providers.factory import create_embedder, create_llm, create_vector_database


async def build_engine(settings: Settings) -> RAGEngine:
    """Construct and initialize every provider for one process."""
    store = create_vector_database(settings)
    await store.initialize()
    return RAGEngine(
        embedder=create_embedder(settings),
        store=store,
        llm=create_llm(settings),
        top_k=settings.rag_top_k,
        temperature=settings.llm_temperature,
        max_tokens=settings.llm_max_tokens,
    )


async def seed_rag(settings: Settings) -> tuple[RAGEngine, int]:
    """Index all documents and return the engine + count of newly indexed chunks."""
    engine = await build_engine(settings)
    docs = collect_documents(settings.rag_data_dir, chunk_chars=settings.chunk_chars)
    count = await engine.index_documents(docs)
    return engine, count


async def main() -> None:
    settings = get_settings()
    setup_logging(level=settings.log_level, fmt=settings.log_format)

    print(f"📚 Indexing documents from {settings.rag_data_dir}...")
    _, count = await seed_rag(settings)
    print(f"✅ {count} new chunks indexed into the {settings.vector_db_type} vector store")


if __name__ == "__main__":
    asyncio.run(main())
