"""Build the configured providers once at process start."""

from __future__ import annotations

from typing import TYPE_CHECKING

from providers.anthropic_llm import AnthropicLLM
from providers.dummy_llm import DummyLLM
from providers.local_embeddings import LocalEmbeddings
from providers.openai_embeddings import OpenAIEmbeddings
from providers.openai_llm import GROQ_BASE_URL, OpenAILLM
from providers.simple_store import SimpleVectorDatabase
from providers.upstash_store import UpstashVectorDatabase

if TYPE_CHECKING:
    from config.settings import Settings
    from protocols.embeddings import EmbeddingProvider
    from protocols.llm import LLMProvider
    from protocols.vector_store import VectorDatabase


def create_vector_database(settings: Settings) -> VectorDatabase:
    if settings.vector_db_type == "upstash":
        return UpstashVectorDatabase(
            url=settings.upstash_vector_url,
            token=settings.upstash_vector_token,
        )
    return SimpleVectorDatabase(path=settings.vector_db_file)


def create_embedder(settings: Settings) -> EmbeddingProvider:
    if settings.embedding_provider == "openai":
        return OpenAIEmbeddings(
            api_key=settings.openai_api_key,
            model=settings.embedding_model,
        )
    if settings.embedding_provider == "ollama":
        # Ollama ignores the key but the client refuses an empty one
        return OpenAIEmbeddings(
            api_key="ollama",
            model=settings.embedding_model,
            base_url=settings.ollama_base_url,
        )
    return LocalEmbeddings(dim=settings.embedding_dim)


def create_llm(settings: Settings) -> LLMProvider:
    provider = settings.llm_provider
    model = settings.default_llm_model
    version = settings.prompt_version

    if provider == "anthropic":
        return AnthropicLLM(
            api_key=settings.anthropic_api_key, model=model, prompt_version=version,
        )
    if provider == "openai":
        return OpenAILLM(
            api_key=settings.openai_api_key, model=model, prompt_version=version,
        )
    if provider == "groq":
        return OpenAILLM(
            api_key=settings.groq_api_key,
            model=model,
            base_url=GROQ_BASE_URL,
            provider_name="groq",
            prompt_version=version,
        )
    if provider == "ollama":
        return OpenAILLM(
            api_key="ollama",
            model=model,
            base_url=settings.ollama_base_url,
            provider_name="ollama",
            prompt_version=version,
        )
    return DummyLLM(prompt_version=version)
