"""Environment-driven configuration using Pydantic Settings."""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """All configuration comes from environment variables / .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # --- Vector store ---
    vector_db_type: Literal["simple", "upstash"] = "simple"
    vector_db_file: str = "simple_vector_db.json"
    upstash_vector_url: str = ""
    upstash_vector_token: str = ""

    # --- Embeddings ---
    embedding_provider: Literal["local", "openai", "ollama"] = "local"
    embedding_model: str = "text-embedding-3-small"
    embedding_dim: int = 256

    # --- LLM ---
    llm_provider: Literal["dummy", "openai", "groq", "ollama", "anthropic"] = "dummy"
    llm_model: str = ""
    openai_api_key: str = ""
    groq_api_key: str = ""
    anthropic_api_key: str = ""
    ollama_base_url: str = "http://localhost:11434/v1"
    llm_temperature: float = 0.0
    llm_max_tokens: int = 1024

    # --- RAG ---
    rag_top_k: int = 3
    rag_data_dir: str = "rag_data"
    chunk_chars: int = 1500
    prompt_version: str = "v1"

    # --- Observability ---
    log_level: str = "INFO"
    log_format: Literal["json", "console"] = "json"

    @property
    def default_llm_model(self) -> str:
        if self.llm_model:
            return self.llm_model
        return {
            "openai": "gpt-4o-mini",
            "groq": "llama-3.1-8b-instant",
            "ollama": "llama3.2",
            "anthropic": "claude-sonnet-4-20250514",
        }.get(self.llm_provider, "dummy-extractive-v1")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
