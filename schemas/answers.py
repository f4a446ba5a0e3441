"""Answer schemas returned by the RAG engine."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class AnswerSource(BaseModel):
    """A retrieved document that was handed to the LLM as context."""

    doc_id: str
    distance: float
    content: str = ""


class Answer(BaseModel):
    """Generated answer for a single question."""

    model_config = ConfigDict(protected_namespaces=())

    question: str
    answer: str
    sources: list[AnswerSource] = Field(default_factory=list)
    provider: str = ""  # "dummy", "openai", "groq", "ollama", "anthropic"
    model_id: str = ""
    latency_ms: float = 0.0
    created_at: datetime = Field(default_factory=datetime.utcnow)
