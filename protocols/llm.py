"""LLM provider protocol — structural subtyping, no ABC needed."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class LLMProvider(Protocol):
    """Any class that implements generate() can be used to answer questions."""

    provider_name: str
    model_id: str

    async def generate(
        self,
        prompt: str,
        context: list[str],
        *,
        temperature: float = 0.0,
        max_tokens: int = 1024,
    ) -> str:
        """Answer prompt using the retrieved context passages."""
        ...
