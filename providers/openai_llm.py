"""Chat completion provider for OpenAI-compatible APIs (OpenAI, Groq, Ollama)."""

from __future__ import annotations

import time

from openai import AsyncOpenAI
from tenacity import retry, stop_after_attempt, wait_exponential

from config.prompts.registry import build_answer_prompt, load_prompt
from observability.logger import get_logger

log = get_logger(__name__)

GROQ_BASE_URL = "https://api.groq.com/openai/v1"


class OpenAILLM:
    """Answers questions through a chat completions endpoint. Implements LLMProvider protocol.

    Pass ``base_url`` to target Groq or a local Ollama server instead of OpenAI.
    """

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o-mini",
        *,
        base_url: str | None = None,
        provider_name: str = "openai",
        prompt_version: str = "v1",
    ) -> None:
        self.model_id = model
        self.provider_name = provider_name
        self.prompt_version = prompt_version
        self._client = AsyncOpenAI(api_key=api_key, base_url=base_url)

    @retry(
        stop=stop_after_attempt(2),
        wait=wait_exponential(multiplier=1, min=1, max=8),
        reraise=True,
    )
    async def generate(
        self,
        prompt: str,
        context: list[str],
        *,
        temperature: float = 0.0,
        max_tokens: int = 1024,
    ) -> str:
        start = time.perf_counter()

        response = await self._client.chat.completions.create(
            model=self.model_id,
            temperature=temperature,
            max_tokens=max_tokens,
            messages=[
                {"role": "system", "content": load_prompt("system", self.prompt_version)},
                {
                    "role": "user",
                    "content": build_answer_prompt(prompt, context, self.prompt_version),
                },
            ],
        )

        latency_ms = (time.perf_counter() - start) * 1000
        text = (response.choices[0].message.content or "").strip()

        log.info(
            "llm.generate.success",
            provider=self.provider_name,
            model=self.model_id,
            input_tokens=response.usage.prompt_tokens if response.usage else 0,
            output_tokens=response.usage.completion_tokens if response.usage else 0,
            latency_ms=round(latency_ms, 2),
        )
        return text
