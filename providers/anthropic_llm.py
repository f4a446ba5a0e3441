"""Claude API provider with retry and observability."""

from __future__ import annotations

import time

import anthropic
from tenacity import retry, stop_after_attempt, wait_exponential

from config.prompts.registry import build_answer_prompt, load_prompt
from observability.logger import get_logger

log = get_logger(__name__)


class AnthropicLLM:
    """Claude LLM provider via Anthropic SDK. Implements LLMProvider protocol."""

    provider_name: str = "anthropic"

    def __init__(
        self,
        api_key: str,
        model: str = "claude-sonnet-4-20250514",
        *,
        prompt_version: str = "v1",
    ) -> None:
        self.model_id = model
        self.prompt_version = prompt_version
        self._client = anthropic.AsyncAnthropic(api_key=api_key)

    @retry(
        stop=stop_after_attempt(2),
        wait=wait_exponential(multiplier=1, min=1, max=5),
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

        message = await self._client.messages.create(
            model=self.model_id,
            max_tokens=max_tokens,
            temperature=temperature,
            system=load_prompt("system", self.prompt_version),
            messages=[
                {
                    "role": "user",
                    "content": build_answer_prompt(prompt, context, self.prompt_version),
                }
            ],
        )

        latency_ms = (time.perf_counter() - start) * 1000
        text = "".join(
            block.text for block in message.content if getattr(block, "type", "") == "text"
        ).strip()

        log.info(
            "llm.generate.success",
            provider=self.provider_name,
            model=self.model_id,
            input_tokens=message.usage.input_tokens,
            output_tokens=message.usage.output_tokens,
            latency_ms=round(latency_ms, 2),
        )
        return text
