"""Deterministic dummy LLM for tests and offline demos."""

from __future__ import annotations

import re

from config.prompts.registry import build_answer_prompt

_WORD_RE = re.compile(r"[a-z0-9]+")
_SENTENCE_RE = re.compile(r"(?<=[.!?])\s+")

NO_ANSWER = "I don't know. No relevant documents were found."


def _words(text: str) -> set[str]:
    return set(_WORD_RE.findall(text.lower()))


class DummyLLM:
    """Extractive answerer: returns the context sentence sharing most words with
    the question. Implements LLMProvider protocol."""

    provider_name: str = "dummy"
    model_id: str = "dummy-extractive-v1"

    def __init__(self, prompt_version: str = "v1") -> None:
        self.prompt_version = prompt_version
        self.last_prompt: str = ""

    async def generate(
        self,
        prompt: str,
        context: list[str],
        *,
        temperature: float = 0.0,
        max_tokens: int = 1024,
    ) -> str:
        self.last_prompt = build_answer_prompt(prompt, context, self.prompt_version)
        if not context:
            return NO_ANSWER

        question_words = _words(prompt)
        best_score = -1
        best = ""
        best_ref = 1
        for i, passage in enumerate(context, 1):
            for sentence in _SENTENCE_RE.split(passage.strip()):
                score = len(question_words & _words(sentence))
                if score > best_score:
                    best_score, best, best_ref = score, sentence, i

        return f"{best.strip()} [{best_ref}]"[: max_tokens * 4]
