"""Prompt registry — loads versioned prompt templates from files."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

_PROMPTS_DIR = Path(__file__).parent

NO_CONTEXT = "(no relevant documents found)"


@lru_cache(maxsize=32)
def load_prompt(name: str, version: str = "v1") -> str:
    """Load a prompt template by name and version.

    Args:
        name: Prompt name without extension (e.g., "answer", "system")
        version: Prompt version directory (e.g., "v1")
    """
    path = _PROMPTS_DIR / version / f"{name}.txt"
    if not path.exists():
        raise FileNotFoundError(f"Prompt not found: {path}")
    return path.read_text(encoding="utf-8")


def format_prompt(name: str, version: str = "v1", **kwargs: str) -> str:
    """Load and format a prompt template with the given variables."""
    template = load_prompt(name, version)
    return template.format(**kwargs)


def build_answer_prompt(question: str, context: list[str], version: str = "v1") -> str:
    """Number the context passages and fill the answer template."""
    if context:
        passages = "\n\n".join(f"[{i}] {text}" for i, text in enumerate(context, 1))
    else:
        passages = NO_CONTEXT
    return format_prompt("answer", version, question=question, context=passages)
