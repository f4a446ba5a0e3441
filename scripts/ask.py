"""Ask a question against the indexed documents and print the answer with its sources."""

from __future__ import annotations

import asyncio
import sys
from uuid import uuid4

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from config.settings import get_settings
from observability.logger import bind_request, setup_logging
from protocols.errors import VectorStoreError
from schemas.answers import Answer
from scripts.seed_rag import build_engine, seed_rag

console = Console()


def build_sources_table(answer: Answer) -> Table:
    table = Table(title="📄 Sources", show_lines=True)
    table.add_column("#", style="dim", width=3)
    table.add_column("Document", style="cyan")
    table.add_column("Distance", justify="right", style="green")
    table.add_column("Preview", max_width=60)

    for i, src in enumerate(answer.sources, 1):
        preview = src.content[:80] + ("..." if len(src.content) > 80 else "")
        table.add_row(str(i), src.doc_id, f"{src.distance:.3f}", preview)

    return table


def print_answer(answer: Answer) -> None:
    console.print(
        Panel(
            answer.answer or "[dim](empty answer)[/dim]",
            title=f"💬 {answer.question}",
            subtitle=f"{answer.provider} · {answer.model_id} · {answer.latency_ms:.0f}ms",
            border_style="cyan",
        )
    )
    if answer.sources:
        console.print(build_sources_table(answer))
    else:
        console.print("[yellow]No documents retrieved. Run scripts/seed_rag.py first.[/yellow]")


async def ask(question: str, top_k: int | None, seed: bool) -> Answer:
    settings = get_settings()
    if seed:
        engine, _ = await seed_rag(settings)
    else:
        engine = await build_engine(settings)
    if top_k is not None:
        engine.top_k = top_k
    return await engine.answer(question)


# ── CLI ──────────────────────────────────────────────────────────────────

@click.command("ask")
@click.argument("question", nargs=-1, required=True)
@click.option("--top-k", "-k", type=click.IntRange(min=0), default=None, help="Documents to retrieve (default: RAG_TOP_K).")
@click.option("--seed", is_flag=True, help="Index the data directory before answering.")
def main(question: tuple[str, ...], top_k: int | None, seed: bool) -> None:
    """Answer QUESTION using the configured vector store and LLM."""
    settings = get_settings()
    setup_logging(level=settings.log_level, fmt=settings.log_format)
    bind_request(question_id=str(uuid4()))

    try:
        answer = asyncio.run(ask(" ".join(question), top_k, seed))
    except VectorStoreError as exc:
        console.print(f"[bold red]Vector store error:[/bold red] {exc}")
        sys.exit(1)

    print_answer(answer)


if __name__ == "__main__":
    main()
