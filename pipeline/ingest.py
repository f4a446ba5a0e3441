"""Collect source documents from disk and give them content-addressed ids."""

from __future__ import annotations

import hashlib
from pathlib import Path

from schemas.documents import SourceDocument

SUFFIXES = (".md", ".txt")


def content_id(source: str, text: str) -> str:
    """Stable id for a chunk: its source plus a hash of its text.

    Editing a file changes the ids of the chunks that changed, so only those
    get embedded again.
    """
    digest = hashlib.sha256(text.encode("utf-8")).hexdigest()[:16]
    return f"{source}#{digest}"


def split_text(text: str, chunk_chars: int = 1500) -> list[str]:
    """Split on blank lines and pack paragraphs into chunks of at most chunk_chars.

    A single paragraph longer than chunk_chars becomes its own chunk.
    """
    paragraphs = [p.strip() for p in text.split("\n\n") if p.strip()]
    chunks: list[str] = []
    current = ""
    for para in paragraphs:
        if current and len(current) + 2 + len(para) > chunk_chars:
            chunks.append(current)
            current = para
        else:
            current = f"{current}\n\n{para}" if current else para
    if current:
        chunks.append(current)
    return chunks


def collect_documents(data_dir: str | Path, chunk_chars: int = 1500) -> list[SourceDocument]:
    """Scan data_dir recursively for markdown and text files and chunk them."""
    base = Path(data_dir)
    docs: list[SourceDocument] = []
    if not base.exists():
        return docs

    for path in sorted(base.rglob("*")):
        if not path.is_file() or path.suffix.lower() not in SUFFIXES:
            continue
        source = path.relative_to(base).as_posix()
        text = path.read_text(encoding="utf-8")
        for chunk in split_text(text, chunk_chars):
            docs.append(SourceDocument(source=source, text=chunk))

    return docs
