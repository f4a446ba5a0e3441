"""JSON snapshot codec for the simple vector store.

The file holds one object, ``{"documents": [{"id", "text", "embedding"}, ...]}``,
indented for humans. It is the whole durable state of a collection and is
always rewritten in full.
"""

from __future__ import annotations

import os
import stat
import tempfile
from pathlib import Path

from pydantic import ValidationError

from protocols.errors import InitializationError, PersistenceError
from schemas.documents import DocumentRecord, StoreSnapshot


def load_snapshot(path: Path) -> list[DocumentRecord] | None:
    """Read records from path. Returns None when the file does not exist."""
    if not path.exists():
        return None
    try:
        raw = path.read_text(encoding="utf-8")
        return StoreSnapshot.model_validate_json(raw).documents
    except (OSError, UnicodeDecodeError, ValidationError) as exc:
        raise InitializationError(f"Cannot load snapshot {path}: {exc}") from exc


def _target_mode(path: Path) -> int:
    """Permission bits for the snapshot: the existing file's, else 0o666 minus umask."""
    try:
        return stat.S_IMODE(path.stat().st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


def save_snapshot(path: Path, records: list[DocumentRecord]) -> None:
    """Overwrite path with all records (atomic write: temp file + rename).

    mkstemp creates the temp file as 0o600, so it is chmod-ed before the rename.
    """
    payload = StoreSnapshot(documents=records).model_dump_json(indent=2)
    tmp: str | None = None
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(dir=path.parent, suffix=".tmp")
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(payload)
        os.chmod(tmp, _target_mode(path))
        os.replace(tmp, path)
    except OSError as exc:
        if tmp is not None and os.path.exists(tmp):
            os.unlink(tmp)
        raise PersistenceError(f"Cannot write snapshot {path}: {exc}") from exc
