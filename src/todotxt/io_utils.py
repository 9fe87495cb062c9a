"""Wrappers for task-file I/O with consistent encoding (UTF-8)."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path

PathLike = Path | str


def read_lines(path: PathLike) -> list[str]:
    """Read *path* as UTF-8 and return its lines without line terminators.

    Only ``\\n`` ends a line (a preceding ``\\r`` is dropped). Other Unicode
    line boundaries such as form feed or U+2028 stay inside the task text.
    """
    p = path if isinstance(path, Path) else Path(path)
    with p.open(encoding="utf-8", newline="") as f:
        text = f.read()
    if not text:
        return []
    if text.endswith("\n"):
        text = text[:-1]
    return [line.removesuffix("\r") for line in text.split("\n")]


def serialize_lines(lines: list[str]) -> str:
    """Join *lines* into file content, one newline-terminated line each."""
    return "".join(f"{line}\n" for line in lines)


def atomic_write_text(path: PathLike, text: str) -> None:
    """Replace the contents of *path* with *text* in one rename.

    The temporary file lives next to the target so ``os.replace`` never
    crosses a filesystem boundary.
    """
    p = path if isinstance(path, Path) else Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{p.name}.", suffix=".tmp", dir=str(p.parent))
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as tmp:
            tmp.write(text)
            tmp.flush()
            os.fsync(tmp.fileno())
        os.replace(tmp_name, p)
    finally:
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)


def write_lines(path: PathLike, lines: list[str]) -> None:
    """Atomically rewrite *path* with *lines*."""
    atomic_write_text(path, serialize_lines(lines))
