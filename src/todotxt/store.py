"""Store adapters: where task lines are read from and written back to."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path

from todotxt import log
from todotxt.errors import SelectionError, StoreError
from todotxt.io_utils import PathLike, read_lines, write_lines


class StoreBase(ABC):
    """Abstract line store.  Subclasses implement ``read`` and ``write``.

    Every operation reads a fresh list, transforms it and writes the whole
    list back; stores never hand out shared mutable state.
    """

    name: str = "base"

    @abstractmethod
    def read(self, path: PathLike) -> list[str]:
        """Return the lines stored at *path*."""
        ...

    @abstractmethod
    def write(self, path: PathLike, lines: list[str]) -> None:
        """Replace the full contents at *path* with *lines*."""
        ...

    def exists(self, path: PathLike) -> bool:
        """Stores that cannot tell report every path as present."""
        return True

    def ensure(self, path: PathLike) -> bool:
        """Create an empty list at *path* if none exists. Return ``True`` if created."""
        if self.exists(path):
            return False
        self.write(path, [])
        return True

    def append(self, path: PathLike, line: str) -> None:
        lines = self.read(path)
        lines.append(line)
        self.write(path, lines)

    def view(self, path: PathLike, line_no: int = 1) -> TaskView:
        return TaskView(self, Path(path), line_no)


class FileStore(StoreBase):
    """Plain UTF-8 text files on disk, rewritten atomically."""

    name = "file"

    def read(self, path: PathLike) -> list[str]:
        try:
            lines = read_lines(path)
        except OSError as exc:
            raise StoreError(path, exc.strerror or str(exc)) from exc
        except UnicodeDecodeError as exc:
            raise StoreError(path, "not valid UTF-8") from exc
        log.debug(f"Read {len(lines)} line(s) from {path}")
        return lines

    def write(self, path: PathLike, lines: list[str]) -> None:
        try:
            write_lines(path, lines)
        except OSError as exc:
            raise StoreError(path, exc.strerror or str(exc)) from exc
        log.debug(f"Wrote {len(lines)} line(s) to {path}")

    def exists(self, path: PathLike) -> bool:
        return Path(path).is_file()


class MemoryStore(StoreBase):
    """Dict-backed store for hosts that keep their own live buffers."""

    name = "memory"

    def __init__(self, files: dict[str, list[str]] | None = None) -> None:
        self.files: dict[str, list[str]] = {
            str(path): list(lines) for path, lines in (files or {}).items()
        }
        self.writes: list[str] = []

    def read(self, path: PathLike) -> list[str]:
        key = str(path)
        if key not in self.files:
            raise StoreError(path, "no such buffer")
        return list(self.files[key])

    def write(self, path: PathLike, lines: list[str]) -> None:
        key = str(path)
        self.files[key] = list(lines)
        self.writes.append(key)

    def exists(self, path: PathLike) -> bool:
        return str(path) in self.files


@dataclass(frozen=True)
class Selection:
    """One selected line: its 0-based position and its text."""

    index: int
    text: str


@dataclass
class TaskView:
    """The list currently being edited plus a 1-based cursor line."""

    store: StoreBase
    path: Path
    line_no: int = 1

    def current_view_lines(self) -> list[str]:
        return self.store.read(self.path)

    def replace_view_lines(self, lines: list[str]) -> None:
        self.store.write(self.path, lines)

    def current_selection(self, lines: list[str] | None = None) -> Selection:
        if lines is None:
            lines = self.current_view_lines()
        if not 1 <= self.line_no <= len(lines):
            raise SelectionError(self.line_no, len(lines))
        index = self.line_no - 1
        return Selection(index, lines[index])

    def replace_selection(self, text: str) -> Selection:
        """Rewrite the selected line in place and persist the view."""
        lines = self.current_view_lines()
        selection = self.current_selection(lines)
        lines[selection.index] = text
        self.replace_view_lines(lines)
        return Selection(selection.index, text)
