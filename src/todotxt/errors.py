"""Exception types raised by todotxt operations."""

from __future__ import annotations

from pathlib import Path


class TodoTxtError(RuntimeError):
    """Base class for expected, user-facing failures."""


class MissingReferenceError(TodoTxtError):
    """Raised when a relevance sort's reference line lacks the needed tag.

    Informational: callers report it and leave the list untouched.
    """

    def __init__(self, kind: str) -> None:
        super().__init__(f"No {kind} found in the current line")
        self.kind = kind


class SelectionError(TodoTxtError):
    """Raised when a cursor position does not address a line of the view."""

    def __init__(self, line_no: int, line_count: int) -> None:
        super().__init__(
            f"Line {line_no} is out of range (file has {line_count} line(s))"
        )
        self.line_no = line_no
        self.line_count = line_count


class StoreError(TodoTxtError):
    """Raised when a task file cannot be read or written."""

    def __init__(self, path: Path | str, reason: str) -> None:
        super().__init__(f"{path}: {reason}")
        self.path = Path(path)
        self.reason = reason
