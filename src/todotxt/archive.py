"""Move completed tasks from the active list to the archive list."""

from __future__ import annotations

from collections.abc import Sequence

from todotxt import log
from todotxt.io_utils import PathLike
from todotxt.store import StoreBase
from todotxt.tasks.model import is_done


def archive(active_lines: Sequence[str], done_lines: Sequence[str]) -> tuple[list[str], list[str]]:
    """Split *active_lines* into remaining and done, appending done to the archive.

    Any line starting with ``x `` counts as done, dated or not. Both outputs
    keep input order; the existing archive is never reordered or deduplicated.
    """
    remaining: list[str] = []
    new_done = list(done_lines)
    for line in active_lines:
        if is_done(line):
            new_done.append(line)
        else:
            remaining.append(line)
    return remaining, new_done


def move_done_tasks(store: StoreBase, todo_path: PathLike, done_path: PathLike) -> int:
    """Archive done tasks from *todo_path* into *done_path*; return how many moved.

    The archive is written before the active list is truncated, so a failure
    between the two writes duplicates tasks rather than losing them.
    """
    todo_lines = store.read(todo_path)
    done_lines = store.read(done_path)
    remaining, new_done = archive(todo_lines, done_lines)
    moved = len(todo_lines) - len(remaining)
    if not moved:
        log.debug("No completed tasks to archive")
        return 0
    store.write(done_path, new_done)
    store.write(todo_path, remaining)
    return moved
