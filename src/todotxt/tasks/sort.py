"""Stable multi-key sorting of task lines.

Every comparator is a strict "less than" predicate over two lines. Lines the
comparator treats as equal keep their document order: the sort never relies on
the underlying primitive being stable, it breaks ties on the original index.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from functools import cmp_to_key

from todotxt.errors import MissingReferenceError
from todotxt.tasks import model

Less = Callable[[str, str], bool]

# Rank used for lines without a bracketed priority letter.
NO_PRIORITY = "Z"


def stable_sort(lines: Sequence[str], less: Less) -> list[str]:
    """Return *lines* ordered by *less*, ties broken by original position."""

    def compare(a: tuple[int, str], b: tuple[int, str]) -> int:
        (ia, la), (ib, lb) = a, b
        if less(la, lb):
            return -1
        if less(lb, la):
            return 1
        return (ia > ib) - (ia < ib)

    indexed = sorted(enumerate(lines), key=cmp_to_key(compare))
    return [line for _, line in indexed]


# ── standard comparators ─────────────────────────────────────────────


def by_priority(a: str, b: str) -> bool:
    """A first; lines without a priority rank as ``Z``."""
    return (model.priority_letter(a) or NO_PRIORITY) < (model.priority_letter(b) or NO_PRIORITY)


def by_date(a: str, b: str) -> bool:
    """Most recent completion/creation date first; undated lines last."""
    date_a = model.sort_date(a)
    date_b = model.sort_date(b)
    if date_a and date_b:
        return date_a > date_b
    if date_a:
        return True
    if date_b:
        return False
    return a > b


def by_project(a: str, b: str) -> bool:
    """First ``+project`` ascending; untagged lines first."""
    return model.first_project(a) < model.first_project(b)


def by_context(a: str, b: str) -> bool:
    """First ``@context`` ascending; untagged lines first."""
    return model.first_context(a) < model.first_context(b)


def by_due_date(a: str, b: str) -> bool:
    """Soonest ``due:`` first; lines without one last."""
    due_a = model.due_date(a)
    due_b = model.due_date(b)
    if due_a and due_b:
        return due_a < due_b
    if due_a:
        return True
    if due_b:
        return False
    return a < b


SORTERS: dict[str, Less] = {
    "priority": by_priority,
    "date": by_date,
    "project": by_project,
    "context": by_context,
    "due": by_due_date,
}

SORT_NAMES = tuple(SORTERS)


def get_sorter(name: str) -> Less:
    """Return the comparator registered as *name*."""
    try:
        return SORTERS[name]
    except KeyError:
        raise ValueError(f"Unknown sort key: {name}") from None


def sort_lines(lines: Sequence[str], name: str) -> list[str]:
    return stable_sort(lines, get_sorter(name))


# ── relevance partitions ─────────────────────────────────────────────


def _partition_by(sigil: str, name: str) -> Less:
    def less(a: str, b: str) -> bool:
        return model.has_tag(a, sigil, name) and not model.has_tag(b, sigil, name)

    return less


def by_current_project(reference_line: str) -> tuple[str, Less]:
    """Comparator moving lines that share *reference_line*'s project to the top.

    Returns the matched tag alongside the comparator. Raises
    :class:`MissingReferenceError` when the reference line has no project.
    """
    name = model.reference_project(reference_line)
    if name is None:
        raise MissingReferenceError("project")
    return f"+{name}", _partition_by("+", name)


def by_current_context(reference_line: str) -> tuple[str, Less]:
    """Like :func:`by_current_project`, for the first ``@context``."""
    name = model.reference_context(reference_line)
    if name is None:
        raise MissingReferenceError("context")
    return f"@{name}", _partition_by("@", name)


def focus_lines(lines: Sequence[str], reference_line: str, kind: str) -> tuple[str, list[str]]:
    """Partition *lines* by the *kind* (``project``/``context``) of the reference line."""
    match kind:
        case "project":
            tag, less = by_current_project(reference_line)
        case "context":
            tag, less = by_current_context(reference_line)
        case _:
            raise ValueError(f"Unknown focus kind: {kind}")
    return tag, stable_sort(lines, less)
