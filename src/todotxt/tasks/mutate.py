"""Single-line rewrites: completion toggle, priority cycle, task capture."""

from __future__ import annotations

import re
from datetime import date

from todotxt.tasks.model import COMPLETED_PREFIX

# Only the cycled letters are recognised; "(D) ..." is left as plain text.
CYCLE_PREFIX = re.compile(r"^\(([ABC])\)\s*")

NEXT_PRIORITY = {None: "A", "A": "B", "B": "C", "C": None}


def format_date(day: date | str | None = None) -> str:
    """Return *day* as ``YYYY-MM-DD``; defaults to today."""
    if day is None:
        day = date.today()
    if isinstance(day, date):
        return day.isoformat()
    return day


def toggle_completion(line: str, today: date | str | None = None) -> str:
    """Mark *line* done (stamping *today*) or undone.

    Re-completing a line always stamps the new date; a previous completion
    date is not remembered.
    """
    if COMPLETED_PREFIX.match(line):
        return COMPLETED_PREFIX.sub("", line, count=1)
    return f"x {format_date(today)} {line}"


def cycle_priority(line: str) -> str:
    """Advance *line* through none → (A) → (B) → (C) → none."""
    m = CYCLE_PREFIX.match(line)
    if m is None:
        return f"(A) {line}"
    rest = line[m.end():]
    successor = NEXT_PRIORITY[m.group(1)]
    if successor is None:
        return rest
    return f"({successor}) {rest}"


def capture_task(text: str | None, today: date | str | None = None) -> str | None:
    """Build a new task line dated *today*.

    Returns ``None`` when *text* is missing or blank, which callers treat as
    a cancelled capture.
    """
    if text is None:
        return None
    clean = " ".join(text.splitlines()).strip()
    if not clean:
        return None
    return f"{format_date(today)} {clean}"
