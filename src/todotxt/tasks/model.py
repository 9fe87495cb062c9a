"""Field extraction for todo.txt task lines.

A task line is never turned into a stored record: every field is derived
from the raw text on demand, and absence is ``None`` (or an empty tuple).

Recognised layout::

    x 2024-03-02 (A) 2024-03-01 call mom +family @phone due:2024-03-05
    ^ completion ^   ^ priority ^ creation     project  context  due date
"""

from __future__ import annotations

import re
from dataclasses import dataclass

DATE = r"[0-9]{4}-[0-9]{2}-[0-9]{2}"

# Completion marker: "x " + date + " ". Toggle, glyph and date all use it.
COMPLETED_PREFIX = re.compile(rf"^x ({DATE}) ")
# Archival is looser: any line starting with "x ".
DONE_MARKER = re.compile(r"^x ")

PRIORITY_PREFIX = re.compile(r"^\(([A-Za-z])\)")
CREATION_DATE = re.compile(rf"^({DATE})(?= |$)")
DUE_DATE = re.compile(rf"due:({DATE})")

TAG_CHARS = r"[A-Za-z0-9.\-]"
PROJECT = re.compile(rf"\+({TAG_CHARS}+)")
CONTEXT = re.compile(rf"@({TAG_CHARS}+)")
# Sort keys only consider the alphanumeric run right after the sigil.
PROJECT_KEY = re.compile(r"\+[A-Za-z0-9]+")
CONTEXT_KEY = re.compile(r"@[A-Za-z0-9]+")

CYCLED_PRIORITIES = ("A", "B", "C")


def _strip_completion(line: str) -> str:
    m = COMPLETED_PREFIX.match(line)
    return line[m.end():] if m else line


def is_completed(line: str) -> bool:
    return COMPLETED_PREFIX.match(line) is not None


def is_done(line: str) -> bool:
    """Return ``True`` when *line* would be swept into the archive."""
    return DONE_MARKER.match(line) is not None


def completion_date(line: str) -> str | None:
    m = COMPLETED_PREFIX.match(line)
    return m.group(1) if m else None


def priority_letter(line: str) -> str | None:
    """Return any bracketed leading letter, completion prefix ignored."""
    m = PRIORITY_PREFIX.match(_strip_completion(line))
    return m.group(1) if m else None


def extract_priority(line: str) -> str | None:
    """Return ``"A"``, ``"B"`` or ``"C"``; anything else counts as no priority."""
    letter = priority_letter(line)
    return letter if letter in CYCLED_PRIORITIES else None


def creation_date(line: str) -> str | None:
    rest = _strip_completion(line)
    m = PRIORITY_PREFIX.match(rest)
    if m:
        rest = rest[m.end():].lstrip(" ")
    m = CREATION_DATE.match(rest)
    return m.group(1) if m else None


def sort_date(line: str) -> str | None:
    """Completion date for completed lines, creation date otherwise."""
    return completion_date(line) or creation_date(line)


def due_date(line: str) -> str | None:
    m = DUE_DATE.search(line)
    return m.group(1) if m else None


def _unique(tokens: list[str]) -> tuple[str, ...]:
    return tuple(dict.fromkeys(tokens))


def projects(line: str) -> tuple[str, ...]:
    """All ``+project`` tags in line order, sigil included, without repeats."""
    return _unique([f"+{name}" for name in PROJECT.findall(line)])


def contexts(line: str) -> tuple[str, ...]:
    """All ``@context`` tags in line order, sigil included, without repeats."""
    return _unique([f"@{name}" for name in CONTEXT.findall(line)])


def first_project(line: str) -> str:
    m = PROJECT_KEY.search(line)
    return m.group(0) if m else ""


def first_context(line: str) -> str:
    m = CONTEXT_KEY.search(line)
    return m.group(0) if m else ""


def reference_project(line: str) -> str | None:
    """Bare name of the first project tag, used to rank other lines against."""
    m = PROJECT.search(line)
    return m.group(1) if m else None


def reference_context(line: str) -> str | None:
    m = CONTEXT.search(line)
    return m.group(1) if m else None


def has_tag(line: str, sigil: str, name: str) -> bool:
    """Return ``True`` if *line* carries ``sigil + name`` as a whole token.

    The tag must be followed by a non-alphanumeric character or the end of
    the line, so ``+alpha`` does not match ``+alphabet``.
    """
    pattern = re.escape(sigil + name) + r"(?![A-Za-z0-9])"
    return re.search(pattern, line) is not None


@dataclass(frozen=True)
class TaskFields:
    """Snapshot of every field derived from one task line."""

    text: str
    completed: bool = False
    completion_date: str | None = None
    priority: str | None = None
    creation_date: str | None = None
    projects: tuple[str, ...] = ()
    contexts: tuple[str, ...] = ()
    due_date: str | None = None

    @classmethod
    def parse(cls, line: str) -> TaskFields:
        return cls(
            text=line,
            completed=is_completed(line),
            completion_date=completion_date(line),
            priority=extract_priority(line),
            creation_date=creation_date(line),
            projects=projects(line),
            contexts=contexts(line),
            due_date=due_date(line),
        )

    def __str__(self) -> str:
        return self.text
