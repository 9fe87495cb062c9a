"""Interactive list/filter browser over the active task list.

Optional convenience surface: nothing in the core depends on it. Entries are
numbered by their line in the file, so a number stays valid while a project
filter is active.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import click
from rich.markup import escape
from rich.table import Table

from todotxt import log
from todotxt.archive import move_done_tasks
from todotxt.errors import TodoTxtError
from todotxt.store import StoreBase
from todotxt.tasks.model import has_tag, is_completed, projects
from todotxt.tasks.mutate import toggle_completion

DONE_GLYPH = "✓"
OPEN_GLYPH = "○"

HELP = """\
  t <n>      Toggle completion of task <n>
  a          Archive all completed tasks
  p [+tag]   Filter by project (lists tags when none given)
  c          Clear the project filter
  r          Redraw the list
  q          Quit"""


def glyph(line: str) -> str:
    return DONE_GLYPH if is_completed(line) else OPEN_GLYPH


def project_tags(lines: list[str]) -> list[str]:
    """Distinct project tags across *lines*, sorted."""
    tags: set[str] = set()
    for line in lines:
        tags.update(projects(line))
    return sorted(tags)


def filter_by_project(lines: list[str], tag: str) -> list[tuple[int, str]]:
    """Return ``(line_no, line)`` pairs carrying *tag* (with or without ``+``)."""
    name = tag.removeprefix("+")
    return [(n, line) for n, line in enumerate(lines, start=1) if has_tag(line, "+", name)]


def numbered(lines: list[str]) -> list[tuple[int, str]]:
    """Pair non-blank lines with their 1-based line numbers."""
    return [(n, line) for n, line in enumerate(lines, start=1) if line.strip()]


def print_tasks(entries: list[tuple[int, str]], title: str = "Tasks") -> None:
    table = Table(title=escape(title), show_header=False, box=None, pad_edge=False)
    table.add_column(justify="right", style="dim")
    table.add_column()
    table.add_column()
    for line_no, line in entries:
        table.add_row(str(line_no), glyph(line), log.task_markup(line))
    log.console.print(table)


class Picker:
    """Prompt-driven browser: toggle, archive, project drill-down."""

    def __init__(
        self,
        store: StoreBase,
        todo_path: Path,
        done_path: Path,
        *,
        prompt: Callable[..., str] = click.prompt,
    ) -> None:
        self.store = store
        self.todo_path = todo_path
        self.done_path = done_path
        self.project: str | None = None
        self._prompt = prompt

    # ── queries ──────────────────────────────────────────────────

    def lines(self) -> list[str]:
        return self.store.read(self.todo_path)

    def entries(self) -> list[tuple[int, str]]:
        lines = self.lines()
        if self.project:
            return filter_by_project(lines, self.project)
        return numbered(lines)

    # ── actions ──────────────────────────────────────────────────

    def toggle(self, line_no: int) -> str:
        view = self.store.view(self.todo_path, line_no)
        selection = view.current_selection()
        return view.replace_selection(toggle_completion(selection.text)).text

    def archive_completed(self) -> int:
        return move_done_tasks(self.store, self.todo_path, self.done_path)

    def set_project(self, tag: str | None) -> None:
        if tag and not tag.startswith("+"):
            tag = f"+{tag}"
        self.project = tag or None

    def choose_project(self) -> None:
        tags = project_tags(self.lines())
        if not tags:
            log.info("No projects found")
            return
        for i, tag in enumerate(tags, start=1):
            log.console.print(f"  {i:>2}. [cyan]{escape(tag)}[/cyan]")
        raw = self._prompt("Project", default="", show_default=False).strip()
        if not raw:
            return
        if raw.isdigit() and 1 <= int(raw) <= len(tags):
            self.set_project(tags[int(raw) - 1])
        elif raw.removeprefix("+") in {t.removeprefix("+") for t in tags}:
            self.set_project(raw)
        else:
            log.warn(f"Unknown project: {escape(raw)}")

    # ── rendering ────────────────────────────────────────────────

    def render(self) -> None:
        title = f"Tasks: {self.project}" if self.project else "Tasks"
        print_tasks(self.entries(), title)

    # ── loop ─────────────────────────────────────────────────────

    def handle(self, command: str) -> bool:
        """Run one command. Return ``False`` when the browser should exit."""
        tokens = command.split()
        if not tokens:
            return True
        cmd, args = tokens[0].lower(), tokens[1:]
        match cmd:
            case "q" | "quit" | "exit":
                return False
            case "t" | "toggle":
                if len(args) != 1 or not args[0].isdigit():
                    log.warn("Usage: t <n>")
                    return True
                line = self.toggle(int(args[0]))
                log.success(f"{glyph(line)} {log.task_markup(line)}")
            case "a" | "archive":
                moved = self.archive_completed()
                log.success(f"Archived {moved} task(s)")
            case "p" | "project":
                if args:
                    self.set_project(args[0])
                else:
                    self.choose_project()
            case "c" | "clear":
                self.set_project(None)
            case "r":
                pass
            case "?" | "h" | "help":
                log.console.print(HELP)
                return True
            case _:
                log.warn("Unknown command. Type '?' for help.")
                return True
        self.render()
        return True

    def run(self) -> None:
        self.render()
        while True:
            try:
                command = self._prompt("todo", default="", show_default=False)
            except click.Abort:
                log.console.print()
                return
            try:
                if not self.handle(command):
                    return
            except TodoTxtError as exc:
                log.error(escape(str(exc)))
