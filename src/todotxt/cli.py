"""todotxt CLI — manage todo.txt task lists from the shell.

Installed as ``todotxt`` console_script via pipx / pip.
"""

from __future__ import annotations

import sys
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

import click
from rich.markup import escape

from todotxt import __version__
from todotxt.config import Config
from todotxt.errors import MissingReferenceError, TodoTxtError
from todotxt.store import FileStore, StoreBase
from todotxt.tasks.sort import SORT_NAMES


CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])

FOCUS_KINDS = ("project", "context")


def _make_store() -> StoreBase:
    return FileStore()


@contextmanager
def _reporting_errors() -> Iterator[None]:
    """Turn expected failures into log messages and exit codes."""
    from todotxt import log as tlog

    try:
        yield
    except MissingReferenceError as exc:
        tlog.info(escape(str(exc)))
    except TodoTxtError as exc:
        tlog.error(escape(str(exc)))
        sys.exit(1)


def _target(cfg: Config, file: str) -> Path:
    return Path(file).expanduser() if file else cfg.todo_path


file_option = click.option(
    "--file", "-f", "file", default="", help="Operate on this file instead of the todo file"
)


@click.group(invoke_without_command=True, context_settings=CONTEXT_SETTINGS)
@click.option("--todo-file", default="", envvar="TODOTXT_FILE", help="Active task list (default: ~/Documents/todo.txt)")
@click.option("--done-file", default="", envvar="TODOTXT_DONE_FILE", help="Archive list (default: ~/Documents/done.txt)")
@click.option("-v", "--verbose", is_flag=True, help="Show debug output")
@click.version_option(__version__, prog_name="todotxt")
@click.pass_context
def main(ctx: click.Context, todo_file: str, done_file: str, verbose: bool) -> None:
    """todotxt — plain-text task lists.

    Tasks live one per line in a todo.txt file; completed tasks can be
    archived to a done.txt file. Both files are created empty if missing.

    \b
    EXAMPLES:
      todotxt add "Call mom +family @phone"   # Capture a task dated today
      todotxt list --project family           # Show one project
      todotxt toggle 3                        # Mark line 3 done / undone
      todotxt cycle 3                         # none -> (A) -> (B) -> (C) -> none
      todotxt sort due                        # Soonest due date first
      todotxt focus project 3                 # Line 3's project to the top
      todotxt archive                         # Move done tasks to done.txt
    """
    from todotxt import log as tlog

    tlog.set_verbose(verbose)

    cfg = Config(todo_file=todo_file, done_file=done_file, verbose=verbose)
    ctx.obj = cfg
    tlog.debug(f"todo file: {escape(cfg.todo_file)}")
    tlog.debug(f"done file: {escape(cfg.done_file)}")

    store = _make_store()
    with _reporting_errors():
        for path in (cfg.todo_path, cfg.done_path):
            if store.ensure(path):
                tlog.info(f"Created {escape(str(path))}")

    if ctx.invoked_subcommand is None:
        ctx.invoke(list_tasks)


# ── Subcommand: init ─────────────────────────────────────────────


@main.command()
@click.pass_obj
def init(cfg: Config) -> None:
    """Create the todo and done files if they do not exist."""
    from todotxt import log as tlog

    tlog.success(f"Todo file: {escape(str(cfg.todo_path))}")
    tlog.success(f"Done file: {escape(str(cfg.done_path))}")


# ── Subcommand: add ──────────────────────────────────────────────


@main.command()
@click.argument("text", nargs=-1)
@click.pass_obj
def add(cfg: Config, text: tuple[str, ...]) -> None:
    """Capture a new task, dated today.

    Prompts for the task when TEXT is omitted; an empty answer adds nothing.
    """
    from todotxt import log as tlog
    from todotxt.tasks.mutate import capture_task

    raw = " ".join(text)
    if not raw:
        try:
            raw = click.prompt("New Todo", default="", show_default=False)
        except click.Abort:
            raw = ""

    line = capture_task(raw)
    if line is None:
        tlog.info("Nothing to add")
        return

    with _reporting_errors():
        _make_store().append(cfg.todo_path, line)
        tlog.success(f"Added: {tlog.task_markup(line)}")


# ── Subcommand: list ─────────────────────────────────────────────


@main.command("list")
@click.option("--project", "-p", default="", help="Only tasks tagged with this project")
@click.option("--done", is_flag=True, help="Show the archive instead")
@click.pass_obj
def list_tasks(cfg: Config, project: str = "", done: bool = False) -> None:
    """Print tasks with their line numbers and completion glyphs."""
    from todotxt.picker import filter_by_project, numbered, print_tasks

    path = cfg.done_path if done else cfg.todo_path
    with _reporting_errors():
        lines = _make_store().read(path)
        if project:
            tag = project if project.startswith("+") else f"+{project}"
            print_tasks(filter_by_project(lines, tag), title=f"{path.name}: {tag}")
        else:
            print_tasks(numbered(lines), title=path.name)


@main.command()
@click.pass_obj
def projects(cfg: Config) -> None:
    """List the distinct project tags of the todo file."""
    from todotxt import log as tlog
    from todotxt.picker import project_tags

    with _reporting_errors():
        tags = project_tags(_make_store().read(cfg.todo_path))
    if not tags:
        tlog.info("No projects found")
        return
    for tag in tags:
        tlog.console.print(f"[cyan]{escape(tag)}[/cyan]")


# ── Subcommands: toggle / cycle ──────────────────────────────────


@main.command()
@click.argument("line_no", metavar="LINE", type=int)
@file_option
@click.pass_obj
def toggle(cfg: Config, line_no: int, file: str) -> None:
    """Mark task LINE done (stamped today) or undone."""
    from todotxt import log as tlog
    from todotxt.tasks.mutate import toggle_completion

    with _reporting_errors():
        view = _make_store().view(_target(cfg, file), line_no)
        selection = view.current_selection()
        updated = view.replace_selection(toggle_completion(selection.text))
        tlog.success(f"{line_no}: {tlog.task_markup(updated.text)}")


@main.command()
@click.argument("line_no", metavar="LINE", type=int)
@file_option
@click.pass_obj
def cycle(cfg: Config, line_no: int, file: str) -> None:
    """Cycle the priority of task LINE: none, (A), (B), (C), none."""
    from todotxt import log as tlog
    from todotxt.tasks.mutate import cycle_priority

    with _reporting_errors():
        view = _make_store().view(_target(cfg, file), line_no)
        selection = view.current_selection()
        updated = view.replace_selection(cycle_priority(selection.text))
        tlog.success(f"{line_no}: {tlog.task_markup(updated.text)}")


# ── Subcommands: sort / focus ────────────────────────────────────


@main.command()
@click.argument("key", type=click.Choice(SORT_NAMES))
@file_option
@click.pass_obj
def sort(cfg: Config, key: str, file: str) -> None:
    """Sort the file by KEY, keeping document order among ties.

    \b
    KEYS:
      priority   (A) first, unprioritised last
      date       newest completion/creation date first, undated last
      project    first +project ascending, untagged first
      context    first @context ascending, untagged first
      due        soonest due: date first, no due date last
    """
    from todotxt import log as tlog
    from todotxt.tasks.sort import sort_lines

    with _reporting_errors():
        view = _make_store().view(_target(cfg, file))
        view.replace_view_lines(sort_lines(view.current_view_lines(), key))
        tlog.success(f"Sorted by {key}")


@main.command()
@click.argument("kind", type=click.Choice(FOCUS_KINDS))
@click.argument("line_no", metavar="LINE", type=int)
@file_option
@click.pass_obj
def focus(cfg: Config, kind: str, line_no: int, file: str) -> None:
    """Move tasks sharing LINE's first project (or context) to the top."""
    from todotxt import log as tlog
    from todotxt.tasks.sort import focus_lines

    with _reporting_errors():
        view = _make_store().view(_target(cfg, file), line_no)
        lines = view.current_view_lines()
        selection = view.current_selection(lines)
        tag, ordered = focus_lines(lines, selection.text, kind)
        view.replace_view_lines(ordered)
        tlog.info(f"Sorted by {kind}: {escape(tag)}")


# ── Subcommand: archive ──────────────────────────────────────────


@main.command()
@click.pass_obj
def archive(cfg: Config) -> None:
    """Move completed tasks from the todo file to the done file."""
    from todotxt import log as tlog
    from todotxt.archive import move_done_tasks

    with _reporting_errors():
        moved = move_done_tasks(_make_store(), cfg.todo_path, cfg.done_path)
        if moved:
            tlog.success(f"Archived {moved} task(s) to {escape(str(cfg.done_path))}")
        else:
            tlog.info("No completed tasks to archive")


# ── Subcommands: edit / browse ───────────────────────────────────


@main.command()
@click.option("--done", is_flag=True, help="Edit the done file instead")
@click.pass_obj
def edit(cfg: Config, done: bool) -> None:
    """Open the todo (or done) file in $EDITOR."""
    path = cfg.done_path if done else cfg.todo_path
    click.edit(filename=str(path))


@main.command()
@click.pass_obj
def browse(cfg: Config) -> None:
    """Browse tasks interactively: toggle, archive, filter by project."""
    from todotxt.picker import Picker

    with _reporting_errors():
        Picker(_make_store(), cfg.todo_path, cfg.done_path).run()
