"""Logging utilities with colored output via Rich."""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape

from todotxt.tasks.model import extract_priority, is_completed

console = Console(highlight=False)
_err_console = Console(highlight=False, stderr=True)

_verbose = False

_PRIORITY_STYLES = {"A": "bold red", "B": "yellow", "C": "cyan"}


def set_verbose(enabled: bool) -> None:
    global _verbose
    _verbose = enabled


def is_verbose() -> bool:
    return _verbose


def info(msg: str) -> None:
    console.print(f"[blue]\\[INFO][/blue] {msg}")


def success(msg: str) -> None:
    console.print(f"[green]\\[OK][/green] {msg}")


def warn(msg: str) -> None:
    console.print(f"[yellow]\\[WARN][/yellow] {msg}")


def error(msg: str) -> None:
    _err_console.print(f"[red]\\[ERROR][/red] {msg}")


def debug(msg: str) -> None:
    if _verbose:
        console.print(f"[dim]\\[DEBUG] {msg}[/dim]")


def task_markup(line: str) -> str:
    """Return *line* escaped for Rich, styled by completion and priority."""
    text = escape(line)
    if is_completed(line):
        return f"[dim strike]{text}[/dim strike]"
    style = _PRIORITY_STYLES.get(extract_priority(line) or "")
    if style:
        return f"[{style}]{text}[/{style}]"
    return text
