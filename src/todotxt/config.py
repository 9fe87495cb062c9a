"""Configuration defaults, env vars, and runtime options for todotxt."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path


VERSION = "1.0.0"

DEFAULT_TODO_FILE = "~/Documents/todo.txt"
DEFAULT_DONE_FILE = "~/Documents/done.txt"


@dataclass
class Config:
    """Runtime configuration — the two managed files plus output flags."""

    # Files
    todo_file: str = ""
    done_file: str = ""

    # Misc
    verbose: bool = False

    def __post_init__(self) -> None:
        if not self.todo_file:
            self.todo_file = os.environ.get("TODOTXT_FILE") or DEFAULT_TODO_FILE
        if not self.done_file:
            self.done_file = os.environ.get("TODOTXT_DONE_FILE") or DEFAULT_DONE_FILE
        self.todo_file = os.path.expanduser(self.todo_file)
        self.done_file = os.path.expanduser(self.done_file)

    @property
    def todo_path(self) -> Path:
        return Path(self.todo_file)

    @property
    def done_path(self) -> Path:
        return Path(self.done_file)
