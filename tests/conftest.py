"""Shared fixtures for todotxt tests.

File handling in tests:
- Use tmp_path for any file creation so tests are isolated and cleaned up.
- Use todotxt.io_utils read_lines/write_lines for consistent UTF-8 I/O.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from todotxt import log
from todotxt.io_utils import write_lines


@pytest.fixture(autouse=True)
def _quiet_log():
    """Reset verbose mode between tests."""
    log.set_verbose(False)
    yield
    log.set_verbose(False)


@pytest.fixture
def todo_files(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> tuple[Path, Path]:
    """Point the env defaults at a fresh todo.txt / done.txt pair under tmp_path."""
    todo = tmp_path / "todo.txt"
    done = tmp_path / "done.txt"
    monkeypatch.setenv("TODOTXT_FILE", str(todo))
    monkeypatch.setenv("TODOTXT_DONE_FILE", str(done))
    return todo, done


def _write_tasks(path: Path, *lines: str) -> Path:
    write_lines(path, list(lines))
    return path


@pytest.fixture
def write_tasks():
    """Factory fixture that writes task lines to a file."""
    return _write_tasks


@pytest.fixture
def cli_runner():
    """Click CliRunner for invoking the CLI in-process."""
    from click.testing import CliRunner
    return CliRunner()
