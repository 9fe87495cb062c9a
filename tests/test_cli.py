"""CLI tests: every command runs against real files under tmp_path."""

from __future__ import annotations

import subprocess
import sys
from datetime import date
from pathlib import Path
from unittest.mock import patch

import pytest

from todotxt.cli import main
from todotxt.io_utils import read_lines


TODAY = date.today().isoformat()


def _run_cli(args: list[str], cwd: Path | None = None, timeout: int = 30) -> subprocess.CompletedProcess:
    """Run todotxt as a subprocess."""
    cmd = [sys.executable, "-m", "todotxt"] + args
    return subprocess.run(
        cmd,
        cwd=cwd,
        capture_output=True,
        text=True,
        encoding="utf-8",
        errors="replace",
        timeout=timeout,
    )


# ── Main entry and help ────────────────────────────────────────────────


class TestCliHelpAndVersion:
    def test_help_long(self, cli_runner, todo_files):
        r = cli_runner.invoke(main, ["--help"])
        assert r.exit_code == 0
        assert "todotxt" in r.output

    def test_help_short(self, cli_runner, todo_files):
        r = cli_runner.invoke(main, ["-h"])
        assert r.exit_code == 0
        assert "archive" in r.output

    def test_version(self, cli_runner, todo_files):
        r = cli_runner.invoke(main, ["--version"])
        assert r.exit_code == 0
        assert "todotxt" in r.output.lower()

    def test_module_entry_point(self, tmp_path: Path):
        r = _run_cli(["--help"], cwd=tmp_path)
        assert r.returncode == 0, r.stderr
        assert "todotxt" in r.stdout


# ── Bootstrap ────────────────────────────────────────────────────────────


class TestCliBootstrap:
    def test_init_creates_both_files(self, cli_runner, todo_files):
        todo, done = todo_files
        r = cli_runner.invoke(main, ["init"])
        assert r.exit_code == 0, r.output
        assert todo.is_file() and done.is_file()
        assert read_lines(todo) == []

    def test_any_command_bootstraps(self, cli_runner, todo_files):
        todo, done = todo_files
        r = cli_runner.invoke(main, ["projects"])
        assert r.exit_code == 0, r.output
        assert todo.is_file() and done.is_file()

    def test_existing_files_untouched(self, cli_runner, todo_files, write_tasks):
        todo, _ = todo_files
        write_tasks(todo, "keep")
        cli_runner.invoke(main, ["init"])
        assert read_lines(todo) == ["keep"]

    def test_file_options_override_env(self, cli_runner, todo_files, tmp_path: Path):
        other = tmp_path / "other" / "todo.txt"
        r = cli_runner.invoke(main, ["--todo-file", str(other), "init"])
        assert r.exit_code == 0, r.output
        assert other.is_file()
        assert not todo_files[0].exists()

    def test_no_subcommand_lists(self, cli_runner, todo_files, write_tasks):
        todo, _ = todo_files
        write_tasks(todo, "(A) alpha task")
        r = cli_runner.invoke(main, [])
        assert r.exit_code == 0, r.output
        assert "alpha task" in r.output


# ── add ──────────────────────────────────────────────────────────────────


class TestCliAdd:
    def test_add_inline(self, cli_runner, todo_files):
        todo, _ = todo_files
        r = cli_runner.invoke(main, ["add", "Call", "mom", "+family"])
        assert r.exit_code == 0, r.output
        assert read_lines(todo) == [f"{TODAY} Call mom +family"]

    def test_add_appends(self, cli_runner, todo_files, write_tasks):
        todo, _ = todo_files
        write_tasks(todo, "first")
        cli_runner.invoke(main, ["add", "second"])
        assert read_lines(todo) == ["first", f"{TODAY} second"]

    def test_add_prompts(self, cli_runner, todo_files):
        todo, _ = todo_files
        r = cli_runner.invoke(main, ["add"], input="Buy milk @store\n")
        assert r.exit_code == 0, r.output
        assert read_lines(todo) == [f"{TODAY} Buy milk @store"]

    def test_add_empty_answer_is_noop(self, cli_runner, todo_files):
        todo, _ = todo_files
        r = cli_runner.invoke(main, ["add"], input="\n")
        assert r.exit_code == 0, r.output
        assert read_lines(todo) == []
        assert "Nothing to add" in r.output

    def test_add_dismissed_prompt_is_noop(self, cli_runner, todo_files):
        todo, _ = todo_files
        r = cli_runner.invoke(main, ["add"], input="")
        assert r.exit_code == 0, r.output
        assert read_lines(todo) == []


# ── list / projects ──────────────────────────────────────────────────────


class TestCliList:
    def test_list_shows_numbers_and_glyphs(self, cli_runner, todo_files, write_tasks):
        todo, _ = todo_files
        write_tasks(todo, "open one", "x 2024-01-01 closed two")
        r = cli_runner.invoke(main, ["list"])
        assert r.exit_code == 0, r.output
        assert "open one" in r.output
        assert "closed two" in r.output
        assert "✓" in r.output
        assert "○" in r.output

    def test_list_project_filter(self, cli_runner, todo_files, write_tasks):
        todo, _ = todo_files
        write_tasks(todo, "a +alpha", "b +beta", "c +alphabet")
        r = cli_runner.invoke(main, ["list", "--project", "alpha"])
        assert r.exit_code == 0, r.output
        assert "a +alpha" in r.output
        assert "b +beta" not in r.output
        assert "+alphabet" not in r.output

    def test_list_project_with_markup_characters(self, cli_runner, todo_files, write_tasks):
        todo, _ = todo_files
        write_tasks(todo, "a +alpha")
        r = cli_runner.invoke(main, ["list", "--project", "x[/b]"])
        assert r.exit_code == 0, r.output
        assert r.exception is None

    def test_list_done(self, cli_runner, todo_files, write_tasks):
        _, done = todo_files
        write_tasks(done, "x 2024-01-01 archived thing")
        r = cli_runner.invoke(main, ["list", "--done"])
        assert r.exit_code == 0, r.output
        assert "archived thing" in r.output

    def test_projects(self, cli_runner, todo_files, write_tasks):
        todo, _ = todo_files
        write_tasks(todo, "a +zeta", "b +alpha +zeta", "c")
        r = cli_runner.invoke(main, ["projects"])
        assert r.exit_code == 0, r.output
        assert r.output.index("+alpha") < r.output.index("+zeta")

    def test_projects_none(self, cli_runner, todo_files):
        r = cli_runner.invoke(main, ["projects"])
        assert r.exit_code == 0
        assert "No projects found" in r.output


# ── toggle / cycle ───────────────────────────────────────────────────────


class TestCliMutators:
    def test_toggle_completes_and_reopens(self, cli_runner, todo_files, write_tasks):
        todo, _ = todo_files
        write_tasks(todo, "first", "second")
        r = cli_runner.invoke(main, ["toggle", "2"])
        assert r.exit_code == 0, r.output
        assert read_lines(todo) == ["first", f"x {TODAY} second"]

        cli_runner.invoke(main, ["toggle", "2"])
        assert read_lines(todo) == ["first", "second"]

    def test_toggle_out_of_range(self, cli_runner, todo_files, write_tasks):
        todo, _ = todo_files
        write_tasks(todo, "only")
        r = cli_runner.invoke(main, ["toggle", "5"])
        assert r.exit_code == 1
        assert "out of range" in r.output
        assert read_lines(todo) == ["only"]

    def test_cycle(self, cli_runner, todo_files, write_tasks):
        todo, _ = todo_files
        write_tasks(todo, "buy milk")
        expected = ["(A) buy milk", "(B) buy milk", "(C) buy milk", "buy milk"]
        for want in expected:
            r = cli_runner.invoke(main, ["cycle", "1"])
            assert r.exit_code == 0, r.output
            assert read_lines(todo) == [want]

    def test_mutators_accept_file_option(self, cli_runner, todo_files, tmp_path: Path, write_tasks):
        other = write_tasks(tmp_path / "work.txt", "task")
        r = cli_runner.invoke(main, ["cycle", "1", "--file", str(other)])
        assert r.exit_code == 0, r.output
        assert read_lines(other) == ["(A) task"]

    def test_missing_file_option_target(self, cli_runner, todo_files, tmp_path: Path):
        r = cli_runner.invoke(main, ["toggle", "1", "-f", str(tmp_path / "absent.txt")])
        assert r.exit_code == 1
        assert "[ERROR]" in r.output
        assert not (tmp_path / "absent.txt").exists()

    def test_error_path_with_markup_characters(self, cli_runner, todo_files, tmp_path: Path):
        target = tmp_path / "[/red]" / "absent.txt"
        r = cli_runner.invoke(main, ["toggle", "1", "-f", str(target)])
        assert r.exit_code == 1
        assert isinstance(r.exception, SystemExit)
        assert "[ERROR]" in r.output


# ── sort / focus ─────────────────────────────────────────────────────────


class TestCliSort:
    def test_sort_due(self, cli_runner, todo_files, write_tasks):
        todo, _ = todo_files
        write_tasks(todo, "do X due:2024-03-01", "do Y due:2024-01-01", "do Z")
        r = cli_runner.invoke(main, ["sort", "due"])
        assert r.exit_code == 0, r.output
        assert read_lines(todo) == ["do Y due:2024-01-01", "do X due:2024-03-01", "do Z"]
        assert "Sorted by due" in r.output

    def test_sort_priority(self, cli_runner, todo_files, write_tasks):
        todo, _ = todo_files
        write_tasks(todo, "plain", "(B) b", "(A) a")
        cli_runner.invoke(main, ["sort", "priority"])
        assert read_lines(todo) == ["(A) a", "(B) b", "plain"]

    def test_sort_keeps_lines_with_form_feed_intact(self, cli_runner, todo_files):
        todo, _ = todo_files
        todo.write_bytes("(B) b\n(A) page\x0cbreak note more\n".encode("utf-8"))
        r = cli_runner.invoke(main, ["sort", "priority"])
        assert r.exit_code == 0, r.output
        assert todo.read_bytes().decode("utf-8") == "(A) page\x0cbreak note more\n(B) b\n"

    def test_sort_unknown_key(self, cli_runner, todo_files):
        r = cli_runner.invoke(main, ["sort", "size"])
        assert r.exit_code == 2

    def test_focus_project(self, cli_runner, todo_files, write_tasks):
        todo, _ = todo_files
        write_tasks(todo, "a +beta", "b +alpha", "c", "task +alpha")
        r = cli_runner.invoke(main, ["focus", "project", "4"])
        assert r.exit_code == 0, r.output
        assert read_lines(todo) == ["b +alpha", "task +alpha", "a +beta", "c"]
        assert "Sorted by project: +alpha" in r.output

    def test_focus_context(self, cli_runner, todo_files, write_tasks):
        todo, _ = todo_files
        write_tasks(todo, "a @desk", "b @phone")
        r = cli_runner.invoke(main, ["focus", "context", "2"])
        assert r.exit_code == 0, r.output
        assert read_lines(todo) == ["b @phone", "a @desk"]

    def test_focus_without_reference_tag_is_informational(self, cli_runner, todo_files, write_tasks):
        todo, _ = todo_files
        write_tasks(todo, "b +alpha", "no tags")
        r = cli_runner.invoke(main, ["focus", "project", "2"])
        assert r.exit_code == 0, r.output
        assert "No project found in the current line" in r.output
        assert read_lines(todo) == ["b +alpha", "no tags"]


# ── archive ──────────────────────────────────────────────────────────────


class TestCliArchive:
    def test_archive_moves_done(self, cli_runner, todo_files, write_tasks):
        todo, done = todo_files
        write_tasks(todo, "x 2024-01-01 done task", "2024-02-01 open task")
        write_tasks(done, "x 2023-01-01 older")
        r = cli_runner.invoke(main, ["archive"])
        assert r.exit_code == 0, r.output
        assert read_lines(todo) == ["2024-02-01 open task"]
        assert read_lines(done) == ["x 2023-01-01 older", "x 2024-01-01 done task"]
        assert "Archived 1 task(s)" in r.output

    def test_archive_nothing(self, cli_runner, todo_files, write_tasks):
        todo, _ = todo_files
        write_tasks(todo, "open")
        r = cli_runner.invoke(main, ["archive"])
        assert r.exit_code == 0
        assert "No completed tasks" in r.output


# ── edit / browse ────────────────────────────────────────────────────────


class TestCliInteractive:
    @pytest.mark.parametrize("args, index", [([], 0), (["--done"], 1)])
    def test_edit_opens_file(self, cli_runner, todo_files, args, index):
        with patch("todotxt.cli.click.edit") as mock_edit:
            r = cli_runner.invoke(main, ["edit", *args])
        assert r.exit_code == 0, r.output
        mock_edit.assert_called_once_with(filename=str(todo_files[index]))

    def test_browse_toggle_then_quit(self, cli_runner, todo_files, write_tasks):
        todo, _ = todo_files
        write_tasks(todo, "walk dog")
        r = cli_runner.invoke(main, ["browse"], input="t 1\nq\n")
        assert r.exit_code == 0, r.output
        assert read_lines(todo) == [f"x {TODAY} walk dog"]

    def test_browse_ends_on_eof(self, cli_runner, todo_files, write_tasks):
        todo, _ = todo_files
        write_tasks(todo, "walk dog")
        r = cli_runner.invoke(main, ["browse"], input="")
        assert r.exit_code == 0, r.output
        assert read_lines(todo) == ["walk dog"]
