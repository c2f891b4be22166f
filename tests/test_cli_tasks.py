"""Tests for the todo CLI commands."""

import pytest
from typer.testing import CliRunner

from plaintodo import __version__
from plaintodo.cli import app
from plaintodo.cli.argv import preprocess_argv
from plaintodo.cli.errors import ExitCode

runner = CliRunner()


@pytest.fixture
def cli_env(tmp_path, todo_file, backup_file, monkeypatch):
    """Environment pointing the CLI at temp files, with no stray .env files."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    return {"TODO_PATH": str(todo_file), "TODO_BAK_DIR": str(backup_file)}


def _read(path) -> str:
    return path.read_bytes().decode("utf-8")


class TestAddAndList:
    """Tests for `todo add` and `todo list`."""

    def test_add_then_list(self, cli_env) -> None:
        result = runner.invoke(app, ["add", "buy milk", "wash car"], env=cli_env)
        assert result.exit_code == 0

        result = runner.invoke(app, ["list"], env=cli_env)
        assert result.exit_code == 0
        assert result.stdout == "1 buy milk\n2 wash car\n"

    def test_add_skips_blank(self, cli_env, todo_file) -> None:
        result = runner.invoke(app, ["add", "", "  ", "wash car"], env=cli_env)
        assert result.exit_code == 0
        assert _read(todo_file) == "[ ]wash car\n"

    def test_add_without_args_is_usage_error(self, cli_env, todo_file) -> None:
        result = runner.invoke(app, ["add"], env=cli_env)
        assert result.exit_code == ExitCode.USER_ERROR
        assert "todo add takes at least 1 argument" in result.output

    def test_list_shows_done_tasks(self, cli_env, todo_file) -> None:
        todo_file.write_text("[ ]buy milk\n[*] call mom\n")
        result = runner.invoke(app, ["list"], env=cli_env)
        assert result.exit_code == 0
        assert "call mom" in result.stdout

    def test_list_with_debug_flag(self, cli_env) -> None:
        result = runner.invoke(app, ["--debug", "list"], env=cli_env)
        assert result.exit_code == 0

    def test_list_unreadable_line(self, cli_env, todo_file) -> None:
        todo_file.write_text("[ ]buy milk\n\n")
        result = runner.invoke(app, ["list"], env=cli_env)
        assert result.exit_code == ExitCode.GENERAL_ERROR
        assert "unreadable line" in result.output


class TestRaw:
    """Tests for `todo raw`."""

    def test_raw_done(self, cli_env, todo_file) -> None:
        todo_file.write_text("[ ]buy milk\n[*] call mom\n")
        result = runner.invoke(app, ["raw", "done"], env=cli_env)
        assert result.exit_code == 0
        assert result.stdout == "call mom\n"

    def test_raw_todo(self, cli_env, todo_file) -> None:
        todo_file.write_text("[ ]buy milk\n[*] call mom\n")
        result = runner.invoke(app, ["raw", "todo"], env=cli_env)
        assert result.exit_code == 0
        assert result.stdout == "buy milk\n"

    def test_raw_legacy_decode(self, cli_env, todo_file) -> None:
        todo_file.write_text("[ ]buy milk\n[*] call mom\n")
        env = {**cli_env, "TODO_DECODE": "legacy"}
        result = runner.invoke(app, ["raw", "todo"], env=env)
        assert result.exit_code == 0
        assert result.stdout == "uy milk\n"

    def test_raw_wrong_count_is_reported_not_fatal(self, cli_env, todo_file) -> None:
        todo_file.write_text("[ ]buy milk\n")
        result = runner.invoke(app, ["raw", "done", "todo"], env=cli_env)
        assert result.exit_code == 0
        assert "todo raw takes 1 argument" in result.output
        assert _read(todo_file) == "[ ]buy milk\n"


class TestEditingCommands:
    """Tests for `todo rm`, `todo done`, `todo edit` and `todo sort`."""

    def test_rm(self, cli_env, todo_file) -> None:
        todo_file.write_text("[ ]a\n[ ]b\n[ ]c\n")
        result = runner.invoke(app, ["rm", "2"], env=cli_env)
        assert result.exit_code == 0
        assert _read(todo_file) == "[ ]a\n[ ]c\n"

    def test_rm_without_args(self, cli_env) -> None:
        result = runner.invoke(app, ["rm"], env=cli_env)
        assert result.exit_code == ExitCode.USER_ERROR
        assert "todo rm takes at least 1 argument" in result.output

    def test_done_toggles(self, cli_env, todo_file) -> None:
        todo_file.write_text("[ ]a\n[*] b\n")
        result = runner.invoke(app, ["done", "1", "2"], env=cli_env)
        assert result.exit_code == 0
        assert _read(todo_file) == "[*] a\n[ ]b\n"

    def test_done_without_args(self, cli_env) -> None:
        result = runner.invoke(app, ["done"], env=cli_env)
        assert result.exit_code == ExitCode.USER_ERROR

    def test_edit(self, cli_env, todo_file) -> None:
        todo_file.write_text("[ ]a\n[*] b\n")
        result = runner.invoke(app, ["edit", "2", "banana"], env=cli_env)
        assert result.exit_code == 0
        assert _read(todo_file) == "[ ]a\n[*] banana\n"

    def test_edit_wrong_count(self, cli_env, todo_file) -> None:
        todo_file.write_text("[ ]a\n")
        result = runner.invoke(app, ["edit", "1"], env=cli_env)
        assert result.exit_code == ExitCode.USER_ERROR
        assert "todo edit takes exact 2 arguments" in result.output
        assert _read(todo_file) == "[ ]a\n"

    def test_sort(self, cli_env, todo_file) -> None:
        todo_file.write_text("[*] a\n[ ]b\n[*] c\n[ ]d\n")
        result = runner.invoke(app, ["sort"], env=cli_env)
        assert result.exit_code == 0
        assert _read(todo_file) == "[ ]b\n[ ]d\n[*] a\n[*] c\n"


class TestDashedTaskText:
    """Tests for task text that looks like an option."""

    def test_add_text_starting_with_dash(self, cli_env, todo_file) -> None:
        result = runner.invoke(app, ["add", "-5 pushups"], env=cli_env)
        assert result.exit_code == 0
        assert _read(todo_file) == "[ ]-5 pushups\n"

    def test_add_mixed_dashed_and_plain_text(self, cli_env, todo_file) -> None:
        result = runner.invoke(app, ["add", "--weird", "buy milk", "-x"], env=cli_env)
        assert result.exit_code == 0
        assert _read(todo_file) == "[ ]--weird\n[ ]buy milk\n[ ]-x\n"

    def test_edit_text_starting_with_dash(self, cli_env, todo_file) -> None:
        todo_file.write_text("[ ]a\n")
        result = runner.invoke(app, ["edit", "1", "-3 apples"], env=cli_env)
        assert result.exit_code == 0
        assert _read(todo_file) == "[ ]-3 apples\n"

    def test_edit_text_named_like_global_flag(self, cli_env, todo_file) -> None:
        todo_file.write_text("[ ]a\n")
        argv = preprocess_argv(["edit", "1", "--debug"])
        result = runner.invoke(app, argv, env=cli_env)
        assert result.exit_code == 0
        assert _read(todo_file) == "[ ]--debug\n"

    def test_add_text_named_like_global_flag(self, cli_env, todo_file) -> None:
        result = runner.invoke(app, preprocess_argv(["add", "--debug"]), env=cli_env)
        assert result.exit_code == 0
        assert _read(todo_file) == "[ ]--debug\n"

    def test_help_still_available(self, cli_env) -> None:
        result = runner.invoke(app, ["add", "--help"], env=cli_env)
        assert result.exit_code == 0
        assert "Add new task" in result.output


class TestResetRestore:
    """Tests for `todo reset` and `todo restore`."""

    def test_reset_and_restore(self, cli_env, todo_file, backup_file) -> None:
        todo_file.write_text("[ ]a\n[*] b\n")

        result = runner.invoke(app, ["reset"], env=cli_env)
        assert result.exit_code == 0
        assert not todo_file.exists()
        assert _read(backup_file) == "[ ]a\n[*] b\n"

        result = runner.invoke(app, ["restore"], env=cli_env)
        assert result.exit_code == 0
        assert _read(todo_file) == "[ ]a\n[*] b\n"

    def test_reset_no_backup(self, cli_env, todo_file, backup_file) -> None:
        todo_file.write_text("[ ]a\n")
        env = {**cli_env, "TODO_NOBACKUP": ""}
        result = runner.invoke(app, ["reset"], env=env)
        assert result.exit_code == 0
        assert not todo_file.exists()
        assert not backup_file.exists()

    def test_reset_no_backup_from_bare_dotenv_key(
        self, cli_env, todo_file, backup_file, tmp_path
    ) -> None:
        todo_file.write_text("[ ]a\n")
        (tmp_path / ".env").write_text("TODO_NOBACKUP\n")
        result = runner.invoke(app, ["reset"], env=cli_env)
        assert result.exit_code == 0
        assert not todo_file.exists()
        assert not backup_file.exists()

    def test_reset_backup_failure_keeps_file(self, cli_env, todo_file, tmp_path) -> None:
        todo_file.write_text("[ ]a\n")
        env = {**cli_env, "TODO_BAK_DIR": str(tmp_path / "missing" / "todo.bak")}
        result = runner.invoke(app, ["reset"], env=env)
        assert result.exit_code == ExitCode.GENERAL_ERROR
        assert "Couldn't backup the todo file" in result.output
        assert _read(todo_file) == "[ ]a\n"

    def test_restore_without_backup(self, cli_env) -> None:
        result = runner.invoke(app, ["restore"], env=cli_env)
        assert result.exit_code == ExitCode.GENERAL_ERROR
        assert "unable to restore the backup" in result.output


class TestEnvironmentErrors:
    """Tests for configuration failures surfaced by the CLI."""

    def test_home_unresolved(self, cli_env) -> None:
        result = runner.invoke(app, ["list"], env={"TODO_PATH": None, "HOME": None})
        assert result.exit_code == ExitCode.USER_ERROR
        assert "Could not locate the todo file" in result.output

    def test_bad_decode_mode(self, cli_env) -> None:
        env = {**cli_env, "TODO_DECODE": "fancy"}
        result = runner.invoke(app, ["list"], env=env)
        assert result.exit_code == ExitCode.USER_ERROR
        assert "TODO_DECODE" in result.output

    def test_project_env_file(self, cli_env, tmp_path) -> None:
        env_todo = tmp_path / "from-dotenv"
        (tmp_path / ".env").write_text(f"TODO_PATH={env_todo}\n")
        result = runner.invoke(app, ["add", "x"], env={"TODO_PATH": None})
        assert result.exit_code == 0
        assert _read(env_todo) == "[ ]x\n"


class TestVersion:
    """Tests for `todo version`."""

    def test_version(self) -> None:
        result = runner.invoke(app, ["version"])
        assert result.exit_code == 0
        assert __version__ in result.stdout
