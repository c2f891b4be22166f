"""
Pytest configuration and shared fixtures.

Provides fixtures for temp todo/backup files, a resolved TodoConfig and a
factory for stores loaded from given file contents.
"""

from collections.abc import Callable
from pathlib import Path

import pytest

from plaintodo.core.config.models import TodoConfig
from plaintodo.core.store import TodoStore

TODO_ENV_VARS = ("TODO_PATH", "TODO_BAK_DIR", "TODO_NOBACKUP", "TODO_DECODE")

# ==============================================================================
# Environment Isolation
# ==============================================================================


@pytest.fixture(autouse=True)
def clean_todo_env(monkeypatch):
    """Make sure no real TODO_* overrides leak into tests."""
    for name in TODO_ENV_VARS:
        # setenv first so teardown also drops values written straight to os.environ
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)


# ==============================================================================
# File Fixtures
# ==============================================================================


@pytest.fixture
def todo_file(tmp_path) -> Path:
    """Path of the live todo file (not created)."""
    return tmp_path / "todo"


@pytest.fixture
def backup_file(tmp_path) -> Path:
    """Path of the backup file (not created)."""
    return tmp_path / "todo.bak"


@pytest.fixture
def config(todo_file, backup_file) -> TodoConfig:
    """Configuration pointing at the temp files."""
    return TodoConfig(todo_path=todo_file, backup_path=backup_file)


@pytest.fixture
def make_store(config) -> Callable[..., TodoStore]:
    """
    Factory: write the given contents to the live file and load a store.

    Keyword overrides are applied to the config (e.g. no_backup=True).
    """

    def _make(contents: str | None = "", **overrides) -> TodoStore:
        cfg = config.model_copy(update=overrides) if overrides else config
        if contents is not None:
            cfg.todo_path.write_bytes(contents.encode("utf-8"))
        return TodoStore.load(cfg)

    return _make


@pytest.fixture
def sample_contents() -> str:
    """Two open tasks and two done tasks, interleaved."""
    return "[ ]buy milk\n[*] call mom\n[ ]wash car\n[*] pay rent\n"
