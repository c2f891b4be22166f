"""
Configuration data model for plaintodo.

The store never reads the environment itself: a TodoConfig is resolved once
at process start (see loader.load_config) and passed in explicitly.
"""

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from plaintodo.core.entry import DecodeMode

DEFAULT_BACKUP_PATH = Path("/tmp/todo.bak")


class TodoConfig(BaseModel):
    """
    Paths and switches for one invocation of the task-list store.

    Example:
        >>> config = TodoConfig(todo_path=Path("~/.todo").expanduser())
        >>> config.backup_path
        PosixPath('/tmp/todo.bak')
    """

    model_config = ConfigDict(frozen=True)

    todo_path: Path = Field(description="Live task-list file")
    backup_path: Path = Field(
        default=DEFAULT_BACKUP_PATH,
        description="Where reset copies the live file before deleting it",
    )
    no_backup: bool = Field(
        default=False,
        description="Skip the backup copy on reset",
    )
    decode_mode: DecodeMode = Field(
        default=DecodeMode.CORRECTED,
        description="How stored lines are split into marker and text",
    )
