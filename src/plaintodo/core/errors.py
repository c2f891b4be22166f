"""
Error taxonomy for the task-list core.

The core never exits the process: every failure is raised as a subclass of
TodoError and the CLI layer decides on the message and exit code.
"""

from pathlib import Path


class TodoError(Exception):
    """Base class for all plaintodo errors."""

    pass


class StoreIOError(TodoError):
    """Raised when the live or backup file cannot be opened, read, written, copied or deleted."""

    def __init__(self, message: str, path: Path | None = None):
        self.path = path
        super().__init__(message)


class BackupFailedError(StoreIOError):
    """Raised when reset could not copy the live file to the backup path.

    The live file is left untouched when this is raised.
    """

    pass


class HomeUnresolvedError(TodoError):
    """Raised when a default path needs $HOME and it is not set."""

    def __init__(self) -> None:
        super().__init__("Could not resolve the home directory ($HOME is not set)")


class InvalidArgCountError(TodoError):
    """Raised when a command receives the wrong number of arguments."""

    def __init__(self, command: str, usage: str, got: int):
        self.command = command
        self.usage = usage
        self.got = got
        super().__init__(f"todo {command} {usage}, got {got}")


class DecodeError(TodoError):
    """Raised when a stored line cannot be decoded into an Entry."""

    def __init__(self, message: str, line_num: int | None = None):
        self.line_num = line_num
        if line_num is not None:
            message = f"Line {line_num}: {message}"
        super().__init__(message)


class LineTooShortError(DecodeError):
    """Raised when a stored line is shorter than its marker prefix."""

    def __init__(self, line: str, width: int, line_num: int | None = None):
        self.line = line
        self.width = width
        super().__init__(
            f"line too short to carry a marker ({len(line)} < {width} chars): {line!r}",
            line_num=line_num,
        )


class InvalidEntryError(TodoError):
    """Raised when task text cannot be stored on a single line."""

    pass


class ConfigError(TodoError):
    """Raised when an environment override holds an unusable value."""

    pass


__all__ = [
    "BackupFailedError",
    "ConfigError",
    "DecodeError",
    "HomeUnresolvedError",
    "InvalidArgCountError",
    "InvalidEntryError",
    "LineTooShortError",
    "StoreIOError",
    "TodoError",
]
