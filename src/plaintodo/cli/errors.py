"""
Standardized error handling and exit codes for the todo CLI.

This module provides consistent error messaging with actionable guidance
and standardized exit codes across all CLI commands. Errors go to stderr.
"""

from enum import IntEnum

from rich.console import Console
from rich.markup import escape

from plaintodo.core.errors import (
    BackupFailedError,
    ConfigError,
    DecodeError,
    HomeUnresolvedError,
    InvalidArgCountError,
    InvalidEntryError,
    TodoError,
)

console = Console(stderr=True, highlight=False)


class ExitCode(IntEnum):
    """Standard exit codes for todo CLI operations."""

    SUCCESS = 0
    """Operation completed successfully."""

    GENERAL_ERROR = 1
    """I/O failure or unreadable todo file."""

    USER_ERROR = 2
    """Wrong arguments or environment (actionable by user)."""

    SIGINT = 130
    """Terminated by SIGINT (Ctrl+C) - Unix standard."""


def print_error(
    problem: str,
    *,
    reason: str | None = None,
    solution: str | None = None,
) -> None:
    """
    Print a standardized error message with actionable guidance.

    Args:
        problem: Brief description of what went wrong
        reason: Optional explanation of why it happened
        solution: Optional command or action to fix it

    Example:
        >>> print_error(
        ...     "todo edit takes exact 2 arguments",
        ...     solution='todo edit 1 "new text"',
        ... )
    """
    console.print(f"[red]Error:[/red] {escape(problem)}")

    if reason:
        console.print(f"[dim]{escape(reason)}[/dim]")

    if solution:
        console.print(f"[cyan]→ Try:[/cyan] {escape(solution)}")


USAGE_EXAMPLES = {
    "add": 'todo add "buy carrots"',
    "rm": "todo rm 4",
    "done": "todo done 2 3",
    "edit": "todo edit 1 banana",
    "raw": "todo raw done",
}


def print_invalid_arg_count_error(error: InvalidArgCountError) -> None:
    """Print usage when a command receives the wrong number of arguments."""
    print_error(
        f"todo {error.command} {error.usage}",
        reason=f"Got {error.got} argument(s)",
        solution=USAGE_EXAMPLES.get(error.command),
    )


def print_backup_failed_error(error: BackupFailedError) -> None:
    """Print error when reset could not back up the live file."""
    print_error(
        "Couldn't backup the todo file",
        reason=f"{error}. The todo file was left untouched.",
        solution="Set TODO_BAK_DIR to a writable path, or TODO_NOBACKUP=1 to skip the backup",
    )


def print_home_unresolved_error() -> None:
    """Print error when the default todo path needs $HOME."""
    print_error(
        "Could not locate the todo file",
        reason="$HOME is not set and TODO_PATH was not given",
        solution="export TODO_PATH=/path/to/todo",
    )


def print_decode_error(error: DecodeError) -> None:
    """Print error when a stored line has no readable marker."""
    print_error(
        "The todo file contains an unreadable line",
        reason=str(error),
        solution="todo rm <index>  # or fix the line by hand",
    )


def report_error(error: TodoError) -> ExitCode:
    """
    Print a TodoError and return the exit code the CLI should use.

    Args:
        error: Error raised by the core

    Returns:
        USER_ERROR for argument and environment problems,
        GENERAL_ERROR otherwise
    """
    if isinstance(error, InvalidArgCountError):
        print_invalid_arg_count_error(error)
        return ExitCode.USER_ERROR
    if isinstance(error, HomeUnresolvedError):
        print_home_unresolved_error()
        return ExitCode.USER_ERROR
    if isinstance(error, (ConfigError, InvalidEntryError)):
        print_error(str(error))
        return ExitCode.USER_ERROR
    if isinstance(error, BackupFailedError):
        print_backup_failed_error(error)
        return ExitCode.GENERAL_ERROR
    if isinstance(error, DecodeError):
        print_decode_error(error)
        return ExitCode.GENERAL_ERROR

    print_error(str(error))
    return ExitCode.GENERAL_ERROR


__all__ = [
    "ExitCode",
    "print_error",
    "print_invalid_arg_count_error",
    "print_backup_failed_error",
    "print_home_unresolved_error",
    "print_decode_error",
    "report_error",
]
