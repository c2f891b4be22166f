"""
todo CLI - task-list commands.

Each command resolves the configuration, loads the store and runs exactly
one operation. Arguments are collected as plain lists so the store performs
the argument-count validation itself.
"""

import logging
from typing import NoReturn

import typer

from plaintodo.cli.errors import report_error
from plaintodo.core.config import load_config
from plaintodo.core.errors import InvalidArgCountError, TodoError
from plaintodo.core.store import TodoStore

logger = logging.getLogger(__name__)


def _open_store() -> TodoStore:
    """Resolve configuration from the environment and load the live file."""
    return TodoStore.load(load_config())


def _fail(error: TodoError) -> NoReturn:
    """Report an error raised by the core and exit with its code."""
    logger.debug(f"Command failed: {error!r}")
    raise typer.Exit(report_error(error))


def list_cmd() -> None:
    """
    List all tasks.

    Done tasks are shown struck through.

    Examples:
        todo list
    """
    try:
        _open_store().list_tasks()
    except TodoError as e:
        _fail(e)


def raw(
    args: list[str] | None = typer.Argument(
        None,
        help="Which tasks to print: done or todo",
        show_default=False,
    ),
) -> None:
    """
    Print done or not-done tasks as plain text, without markers.

    Examples:
        todo raw done
        todo raw todo
    """
    try:
        _open_store().raw(args or [])
    except InvalidArgCountError as e:
        # Reported, but not a failed invocation.
        report_error(e)
    except TodoError as e:
        _fail(e)


def add(
    tasks: list[str] | None = typer.Argument(
        None,
        help="Task(s) to add; blank arguments are skipped",
        show_default=False,
    ),
) -> None:
    """
    Add new task(s).

    Examples:
        todo add "buy carrots"
        todo add "buy carrots" "call mom"
    """
    try:
        _open_store().add(tasks or [])
    except TodoError as e:
        _fail(e)


def rm(
    indices: list[str] | None = typer.Argument(
        None,
        help="Index/indices of the task(s) to remove",
        show_default=False,
    ),
) -> None:
    """
    Remove task(s).

    Examples:
        todo rm 4
        todo rm 1 3
    """
    try:
        _open_store().remove(indices or [])
    except TodoError as e:
        _fail(e)


def reset() -> None:
    """
    Delete all tasks.

    The todo file is backed up first (see TODO_BAK_DIR) unless
    TODO_NOBACKUP is set; use `todo restore` to bring it back.
    """
    try:
        _open_store().reset()
    except TodoError as e:
        _fail(e)


def restore() -> None:
    """Restore the most recent backup made by `todo reset`."""
    try:
        _open_store().restore()
    except TodoError as e:
        _fail(e)


def sort() -> None:
    """Move completed tasks below uncompleted ones, keeping their order."""
    try:
        _open_store().sort()
    except TodoError as e:
        _fail(e)


def done(
    indices: list[str] | None = typer.Argument(
        None,
        help="Index/indices of the task(s) to toggle",
        show_default=False,
    ),
) -> None:
    """
    Mark task(s) as done, or as not done if they already are.

    Examples:
        todo done 2 3
    """
    try:
        _open_store().done(indices or [])
    except TodoError as e:
        _fail(e)


def edit(
    args: list[str] | None = typer.Argument(
        None,
        help="Index of the task, then its new text",
        show_default=False,
    ),
) -> None:
    """
    Replace the text of an existing task.

    Examples:
        todo edit 1 banana
        todo edit 2 "call mom tonight"
    """
    try:
        _open_store().edit(args or [])
    except TodoError as e:
        _fail(e)


__all__ = [
    "add",
    "done",
    "edit",
    "list_cmd",
    "raw",
    "reset",
    "restore",
    "rm",
    "sort",
]
