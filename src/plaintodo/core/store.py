"""
Plain-text task-list store.

The live file holds one encoded Entry per line (see plaintodo.core.entry).
A TodoStore reads the whole file once and every operation derives its
output from that snapshot plus the command arguments:

- read-only operations (list, raw) write to an output stream
- add appends to the live file
- every other mutating operation rewrites the live file in full

Full rewrites are built in memory first and committed through a temporary
file and an atomic rename, so a failure never leaves a truncated file.

There is no locking: two invocations racing on the same file are
last-writer-wins.
"""

import logging
import os
import shutil
import sys
import tempfile
from collections.abc import Sequence
from pathlib import Path
from typing import TextIO

from pydantic import ValidationError
from rich.console import Console

from .config.models import TodoConfig
from .entry import Entry, decode, encode_listing, encode_plain, encode_stored
from .errors import BackupFailedError, InvalidArgCountError, InvalidEntryError, StoreIOError

logger = logging.getLogger(__name__)

RAW_FILTERS = ("done", "todo")


def split_lines(contents: str) -> list[str]:
    """
    Split file contents into lines without terminators.

    Only "\\n" separates lines; a "\\r" directly before it is dropped and a
    final terminator does not produce a trailing empty line.
    """
    lines = contents.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def _require_args(command: str, args: Sequence[str], usage: str, *, exact: int | None = None) -> None:
    if exact is not None:
        if len(args) != exact:
            raise InvalidArgCountError(command, usage, len(args))
    elif not args:
        raise InvalidArgCountError(command, usage, 0)


def _new_entry(text: str, done: bool = False) -> Entry:
    try:
        return Entry(text=text, done=done)
    except ValidationError as e:
        raise InvalidEntryError(f"Task text must be a single line: {text!r}") from e


def _user_entry(text: str, done: bool = False) -> Entry:
    # A trailing "\r" would be read back as part of the line terminator.
    if text.endswith("\r"):
        raise InvalidEntryError(f"Task text cannot end with a carriage return: {text!r}")
    return _new_entry(text, done)


class TodoStore:
    """
    Task list loaded from a single plain-text file.

    Lines are kept exactly as read; a task's 1-based position is its index.

    Example:
        >>> store = TodoStore.load(load_config())
        >>> store.add(["buy milk"])
        >>> store.done(["1"])
    """

    def __init__(self, config: TodoConfig, lines: list[str]):
        """
        Initialize a store over already-loaded lines.

        Args:
            config: Resolved configuration
            lines: Stored lines in file order, without terminators
        """
        self.config = config
        self.lines = lines

    @classmethod
    def load(cls, config: TodoConfig) -> "TodoStore":
        """
        Open (creating if absent) and read the live file.

        Args:
            config: Resolved configuration

        Returns:
            Store holding the file's lines

        Raises:
            StoreIOError: If the file cannot be created, read or decoded as UTF-8
        """
        path = config.todo_path
        try:
            with open(path, "a+", encoding="utf-8", newline="") as f:
                f.seek(0)
                contents = f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise StoreIOError(f"Couldn't open the todo file {path}: {e}", path=path) from e

        lines = split_lines(contents)
        logger.debug(f"Loaded {len(lines)} line(s) from {path}")
        return cls(config, lines)

    @property
    def todo_path(self) -> Path:
        return self.config.todo_path

    @property
    def backup_path(self) -> Path:
        return self.config.backup_path

    # ---- low-level helpers ----

    def _decode(self, line: str, pos: int) -> Entry:
        return decode(line, self.config.decode_mode, line_num=pos)

    def entries(self) -> list[Entry]:
        """Decode every stored line, in order."""
        return [self._decode(line, pos) for pos, line in enumerate(self.lines, start=1)]

    def _write_lines(self, lines: Sequence[str]) -> None:
        """
        Replace the live file with the given encoded lines.

        Args:
            lines: Lines including their terminators

        Raises:
            StoreIOError: If the temporary file cannot be written or renamed
        """
        path = self.todo_path
        directory = path.parent
        try:
            fd, temp_path = tempfile.mkstemp(dir=directory, prefix=".todo_", suffix=".tmp")
        except OSError as e:
            raise StoreIOError(f"Couldn't open the todo file {path}: {e}", path=path) from e

        try:
            with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
                f.write("".join(lines))
            if path.exists():
                shutil.copymode(path, temp_path)
            os.replace(temp_path, path)
        except OSError as e:
            try:
                os.unlink(temp_path)
            except OSError:
                pass
            raise StoreIOError(f"Error while saving the todo file {path}: {e}", path=path) from e

        logger.debug(f"Wrote {len(lines)} line(s) to {path}")

    def _remove_live_file(self) -> None:
        try:
            os.remove(self.todo_path)
        except OSError as e:
            raise StoreIOError(
                f"Error while clearing todo file: {e}", path=self.todo_path
            ) from e
        logger.info(f"Removed todo file {self.todo_path}")

    # ---- read-only operations ----

    def list_tasks(self, console: Console | None = None) -> None:
        """
        Print every task as "{index} {text}", striking through done tasks.

        Args:
            console: Rich console to print to (defaults to stdout)

        Raises:
            DecodeError: If a stored line cannot be decoded
        """
        if console is None:
            console = Console(highlight=False, soft_wrap=True)

        for number, entry in enumerate(self.entries(), start=1):
            line = encode_listing(number, entry)
            line.right_crop(1)
            console.print(line)

    def raw(self, args: Sequence[str], out: TextIO | None = None) -> None:
        """
        Print the text of every done or not-done task, without markers.

        Args:
            args: Exactly one filter, "done" or "todo"
            out: Stream to write to (defaults to stdout)

        Raises:
            InvalidArgCountError: If args does not hold exactly one filter
            DecodeError: If a stored line cannot be decoded
        """
        _require_args("raw", args, "takes 1 argument (done/todo)", exact=1)
        if out is None:
            out = sys.stdout

        wanted = args[0]
        if wanted not in RAW_FILTERS:
            logger.warning(f"Unknown raw filter {wanted!r}; expected one of {', '.join(RAW_FILTERS)}")
            return

        want_done = wanted == "done"
        for pos, line in enumerate(self.lines, start=1):
            entry = self._decode(line, pos)
            if entry.done == want_done:
                out.write(encode_plain(entry))

    # ---- mutating operations ----

    def add(self, args: Sequence[str]) -> None:
        """
        Append one not-done task per non-blank argument.

        Args:
            args: Task texts; arguments that are blank after trimming are skipped

        Raises:
            InvalidArgCountError: If args is empty
            InvalidEntryError: If a task text spans several lines or ends with "\\r"
            StoreIOError: If the live file cannot be appended to
        """
        _require_args("add", args, "takes at least 1 argument")

        new_lines = [encode_stored(_user_entry(arg)) for arg in args if arg.strip()]

        try:
            with open(self.todo_path, "a", encoding="utf-8", newline="") as f:
                f.write("".join(new_lines))
        except OSError as e:
            raise StoreIOError(
                f"Couldn't open the todo file {self.todo_path}: {e}", path=self.todo_path
            ) from e

        self.lines.extend(line[:-1] for line in new_lines)
        logger.debug(f"Appended {len(new_lines)} task(s) to {self.todo_path}")

    def remove(self, args: Sequence[str]) -> None:
        """
        Drop the tasks at the given 1-based indices.

        Indices are matched as strings; unknown indices are ignored.

        Raises:
            InvalidArgCountError: If args is empty
            StoreIOError: If the live file cannot be rewritten
        """
        _require_args("rm", args, "takes at least 1 argument")

        targets = set(args)
        kept = [
            line for pos, line in enumerate(self.lines, start=1) if str(pos) not in targets
        ]
        self._write_lines([f"{line}\n" for line in kept])
        logger.debug(f"Removed {len(self.lines) - len(kept)} task(s)")
        self.lines = kept

    def reset(self) -> None:
        """
        Delete the live file, backing it up first unless backups are disabled.

        Raises:
            BackupFailedError: If the backup copy fails (the live file is kept)
            StoreIOError: If the live file cannot be deleted
        """
        if not self.config.no_backup:
            try:
                shutil.copyfile(self.todo_path, self.backup_path)
                shutil.copymode(self.todo_path, self.backup_path)
            except OSError as e:
                raise BackupFailedError(
                    f"Couldn't backup the todo file to {self.backup_path}: {e}",
                    path=self.backup_path,
                ) from e
            logger.info(f"Backed up {self.todo_path} to {self.backup_path}")

        self._remove_live_file()
        self.lines = []

    def restore(self) -> None:
        """
        Copy the backup over the live file.

        Raises:
            StoreIOError: If there is no backup or the copy fails
        """
        if not self.backup_path.is_file():
            raise StoreIOError(
                f"unable to restore the backup: {self.backup_path} does not exist",
                path=self.backup_path,
            )
        try:
            shutil.copyfile(self.backup_path, self.todo_path)
        except OSError as e:
            raise StoreIOError(
                f"unable to restore the backup: {e}", path=self.backup_path
            ) from e
        logger.info(f"Restored {self.todo_path} from {self.backup_path}")

    def sort(self) -> None:
        """
        Move done tasks after not-done tasks, keeping relative order.

        Raises:
            DecodeError: If a stored line cannot be decoded
            StoreIOError: If the live file cannot be rewritten
        """
        todo: list[str] = []
        done: list[str] = []
        for pos, line in enumerate(self.lines, start=1):
            (done if self._decode(line, pos).done else todo).append(line)

        self.lines = todo + done
        self._write_lines([f"{line}\n" for line in self.lines])

    def done(self, args: Sequence[str]) -> None:
        """
        Toggle the done flag of the tasks at the given 1-based indices.

        Toggling twice restores the original state.

        Raises:
            InvalidArgCountError: If args is empty
            DecodeError: If a targeted line cannot be decoded
            StoreIOError: If the live file cannot be rewritten
        """
        _require_args("done", args, "takes at least 1 argument")

        targets = set(args)
        out: list[str] = []
        for pos, line in enumerate(self.lines, start=1):
            if str(pos) in targets:
                entry = self._decode(line, pos)
                out.append(encode_stored(_new_entry(entry.text, not entry.done)))
            else:
                out.append(f"{line}\n")

        self._write_lines(out)
        self.lines = [line[:-1] for line in out]

    def edit(self, args: Sequence[str]) -> None:
        """
        Replace the text of one task, keeping its done flag.

        Args:
            args: [index, new_text]; an index matching no task leaves the
                file unchanged

        Raises:
            InvalidArgCountError: If args does not hold exactly 2 items
            InvalidEntryError: If the new text spans several lines or ends with "\\r"
            DecodeError: If the targeted line cannot be decoded
            StoreIOError: If the live file cannot be rewritten
        """
        _require_args("edit", args, "takes exact 2 arguments", exact=2)

        index, new_text = args
        out: list[str] = []
        for pos, line in enumerate(self.lines, start=1):
            if str(pos) == index:
                entry = self._decode(line, pos)
                out.append(encode_stored(_user_entry(new_text, entry.done)))
            else:
                out.append(f"{line}\n")

        self._write_lines(out)
        self.lines = [line[:-1] for line in out]


__all__ = ["RAW_FILTERS", "TodoStore", "split_lines"]
