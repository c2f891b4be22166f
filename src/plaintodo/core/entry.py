"""
Entry model and line codec.

A stored line carries a marker prefix followed by the task text:

    [ ]buy milk        not done (3-character marker)
    [*] call mom       done (4-character marker)

The marker widths differ. The historical decoder always stripped four
characters, which drops the first text character of every not-done entry.
DecodeMode makes that behavior an explicit choice: LEGACY reproduces it,
CORRECTED strips exactly the marker that is present.
"""

from enum import Enum

from pydantic import BaseModel, field_validator
from rich.text import Text

from .errors import LineTooShortError

DONE_MARKER = "[*] "
TODO_MARKER = "[ ]"

# Width stripped by the fixed-width decoder, whatever the marker.
LEGACY_PREFIX_WIDTH = len(DONE_MARKER)

STRIKE_STYLE = "strike"


class DecodeMode(str, Enum):
    """How stored lines are split into marker and text."""

    LEGACY = "legacy"
    CORRECTED = "corrected"


class Entry(BaseModel):
    """One task and its completion flag."""

    text: str
    done: bool = False

    @field_validator("text")
    @classmethod
    def text_is_single_line(cls, v: str) -> str:
        """Stored lines cannot contain line breaks."""
        if "\n" in v:
            raise ValueError("task text must be a single line")
        return v


def encode_stored(entry: Entry) -> str:
    """Encode an entry as a line of the live file."""
    marker = DONE_MARKER if entry.done else TODO_MARKER
    return f"{marker}{entry.text}\n"


def encode_plain(entry: Entry) -> str:
    """Encode an entry without any marker (used by `raw`)."""
    return f"{entry.text}\n"


def encode_listing(number: int, entry: Entry) -> Text:
    """
    Render an entry for `list` as "{number} {text}\\n".

    Done entries carry a strikethrough style on the text. The returned
    Rich Text's `.plain` is the undecorated line.
    """
    line = Text(f"{number} ")
    line.append(entry.text, style=STRIKE_STYLE if entry.done else None)
    line.append("\n")
    return line


def decode(
    line: str,
    mode: DecodeMode = DecodeMode.CORRECTED,
    *,
    line_num: int | None = None,
) -> Entry:
    """
    Decode a stored line (without its terminator) into an Entry.

    Args:
        line: Stored line
        mode: LEGACY strips a fixed 4 characters; CORRECTED strips the
            marker actually present and falls back to the fixed width for
            lines carrying neither marker
        line_num: 1-based position, used only for error messages

    Returns:
        Decoded Entry

    Raises:
        LineTooShortError: If the line is shorter than the width to strip
    """
    done = line[:LEGACY_PREFIX_WIDTH] == DONE_MARKER

    width = LEGACY_PREFIX_WIDTH
    if mode is DecodeMode.CORRECTED and not done and line.startswith(TODO_MARKER):
        width = len(TODO_MARKER)

    if len(line) < width:
        raise LineTooShortError(line, width, line_num=line_num)

    return Entry(text=line[width:], done=done)


__all__ = [
    "DONE_MARKER",
    "TODO_MARKER",
    "DecodeMode",
    "Entry",
    "decode",
    "encode_listing",
    "encode_plain",
    "encode_stored",
]
