"""
plaintodo - a task organizer backed by a single plain-text file.

Each line of the todo file encodes one task and its done marker.
"""

__version__ = "0.1.0"

# Re-export core models for convenience
from plaintodo.core.config.models import TodoConfig
from plaintodo.core.entry import DecodeMode, Entry
from plaintodo.core.store import TodoStore

__all__ = ["DecodeMode", "Entry", "TodoConfig", "TodoStore", "__version__"]
