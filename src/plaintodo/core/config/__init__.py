"""
Configuration model and loading.

This module provides the Pydantic TodoConfig model and its resolution
from environment overrides with defaults.
"""

from .loader import (
    get_home_dir,
    load_config,
    resolve_backup_path,
    resolve_decode_mode,
    resolve_todo_path,
)
from .models import TodoConfig

__all__ = [
    # Models
    "TodoConfig",
    # Loader functions
    "get_home_dir",
    "load_config",
    "resolve_backup_path",
    "resolve_decode_mode",
    "resolve_todo_path",
]
