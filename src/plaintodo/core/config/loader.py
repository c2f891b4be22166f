"""
Configuration resolution from environment overrides.

Precedence for the live file:
    TODO_PATH > $HOME/TODO (if it exists) > $HOME/.todo

The backup path comes from TODO_BAK_DIR (default /tmp/todo.bak), and backups
are suppressed whenever TODO_NOBACKUP is present, whatever its value.
"""

import logging
import os
from collections.abc import Mapping
from pathlib import Path

from plaintodo.core.entry import DecodeMode
from plaintodo.core.errors import ConfigError, HomeUnresolvedError

from .models import DEFAULT_BACKUP_PATH, TodoConfig

logger = logging.getLogger(__name__)

ENV_TODO_PATH = "TODO_PATH"
ENV_BACKUP_PATH = "TODO_BAK_DIR"
ENV_NO_BACKUP = "TODO_NOBACKUP"
ENV_DECODE_MODE = "TODO_DECODE"

LEGACY_FILENAME = "TODO"
DEFAULT_FILENAME = ".todo"


def get_home_dir(environ: Mapping[str, str] | None = None) -> Path:
    """
    Get the home directory from $HOME.

    Raises:
        HomeUnresolvedError: If HOME is unset or empty
    """
    if environ is None:
        environ = os.environ
    home = environ.get("HOME")
    if not home:
        raise HomeUnresolvedError()
    return Path(home)


def resolve_todo_path(environ: Mapping[str, str] | None = None) -> Path:
    """
    Resolve the live task-list path.

    Args:
        environ: Environment mapping (defaults to os.environ)

    Returns:
        TODO_PATH if set, else the legacy $HOME/TODO when it exists,
        else $HOME/.todo

    Raises:
        HomeUnresolvedError: If no override is given and HOME is unset
    """
    if environ is None:
        environ = os.environ

    if (override := environ.get(ENV_TODO_PATH)) is not None:
        return Path(override)

    home = get_home_dir(environ)
    legacy = home / LEGACY_FILENAME
    if legacy.exists():
        logger.debug(f"Using legacy todo file {legacy}")
        return legacy
    return home / DEFAULT_FILENAME


def resolve_backup_path(environ: Mapping[str, str] | None = None) -> Path:
    """Resolve the backup path (TODO_BAK_DIR or /tmp/todo.bak)."""
    if environ is None:
        environ = os.environ
    if (override := environ.get(ENV_BACKUP_PATH)) is not None:
        return Path(override)
    return DEFAULT_BACKUP_PATH


def resolve_decode_mode(environ: Mapping[str, str] | None = None) -> DecodeMode:
    """
    Resolve the line decode mode from TODO_DECODE.

    Raises:
        ConfigError: If the value is not a known mode
    """
    if environ is None:
        environ = os.environ
    raw = environ.get(ENV_DECODE_MODE)
    if raw is None or not raw.strip():
        return DecodeMode.CORRECTED
    try:
        return DecodeMode(raw.strip().lower())
    except ValueError as e:
        valid = ", ".join(m.value for m in DecodeMode)
        raise ConfigError(f"Invalid {ENV_DECODE_MODE}={raw!r} (valid: {valid})") from e


def load_config(environ: Mapping[str, str] | None = None) -> TodoConfig:
    """
    Build a TodoConfig from the environment.

    Args:
        environ: Environment mapping (defaults to os.environ)

    Returns:
        Resolved configuration

    Raises:
        HomeUnresolvedError: If the live path needs HOME and it is unset
        ConfigError: If TODO_DECODE holds an unknown value
    """
    if environ is None:
        environ = os.environ

    config = TodoConfig(
        todo_path=resolve_todo_path(environ),
        backup_path=resolve_backup_path(environ),
        no_backup=ENV_NO_BACKUP in environ,
        decode_mode=resolve_decode_mode(environ),
    )
    logger.debug(
        f"Resolved config: todo_path={config.todo_path} backup_path={config.backup_path} "
        f"no_backup={config.no_backup} decode_mode={config.decode_mode.value}"
    )
    return config
