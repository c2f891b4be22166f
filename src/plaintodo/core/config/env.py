"""Environment loading helpers.

The todo overrides (TODO_PATH, TODO_BAK_DIR, TODO_NOBACKUP, TODO_DECODE) are
read from the process environment, which can be seeded from .env files:

  os.environ (pre-existing) > project .env > user .env

- user env: $XDG_CONFIG_HOME/plaintodo/.env (or ~/.config/plaintodo/.env)
- project env: .env in the working directory

A .env file never overrides a variable exported in the shell. The project
file may override what the user file set.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterable

from dotenv import dotenv_values

from .loader import ENV_NO_BACKUP

# Variables that take effect by being set at all; a bare `KEY` line sets them.
PRESENCE_ONLY_KEYS = frozenset({ENV_NO_BACKUP})


def read_env_file(path: Path) -> dict[str, str]:
    """
    Parse one .env file. Missing files are empty.

    Keys without a value are skipped, except presence-only keys, which are
    read as an empty string.
    """
    if not path.is_file():
        return {}
    values: dict[str, str] = {}
    for k, v in dotenv_values(path).items():
        if k is None:
            continue
        if v is None:
            if k not in PRESENCE_ONLY_KEYS:
                continue
            v = ""
        values[str(k)] = str(v)
    return values


def default_user_env_paths() -> list[Path]:
    """User-level env files, or none when no config home can be found."""
    if xdg_home := os.environ.get("XDG_CONFIG_HOME"):
        return [Path(xdg_home) / "plaintodo" / ".env"]
    if home := os.environ.get("HOME"):
        return [Path(home) / ".config" / "plaintodo" / ".env"]
    return []


def load_layered_env(
    *,
    project_dir: Path | None = None,
    user_env_paths: Iterable[Path] | None = None,
    project_env_paths: Iterable[Path] | None = None,
) -> set[str]:
    """Seed os.environ from user + project .env files.

    Args:
        project_dir: base directory for the project .env (defaults to cwd)
        user_env_paths: explicit user env file paths
        project_env_paths: explicit project env file paths

    Returns:
        Names of the variables that were set from a file
    """
    if user_env_paths is None:
        user_env_paths = default_user_env_paths()
    if project_env_paths is None:
        project_env_paths = [(project_dir or Path.cwd()) / ".env"]

    # Anything present now came from the shell and is never touched.
    shell_keys = set(os.environ)
    loaded: set[str] = set()

    for layer in (user_env_paths, project_env_paths):
        for p in layer:
            for k, v in read_env_file(Path(p)).items():
                if k in shell_keys:
                    continue
                os.environ[k] = v
                loaded.add(k)

    return loaded
