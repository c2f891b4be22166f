"""
Argv preprocessor for forgiving CLI flag and command handling.

Normalizes sys.argv before Typer parses it, handling common user patterns:
- ``todo --version`` → ``todo version``
- ``todo help`` → ``todo --help`` and ``todo help add`` → ``todo add --help``
- ``todo list --debug`` → ``todo --debug list``

Arguments of commands that take task text or indices are never rewritten:
``todo add --debug`` adds a task named "--debug".
"""

_GLOBAL_FLAGS = {"--debug"}

# Subcommands without arguments; a global flag after them can only be a flag.
_NO_ARG_COMMANDS = {"list", "sort", "reset", "restore", "version"}


def preprocess_argv(argv: list[str]) -> list[str]:
    """Normalize CLI arguments for Typer compatibility.

    Applied rules (in order):
    1. ``--version`` / ``-V`` as first arg → ``version`` subcommand
    2. ``help`` pseudo-command → ``--help`` appended to the subcommand
    3. Global flags hoisted before the subcommand
    """
    if not argv:
        return argv

    # Rule 1: --version / -V at top level → version subcommand
    if argv[0] in ("--version", "-V"):
        return ["version"]

    # Rule 2: help pseudo-command → --help
    if argv[0] == "help":
        return _rewrite_help(argv[1:])

    # Rule 3: hoist global flags
    return _hoist_global_flags(argv)


def _rewrite_help(rest: list[str]) -> list[str]:
    """Rewrite ``help [subcmd]`` into ``[subcmd] --help``.

    Only the first non-flag, non-"help" token is kept; commands have no
    nested subcommands.
    """
    for token in rest:
        if token.startswith("-") or token == "help":
            continue
        return [token, "--help"]
    return ["--help"]


def _hoist_global_flags(argv: list[str]) -> list[str]:
    """Move global flags in front of the subcommand, keeping one of each.

    Flags before the subcommand are always moved. Flags after it are moved
    only for subcommands that take no arguments.
    """
    split = next((i for i, token in enumerate(argv) if not token.startswith("-")), len(argv))
    head, command, tail = argv[:split], argv[split : split + 1], argv[split + 1 :]

    if command and command[0] in _NO_ARG_COMMANDS:
        movable = head + tail
        tail = [token for token in tail if token not in _GLOBAL_FLAGS]
    else:
        movable = head

    flags = [flag for flag in sorted(_GLOBAL_FLAGS) if flag in movable]
    head = [token for token in head if token not in _GLOBAL_FLAGS]
    return [*flags, *head, *command, *tail]
