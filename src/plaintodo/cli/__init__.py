"""
todo CLI - Main application entry point.

This module sets up the Typer CLI application with all subcommands.
"""

import logging
import sys

import typer
from rich.console import Console

from plaintodo import __version__
from plaintodo.cli import tasks
from plaintodo.cli.argv import preprocess_argv
from plaintodo.core.config.env import load_layered_env

# Help panel names for command grouping
PANEL_TASKS = "Work with Tasks"
PANEL_BACKUP = "Reset and Restore"
PANEL_ABOUT = "About"

# Create the main Typer app
app = typer.Typer(
    name="todo",
    help="A super fast and simple task organizer backed by a plain-text file",
    no_args_is_help=True,
    add_completion=False,
    context_settings={"help_option_names": ["--help", "-h"]},
)

console = Console()


def _configure_logging(debug: bool) -> None:
    """
    Configure logging for todo commands.

    Args:
        debug: If True, enable DEBUG level logging
    """
    level = logging.DEBUG if debug else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )


@app.callback()
def main(
    ctx: typer.Context,
    debug: bool = typer.Option(
        False,
        "--debug",
        help="Enable debug output with detailed logging",
    ),
) -> None:
    """
    todo - a task organizer backed by a single plain-text file.

    Each line of the todo file is one task, "[ ]task" when open and
    "[*] task" when done. Tasks are addressed by their 1-based index.

    Environment:
        TODO_PATH       todo file (default: ~/TODO if present, else ~/.todo)
        TODO_BAK_DIR    backup file used by reset/restore (default: /tmp/todo.bak)
        TODO_NOBACKUP   if set, reset deletes without a backup
        TODO_DECODE     legacy or corrected (default) line decoding

    Examples:
        todo add "buy carrots"       # Add a task
        todo list                    # Show all tasks
        todo done 1                  # Mark task 1 as done
        todo sort                    # Move done tasks to the bottom
    """
    _configure_logging(debug)

    # Precedence: OS env > project .env > user .env
    load_layered_env()

    ctx.obj = {"debug": debug}


# =============================================================================
# Work with Tasks
# =============================================================================

# Task arguments are free text: tokens starting with "-" are kept as
# arguments, and only the long --help flag is recognized, as the first token.
FREE_ARGS = {
    "ignore_unknown_options": True,
    "allow_interspersed_args": False,
    "help_option_names": ["--help"],
}

app.command(name="list", rich_help_panel=PANEL_TASKS)(tasks.list_cmd)
app.command(name="add", rich_help_panel=PANEL_TASKS, context_settings=FREE_ARGS)(tasks.add)
app.command(name="edit", rich_help_panel=PANEL_TASKS, context_settings=FREE_ARGS)(tasks.edit)
app.command(name="done", rich_help_panel=PANEL_TASKS, context_settings=FREE_ARGS)(tasks.done)
app.command(name="rm", rich_help_panel=PANEL_TASKS, context_settings=FREE_ARGS)(tasks.rm)
app.command(name="sort", rich_help_panel=PANEL_TASKS)(tasks.sort)
app.command(name="raw", rich_help_panel=PANEL_TASKS, context_settings=FREE_ARGS)(tasks.raw)


# =============================================================================
# Reset and Restore
# =============================================================================

app.command(name="reset", rich_help_panel=PANEL_BACKUP)(tasks.reset)
app.command(name="restore", rich_help_panel=PANEL_BACKUP)(tasks.restore)


# =============================================================================
# About
# =============================================================================


@app.command(rich_help_panel=PANEL_ABOUT)
def version() -> None:
    """Show todo version and exit."""
    console.print(f"todo version {__version__}")
    raise typer.Exit(0)


def cli_main() -> None:
    """
    Main CLI entry point.

    The argv preprocessor normalizes common patterns before Typer
    parses them (e.g. ``todo --version``, ``todo help add``,
    ``todo list --debug``).
    """
    sys.argv[1:] = preprocess_argv(sys.argv[1:])
    app()


__all__ = ["app", "cli_main"]
