"""CLI interface for taskflow using Typer.

Usage:
    taskflow board show             # Board columns
    taskflow move T1 in-progress    # Drag a card to another column
    taskflow dashboard team         # Team counters

The CLI is structured as:
- app: Main Typer application
- commands/: Individual command groups (board, dashboard, config)
- common.py: Shared utilities for CLI commands
- main.py: Entry point that runs the app
"""

import logging
from typing import Optional

import typer

from taskflow import __version__
from taskflow.config import load_settings

# Import command groups
from taskflow.interfaces.cli.commands import board, config, dashboard
from taskflow.interfaces.cli.common import BoardOption

# Create the main Typer application
app = typer.Typer(
    name="taskflow",
    help="Task lifecycle and Kanban board tooling",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"taskflow version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-V",
        help="Show version and exit",
        callback=version_callback,
        is_eager=True,
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """taskflow - role-based task lifecycle with an optimistic Kanban board."""
    level = "DEBUG" if verbose else load_settings().log_level
    logging.basicConfig(
        level=getattr(logging, level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


# =============================================================================
# Register Command Groups
# =============================================================================

app.add_typer(board.app, name="board")
app.add_typer(dashboard.app, name="dashboard")
app.add_typer(config.app, name="config")


# =============================================================================
# Top-Level Shortcuts for Common Commands
# =============================================================================


@app.command("move")
def move(
    task_id: str = typer.Argument(..., help="Task ID"),
    target: str = typer.Argument(..., help="Target column label"),
    reason: Optional[str] = typer.Option(None, "--reason", "-r", help="Reason when returning a task"),
    save: bool = typer.Option(False, "--save", help="Write the result back to the board file"),
    board_file: BoardOption = None,
) -> None:
    """Move a card (shortcut for 'board move')."""
    board.move(task_id=task_id, target=target, reason=reason, save=save, board=board_file)


@app.command("status")
def status(board_file: BoardOption = None) -> None:
    """Show the board (shortcut for 'board show')."""
    board.show(board=board_file, today=None)
