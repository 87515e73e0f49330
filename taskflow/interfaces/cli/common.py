"""Shared utilities for taskflow CLI commands.

This module provides common utilities used across CLI commands:
- Board snapshot resolution and loading
- Formatted output helpers (error, success, info)
- Task formatting for display
"""

import os
from datetime import date
from pathlib import Path
from typing import Annotated, Optional

import typer

from taskflow.application.ports import Notice
from taskflow.domain.shared import Err
from taskflow.domain.task import OVERDUE, Task, display_status
from taskflow.infrastructure.storage import BoardRepository, BoardSnapshot

BOARD_ENV = "TASKFLOW_BOARD"
DEFAULT_BOARD_FILE = "board.json"

# Reusable board option for CLI commands
# Usage: def my_command(board: BoardOption = None) -> None:
BoardOption = Annotated[Optional[Path], typer.Option(
    "--board", "-b",
    help=f"Board snapshot file (or set {BOARD_ENV} env var)",
    envvar=BOARD_ENV,
)]


def get_board_path(explicit: Path | None = None) -> Path:
    """Resolve the board snapshot file.

    Resolution order:
    1. Explicit path (from -b/--board CLI option or TASKFLOW_BOARD)
    2. board.json in the current directory

    Raises:
        typer.Exit: If no board file can be found.
    """
    if explicit:
        return explicit

    env_board = os.environ.get(BOARD_ENV)
    if env_board:
        return Path(env_board)

    candidate = Path.cwd() / DEFAULT_BOARD_FILE
    if candidate.exists():
        return candidate

    print_error("No board specified.")
    typer.echo("")
    typer.echo("Specify a board using one of:")
    typer.echo("  1. Use -b/--board option: taskflow board show -b team.json")
    typer.echo(f"  2. Set {BOARD_ENV} env var: export {BOARD_ENV}=team.json")
    typer.echo(f"  3. Run from a directory containing {DEFAULT_BOARD_FILE}")
    raise typer.Exit(1)


def load_board(explicit: Path | None = None) -> tuple[Path, BoardSnapshot]:
    """Load a board snapshot or exit with the repository's error."""
    path = get_board_path(explicit)
    result = BoardRepository().load(path)
    if isinstance(result, Err):
        print_error(result.error)
        raise typer.Exit(1)
    return path, result.value


def save_board(path: Path, snapshot: BoardSnapshot) -> None:
    result = BoardRepository().save(path, snapshot)
    if isinstance(result, Err):
        print_error(result.error)
        raise typer.Exit(1)
    print_info(f"Saved {path}")


def require_task(snapshot: BoardSnapshot, task_id: str) -> Task:
    for task in snapshot.tasks:
        if task.id == task_id:
            return task
    print_error(f"Task {task_id} not found")
    raise typer.Exit(1)


def print_error(msg: str) -> None:
    typer.echo(typer.style(f"Error: {msg}", fg=typer.colors.RED), err=True)


def print_success(msg: str) -> None:
    typer.echo(typer.style(msg, fg=typer.colors.GREEN))


def print_info(msg: str) -> None:
    typer.echo(typer.style(msg, fg=typer.colors.BLUE))


def print_notice(notice: Notice) -> None:
    """Render an engine notice the way the UI would toast it."""
    if notice.level == "error":
        print_error(notice.message)
    elif notice.level == "success":
        print_success(notice.message)
    else:
        print_info(notice.message)


def print_separator(char: str = "=", width: int = 60) -> None:
    typer.echo(char * width)


def print_header(title: str, width: int = 60) -> None:
    """Print a formatted header with separators."""
    print_separator("=", width)
    typer.echo(title)
    print_separator("=", width)


def format_task_line(task: Task, today: date) -> str:
    """One-line task summary: id, title, progress, deadline, assignees."""
    parts = [f"{task.id}: {task.title}", f"{task.progress}%"]
    if task.deadline:
        parts.append(f"due {task.deadline.isoformat()}")
    if display_status(task, today) == OVERDUE:
        parts.append(typer.style("OVERDUE", fg=typer.colors.RED))
    if task.assignees:
        parts.append("@" + ",".join(sorted(task.assignees)))
    if task.parent_id:
        parts.append(f"(sub of {task.parent_id})")
    return "  ".join(parts)

