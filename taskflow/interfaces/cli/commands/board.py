"""Board CLI commands.

Commands for looking at a board snapshot and moving cards on it: column
view, progress, authorization checks, drag-and-drop moves and checklist
toggles. Moves go through the same sync engine the UI uses, against an
in-memory transport seeded from the snapshot.
"""

import asyncio
import logging
from datetime import date, datetime
from pathlib import Path
from typing import Optional

import typer

from taskflow.application import (
    InFlightPolicy,
    KanbanSync,
    MoveOutcome,
    MoveReport,
    TaskBoard,
    get_board_stats,
)
from taskflow.config import load_settings
from taskflow.domain.actor import allowed_targets, authorize_transition
from taskflow.domain.shared import Err
from taskflow.domain.task import (
    COLUMN_ORDER,
    STATUS_LABELS,
    compute_progress,
    parse_status,
    rollup_progress,
    subtasks_of,
)
from taskflow.infrastructure.storage import BoardSnapshot
from taskflow.infrastructure.transport import InMemoryTransport
from taskflow.interfaces.cli.common import (
    BoardOption,
    format_task_line,
    load_board,
    print_error,
    print_header,
    print_info,
    print_notice,
    print_separator,
    print_success,
    require_task,
    save_board,
)

logger = logging.getLogger(__name__)

app = typer.Typer(help="Board commands")

TodayOption = typer.Option(
    None, "--today", formats=["%Y-%m-%d"], help="Reference date (default: today)"
)


def _today(value: datetime | None) -> date:
    return value.date() if value else date.today()


def _engine(snapshot: BoardSnapshot) -> tuple[TaskBoard, KanbanSync]:
    board = TaskBoard(snapshot.tasks)
    transport = InMemoryTransport(snapshot.tasks, actor=snapshot.actor)
    settings = load_settings()
    sync = KanbanSync(
        board,
        snapshot.actor,
        transport,
        notify=print_notice,
        policy=InFlightPolicy(settings.in_flight_policy),
    )
    return board, sync


def _finish(
    report: MoveReport,
    snapshot: BoardSnapshot,
    board: TaskBoard,
    save: bool,
    path: Path,
) -> None:
    logger.debug("Gesture report: %s", report)
    if report.outcome != MoveOutcome.COMMITTED:
        if report.outcome == MoveOutcome.NOOP:
            print_info("Nothing to do")
            return
        raise typer.Exit(1)
    if save:
        save_board(path, snapshot.model_copy(update={"tasks": board.get()}))


# =============================================================================
# Commands
# =============================================================================


@app.command("show")
def show(
    board: BoardOption = None,
    today: Optional[datetime] = TodayOption,
) -> None:
    """Show the board as columns, left to right."""
    _, snapshot = load_board(board)
    ref = _today(today)
    live = [t for t in snapshot.tasks if not t.archived]

    print_header(f"BOARD ({snapshot.actor.role.value}: {snapshot.actor.id})")
    for status in COLUMN_ORDER:
        column = [t for t in live if t.status == status]
        typer.echo(f"\n## {STATUS_LABELS[status]} ({len(column)})")
        for task in column:
            typer.echo(f"- {format_task_line(task, ref)}")

    stats = get_board_stats(snapshot.tasks)
    typer.echo("")
    print_separator()
    typer.echo(f"{stats.completed}/{stats.total} completed ({stats.progress_percent}%)")


@app.command("progress")
def progress(
    task_id: str = typer.Argument(..., help="Task ID"),
    board: BoardOption = None,
) -> None:
    """Show checklist and subtask progress of a task."""
    _, snapshot = load_board(board)
    task = require_task(snapshot, task_id)

    typer.echo(f"{task.title}: {task.progress}%")
    derived = compute_progress(task.checklist)
    if derived is None:
        typer.echo("Checklist: empty (progress is set manually)")
    else:
        done = sum(1 for item in task.checklist if item.completed)
        typer.echo(f"Checklist: {done}/{len(task.checklist)} done ({derived}%)")
        for item in task.checklist:
            mark = "[x]" if item.completed else "[ ]"
            typer.echo(f"  {mark} {item.id}: {item.content}")

    children = subtasks_of(snapshot.tasks, task.id)
    if children:
        typer.echo(f"Subtasks: {len(children)} (mean progress {rollup_progress(snapshot.tasks, task.id)}%)")


@app.command("can")
def can(
    task_id: str = typer.Argument(..., help="Task ID"),
    status: Optional[str] = typer.Argument(None, help="Target status or column label"),
    board: BoardOption = None,
) -> None:
    """Check whether the board's actor may move a task.

    Without a target status, lists every status the actor may move it to.
    """
    _, snapshot = load_board(board)
    task = require_task(snapshot, task_id)

    if status is None:
        targets = allowed_targets(snapshot.actor, task)
        if not targets:
            print_info(f"No moves allowed for '{task.title}'")
            return
        for target in targets:
            typer.echo(f"- {target.value}")
        return

    target = parse_status(status)
    if target is None:
        print_error(f"Unknown status: {status}")
        raise typer.Exit(1)
    result = authorize_transition(snapshot.actor, task, task.status, target)
    if isinstance(result, Err):
        print_error(result.error.message)
        raise typer.Exit(1)
    print_success(f"Allowed: {task.status.value} -> {target.value}")


@app.command("move")
def move(
    task_id: str = typer.Argument(..., help="Task ID"),
    target: str = typer.Argument(..., help="Target column label"),
    reason: Optional[str] = typer.Option(None, "--reason", "-r", help="Reason when returning a task"),
    save: bool = typer.Option(False, "--save", help="Write the result back to the board file"),
    board: BoardOption = None,
) -> None:
    """Move a card to another column, as a drag-and-drop would."""
    path, snapshot = load_board(board)
    task = require_task(snapshot, task_id)
    live_board, sync = _engine(snapshot)

    report = asyncio.run(sync.on_card_moved(task_id, task.status.value, target, reason=reason))
    _finish(report, snapshot, live_board, save, path)


@app.command("check")
def check(
    task_id: str = typer.Argument(..., help="Task ID"),
    item_id: str = typer.Argument(..., help="Checklist item ID"),
    save: bool = typer.Option(False, "--save", help="Write the result back to the board file"),
    board: BoardOption = None,
) -> None:
    """Toggle a checklist item and show the new progress."""
    path, snapshot = load_board(board)
    require_task(snapshot, task_id)
    live_board, sync = _engine(snapshot)

    report = asyncio.run(sync.on_checklist_toggled(task_id, item_id))
    updated = live_board.find(task_id)
    if report.outcome == MoveOutcome.COMMITTED and updated is not None:
        typer.echo(f"Progress: {updated.progress}%")
    _finish(report, snapshot, live_board, save, path)
