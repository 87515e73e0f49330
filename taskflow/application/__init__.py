"""Application service layer.

This package contains services that orchestrate domain operations.

Services:
    task_service - Pure task operations (transition, checklist, assign, archive)
    kanban_sync - Optimistic drag-and-drop synchronization with the transport
    dashboard_service - Scoped dashboard summaries
    board - Caller-owned task list and the optimistic mutation command

Example usage:
    >>> from taskflow.application import KanbanSync, TaskBoard
    >>>
    >>> board = TaskBoard(tasks)
    >>> sync = KanbanSync(board, actor, transport)
    >>> report = await sync.on_card_moved("T1", "waiting-approval", "completed")
"""

from taskflow.application.board import MutationState, OptimisticMutation, TaskBoard
from taskflow.application.dashboard_service import (
    DashboardSummary,
    DeadlineEntry,
    personal_dashboard,
    team_dashboard,
)
from taskflow.application.kanban_sync import (
    InFlightPolicy,
    KanbanSync,
    MoveOutcome,
    MoveReport,
)
from taskflow.application.ports import Notice, Notifier, TaskPatch, Transport
from taskflow.application.task_service import (
    BoardStats,
    add_checklist_item,
    approve_task,
    archive_task,
    assign_members,
    get_board_stats,
    remove_checklist_item,
    return_task,
    rollup_parent_progress,
    set_manual_progress,
    toggle_checklist_item,
    transition_patch,
    transition_task,
)

__all__ = [
    # Board
    "TaskBoard",
    "OptimisticMutation",
    "MutationState",
    # Ports
    "Transport",
    "TaskPatch",
    "Notice",
    "Notifier",
    # Task service
    "transition_task",
    "transition_patch",
    "approve_task",
    "return_task",
    "add_checklist_item",
    "toggle_checklist_item",
    "remove_checklist_item",
    "set_manual_progress",
    "rollup_parent_progress",
    "assign_members",
    "archive_task",
    "get_board_stats",
    "BoardStats",
    # Sync engine
    "KanbanSync",
    "InFlightPolicy",
    "MoveOutcome",
    "MoveReport",
    # Dashboards
    "team_dashboard",
    "personal_dashboard",
    "DashboardSummary",
    "DeadlineEntry",
]
