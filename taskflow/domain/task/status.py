"""Task status state machine.

Defines the one canonical status enum, the legal transition graph, and the
single mapping from free-form labels (board column names, backend values)
to statuses. ``overdue`` is not a status: it is a display state derived from
the deadline by ``is_overdue``.

All functions in this module are pure - no I/O, no side effects.
"""

from collections.abc import Collection
from datetime import date
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .models import Task


class TaskStatus(str, Enum):
    """Stored lifecycle status of a task."""

    NOT_ASSIGNED = "not-assigned"
    IN_PROGRESS = "in-progress"
    WAITING_APPROVAL = "waiting-approval"
    RETURNED = "returned"
    COMPLETED = "completed"


INITIAL_STATUS = TaskStatus.NOT_ASSIGNED
TERMINAL_STATUSES: frozenset[TaskStatus] = frozenset({TaskStatus.COMPLETED})

# Display-only state, never stored on a task
OVERDUE = "overdue"

# Edge -> action name. These are the only legal moves.
TRANSITIONS: dict[tuple[TaskStatus, TaskStatus], str] = {
    (TaskStatus.NOT_ASSIGNED, TaskStatus.IN_PROGRESS): "accept",
    (TaskStatus.NOT_ASSIGNED, TaskStatus.RETURNED): "decline",
    (TaskStatus.IN_PROGRESS, TaskStatus.WAITING_APPROVAL): "submit",
    (TaskStatus.WAITING_APPROVAL, TaskStatus.COMPLETED): "approve",
    (TaskStatus.WAITING_APPROVAL, TaskStatus.RETURNED): "return",
    (TaskStatus.RETURNED, TaskStatus.IN_PROGRESS): "resume",
    (TaskStatus.RETURNED, TaskStatus.WAITING_APPROVAL): "resubmit",
}

# Board column order, left to right
COLUMN_ORDER: tuple[TaskStatus, ...] = (
    TaskStatus.NOT_ASSIGNED,
    TaskStatus.IN_PROGRESS,
    TaskStatus.WAITING_APPROVAL,
    TaskStatus.RETURNED,
    TaskStatus.COMPLETED,
)

STATUS_LABELS: dict[TaskStatus, str] = {
    TaskStatus.NOT_ASSIGNED: "Not assigned",
    TaskStatus.IN_PROGRESS: "In progress",
    TaskStatus.WAITING_APPROVAL: "Waiting for approval",
    TaskStatus.RETURNED: "Returned",
    TaskStatus.COMPLETED: "Completed",
}

# Normalized label -> status. Keys are lowercase with '-' separators.
_SYNONYMS: dict[str, TaskStatus] = {
    "not-assigned": TaskStatus.NOT_ASSIGNED,
    "pending": TaskStatus.NOT_ASSIGNED,
    "todo": TaskStatus.NOT_ASSIGNED,
    "in-progress": TaskStatus.IN_PROGRESS,
    "running": TaskStatus.IN_PROGRESS,
    "doing": TaskStatus.IN_PROGRESS,
    "waiting-approval": TaskStatus.WAITING_APPROVAL,
    "waiting-for-approval": TaskStatus.WAITING_APPROVAL,
    "submitted": TaskStatus.WAITING_APPROVAL,
    "review": TaskStatus.WAITING_APPROVAL,
    "returned": TaskStatus.RETURNED,
    "rejected": TaskStatus.RETURNED,
    "completed": TaskStatus.COMPLETED,
    "done": TaskStatus.COMPLETED,
    "finished": TaskStatus.COMPLETED,
}


def _normalize_label(label: str) -> str:
    return "-".join(label.strip().lower().replace("_", " ").replace("-", " ").split())


def parse_status(label: "str | TaskStatus | None") -> TaskStatus | None:
    """Map a label or backend value to a status.

    Case, surrounding whitespace, underscores and spaces are ignored, so
    "In_Progress", "in progress" and "running" all resolve to IN_PROGRESS.

    Returns:
        The status, or None if the label is unknown
    """
    if isinstance(label, TaskStatus):
        return label
    if not isinstance(label, str):
        return None
    return _SYNONYMS.get(_normalize_label(label))


def resolve_column(label: "str | TaskStatus | None") -> TaskStatus:
    """Map a board column label to a status. Total: never raises.

    Unknown labels fall back to the initial status.
    """
    return parse_status(label) or INITIAL_STATUS


def is_legal_edge(from_status: TaskStatus, to_status: TaskStatus) -> bool:
    """Check if the state graph contains the edge from_status -> to_status."""
    return (from_status, to_status) in TRANSITIONS


def edge_name(from_status: TaskStatus, to_status: TaskStatus) -> str | None:
    """Action name of an edge ("accept", "approve", ...), or None if illegal."""
    return TRANSITIONS.get((from_status, to_status))


def next_statuses(status: TaskStatus) -> list[TaskStatus]:
    """Statuses reachable in one legal move, in board column order."""
    return [target for target in COLUMN_ORDER if (status, target) in TRANSITIONS]


def is_terminal(status: TaskStatus) -> bool:
    return status in TERMINAL_STATUSES


def requires_reason(from_status: TaskStatus, to_status: TaskStatus) -> bool:
    """Returning work from approval must say why."""
    return from_status == TaskStatus.WAITING_APPROVAL and to_status == TaskStatus.RETURNED


def is_overdue(
    task: "Task",
    today: date,
    terminal: Collection[TaskStatus] = TERMINAL_STATUSES,
) -> bool:
    """Check if a task is past its deadline and not finished.

    The one overdue predicate used by boards and dashboards alike. Tasks
    without a deadline are never overdue.

    Args:
        task: The task to check
        today: Reference date
        terminal: Statuses that count as finished

    Returns:
        True if deadline < today and the status is not terminal
    """
    if task.deadline is None:
        return False
    return task.deadline < today and task.status not in terminal


def display_status(task: "Task", today: date) -> str:
    """Status shown to the user: "overdue" overrides the stored status."""
    if is_overdue(task, today):
        return OVERDUE
    return task.status.value
