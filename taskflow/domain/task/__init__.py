"""Task domain - lifecycle, progress and hierarchy.

All exports are pure (no I/O, no side effects).

Key Types:
    TaskStatus - Stored lifecycle status
    Priority - Task priority
    ChecklistItem - One checklist line
    Task - Main task or subtask

State Machine:
    TRANSITIONS - Legal edges and their action names
    parse_status / resolve_column - Label to status mapping
    is_overdue / display_status - Derived overdue display state

Progress:
    compute_progress - Checklist completion percentage
    mean_progress - Subtask rollup

Hierarchy:
    subtasks_of, ancestors, root_of, validate_hierarchy, rollup_progress

Domain Events:
    TaskTransitioned, TaskReturned, ChecklistChanged, ProgressSet,
    AssigneesChanged, TaskArchived, TransitionRolledBack
"""

from .events import (
    AssigneesChanged,
    ChecklistChanged,
    ProgressSet,
    TaskArchived,
    TaskReturned,
    TaskTransitioned,
    TransitionRolledBack,
)
from .hierarchy import (
    ancestors,
    completed_subtask_count,
    count_by_status,
    find_task,
    fold_tasks,
    index_by_id,
    replace_task,
    rollup_progress,
    root_of,
    subtasks_of,
    update_task_in,
    validate_hierarchy,
)
from .models import ChecklistItem, Priority, Task
from .progress import compute_progress, mean_progress, percent
from .status import (
    COLUMN_ORDER,
    INITIAL_STATUS,
    OVERDUE,
    STATUS_LABELS,
    TERMINAL_STATUSES,
    TRANSITIONS,
    TaskStatus,
    display_status,
    edge_name,
    is_legal_edge,
    is_overdue,
    is_terminal,
    next_statuses,
    parse_status,
    requires_reason,
    resolve_column,
)

__all__ = [
    # Models
    "TaskStatus",
    "Priority",
    "ChecklistItem",
    "Task",
    # State machine
    "INITIAL_STATUS",
    "TERMINAL_STATUSES",
    "OVERDUE",
    "TRANSITIONS",
    "COLUMN_ORDER",
    "STATUS_LABELS",
    "parse_status",
    "resolve_column",
    "is_legal_edge",
    "edge_name",
    "next_statuses",
    "is_terminal",
    "requires_reason",
    "is_overdue",
    "display_status",
    # Progress
    "percent",
    "compute_progress",
    "mean_progress",
    # Hierarchy
    "fold_tasks",
    "index_by_id",
    "find_task",
    "update_task_in",
    "replace_task",
    "subtasks_of",
    "ancestors",
    "root_of",
    "validate_hierarchy",
    "count_by_status",
    "rollup_progress",
    "completed_subtask_count",
    # Events
    "TaskTransitioned",
    "TaskReturned",
    "ChecklistChanged",
    "ProgressSet",
    "AssigneesChanged",
    "TaskArchived",
    "TransitionRolledBack",
]
