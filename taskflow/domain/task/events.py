"""Task domain events.

Immutable records of state changes on tasks. They can be used for audit
logging or for triggering side effects such as notifications.

All events are pure data structures - no I/O, no side effects.
"""

from taskflow.domain.shared.events import DomainEvent

from .status import TaskStatus


class TaskTransitioned(DomainEvent):
    """Event raised when a task moves along an edge of the status graph."""

    task_id: str
    actor_id: str
    from_status: TaskStatus
    to_status: TaskStatus
    action: str


class TaskReturned(TaskTransitioned):
    """Event raised when work is sent back, with the reason given."""

    reason: str | None = None


class ChecklistChanged(DomainEvent):
    """Event raised when a checklist item is added, toggled or removed."""

    task_id: str
    actor_id: str
    item_id: str
    change: str
    progress: int


class ProgressSet(DomainEvent):
    """Event raised when progress is set manually or rolled up from subtasks."""

    task_id: str
    progress: int
    source: str


class AssigneesChanged(DomainEvent):
    """Event raised when the assignee set of a task is replaced."""

    task_id: str
    actor_id: str
    assignees: list[str]


class TaskArchived(DomainEvent):
    """Event raised when a task is soft-deleted.

    Archived tasks stay in the collection but accept no further transitions.
    """

    task_id: str
    actor_id: str


class TransitionRolledBack(DomainEvent):
    """Event raised when an optimistic move is undone after a failed update."""

    task_id: str
    attempted_status: TaskStatus
    restored_status: TaskStatus
    reason: str
