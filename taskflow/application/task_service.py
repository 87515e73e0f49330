"""Task application service.

Orchestrates task lifecycle operations by combining domain functions.
All functions are pure - no I/O, no side effects. Each returns the updated
task together with the domain event describing the change, or an Err with a
typed DomainError.
"""

import logging
from collections.abc import Sequence
from datetime import UTC, datetime
from uuid import uuid4

from pydantic import BaseModel

from taskflow.domain.actor import Actor, authorize_transition, can_assign, can_edit
from taskflow.domain.shared import (
    DomainError,
    Err,
    Ok,
    Result,
    forbidden,
    invalid_transition,
    not_found,
    validation_error,
)
from taskflow.domain.task import (
    AssigneesChanged,
    ChecklistChanged,
    ChecklistItem,
    ProgressSet,
    Task,
    TaskArchived,
    TaskReturned,
    TaskStatus,
    TaskTransitioned,
    count_by_status,
    edge_name,
    find_task,
    parse_status,
    requires_reason,
    rollup_progress,
)

logger = logging.getLogger(__name__)


class BoardStats(BaseModel):
    """Statistics about a task collection.

    Provides a summary view of task status for progress tracking and
    column headers.
    """

    total: int
    not_assigned: int
    in_progress: int
    waiting_approval: int
    returned: int
    completed: int

    @property
    def progress_percent(self) -> float:
        """Calculate completion percentage."""
        if self.total == 0:
            return 0.0
        return round(self.completed / self.total * 100, 1)


# =============================================================================
# Status Transitions
# =============================================================================


def transition_task(
    task: Task,
    actor: Actor,
    to_status: TaskStatus | str,
    reason: str | None = None,
    now: datetime | None = None,
) -> Result[tuple[Task, TaskTransitioned], DomainError]:
    """Move a task along one edge of the status graph.

    Authorization comes first (archived, illegal edge, actor authority),
    then validation of the return reason. Entering ``completed`` stamps
    ``completed_at``; a return stores the reason.

    Args:
        task: The task to move.
        actor: Who is moving it.
        to_status: Requested status (labels and synonyms accepted).
        reason: Why the task is returned; required for approval returns.
        now: Timestamp for ``completed_at``, defaults to the current UTC time.

    Returns:
        Ok((updated_task, event)) on success, or
        Err(DomainError) with FORBIDDEN, INVALID_TRANSITION or VALIDATION.
    """
    auth = authorize_transition(actor, task, task.status, to_status)
    if isinstance(auth, Err):
        logger.debug("Transition denied for %s: %s", task.id, auth.error)
        return auth

    target = parse_status(to_status)
    if target is None:
        return Err(invalid_transition(f"Unknown status: {to_status!r}"))
    reason = reason.strip() if reason else None
    if requires_reason(task.status, target) and not reason:
        return Err(validation_error("A reason is required to return a task"))

    update: dict[str, object] = {"status": target}
    if target == TaskStatus.COMPLETED:
        update["completed_at"] = now or datetime.now(UTC)
    if target == TaskStatus.RETURNED and reason:
        update["return_reason"] = reason
    updated = task.model_copy(update=update)

    fields = {
        "task_id": task.id,
        "actor_id": actor.id,
        "from_status": task.status,
        "to_status": target,
        "action": edge_name(task.status, target),
    }
    if target == TaskStatus.RETURNED:
        event: TaskTransitioned = TaskReturned(**fields, reason=reason)
    else:
        event = TaskTransitioned(**fields)
    return Ok((updated, event))


def transition_patch(before: Task, after: Task) -> dict[str, object]:
    """Partial update payload for a transition computed by transition_task."""
    patch: dict[str, object] = {"status": after.status.value}
    if after.completed_at != before.completed_at and after.completed_at is not None:
        patch["completed_at"] = after.completed_at.isoformat()
    if after.return_reason != before.return_reason:
        patch["return_reason"] = after.return_reason
    return patch


def approve_task(
    task: Task,
    actor: Actor,
    now: datetime | None = None,
) -> Result[tuple[Task, TaskTransitioned], DomainError]:
    """Approve a task waiting for approval (marks it completed)."""
    return transition_task(task, actor, TaskStatus.COMPLETED, now=now)


def return_task(
    task: Task,
    actor: Actor,
    reason: str,
) -> Result[tuple[Task, TaskTransitioned], DomainError]:
    """Send a task back with a reason."""
    return transition_task(task, actor, TaskStatus.RETURNED, reason=reason)


# =============================================================================
# Checklist and Progress
# =============================================================================


def _require_edit(task: Task, actor: Actor) -> Result[None, DomainError]:
    if not can_edit(actor, task):
        return Err(forbidden(f"You cannot edit '{task.title}'"))
    return Ok(None)


def add_checklist_item(
    task: Task,
    actor: Actor,
    content: str,
    item_id: str | None = None,
) -> Result[tuple[Task, ChecklistChanged], DomainError]:
    """Append a checklist item and recompute progress."""
    allowed = _require_edit(task, actor)
    if isinstance(allowed, Err):
        return allowed
    content = content.strip()
    if not content:
        return Err(validation_error("Checklist item content cannot be empty"))

    item = ChecklistItem(id=item_id or uuid4().hex[:8], content=content)
    updated = task.with_checklist([*task.checklist, item])
    event = ChecklistChanged(
        task_id=task.id,
        actor_id=actor.id,
        item_id=item.id,
        change="added",
        progress=updated.progress,
    )
    return Ok((updated, event))


def toggle_checklist_item(
    task: Task,
    actor: Actor,
    item_id: str,
) -> Result[tuple[Task, ChecklistChanged], DomainError]:
    """Flip one item's completion flag; progress changes in the same update."""
    allowed = _require_edit(task, actor)
    if isinstance(allowed, Err):
        return allowed
    item = task.checklist_item(item_id)
    if item is None:
        return Err(not_found(f"Checklist item {item_id} not found"))

    checklist = [
        i.model_copy(update={"completed": not i.completed}) if i.id == item_id else i
        for i in task.checklist
    ]
    updated = task.with_checklist(checklist)
    event = ChecklistChanged(
        task_id=task.id,
        actor_id=actor.id,
        item_id=item_id,
        change="checked" if not item.completed else "unchecked",
        progress=updated.progress,
    )
    return Ok((updated, event))


def remove_checklist_item(
    task: Task,
    actor: Actor,
    item_id: str,
) -> Result[tuple[Task, ChecklistChanged], DomainError]:
    """Delete a checklist item.

    Removing the last item leaves progress at its last derived value; from
    then on it is a manual field again.
    """
    allowed = _require_edit(task, actor)
    if isinstance(allowed, Err):
        return allowed
    if task.checklist_item(item_id) is None:
        return Err(not_found(f"Checklist item {item_id} not found"))

    updated = task.with_checklist([i for i in task.checklist if i.id != item_id])
    event = ChecklistChanged(
        task_id=task.id,
        actor_id=actor.id,
        item_id=item_id,
        change="removed",
        progress=updated.progress,
    )
    return Ok((updated, event))


def set_manual_progress(
    task: Task,
    actor: Actor,
    value: int,
) -> Result[tuple[Task, ProgressSet], DomainError]:
    """Set progress by hand. Only allowed while the checklist is empty."""
    allowed = _require_edit(task, actor)
    if isinstance(allowed, Err):
        return allowed
    if task.checklist:
        return Err(validation_error("Progress follows the checklist; toggle items instead"))
    if not 0 <= value <= 100:
        return Err(validation_error(f"Progress must be between 0 and 100, got {value}"))

    updated = task.model_copy(update={"progress": value})
    return Ok((updated, ProgressSet(task_id=task.id, progress=value, source="manual")))


def rollup_parent_progress(
    tasks: Sequence[Task],
    parent_id: str,
) -> Result[tuple[Task, ProgressSet], DomainError]:
    """Derive a main task's progress from its subtasks.

    A parent with its own checklist keeps checklist-derived progress.
    """
    parent = find_task(tasks, parent_id)
    if parent is None:
        return Err(not_found(f"Task {parent_id} not found"))
    if parent.checklist:
        return Err(validation_error(f"Task '{parent.title}' tracks progress by checklist"))
    value = rollup_progress(tasks, parent_id)
    if value is None:
        return Err(validation_error(f"Task '{parent.title}' has no subtasks"))

    updated = parent.model_copy(update={"progress": value})
    return Ok((updated, ProgressSet(task_id=parent_id, progress=value, source="subtasks")))


# =============================================================================
# Assignment and Archive
# =============================================================================


def assign_members(
    task: Task,
    actor: Actor,
    member_ids: Sequence[str],
) -> Result[tuple[Task, AssigneesChanged], DomainError]:
    """Replace the assignee set. Creators and managers only."""
    if not can_assign(actor, task):
        return Err(forbidden(f"You cannot assign members to '{task.title}'"))
    assignees = frozenset(m for m in member_ids if m)
    updated = task.model_copy(update={"assignees": assignees})
    event = AssigneesChanged(task_id=task.id, actor_id=actor.id, assignees=sorted(assignees))
    return Ok((updated, event))


def archive_task(task: Task, actor: Actor) -> Result[tuple[Task, TaskArchived], DomainError]:
    """Soft-delete a task. It stays in the collection but is frozen."""
    if task.archived:
        return Err(validation_error(f"Task '{task.title}' is already archived"))
    if not can_assign(actor, task):
        return Err(forbidden(f"You cannot archive '{task.title}'"))
    updated = task.model_copy(update={"archived": True})
    return Ok((updated, TaskArchived(task_id=task.id, actor_id=actor.id)))


# =============================================================================
# Statistics
# =============================================================================


def get_board_stats(tasks: Sequence[Task]) -> BoardStats:
    """Calculate statistics for a task collection.

    Counts live (non-archived) tasks by status.

    Args:
        tasks: The tasks to analyze.

    Returns:
        BoardStats with counts by status.
    """
    counts = count_by_status(tasks)

    return BoardStats(
        total=sum(counts.values()),
        not_assigned=counts[TaskStatus.NOT_ASSIGNED],
        in_progress=counts[TaskStatus.IN_PROGRESS],
        waiting_approval=counts[TaskStatus.WAITING_APPROVAL],
        returned=counts[TaskStatus.RETURNED],
        completed=counts[TaskStatus.COMPLETED],
    )
