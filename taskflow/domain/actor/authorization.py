"""Transition and edit authorization.

The single place where "may this actor do this to this task" is decided.
Boards, detail views and services all call into this module instead of
deriving their own ``can_edit``/``can_approve`` flags.

All functions in this module are pure - no I/O, no side effects.
"""

from dataclasses import dataclass

from taskflow.domain.shared import (
    DomainError,
    Err,
    Ok,
    Result,
    forbidden,
    invalid_transition,
    is_ok,
)
from taskflow.domain.task.models import Task
from taskflow.domain.task.status import (
    COLUMN_ORDER,
    TaskStatus,
    is_legal_edge,
    parse_status,
)

from .models import Actor

# Moves an assignee may make on their own, keyed by the task's current status
_ASSIGNEE_MOVES: dict[TaskStatus, frozenset[TaskStatus]] = {
    TaskStatus.IN_PROGRESS: frozenset({TaskStatus.WAITING_APPROVAL}),
    TaskStatus.NOT_ASSIGNED: frozenset({TaskStatus.IN_PROGRESS, TaskStatus.RETURNED}),
}


@dataclass(frozen=True, slots=True)
class TaskRelation:
    """How an actor relates to one task."""

    is_creator: bool
    is_assignee: bool
    is_manager: bool

    @property
    def has_authority(self) -> bool:
        """Creators and managers may use every edge of the graph."""
        return self.is_creator or self.is_manager


def relation_to(actor: Actor, task: Task) -> TaskRelation:
    return TaskRelation(
        is_creator=task.creator_id is not None and actor.id == task.creator_id,
        is_assignee=actor.member_id is not None and actor.member_id in task.assignees,
        is_manager=actor.is_manager,
    )


def authorize_transition(
    actor: Actor,
    task: Task,
    from_status: TaskStatus | str,
    to_status: TaskStatus | str,
) -> Result[None, DomainError]:
    """Decide whether an actor may move a task from one status to another.

    Rules, first match governs:
    1. Archived tasks accept no transition.
    2. Edges outside the state graph are invalid for everybody.
    3. Creators and managers may use any edge.
    4. An assignee may submit an in-progress task for approval.
    5. An assignee may accept or decline a not-assigned task.
    6. Anything else is denied.

    Args:
        actor: Who is asking
        task: The task as currently known
        from_status: Status the caller believes the task is in
        to_status: Requested status

    Returns:
        Ok(None) if allowed, or Err with a FORBIDDEN or INVALID_TRANSITION error
    """
    if task.archived:
        return Err(forbidden(f"Task '{task.title}' is archived"))

    source = parse_status(from_status)
    target = parse_status(to_status)
    if source is None or target is None:
        return Err(invalid_transition(f"Unknown status: {from_status!r} -> {to_status!r}"))
    if source != task.status:
        return Err(
            invalid_transition(
                f"Task '{task.title}' is {task.status.value}, not {source.value}"
            )
        )
    if not is_legal_edge(source, target):
        return Err(
            invalid_transition(f"Cannot move from {source.value} to {target.value}")
        )

    relation = relation_to(actor, task)
    if relation.has_authority:
        return Ok(None)
    if relation.is_assignee and target in _ASSIGNEE_MOVES.get(task.status, frozenset()):
        return Ok(None)
    return Err(
        forbidden(f"You are not allowed to move '{task.title}' to {target.value}")
    )


def can_transition(
    actor: Actor,
    task: Task,
    from_status: TaskStatus | str,
    to_status: TaskStatus | str,
) -> bool:
    """Boolean form of ``authorize_transition``. Never raises."""
    return is_ok(authorize_transition(actor, task, from_status, to_status))


def allowed_targets(actor: Actor, task: Task) -> list[TaskStatus]:
    """Statuses this actor may move the task to, in board column order."""
    return [s for s in COLUMN_ORDER if can_transition(actor, task, task.status, s)]


def can_edit(actor: Actor, task: Task) -> bool:
    """Edit content (checklist, description, manual progress).

    Creators and managers always may; assignees only while the task is in
    progress. Archived tasks are read-only.
    """
    if task.archived:
        return False
    relation = relation_to(actor, task)
    if relation.has_authority:
        return True
    return relation.is_assignee and task.status == TaskStatus.IN_PROGRESS


def can_assign(actor: Actor, task: Task) -> bool:
    """Change the assignee set, or archive the task."""
    return not task.archived and relation_to(actor, task).has_authority
