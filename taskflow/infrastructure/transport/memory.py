"""In-memory transport.

A stand-in for the REST service: keeps its own copy of every task, applies
partial patches and answers with the canonical record. Like the real
server it re-validates the acting user's status changes (including the
return reason) and content edits, and it never lets a patch change a
task's identity or creator.
"""

import logging
from collections.abc import Iterable
from typing import Any

from pydantic import ValidationError

from taskflow.application.ports import TaskPatch
from taskflow.domain.actor import Actor, authorize_transition, can_edit
from taskflow.domain.shared import (
    DomainError,
    Err,
    Ok,
    Result,
    forbidden,
    not_found,
    validation_error,
)
from taskflow.domain.task import Task, parse_status, requires_reason

logger = logging.getLogger(__name__)

IMMUTABLE_FIELDS = frozenset({"id", "creator_id"})

# Content fields that need edit authority when an actor is set
CONTENT_FIELDS = frozenset({"checklist", "progress", "description"})


def apply_patch(task: Task, patch: TaskPatch) -> Result[Task, DomainError]:
    """Apply a partial update and re-validate the whole record.

    Returns:
        Ok(Task) with the patch applied, or Err(VALIDATION) for unknown or
        immutable fields and values the model rejects.
    """
    unknown = set(patch) - set(Task.model_fields)
    if unknown:
        return Err(validation_error(f"Unknown fields: {', '.join(sorted(unknown))}"))
    for field in IMMUTABLE_FIELDS & set(patch):
        if patch[field] != getattr(task, field):
            return Err(validation_error(f"Field '{field}' cannot be changed"))

    data: dict[str, Any] = {**task.model_dump(), **patch}
    try:
        return Ok(Task.model_validate(data))
    except ValidationError as e:
        return Err(validation_error(f"Invalid update for task {task.id}: {e.error_count()} error(s)"))


class InMemoryTransport:
    """Server-side task store living in process memory.

    Example:
        transport = InMemoryTransport(tasks, actor=actor)
        result = await transport.update_task("T1", {"status": "in-progress"})
    """

    def __init__(self, tasks: Iterable[Task] = (), actor: Actor | None = None) -> None:
        self._tasks: dict[str, Task] = {t.id: t.model_copy(deep=True) for t in tasks}
        self._actor = actor
        self.calls: list[tuple[str, TaskPatch]] = []

    def get(self, task_id: str) -> Task | None:
        return self._tasks.get(task_id)

    def all(self) -> list[Task]:
        return list(self._tasks.values())

    async def update_task(self, task_id: str, patch: TaskPatch) -> Result[Task, DomainError]:
        """Apply a partial patch and return the canonical record."""
        self.calls.append((task_id, dict(patch)))
        current = self._tasks.get(task_id)
        if current is None:
            return Err(not_found(f"Task {task_id} not found"))

        if "status" in patch and self._actor is not None:
            requested = parse_status(patch["status"])
            if requested is None:
                return Err(validation_error(f"Unknown status {patch['status']!r}"))
            if requested != current.status:
                auth = authorize_transition(self._actor, current, current.status, requested)
                if isinstance(auth, Err):
                    logger.debug("Server rejected %s: %s", task_id, auth.error)
                    return auth
                reason = patch.get("return_reason")
                if requires_reason(current.status, requested) and not (reason or "").strip():
                    return Err(validation_error("A reason is required to return a task"))

        if self._actor is not None and CONTENT_FIELDS & set(patch) and not can_edit(self._actor, current):
            logger.debug("Server rejected edit of %s by %s", task_id, self._actor.id)
            return Err(forbidden(f"You cannot edit '{current.title}'"))

        result = apply_patch(current, patch)
        if isinstance(result, Ok):
            self._tasks[task_id] = result.value
        return result
