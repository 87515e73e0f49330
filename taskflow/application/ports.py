"""Ports (interfaces) used by the application layer.

The sync engine depends on Protocols instead of concrete implementations,
so the REST transport, the in-memory transport and test fakes are
interchangeable.
"""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any, Literal, Protocol

from taskflow.domain.shared import DomainError, Result
from taskflow.domain.task import Task

# Partial update: only the fields being changed, keyed by Task field name.
TaskPatch = dict[str, Any]


class Transport(Protocol):
    """Authoritative task update endpoint.

    Implementations apply a partial patch and return the canonical task
    record, or an Err(DomainError) when the server rejects the update. They
    may also raise on network failure; the sync engine treats both the same.
    """

    def update_task(self, task_id: str, patch: TaskPatch) -> Awaitable[Result[Task, DomainError]]: ...


@dataclass(frozen=True, slots=True)
class Notice:
    """A short message for the user (rendered as a toast by the UI)."""

    level: Literal["success", "info", "error"]
    message: str


Notifier = Callable[[Notice], None]
