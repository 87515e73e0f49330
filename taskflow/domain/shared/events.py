"""Base domain event infrastructure.

Domain events are immutable records of something that happened to a task:
a status change, a checklist toggle, a rollback. They are produced by the
pure application services and collected by whoever owns the task list.

Example usage:
    >>> class TaskArchived(DomainEvent):
    ...     task_id: str
    ...
    >>> event = TaskArchived(task_id="task-123")
    >>> print(f"Event {event.event_id} occurred at {event.timestamp}")
"""

from datetime import UTC, datetime
from uuid import uuid4

from pydantic import BaseModel, Field


class DomainEvent(BaseModel):
    """Base class for all domain events.

    Each event has a unique ID and a UTC timestamp of when it occurred.
    Subclasses add domain-specific fields.
    """

    event_id: str = Field(default_factory=lambda: str(uuid4()))
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))

    model_config = {"frozen": True}
