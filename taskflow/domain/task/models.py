"""Task domain models.

Pure domain models for tasks and subtasks. Uses Pydantic for
serialization compatibility with board snapshots and transports.
"""

from datetime import date, datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, field_serializer, field_validator, model_validator

from .progress import compute_progress
from .status import INITIAL_STATUS, TaskStatus, parse_status


class Priority(str, Enum):
    """Priority of a task."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class ChecklistItem(BaseModel):
    """One to-do line inside a task."""

    id: str
    content: str
    completed: bool = False


class Task(BaseModel):
    """A main task or a subtask.

    A subtask is a Task whose ``parent_id`` points at another task; the
    subtask list of a task is derived from the collection, never stored.

    ``progress`` follows the checklist whenever the checklist is non-empty.
    With an empty checklist it is a free field (manual value or subtask
    rollup).
    """

    id: str
    title: str
    description: str = ""
    status: TaskStatus = INITIAL_STATUS
    priority: Priority = Priority.MEDIUM
    deadline: date | None = None
    assignees: frozenset[str] = Field(default_factory=frozenset)
    creator_id: str | None = None
    checklist: list[ChecklistItem] = Field(default_factory=list)
    progress: int = Field(default=0, ge=0, le=100)
    parent_id: str | None = None
    archived: bool = False
    completed_at: datetime | None = None
    return_reason: str | None = None

    @field_validator("status", mode="before")
    @classmethod
    def _parse_status(cls, value: Any) -> Any:
        # Accept backend spellings ("in_progress", "done", ...)
        parsed = parse_status(value)
        return parsed if parsed is not None else value

    @field_serializer("assignees")
    def _sorted_assignees(self, value: frozenset[str]) -> list[str]:
        return sorted(value)

    @model_validator(mode="after")
    def _sync_progress(self) -> "Task":
        derived = compute_progress(self.checklist)
        if derived is not None:
            self.progress = derived
        return self

    def is_subtask(self) -> bool:
        """Check if this task hangs under a parent task."""
        return self.parent_id is not None

    def with_checklist(self, checklist: list[ChecklistItem]) -> "Task":
        """Copy of this task with a new checklist and matching progress.

        The checklist and progress always change in one step, so the two
        fields never diverge.
        """
        update: dict[str, Any] = {"checklist": checklist}
        derived = compute_progress(checklist)
        if derived is not None:
            update["progress"] = derived
        return self.model_copy(update=update)

    def checklist_item(self, item_id: str) -> ChecklistItem | None:
        for item in self.checklist:
            if item.id == item_id:
                return item
        return None
