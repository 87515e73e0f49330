"""Board snapshot repository.

A board snapshot is a JSON file holding the acting user, a task list and,
for dashboards, the trusted team member ids. The CLI loads one, works on it
in memory and can write the result back.
"""

from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

from taskflow.domain.actor import Actor
from taskflow.domain.shared.result import Err, Ok, Result
from taskflow.domain.task import Task, validate_hierarchy
from taskflow.infrastructure.storage.json_storage import JsonStorage


class BoardSnapshot(BaseModel):
    """Contents of a board snapshot file."""

    actor: Actor
    tasks: list[Task] = Field(default_factory=list)
    trusted_member_ids: list[str] = Field(default_factory=list)


class BoardRepository:
    """Repository for board snapshot files.

    Wraps JsonStorage with snapshot validation and Result-based error
    handling.
    """

    def __init__(self, storage: JsonStorage | None = None) -> None:
        """Initialize the repository.

        Args:
            storage: JsonStorage instance to use. Creates new one if not provided.
        """
        self._storage = storage or JsonStorage()

    def load(self, path: Path) -> Result[BoardSnapshot, str]:
        """Load and validate a snapshot.

        Duplicate task ids, dangling parents and parent cycles are rejected.

        Returns:
            Ok(BoardSnapshot) if successful, Err(str) with error message if failed.
        """
        result = self._storage.load_json(path)
        if isinstance(result, Err):
            return result

        try:
            snapshot = BoardSnapshot.model_validate(result.value)
        except ValidationError as e:
            return Err(f"Invalid board data in {path}: {e.error_count()} error(s)\n{e}")

        ids = [t.id for t in snapshot.tasks]
        if len(ids) != len(set(ids)):
            return Err(f"Duplicate task ids in {path}")
        problems = validate_hierarchy(snapshot.tasks)
        if problems:
            return Err(f"Broken task hierarchy in {path}: " + "; ".join(problems))
        return Ok(snapshot)

    def save(self, path: Path, snapshot: BoardSnapshot) -> Result[None, str]:
        """Write a snapshot as JSON.

        Returns:
            Ok(None) if successful, Err(str) with error message if failed.
        """
        return self._storage.save_json(path, snapshot.model_dump(mode="json"))
