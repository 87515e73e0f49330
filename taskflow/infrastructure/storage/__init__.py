"""Storage infrastructure: JSON files and board snapshots."""

from taskflow.infrastructure.storage.json_storage import JsonStorage
from taskflow.infrastructure.storage.repositories import BoardRepository, BoardSnapshot

__all__ = ["JsonStorage", "BoardRepository", "BoardSnapshot"]
