"""Infrastructure layer.

Concrete I/O behind the application ports, returning Result types for
explicit error handling.

Exports:
    Storage:
        - JsonStorage: Low-level JSON file I/O
        - BoardRepository: Board snapshot persistence
        - BoardSnapshot: Actor, tasks and trusted members of one board

    Transport:
        - InMemoryTransport: Process-local task update endpoint
        - apply_patch: Partial update with re-validation
"""

from taskflow.infrastructure.storage import BoardRepository, BoardSnapshot, JsonStorage
from taskflow.infrastructure.transport import InMemoryTransport, apply_patch

__all__ = [
    # Storage
    "JsonStorage",
    "BoardRepository",
    "BoardSnapshot",
    # Transport
    "InMemoryTransport",
    "apply_patch",
]
