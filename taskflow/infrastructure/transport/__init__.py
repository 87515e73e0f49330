"""Transport implementations for the sync engine."""

from taskflow.infrastructure.transport.memory import (
    IMMUTABLE_FIELDS,
    InMemoryTransport,
    apply_patch,
)

__all__ = ["InMemoryTransport", "apply_patch", "IMMUTABLE_FIELDS"]
