"""Shared domain utilities.

This package provides common building blocks used across domain modules:

- Result monad for explicit error handling
- Typed domain errors carried inside ``Err``
- Base domain event infrastructure

Example usage:
    >>> from taskflow.domain.shared import DomainError, Err, Ok, Result, not_found
    >>>
    >>> def find_task(task_id: str) -> Result[dict, DomainError]:
    ...     if task_id == "missing":
    ...         return Err(not_found(f"Task {task_id} not found"))
    ...     return Ok({"id": task_id})
"""

from taskflow.domain.shared.errors import (
    DomainError,
    ErrorKind,
    busy,
    forbidden,
    invalid_transition,
    not_found,
    transport_error,
    validation_error,
)
from taskflow.domain.shared.events import DomainEvent
from taskflow.domain.shared.result import (
    Err,
    Ok,
    Result,
    is_ok,
)

__all__ = [
    # Result monad
    "Ok",
    "Err",
    "Result",
    "is_ok",
    # Errors
    "DomainError",
    "ErrorKind",
    "forbidden",
    "invalid_transition",
    "validation_error",
    "transport_error",
    "not_found",
    "busy",
    # Domain events
    "DomainEvent",
]
