"""Typed domain errors carried inside ``Err`` results.

Every failure a task operation can report is one of a small set of kinds.
The kind decides how the caller reacts: authorization and validation
failures are resolved locally, transport failures trigger a rollback.
"""

from dataclasses import dataclass
from enum import Enum


class ErrorKind(str, Enum):
    """Category of a domain failure."""

    FORBIDDEN = "forbidden"
    INVALID_TRANSITION = "invalid-transition"
    VALIDATION = "validation"
    TRANSPORT = "transport"
    NOT_FOUND = "not-found"
    BUSY = "busy"


@dataclass(frozen=True, slots=True)
class DomainError:
    """A failure with its kind and a short, user-facing message.

    Attributes:
        kind: Category used for routing the failure.
        message: Actionable text suitable for a notification.
    """

    kind: ErrorKind
    message: str

    def __str__(self) -> str:
        return f"{self.kind.value}: {self.message}"


def forbidden(message: str) -> DomainError:
    return DomainError(ErrorKind.FORBIDDEN, message)


def invalid_transition(message: str) -> DomainError:
    return DomainError(ErrorKind.INVALID_TRANSITION, message)


def validation_error(message: str) -> DomainError:
    return DomainError(ErrorKind.VALIDATION, message)


def transport_error(message: str) -> DomainError:
    return DomainError(ErrorKind.TRANSPORT, message)


def not_found(message: str) -> DomainError:
    return DomainError(ErrorKind.NOT_FOUND, message)


def busy(message: str) -> DomainError:
    return DomainError(ErrorKind.BUSY, message)
