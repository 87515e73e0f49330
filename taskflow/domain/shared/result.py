"""Result monad for explicit error handling in domain operations.

Domain operations in taskflow never raise for expected failures such as a
denied transition or a blank return reason. They return either ``Ok`` with
the new value or ``Err`` with a description of what went wrong, so callers
(the sync engine, the CLI) decide how to surface the failure.

Example usage:
    >>> def parse_progress(raw: str) -> Result[int, str]:
    ...     if not raw.isdigit():
    ...         return Err(f"Not a number: {raw}")
    ...     return Ok(int(raw))
    ...
    >>> result = parse_progress("40")
    >>> if is_ok(result):
    ...     print(f"Progress: {result.value}%")
    Progress: 40%
"""

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Represents a successful result containing a value.

    Attributes:
        value: The success value of type T.
    """

    value: T


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """Represents a failed result containing an error.

    Attributes:
        error: The error value of type E.
    """

    error: E


# Using Union here as TypeVar aliases don't work with | syntax at runtime
Result = Union[Ok[T], Err[E]]  # noqa: UP007


def is_ok(result: Ok[T] | Err[E]) -> bool:
    """Check if a result is successful."""
    return isinstance(result, Ok)
