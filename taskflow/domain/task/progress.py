"""Checklist progress calculation.

All functions in this module are pure - no I/O, no side effects.
"""

from collections.abc import Iterable, Sequence
from typing import Protocol


class Checkable(Protocol):
    """Anything with a completion flag (checklist items, in practice)."""

    completed: bool


def percent(part: int, whole: int) -> int:
    """Integer percentage of part/whole, rounded half-up.

    Uses integer arithmetic so that 0.5 boundaries round the same way on
    every platform (66.666 -> 67, 12.5 -> 13).

    Args:
        part: Completed count
        whole: Total count, must be positive

    Returns:
        Percentage in [0, 100] when 0 <= part <= whole
    """
    if whole <= 0:
        raise ValueError("whole must be positive")
    return (200 * part + whole) // (2 * whole)


def compute_progress(checklist: Sequence[Checkable]) -> int | None:
    """Derive a completion percentage from checklist items.

    An empty checklist carries no information: the function returns None and
    the caller keeps the task's stored (manual or rolled-up) progress. It
    never means 0%.

    Args:
        checklist: Ordered checklist items

    Returns:
        round_half_up(100 * completed / total), or None for an empty list

    Example:
        >>> compute_progress([ChecklistItem(id="a", content="x", completed=True)])
        100
    """
    if not checklist:
        return None
    done = sum(1 for item in checklist if item.completed)
    return percent(done, len(checklist))


def mean_progress(values: Iterable[int]) -> int | None:
    """Rounded mean of progress values, or None if there are none."""
    values = list(values)
    if not values:
        return None
    return percent(sum(values), 100 * len(values))
