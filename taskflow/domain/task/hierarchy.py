"""Pure combinators over a flat task collection.

Tasks are stored flat; the main-task/subtask tree is implied by
``parent_id``. These helpers navigate and update that tree without
mutating anything: they take data in, return data out.
"""

from collections.abc import Callable, Iterable, Sequence
from typing import TypeVar

from taskflow.domain.shared import DomainError, Err, Ok, Result, not_found, validation_error

from .models import Task
from .progress import mean_progress
from .status import TaskStatus

T = TypeVar("T")


# =============================================================================
# Fundamental Operations
# =============================================================================


def fold_tasks(
    tasks: Iterable[Task],
    initial: T,
    f: Callable[[T, Task], T],
) -> T:
    """Fold over all tasks in collection order.

    Args:
        tasks: The tasks to fold over
        initial: Starting accumulator value
        f: Function (accumulator, task) -> new_accumulator

    Returns:
        Final accumulated value
    """
    acc = initial
    for task in tasks:
        acc = f(acc, task)
    return acc


def index_by_id(tasks: Iterable[Task]) -> dict[str, Task]:
    return {task.id: task for task in tasks}


def find_task(tasks: Iterable[Task], task_id: str) -> Task | None:
    for task in tasks:
        if task.id == task_id:
            return task
    return None


def update_task_in(
    tasks: Sequence[Task],
    task_id: str,
    update: Callable[[Task], Task],
) -> list[Task]:
    """Return a new list with the task ``task_id`` replaced by update(task).

    Order is preserved; other tasks are the same objects as before.
    """
    return [update(task) if task.id == task_id else task for task in tasks]


def replace_task(tasks: Sequence[Task], replacement: Task) -> list[Task]:
    """Return a new list with the task of the same id swapped for replacement."""
    return update_task_in(tasks, replacement.id, lambda _: replacement)


# =============================================================================
# Tree Navigation
# =============================================================================


def subtasks_of(tasks: Iterable[Task], parent_id: str) -> list[Task]:
    """Tasks whose parent is ``parent_id``, in collection order."""
    return [task for task in tasks if task.parent_id == parent_id]


def ancestors(tasks: Sequence[Task], task_id: str) -> Result[list[Task], DomainError]:
    """Walk parent links from a task up to its main task.

    Returns:
        Ok(list) nearest parent first (empty for a main task), or
        Err if the task or a parent is missing, or the links form a cycle.
    """
    by_id = index_by_id(tasks)
    task = by_id.get(task_id)
    if task is None:
        return Err(not_found(f"Task {task_id} not found"))

    chain: list[Task] = []
    seen = {task.id}
    while task.parent_id is not None:
        if task.parent_id in seen:
            return Err(validation_error(f"Cycle in task hierarchy at {task.parent_id}"))
        parent = by_id.get(task.parent_id)
        if parent is None:
            return Err(not_found(f"Parent {task.parent_id} of task {task.id} not found"))
        chain.append(parent)
        seen.add(parent.id)
        task = parent
    return Ok(chain)


def root_of(tasks: Sequence[Task], task_id: str) -> Result[Task, DomainError]:
    """The main task a (sub)task ultimately belongs to."""
    result = ancestors(tasks, task_id)
    if isinstance(result, Err):
        return result
    if result.value:
        return Ok(result.value[-1])
    return Ok(index_by_id(tasks)[task_id])


def validate_hierarchy(tasks: Sequence[Task]) -> list[str]:
    """List every dangling parent link and cycle in the collection.

    Returns:
        Human-readable problems, empty when the collection is a proper forest
    """
    problems: list[str] = []
    for task in tasks:
        if task.parent_id is None:
            continue
        result = ancestors(tasks, task.id)
        if isinstance(result, Err):
            problems.append(f"{task.id}: {result.error.message}")
    return problems


# =============================================================================
# Aggregates
# =============================================================================


def count_by_status(tasks: Iterable[Task]) -> dict[TaskStatus, int]:
    """Count tasks by stored status. Archived tasks are skipped."""
    counts = {status: 0 for status in TaskStatus}

    def count(acc: dict[TaskStatus, int], task: Task) -> dict[TaskStatus, int]:
        if not task.archived:
            acc[task.status] += 1
        return acc

    return fold_tasks(tasks, counts, count)


def rollup_progress(tasks: Iterable[Task], parent_id: str) -> int | None:
    """Mean progress of a task's live subtasks, or None if it has none."""
    children = [t for t in subtasks_of(tasks, parent_id) if not t.archived]
    return mean_progress(t.progress for t in children)


def completed_subtask_count(tasks: Iterable[Task], parent_id: str) -> int:
    return sum(
        1
        for t in subtasks_of(tasks, parent_id)
        if t.status == TaskStatus.COMPLETED and not t.archived
    )
