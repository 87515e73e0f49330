"""Caller-owned task collection and the optimistic mutation command.

The core owns no global state. Whoever fetched a task list (a board view, a
dashboard, the CLI) keeps it in a ``TaskBoard`` and hands the engine
read/write access. ``OptimisticMutation`` packages the
snapshot/apply/commit/rollback cycle so any mutation can appear instant and
still be undone exactly.
"""

import logging
from collections.abc import Callable, Iterable
from enum import Enum

from taskflow.domain.task import Task, find_task, replace_task

logger = logging.getLogger(__name__)

TaskList = list[Task]


class TaskBoard:
    """A view's task list with change listeners.

    Example:
        board = TaskBoard(tasks)
        board.subscribe(lambda tasks: render(tasks))
        board.set(updated_tasks)
    """

    def __init__(self, tasks: Iterable[Task] = ()) -> None:
        self._tasks: TaskList = list(tasks)
        self._listeners: list[Callable[[TaskList], None]] = []

    def get(self) -> TaskList:
        """Current tasks (a fresh list; the tasks themselves are shared)."""
        return list(self._tasks)

    def set(self, tasks: Iterable[Task]) -> None:
        self._tasks = list(tasks)
        for listener in self._listeners:
            listener(self.get())

    def find(self, task_id: str) -> Task | None:
        return find_task(self._tasks, task_id)

    def subscribe(self, listener: Callable[[TaskList], None]) -> None:
        self._listeners.append(listener)

    def __len__(self) -> int:
        return len(self._tasks)


class MutationState(str, Enum):
    """Lifecycle of an optimistic mutation."""

    PENDING = "pending"
    APPLIED = "applied"
    COMMITTED = "committed"
    ROLLED_BACK = "rolled-back"


class OptimisticMutation:
    """Command object for an instant local change that may be undone.

    1. ``snapshot()`` deep-copies the whole list.
    2. ``apply()`` writes the transformed list immediately.
    3. ``commit(canonical)`` keeps the change, optionally swapping in the
       server's record for the touched task.
    4. ``rollback()`` restores the snapshot exactly, discarding any local
       edits made in between (last write wins).
    """

    def __init__(
        self,
        read: Callable[[], TaskList],
        write: Callable[[TaskList], None],
        transform: Callable[[TaskList], TaskList],
    ) -> None:
        self._read = read
        self._write = write
        self._transform = transform
        self._snapshot: TaskList | None = None
        self.state = MutationState.PENDING

    @classmethod
    def on_board(cls, board: TaskBoard, transform: Callable[[TaskList], TaskList]) -> "OptimisticMutation":
        return cls(board.get, board.set, transform)

    def snapshot(self) -> TaskList:
        self._snapshot = [task.model_copy(deep=True) for task in self._read()]
        return self._snapshot

    def apply(self) -> None:
        if self.state != MutationState.PENDING:
            raise RuntimeError(f"Cannot apply a mutation that is {self.state.value}")
        if self._snapshot is None:
            self.snapshot()
        self._write(self._transform(self._read()))
        self.state = MutationState.APPLIED

    def commit(self, canonical: Task | None = None) -> None:
        if self.state != MutationState.APPLIED:
            raise RuntimeError(f"Cannot commit a mutation that is {self.state.value}")
        if canonical is not None:
            self._write(replace_task(self._read(), canonical))
        self.state = MutationState.COMMITTED

    def rollback(self) -> None:
        if self.state != MutationState.APPLIED or self._snapshot is None:
            raise RuntimeError(f"Cannot roll back a mutation that is {self.state.value}")
        self._write([task.model_copy(deep=True) for task in self._snapshot])
        self.state = MutationState.ROLLED_BACK
        logger.debug("Rolled back to snapshot of %d tasks", len(self._snapshot))
