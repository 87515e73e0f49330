"""Kanban synchronization engine.

Turns drag-and-drop gestures into authorized status transitions and keeps
the caller's board consistent while the authoritative update is in flight:

    gesture -> resolve column -> authorize -> snapshot -> optimistic apply
            -> transport.update_task -> commit (server record) | rollback

Denied or invalid moves never touch the board and never reach the
transport. Transport failures, whether returned as Err or raised, are
caught here and turned into an exact rollback plus an error notice. A
cancelled update (timeout, view teardown) is rolled back before the
cancellation propagates.

Only one request per task is in flight at a time. A second gesture on the
same task is rejected or queued depending on the in-flight policy.
"""

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime
from enum import Enum

from taskflow.application.board import OptimisticMutation, TaskBoard
from taskflow.application.ports import Notice, Notifier, TaskPatch, Transport
from taskflow.application.task_service import (
    toggle_checklist_item,
    transition_patch,
    transition_task,
)
from taskflow.domain.actor import Actor
from taskflow.domain.shared import (
    DomainError,
    DomainEvent,
    Err,
    Ok,
    Result,
    busy,
    not_found,
    transport_error,
)
from taskflow.domain.task import (
    Task,
    TaskStatus,
    TransitionRolledBack,
    replace_task,
    resolve_column,
)

logger = logging.getLogger(__name__)

# (updated task, event to record on commit, patch to send)
Planned = tuple[Task, DomainEvent, TaskPatch]


class InFlightPolicy(str, Enum):
    """What to do with a gesture on a task whose update is still in flight."""

    REJECT = "reject"
    QUEUE = "queue"


class MoveOutcome(str, Enum):
    """How a gesture was resolved."""

    NOOP = "noop"
    COMMITTED = "committed"
    ROLLED_BACK = "rolled-back"
    DENIED = "denied"
    BUSY = "busy"
    DISCARDED = "discarded"


@dataclass(frozen=True, slots=True)
class MoveReport:
    """Result of one gesture, for callers that want more than the notice."""

    task_id: str
    outcome: MoveOutcome
    status: TaskStatus | None = None
    error: DomainError | None = None


class KanbanSync:
    """Optimistic synchronization between a board view and the transport.

    Args:
        board: The view's task list; the engine reads and writes it.
        actor: The current user.
        transport: Authoritative update endpoint.
        notify: Receives user-facing notices (toasts).
        policy: In-flight policy for repeated gestures on one task.
        clock: Source of timestamps for ``completed_at``.
    """

    def __init__(
        self,
        board: TaskBoard,
        actor: Actor,
        transport: Transport,
        notify: Notifier | None = None,
        policy: InFlightPolicy = InFlightPolicy.REJECT,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._board = board
        self._actor = actor
        self._transport = transport
        self._notify = notify or (lambda notice: None)
        self._policy = policy
        self._clock = clock or (lambda: datetime.now(UTC))
        self._locks: dict[str, asyncio.Lock] = {}
        # Gestures holding or waiting for each lock
        self._users: dict[str, int] = {}
        self._closed = False
        self.events: list[DomainEvent] = []

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        """Detach from the view. Results of in-flight requests are discarded."""
        self._closed = True

    @property
    def pending_tasks(self) -> set[str]:
        """Task ids with a gesture in flight or queued."""
        return set(self._users)

    def is_in_flight(self, task_id: str) -> bool:
        lock = self._locks.get(task_id)
        return lock is not None and lock.locked()

    # =========================================================================
    # Gestures
    # =========================================================================

    async def on_card_moved(
        self,
        task_id: str,
        source_column: str,
        target_column: str,
        reason: str | None = None,
    ) -> MoveReport:
        """Handle a card dropped on another column.

        Args:
            task_id: The dragged card.
            source_column: Label of the column it came from.
            target_column: Label of the column it was dropped on.
            reason: Return reason, needed when dropping an awaiting-approval
                card on the returned column.

        Returns:
            MoveReport describing how the gesture was resolved.
        """
        target = resolve_column(target_column)
        if resolve_column(source_column) == target:
            return MoveReport(task_id, MoveOutcome.NOOP)

        def plan(task: Task) -> Result[Planned, DomainError]:
            result = transition_task(task, self._actor, target, reason=reason, now=self._clock())
            if isinstance(result, Err):
                return result
            updated, event = result.value
            return Ok((updated, event, transition_patch(task, updated)))

        return await self._run(task_id, plan, attempted=target)

    async def on_checklist_toggled(self, task_id: str, item_id: str) -> MoveReport:
        """Toggle a checklist item; checklist and progress are sent together."""

        def plan(task: Task) -> Result[Planned, DomainError]:
            result = toggle_checklist_item(task, self._actor, item_id)
            if isinstance(result, Err):
                return result
            updated, event = result.value
            patch: TaskPatch = {
                "checklist": [item.model_dump() for item in updated.checklist],
                "progress": updated.progress,
            }
            return Ok((updated, event, patch))

        return await self._run(task_id, plan)

    # =========================================================================
    # Engine
    # =========================================================================

    async def _run(
        self,
        task_id: str,
        plan: Callable[[Task], Result[Planned, DomainError]],
        attempted: TaskStatus | None = None,
    ) -> MoveReport:
        if self._closed:
            return MoveReport(task_id, MoveOutcome.DISCARDED)

        lock = self._locks.setdefault(task_id, asyncio.Lock())
        if lock.locked() and self._policy == InFlightPolicy.REJECT:
            error = busy("This task is still being updated, try again in a moment")
            self._notify(Notice("error", error.message))
            return MoveReport(task_id, MoveOutcome.BUSY, error=error)

        self._users[task_id] = self._users.get(task_id, 0) + 1
        try:
            async with lock:
                if self._closed:
                    return MoveReport(task_id, MoveOutcome.DISCARDED)
                return await self._run_locked(task_id, plan, attempted)
        finally:
            self._users[task_id] -= 1
            if self._users[task_id] == 0:
                del self._users[task_id]
                del self._locks[task_id]

    async def _run_locked(
        self,
        task_id: str,
        plan: Callable[[Task], Result[Planned, DomainError]],
        attempted: TaskStatus | None,
    ) -> MoveReport:
        task = self._board.find(task_id)
        if task is None:
            error = not_found(f"Task {task_id} is no longer on the board")
            self._notify(Notice("error", error.message))
            return MoveReport(task_id, MoveOutcome.DENIED, error=error)
        if attempted is not None and task.status == attempted:
            return MoveReport(task_id, MoveOutcome.NOOP, status=task.status)

        planned = plan(task)
        if isinstance(planned, Err):
            logger.debug("Gesture on %s denied: %s", task_id, planned.error)
            self._notify(Notice("error", planned.error.message))
            return MoveReport(task_id, MoveOutcome.DENIED, status=task.status, error=planned.error)

        updated, event, patch = planned.value
        mutation = OptimisticMutation.on_board(
            self._board, lambda tasks: replace_task(tasks, updated)
        )
        mutation.snapshot()
        mutation.apply()

        try:
            response = await self._transport.update_task(task_id, patch)
        except asyncio.CancelledError:
            if not self._closed:
                mutation.rollback()
                logger.info("Rolled back %s: update cancelled", task_id)
                self._notify(Notice("error", "Update cancelled, changes were undone"))
            raise
        except Exception as exc:  # any transport failure rolls back
            logger.warning("update_task(%s) raised: %s", task_id, exc)
            response = Err(transport_error(f"Could not reach the server ({exc})"))

        if self._closed:
            logger.info("Discarding result for %s: view closed", task_id)
            return MoveReport(task_id, MoveOutcome.DISCARDED)

        if isinstance(response, Err):
            mutation.rollback()
            logger.info("Rolled back %s after failed update: %s", task_id, response.error)
            if attempted is not None:
                self.events.append(
                    TransitionRolledBack(
                        task_id=task_id,
                        attempted_status=attempted,
                        restored_status=task.status,
                        reason=response.error.message,
                    )
                )
            self._notify(Notice("error", f"Update failed: {response.error.message}"))
            return MoveReport(
                task_id, MoveOutcome.ROLLED_BACK, status=task.status, error=response.error
            )

        canonical = response.value
        mutation.commit(canonical)
        self.events.append(event)
        self._notify(Notice("success", "Task updated"))
        return MoveReport(task_id, MoveOutcome.COMMITTED, status=canonical.status)
