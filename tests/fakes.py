# tests/fakes.py

from __future__ import annotations

import asyncio
from collections.abc import Callable, Iterable
from datetime import date

from taskflow.application.ports import Notice, TaskPatch
from taskflow.domain.shared import DomainError, Err, Ok, Result, not_found
from taskflow.domain.task import ChecklistItem, Task
from taskflow.infrastructure.transport import apply_patch

TODAY = date(2026, 10, 19)


def make_task(task_id: str = "T1", **overrides) -> Task:
    """Task factory with sensible defaults; any field can be overridden."""
    fields = {
        "id": task_id,
        "title": f"Task {task_id}",
        "creator_id": "acc-pmo",
    }
    fields.update(overrides)
    return Task(**fields)


def make_checklist(*flags: bool) -> list[ChecklistItem]:
    return [
        ChecklistItem(id=f"c{i}", content=f"item {i}", completed=flag)
        for i, flag in enumerate(flags, start=1)
    ]


class FakeTransport:
    """
    Controllable transport for sync engine tests.

    - Records every call for assertions
    - Can return an Err, raise, or hold the response until released
    - ``on_call`` runs while the request is "on the wire", which lets a test
      interleave local edits with an in-flight update
    """

    def __init__(
        self,
        tasks: Iterable[Task] = (),
        fail_with: DomainError | None = None,
        raise_exc: Exception | None = None,
    ) -> None:
        self.server = {t.id: t.model_copy(deep=True) for t in tasks}
        self.fail_with = fail_with
        self.raise_exc = raise_exc
        self.calls: list[tuple[str, TaskPatch]] = []
        self.on_call: Callable[[str, TaskPatch], None] | None = None
        self.server_overrides: dict[str, object] = {}
        self._gate: asyncio.Event | None = None

    def hold(self) -> asyncio.Event:
        """Block responses until the returned event is set."""
        self._gate = asyncio.Event()
        return self._gate

    async def wait_for_calls(self, n: int) -> None:
        while len(self.calls) < n:
            await asyncio.sleep(0)

    async def update_task(self, task_id: str, patch: TaskPatch) -> Result[Task, DomainError]:
        self.calls.append((task_id, dict(patch)))
        if self.on_call is not None:
            self.on_call(task_id, patch)
        if self._gate is not None:
            await self._gate.wait()
        if self.raise_exc is not None:
            raise self.raise_exc
        if self.fail_with is not None:
            return Err(self.fail_with)

        current = self.server.get(task_id)
        if current is None:
            return Err(not_found(f"Task {task_id} not found"))
        result = apply_patch(current, {**patch, **self.server_overrides})
        if isinstance(result, Ok):
            self.server[task_id] = result.value
        return result


class NoticeRecorder:
    """Collects notices the engine would show as toasts."""

    def __init__(self) -> None:
        self.notices: list[Notice] = []

    def __call__(self, notice: Notice) -> None:
        self.notices.append(notice)

    @property
    def errors(self) -> list[str]:
        return [n.message for n in self.notices if n.level == "error"]

    @property
    def successes(self) -> list[str]:
        return [n.message for n in self.notices if n.level == "success"]
