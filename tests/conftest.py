# tests/conftest.py

from __future__ import annotations

import pytest

from taskflow.domain.actor import Actor, Role
from taskflow.domain.task import Task, TaskStatus

from .fakes import make_checklist, make_task


@pytest.fixture()
def leader() -> Actor:
    return Actor(id="acc-leader", role=Role.LEADER, member_id="m-leader")


@pytest.fixture()
def staff() -> Actor:
    """Staff member assigned to the default tasks."""
    return Actor(id="acc-staff", role=Role.STAFF, member_id="m-staff")


@pytest.fixture()
def outsider() -> Actor:
    """Staff member with no relation to any task."""
    return Actor(id="acc-other", role=Role.STAFF, member_id="m-other")


@pytest.fixture()
def board_tasks() -> list[Task]:
    """
    A small board:
    - T1 not-assigned, assigned to m-staff
    - T2 waiting-approval, created by the leader, assigned to m-staff
    - T3 in-progress subtask of T2 with a checklist
    """
    return [
        make_task("T1", assignees={"m-staff"}),
        make_task(
            "T2",
            status=TaskStatus.WAITING_APPROVAL,
            creator_id="acc-leader",
            assignees={"m-staff"},
        ),
        make_task(
            "T3",
            status=TaskStatus.IN_PROGRESS,
            parent_id="T2",
            assignees={"m-staff", "m-two"},
            checklist=make_checklist(True, False),
        ),
    ]
