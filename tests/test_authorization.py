# tests/test_authorization.py

from itertools import product

import pytest

from taskflow.domain.actor import (
    Actor,
    Role,
    allowed_targets,
    authorize_transition,
    can_assign,
    can_edit,
    can_transition,
)
from taskflow.domain.shared import Err, ErrorKind, Ok
from taskflow.domain.task import TaskStatus

from .fakes import make_task

S = TaskStatus
GRAPH = {
    (S.NOT_ASSIGNED, S.IN_PROGRESS),
    (S.NOT_ASSIGNED, S.RETURNED),
    (S.IN_PROGRESS, S.WAITING_APPROVAL),
    (S.WAITING_APPROVAL, S.COMPLETED),
    (S.WAITING_APPROVAL, S.RETURNED),
    (S.RETURNED, S.IN_PROGRESS),
    (S.RETURNED, S.WAITING_APPROVAL),
}
ASSIGNEE_EDGES = {
    (S.IN_PROGRESS, S.WAITING_APPROVAL),
    (S.NOT_ASSIGNED, S.IN_PROGRESS),
    (S.NOT_ASSIGNED, S.RETURNED),
}
RELATIONS = ("creator", "assignee", "none")


def _actor_and_task(role: Role, relation: str, status: TaskStatus):
    actor = Actor(id="acc-1", role=role, member_id="m-1")
    task = make_task(
        status=status,
        creator_id="acc-1" if relation == "creator" else "acc-someone",
        assignees={"m-1"} if relation == "assignee" else {"m-2"},
    )
    return actor, task


def _expected(role: Role, relation: str, source: TaskStatus, target: TaskStatus) -> bool:
    if (source, target) not in GRAPH:
        return False
    if relation == "creator" or role != Role.STAFF:
        return True
    return relation == "assignee" and (source, target) in ASSIGNEE_EDGES


@pytest.mark.parametrize("role, relation", list(product(Role, RELATIONS)))
def test_decision_table_is_total(role, relation):
    for source, target in product(TaskStatus, TaskStatus):
        actor, task = _actor_and_task(role, relation, source)
        assert can_transition(actor, task, source, target) == _expected(
            role, relation, source, target
        ), (role, relation, source, target)


class TestAuthorizeTransition:
    def test_staff_cannot_approve_own_submission(self, staff):
        # Assignee, not creator, not manager
        task = make_task(status=S.WAITING_APPROVAL, assignees={"m-staff"})
        result = authorize_transition(staff, task, "waiting-approval", "completed")
        assert isinstance(result, Err)
        assert result.error.kind == ErrorKind.FORBIDDEN

    def test_creator_can_approve(self, leader):
        task = make_task(status=S.WAITING_APPROVAL, creator_id="acc-leader")
        assert isinstance(authorize_transition(leader, task, S.WAITING_APPROVAL, S.COMPLETED), Ok)

    def test_illegal_edge_is_invalid_even_for_managers(self, leader):
        result = authorize_transition(leader, make_task(), S.NOT_ASSIGNED, S.COMPLETED)
        assert result.error.kind == ErrorKind.INVALID_TRANSITION

    def test_unknown_label_is_invalid(self, leader):
        result = authorize_transition(leader, make_task(), "not-assigned", "overdue")
        assert result.error.kind == ErrorKind.INVALID_TRANSITION

    def test_stale_source_status_is_invalid(self, leader):
        task = make_task(status=S.IN_PROGRESS)
        result = authorize_transition(leader, task, S.NOT_ASSIGNED, S.IN_PROGRESS)
        assert result.error.kind == ErrorKind.INVALID_TRANSITION

    def test_archived_task_is_frozen(self, leader):
        task = make_task(creator_id="acc-leader", archived=True)
        result = authorize_transition(leader, task, S.NOT_ASSIGNED, S.IN_PROGRESS)
        assert result.error.kind == ErrorKind.FORBIDDEN

    def test_actor_without_member_id_is_never_assignee(self):
        actor = Actor(id="acc-x", role="STAFF")
        task = make_task(assignees={"m-staff"})
        assert not can_transition(actor, task, S.NOT_ASSIGNED, S.IN_PROGRESS)

    def test_allowed_targets(self, staff):
        task = make_task(assignees={"m-staff"})
        assert allowed_targets(staff, task) == [S.IN_PROGRESS, S.RETURNED]


class TestEditAndAssign:
    def test_assignee_edits_only_while_in_progress(self, staff):
        assert can_edit(staff, make_task(status=S.IN_PROGRESS, assignees={"m-staff"}))
        assert not can_edit(staff, make_task(status=S.WAITING_APPROVAL, assignees={"m-staff"}))

    def test_creator_and_manager_always_edit(self, staff, leader):
        assert can_edit(staff, make_task(status=S.COMPLETED, creator_id="acc-staff"))
        assert can_edit(leader, make_task(status=S.RETURNED))

    def test_outsider_cannot_edit(self, outsider):
        assert not can_edit(outsider, make_task(status=S.IN_PROGRESS, assignees={"m-staff"}))

    def test_archived_is_read_only(self, leader):
        task = make_task(archived=True)
        assert not can_edit(leader, task)
        assert not can_assign(leader, task)

    def test_assignee_cannot_assign(self, staff, leader):
        task = make_task(assignees={"m-staff"})
        assert not can_assign(staff, task)
        assert can_assign(leader, task)
