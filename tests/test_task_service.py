# tests/test_task_service.py

from datetime import UTC, datetime

from taskflow.application import (
    add_checklist_item,
    approve_task,
    archive_task,
    assign_members,
    get_board_stats,
    remove_checklist_item,
    return_task,
    rollup_parent_progress,
    set_manual_progress,
    toggle_checklist_item,
    transition_patch,
    transition_task,
)
from taskflow.domain.shared import Err, ErrorKind, Ok
from taskflow.domain.task import TaskReturned, TaskStatus, TaskTransitioned

from .fakes import make_checklist, make_task

NOW = datetime(2026, 10, 19, 9, 30, tzinfo=UTC)


class TestTransitionTask:
    def test_accept_returns_updated_task_and_event(self, staff):
        task = make_task(assignees={"m-staff"})
        result = transition_task(task, staff, "in progress")

        assert isinstance(result, Ok)
        updated, event = result.value
        assert updated.status == TaskStatus.IN_PROGRESS
        assert task.status == TaskStatus.NOT_ASSIGNED
        assert isinstance(event, TaskTransitioned)
        assert event.action == "accept"
        assert event.actor_id == "acc-staff"

    def test_approve_stamps_completed_at(self, leader):
        task = make_task(status=TaskStatus.WAITING_APPROVAL, creator_id="acc-leader")
        updated, event = approve_task(task, leader, now=NOW).value
        assert updated.status == TaskStatus.COMPLETED
        assert updated.completed_at == NOW
        assert event.action == "approve"

    def test_return_without_reason_is_validation_error(self, leader):
        task = make_task(status=TaskStatus.WAITING_APPROVAL, creator_id="acc-leader")
        for reason in (None, "", "   "):
            result = transition_task(task, leader, TaskStatus.RETURNED, reason=reason)
            assert isinstance(result, Err)
            assert result.error.kind == ErrorKind.VALIDATION

    def test_return_with_reason(self, leader):
        task = make_task(status=TaskStatus.WAITING_APPROVAL, creator_id="acc-leader")
        updated, event = return_task(task, leader, "  Missing tests ").value
        assert updated.status == TaskStatus.RETURNED
        assert updated.return_reason == "Missing tests"
        assert isinstance(event, TaskReturned)
        assert event.reason == "Missing tests"

    def test_decline_needs_no_reason(self, staff):
        task = make_task(assignees={"m-staff"})
        assert isinstance(transition_task(task, staff, TaskStatus.RETURNED), Ok)

    def test_unknown_target_is_invalid(self, leader):
        result = transition_task(make_task(creator_id="acc-leader"), leader, "someday")
        assert isinstance(result, Err)
        assert result.error.kind == ErrorKind.INVALID_TRANSITION

    def test_authorization_checked_before_reason(self, outsider):
        task = make_task(status=TaskStatus.WAITING_APPROVAL)
        result = transition_task(task, outsider, TaskStatus.RETURNED)
        assert result.error.kind == ErrorKind.FORBIDDEN

    def test_patch_contains_changed_fields_only(self, leader):
        task = make_task(status=TaskStatus.WAITING_APPROVAL, creator_id="acc-leader")
        updated, _ = approve_task(task, leader, now=NOW).value
        assert transition_patch(task, updated) == {
            "status": "completed",
            "completed_at": NOW.isoformat(),
        }


class TestChecklist:
    def test_add_item_recomputes_progress(self, staff):
        task = make_task(
            status=TaskStatus.IN_PROGRESS,
            assignees={"m-staff"},
            checklist=make_checklist(True),
        )
        updated, event = add_checklist_item(task, staff, "Write docs", item_id="c9").value
        assert [i.id for i in updated.checklist] == ["c1", "c9"]
        assert updated.progress == 50
        assert event.change == "added"
        assert event.progress == 50

    def test_add_blank_item_rejected(self, leader):
        result = add_checklist_item(make_task(), leader, "  ")
        assert result.error.kind == ErrorKind.VALIDATION

    def test_toggle_item(self, staff):
        task = make_task(
            status=TaskStatus.IN_PROGRESS,
            assignees={"m-staff"},
            checklist=make_checklist(True, True, False),
        )
        updated, event = toggle_checklist_item(task, staff, "c3").value
        assert updated.progress == 100
        assert event.change == "checked"

        again, event = toggle_checklist_item(updated, staff, "c3").value
        assert again.progress == 67
        assert event.change == "unchecked"

    def test_toggle_unknown_item(self, leader):
        result = toggle_checklist_item(make_task(checklist=make_checklist(False)), leader, "nope")
        assert result.error.kind == ErrorKind.NOT_FOUND

    def test_assignee_cannot_edit_submitted_task(self, staff):
        task = make_task(
            status=TaskStatus.WAITING_APPROVAL,
            assignees={"m-staff"},
            checklist=make_checklist(False),
        )
        result = toggle_checklist_item(task, staff, "c1")
        assert result.error.kind == ErrorKind.FORBIDDEN

    def test_remove_last_item_keeps_progress(self, leader):
        task = make_task(checklist=make_checklist(True))
        updated, event = remove_checklist_item(task, leader, "c1").value
        assert updated.checklist == []
        assert updated.progress == 100
        assert event.change == "removed"


class TestProgress:
    def test_manual_progress_without_checklist(self, leader):
        updated, event = set_manual_progress(make_task(), leader, 40).value
        assert updated.progress == 40
        assert event.source == "manual"

    def test_manual_progress_rejected_with_checklist(self, leader):
        result = set_manual_progress(make_task(checklist=make_checklist(False)), leader, 40)
        assert result.error.kind == ErrorKind.VALIDATION

    def test_manual_progress_out_of_range(self, leader):
        assert set_manual_progress(make_task(), leader, 101).error.kind == ErrorKind.VALIDATION
        assert set_manual_progress(make_task(), leader, -1).error.kind == ErrorKind.VALIDATION

    def test_rollup_from_subtasks(self):
        tasks = [
            make_task("P"),
            make_task("A", parent_id="P", progress=50),
            make_task("B", parent_id="P", checklist=make_checklist(True)),
            make_task("C", parent_id="P", progress=0, archived=True),
        ]
        updated, event = rollup_parent_progress(tasks, "P").value
        assert updated.progress == 75
        assert event.source == "subtasks"

    def test_rollup_without_subtasks(self):
        result = rollup_parent_progress([make_task("P")], "P")
        assert result.error.kind == ErrorKind.VALIDATION


class TestAssignAndArchive:
    def test_assign_replaces_set(self, leader):
        updated, event = assign_members(make_task(assignees={"m-old"}), leader, ["m-b", "m-a", ""]).value
        assert updated.assignees == frozenset({"m-a", "m-b"})
        assert event.assignees == ["m-a", "m-b"]

    def test_staff_cannot_assign(self, staff):
        result = assign_members(make_task(assignees={"m-staff"}), staff, ["m-staff", "m-x"])
        assert result.error.kind == ErrorKind.FORBIDDEN

    def test_archive_then_no_transitions(self, leader):
        archived, _ = archive_task(make_task(), leader).value
        assert archived.archived
        assert transition_task(archived, leader, "in-progress").error.kind == ErrorKind.FORBIDDEN
        assert archive_task(archived, leader).error.kind == ErrorKind.VALIDATION


def test_board_stats_skip_archived(board_tasks):
    tasks = [*board_tasks, make_task("T9", status=TaskStatus.COMPLETED, archived=True)]
    stats = get_board_stats(tasks)
    assert stats.total == 3
    assert stats.not_assigned == 1
    assert stats.completed == 0
    assert stats.progress_percent == 0.0
