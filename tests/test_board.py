# tests/test_board.py

import pytest

from taskflow.application import MutationState, OptimisticMutation, TaskBoard
from taskflow.domain.task import replace_task

from .fakes import make_task


def _rename(task_id, title):
    def transform(tasks):
        task = next(t for t in tasks if t.id == task_id)
        return replace_task(tasks, task.model_copy(update={"title": title}))

    return transform


class TestTaskBoard:
    def test_get_returns_a_copy_of_the_list(self, board_tasks):
        board = TaskBoard(board_tasks)
        board.get().clear()
        assert len(board) == 3

    def test_set_notifies_listeners(self, board_tasks):
        board = TaskBoard()
        seen = []
        board.subscribe(lambda tasks: seen.append([t.id for t in tasks]))
        board.set(board_tasks)
        assert seen == [["T1", "T2", "T3"]]

    def test_find(self, board_tasks):
        board = TaskBoard(board_tasks)
        assert board.find("T2").id == "T2"
        assert board.find("nope") is None


class TestOptimisticMutation:
    def test_apply_then_commit(self, board_tasks):
        board = TaskBoard(board_tasks)
        mutation = OptimisticMutation.on_board(board, _rename("T1", "renamed"))
        mutation.apply()
        assert board.find("T1").title == "renamed"

        canonical = make_task("T1", title="from server")
        mutation.commit(canonical)
        assert board.find("T1").title == "from server"
        assert mutation.state == MutationState.COMMITTED

    def test_rollback_restores_snapshot(self, board_tasks):
        board = TaskBoard(board_tasks)
        mutation = OptimisticMutation.on_board(board, _rename("T1", "renamed"))
        snapshot = mutation.snapshot()
        mutation.apply()
        mutation.rollback()

        assert board.get() == snapshot
        assert board.find("T1").title == "Task T1"
        assert mutation.state == MutationState.ROLLED_BACK

    def test_snapshot_is_deep(self, board_tasks):
        board = TaskBoard(board_tasks)
        mutation = OptimisticMutation.on_board(board, lambda tasks: tasks)
        mutation.snapshot()
        board.find("T3").checklist[0].completed = False
        mutation.apply()
        mutation.rollback()
        assert board.find("T3").checklist[0].completed is True

    def test_invalid_state_changes_raise(self, board_tasks):
        mutation = OptimisticMutation.on_board(TaskBoard(board_tasks), lambda tasks: tasks)
        with pytest.raises(RuntimeError):
            mutation.commit()
        with pytest.raises(RuntimeError):
            mutation.rollback()
        mutation.apply()
        with pytest.raises(RuntimeError):
            mutation.apply()
