"""Scoped dashboard aggregation.

Dashboards never infer team membership from task data. The caller passes a
trusted set of member ids (from the team-membership source) and only tasks
assigned to those members are counted, so tasks of unrelated members never
leak into a manager's view.

All functions in this module are pure - no I/O, no side effects.
"""

from collections.abc import Iterable, Sequence
from datetime import UTC, date, datetime

from pydantic import BaseModel

from taskflow.domain.actor.models import Actor
from taskflow.domain.task.models import Task
from taskflow.domain.task.progress import percent
from taskflow.domain.task.status import TERMINAL_STATUSES, TaskStatus, is_overdue

DEFAULT_UPCOMING_DAYS = 3


class DashboardCounters(BaseModel):
    """Counters shown on the dashboard stat cards."""

    total: int = 0
    pending_approvals: int = 0
    overdue: int = 0
    upcoming: int = 0
    completed_this_period: int = 0


class MemberWorkload(BaseModel):
    """Assigned and completed task counts for one team member."""

    member_id: str
    tasks: int = 0
    completed: int = 0

    @property
    def completion_percent(self) -> int:
        if self.tasks == 0:
            return 0
        return percent(self.completed, self.tasks)


def scope_tasks(all_tasks: Iterable[Task], trusted_member_ids: Iterable[str]) -> list[Task]:
    """Keep live tasks assigned to at least one trusted member.

    An empty trusted set yields an empty scope, never the global list.
    """
    trusted = frozenset(trusted_member_ids)
    if not trusted:
        return []
    return [t for t in all_tasks if not t.archived and t.assignees & trusted]


def my_tasks(all_tasks: Iterable[Task], actor: Actor) -> list[Task]:
    """Tasks assigned to the actor's own member id."""
    if actor.member_id is None:
        return []
    return scope_tasks(all_tasks, [actor.member_id])


def days_until(task: Task, today: date) -> int | None:
    """Days from today to the deadline (negative once past), None without one."""
    if task.deadline is None:
        return None
    return (task.deadline - today).days


def days_overdue(task: Task, today: date) -> int | None:
    """How many days an overdue task is late, or None if it is not overdue."""
    if not is_overdue(task, today):
        return None
    return (today - task.deadline).days


def is_upcoming(task: Task, today: date, window_days: int = DEFAULT_UPCOMING_DAYS) -> bool:
    """Check if a task is due within ``window_days`` from today, today included.

    Upcoming and overdue never overlap: a task due today is upcoming, a task
    due yesterday is overdue.
    """
    if task.status in TERMINAL_STATUSES:
        return False
    remaining = days_until(task, today)
    return remaining is not None and 0 <= remaining <= window_days


def _as_utc(value: datetime) -> datetime:
    # Naive timestamps from snapshots or servers are taken as UTC
    return value.replace(tzinfo=UTC) if value.tzinfo is None else value


def _completed_in_period(task: Task, period_start: datetime | None) -> bool:
    if task.status != TaskStatus.COMPLETED:
        return False
    if period_start is None or task.completed_at is None:
        return True
    return _as_utc(task.completed_at) >= _as_utc(period_start)


def compute_counters(
    scoped: Sequence[Task],
    today: date,
    window_days: int = DEFAULT_UPCOMING_DAYS,
    period_start: datetime | None = None,
) -> DashboardCounters:
    """Single pass over a scoped task list.

    Args:
        scoped: Output of ``scope_tasks`` (or ``my_tasks``)
        today: Reference date for overdue/upcoming
        window_days: Size of the "due soon" window
        period_start: Bound for completed tasks that carry ``completed_at``;
            tasks without the timestamp always count. Naive
            datetimes on either side are read as UTC

    Returns:
        DashboardCounters for the stat cards
    """
    counters = DashboardCounters(total=len(scoped))
    for task in scoped:
        if task.status == TaskStatus.WAITING_APPROVAL:
            counters.pending_approvals += 1
        if is_overdue(task, today):
            counters.overdue += 1
        elif is_upcoming(task, today, window_days):
            counters.upcoming += 1
        if _completed_in_period(task, period_start):
            counters.completed_this_period += 1
    return counters


def pending_approvals(scoped: Iterable[Task]) -> list[Task]:
    return [t for t in scoped if t.status == TaskStatus.WAITING_APPROVAL]


def overdue_tasks(scoped: Iterable[Task], today: date) -> list[Task]:
    """Overdue tasks, most late first."""
    late = [t for t in scoped if is_overdue(t, today)]
    return sorted(late, key=lambda t: t.deadline)


def upcoming_tasks(
    scoped: Iterable[Task],
    today: date,
    window_days: int = DEFAULT_UPCOMING_DAYS,
) -> list[Task]:
    """Tasks due soon, nearest deadline first."""
    soon = [t for t in scoped if is_upcoming(t, today, window_days)]
    return sorted(soon, key=lambda t: t.deadline)


def member_workload(
    scoped: Iterable[Task],
    trusted_member_ids: Iterable[str],
) -> list[MemberWorkload]:
    """Per-member task and completion counts, one row per trusted member.

    A task with several trusted assignees counts once for each of them.
    """
    rows = {member_id: MemberWorkload(member_id=member_id) for member_id in sorted(set(trusted_member_ids))}
    for task in scoped:
        for member_id in task.assignees:
            row = rows.get(member_id)
            if row is None:
                continue
            row.tasks += 1
            if task.status == TaskStatus.COMPLETED:
                row.completed += 1
    return list(rows.values())
