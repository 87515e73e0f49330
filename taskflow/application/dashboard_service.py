"""Dashboard application service.

Builds the data behind the role dashboards from a point-in-time task list.
Dashboards do not subscribe to task changes; callers rebuild the summary
after refetching.
"""

from collections.abc import Iterable, Sequence
from datetime import date, datetime

from pydantic import BaseModel

from taskflow.domain.actor import Actor
from taskflow.domain.dashboard import (
    DEFAULT_UPCOMING_DAYS,
    DashboardCounters,
    MemberWorkload,
    compute_counters,
    days_overdue,
    days_until,
    member_workload,
    my_tasks,
    overdue_tasks,
    pending_approvals,
    scope_tasks,
    upcoming_tasks,
)
from taskflow.domain.task import Task


class DeadlineEntry(BaseModel):
    """One line of the overdue or due-soon lists."""

    task_id: str
    title: str
    deadline: date
    days: int


class DashboardSummary(BaseModel):
    """Everything a dashboard page renders."""

    counters: DashboardCounters
    pending_approvals: list[str]
    overdue: list[DeadlineEntry]
    upcoming: list[DeadlineEntry]
    team: list[MemberWorkload]


def _summarize(
    scoped: Sequence[Task],
    members: Iterable[str],
    today: date,
    window_days: int,
    period_start: datetime | None,
) -> DashboardSummary:
    return DashboardSummary(
        counters=compute_counters(scoped, today, window_days, period_start),
        pending_approvals=[t.id for t in pending_approvals(scoped)],
        overdue=[
            DeadlineEntry(task_id=t.id, title=t.title, deadline=t.deadline, days=days_overdue(t, today))
            for t in overdue_tasks(scoped, today)
        ],
        upcoming=[
            DeadlineEntry(task_id=t.id, title=t.title, deadline=t.deadline, days=days_until(t, today))
            for t in upcoming_tasks(scoped, today, window_days)
        ],
        team=member_workload(scoped, members),
    )


def team_dashboard(
    all_tasks: Iterable[Task],
    trusted_member_ids: Iterable[str],
    today: date | None = None,
    window_days: int = DEFAULT_UPCOMING_DAYS,
    period_start: datetime | None = None,
) -> DashboardSummary:
    """Manager view: tasks of the trusted team members only.

    Args:
        all_tasks: Point-in-time task list.
        trusted_member_ids: Team members supplied by the membership source.
        today: Reference date, defaults to the local date.
        window_days: "Due soon" window.
        period_start: Lower bound for the completed counter.

    Returns:
        DashboardSummary with counters, deadline lists and per-member rows.
    """
    members = list(trusted_member_ids)
    scoped = scope_tasks(all_tasks, members)
    return _summarize(scoped, members, today or date.today(), window_days, period_start)


def personal_dashboard(
    all_tasks: Iterable[Task],
    actor: Actor,
    today: date | None = None,
    window_days: int = DEFAULT_UPCOMING_DAYS,
    period_start: datetime | None = None,
) -> DashboardSummary:
    """Staff view: the actor's own tasks."""
    scoped = my_tasks(all_tasks, actor)
    members = [actor.member_id] if actor.member_id else []
    return _summarize(scoped, members, today or date.today(), window_days, period_start)
