"""Dashboard domain - scoped task counters.

Scoping Functions:
    scope_tasks - Filter by a trusted member set
    my_tasks - Filter to the actor's own tasks

Counters:
    compute_counters - Pending approvals, overdue, upcoming, completed
    member_workload - Per-member assigned/completed counts
"""

from .scope import (
    DEFAULT_UPCOMING_DAYS,
    DashboardCounters,
    MemberWorkload,
    compute_counters,
    days_overdue,
    days_until,
    is_upcoming,
    member_workload,
    my_tasks,
    overdue_tasks,
    pending_approvals,
    scope_tasks,
    upcoming_tasks,
)

__all__ = [
    "DEFAULT_UPCOMING_DAYS",
    "DashboardCounters",
    "MemberWorkload",
    "scope_tasks",
    "my_tasks",
    "compute_counters",
    "member_workload",
    "pending_approvals",
    "overdue_tasks",
    "upcoming_tasks",
    "is_upcoming",
    "days_until",
    "days_overdue",
]
