"""Dashboard CLI commands.

Team and personal dashboards computed from a board snapshot: stat
counters, overdue and due-soon lists, per-member workload.
"""

from datetime import date, datetime
from typing import Optional

import typer

from taskflow.application import DashboardSummary, personal_dashboard, team_dashboard
from taskflow.config import load_settings
from taskflow.interfaces.cli.common import (
    BoardOption,
    load_board,
    print_error,
    print_header,
    print_separator,
)

app = typer.Typer(help="Dashboard commands")


def _print_summary(title: str, summary: DashboardSummary, as_json: bool) -> None:
    if as_json:
        typer.echo(summary.model_dump_json(indent=2))
        return

    counters = summary.counters
    print_header(title)
    typer.echo(f"Tasks:             {counters.total}")
    typer.echo(f"Pending approvals: {counters.pending_approvals}")
    typer.echo(f"Overdue:           {counters.overdue}")
    typer.echo(f"Due soon:          {counters.upcoming}")
    typer.echo(f"Completed:         {counters.completed_this_period}")

    if summary.overdue:
        typer.echo("\n## Overdue")
        for entry in summary.overdue:
            typer.echo(f"- {entry.task_id}: {entry.title} ({entry.days} day(s) late)")
    if summary.upcoming:
        typer.echo("\n## Due soon")
        for entry in summary.upcoming:
            typer.echo(f"- {entry.task_id}: {entry.title} (due {entry.deadline.isoformat()}, {entry.days} day(s) left)")
    if summary.team:
        typer.echo("\n## Team")
        for row in summary.team:
            typer.echo(f"- {row.member_id}: {row.completed}/{row.tasks} completed ({row.completion_percent}%)")
    print_separator()


@app.command("team")
def team(
    board: BoardOption = None,
    member: Optional[list[str]] = typer.Option(
        None, "--member", "-m", help="Trusted member id (repeatable; defaults to the snapshot's list)"
    ),
    days: Optional[int] = typer.Option(None, "--days", help="Due-soon window in days"),
    today: Optional[datetime] = typer.Option(None, "--today", formats=["%Y-%m-%d"]),
    as_json: bool = typer.Option(False, "--json", help="Print the summary as JSON"),
) -> None:
    """Team dashboard, scoped to trusted members."""
    _, snapshot = load_board(board)
    members = member or snapshot.trusted_member_ids
    if not members:
        print_error("No trusted members: pass --member or set trusted_member_ids in the board")
        raise typer.Exit(1)

    window = days if days is not None else load_settings().upcoming_window_days
    summary = team_dashboard(
        snapshot.tasks,
        members,
        today=today.date() if today else date.today(),
        window_days=window,
    )
    _print_summary("TEAM DASHBOARD", summary, as_json)


@app.command("me")
def me(
    board: BoardOption = None,
    days: Optional[int] = typer.Option(None, "--days", help="Due-soon window in days"),
    today: Optional[datetime] = typer.Option(None, "--today", formats=["%Y-%m-%d"]),
    as_json: bool = typer.Option(False, "--json", help="Print the summary as JSON"),
) -> None:
    """Personal dashboard for the board's actor."""
    _, snapshot = load_board(board)
    window = days if days is not None else load_settings().upcoming_window_days
    summary = personal_dashboard(
        snapshot.tasks,
        snapshot.actor,
        today=today.date() if today else date.today(),
        window_days=window,
    )
    _print_summary(f"MY TASKS ({snapshot.actor.id})", summary, as_json)
