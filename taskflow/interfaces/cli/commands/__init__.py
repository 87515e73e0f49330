"""CLI command groups for taskflow.

Each module provides a Typer app that gets registered with the main app
using app.add_typer().

Command groups:
- board: Column view, progress, authorization checks, moves
- dashboard: Team and personal dashboards
- config: Settings
"""

from taskflow.interfaces.cli.commands import board, config, dashboard

__all__ = ["board", "dashboard", "config"]
