"""Interfaces layer: user-facing entry points (the typer CLI)."""
