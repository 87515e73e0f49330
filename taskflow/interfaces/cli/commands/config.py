"""Settings CLI commands."""

import typer
from pydantic import ValidationError

from taskflow.config import Settings, load_settings, save_settings
from taskflow.interfaces.cli.common import print_error, print_success

app = typer.Typer(help="Settings commands")


@app.command("show")
def show() -> None:
    """Print the current settings as JSON."""
    typer.echo(load_settings().model_dump_json(indent=2))


@app.command("set")
def set_value(
    key: str = typer.Argument(..., help="Setting name"),
    value: str = typer.Argument(..., help="New value"),
) -> None:
    """Change one setting."""
    if key not in Settings.model_fields:
        print_error(f"Unknown setting: {key}")
        raise typer.Exit(1)

    data = load_settings().model_dump()
    data[key] = value
    try:
        settings = Settings.model_validate(data)
    except ValidationError as e:
        print_error(f"Invalid value for {key}: {e.errors()[0]['msg']}")
        raise typer.Exit(1)

    path = save_settings(settings)
    print_success(f"{key} = {getattr(settings, key)} (saved to {path})")
