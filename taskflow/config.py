"""Settings storage for taskflow.

Stores user preferences in ~/.taskflow/config.json. The directory can be
moved with the TASKFLOW_HOME environment variable.
"""

import json
import logging
import os
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, ValidationError

logger = logging.getLogger(__name__)

HOME_ENV = "TASKFLOW_HOME"


class Settings(BaseModel):
    """Tunable behaviour of boards and dashboards."""

    upcoming_window_days: int = Field(default=3, ge=0)
    in_flight_policy: Literal["reject", "queue"] = "reject"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "WARNING"


def get_config_dir() -> Path:
    """Get the taskflow config directory, creating it if needed."""
    override = os.environ.get(HOME_ENV)
    config_dir = Path(override) if override else Path.home() / ".taskflow"
    config_dir.mkdir(parents=True, exist_ok=True)
    return config_dir


def load_settings() -> Settings:
    """Load settings, falling back to defaults for a missing or broken file."""
    config_file = get_config_dir() / "config.json"
    if config_file.exists():
        try:
            data = json.loads(config_file.read_text(encoding="utf-8"))
            return Settings(**data)
        except (json.JSONDecodeError, ValidationError, TypeError) as e:
            logger.warning("Ignoring invalid %s: %s", config_file, e)
    return Settings()


def save_settings(settings: Settings) -> Path:
    """Save settings and return the file written."""
    config_file = get_config_dir() / "config.json"
    config_file.write_text(
        json.dumps(settings.model_dump(), indent=2),
        encoding="utf-8",
    )
    return config_file
