"""Run configuration for the inactivity analyzer."""

from enum import Enum
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field

DEFAULT_MAX_COMMIT_AGE_DAYS = 180
DEFAULT_INACTIVE_THRESHOLD = 0.5

# YAML key -> AnalysisConfig field
YAML_KEYS = {
    "org": "organization",
    "days": "max_commit_age_days",
    "threshold": "inactive_threshold",
    "format": "output_format",
    "output": "output_file",
    "silent": "silent",
    "flag_archived": "archived_always_flagged",
}


class ConfigError(Exception):
    """The configuration file is missing or malformed."""


class OutputFormat(str, Enum):
    """Report output formats."""

    CONSOLE = "console"
    JSON = "json"
    CSV = "csv"


class AnalysisConfig(BaseModel):
    """Settings for a single run. Built once, never mutated."""

    model_config = ConfigDict(frozen=True)

    organization: str | None = Field(None, description="Organization being analyzed")
    max_commit_age_days: int = Field(
        DEFAULT_MAX_COMMIT_AGE_DAYS, ge=0, description="Maximum age of last commit in days"
    )
    inactive_threshold: float = Field(
        DEFAULT_INACTIVE_THRESHOLD, ge=0.0, le=1.0, description="Threshold of inactive contributors"
    )
    output_format: OutputFormat = OutputFormat.CONSOLE
    output_file: Path | None = None
    silent: bool = False
    archived_always_flagged: bool = Field(
        False, description="Flag archived repositories regardless of activity"
    )


def load_config(config_path: Path) -> dict:
    """Load run defaults from a YAML file.

    Returns a dict keyed by AnalysisConfig field names. Unknown keys are
    ignored.
    """
    if not config_path.exists():
        raise ConfigError(f"Config file not found: {config_path}")

    try:
        data = yaml.safe_load(config_path.read_text())
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {config_path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {config_path} must contain a mapping")

    return {field: data[key] for key, field in YAML_KEYS.items() if key in data}
