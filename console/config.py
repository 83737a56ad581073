"""Roster configuration with YAML support."""

from __future__ import annotations

from pathlib import Path
from typing import Literal

import yaml

from roster_core.schemas import BaseSchema

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class RosterConfig(BaseSchema):
    """Settings for the console and the store it opens."""

    data_file: str = "students.csv"

    # Skip malformed lines on load instead of failing
    skip_malformed: bool = False

    log_level: LogLevel = "INFO"


def load_config(yaml_path: str | Path) -> RosterConfig:
    """Load roster configuration from YAML file.

    Args:
        yaml_path: Path to YAML configuration file

    Returns:
        RosterConfig instance

    Raises:
        FileNotFoundError: If YAML file doesn't exist
        ValueError: If YAML is invalid or has bad values
    """
    yaml_path = Path(yaml_path)

    if not yaml_path.exists():
        raise FileNotFoundError(f"Config file not found: {yaml_path}")

    with open(yaml_path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if not data or not isinstance(data, dict):
        raise ValueError(f"Empty or invalid YAML file: {yaml_path}")

    try:
        return RosterConfig.from_dict(data)
    except Exception as e:
        raise ValueError(f"Invalid configuration in {yaml_path}: {e}") from e


def save_config(config: RosterConfig, yaml_path: str | Path) -> None:
    yaml_path = Path(yaml_path)
    yaml_path.parent.mkdir(parents=True, exist_ok=True)

    with open(yaml_path, "w", encoding="utf-8") as f:
        yaml.dump(config.to_dict(), f, default_flow_style=False, sort_keys=False, indent=2)
