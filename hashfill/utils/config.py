"""
Configuration management using Pydantic for validation.

This module provides type-safe configuration loading and validation
for the recursive filler.
"""
from enum import Enum
from pathlib import Path
from typing import Any, Dict

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from hashfill.utils.exceptions import ConfigurationError


class FillMode(str, Enum):
    """How boundary cells at maximum precision are treated."""
    INTERSECTS = "intersects"
    CONTAINS = "contains"


class FillerConfig(BaseModel):
    """Immutable settings consumed by every step of a fill."""
    model_config = ConfigDict(frozen=True)

    max_precision: int = Field(6, ge=0, description="Deepest geohash precision searched")
    fixed_precision: bool = Field(False, description="Expand results to exactly max_precision")
    mode: FillMode = Field(FillMode.INTERSECTS, description="Default fill mode for the CLI")
    workers: int = Field(1, ge=1, le=64, description="Threads used to search root subtrees")

    @field_validator('mode', mode='before')
    @classmethod
    def normalise_mode(cls, v):
        """Accept mode names in any case."""
        if isinstance(v, str):
            return v.lower()
        return v


def build_config(**overrides: Any) -> FillerConfig:
    """
    Build a validated FillerConfig from keyword overrides.

    ``None`` values are ignored so CLI arguments can be passed straight
    through.

    Raises:
        ConfigurationError: If any value fails validation

    Example:
        >>> build_config(max_precision=8, fixed_precision=True).max_precision
        8
    """
    values = {key: value for key, value in overrides.items() if value is not None}
    try:
        return FillerConfig(**values)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid filler configuration: {e}") from e


def load_config(config_path: Path) -> FillerConfig:
    """
    Load and validate filler configuration from a YAML file.

    Settings may sit at the top level or under a ``filler:`` key.

    Args:
        config_path: Path to YAML config file

    Returns:
        Validated FillerConfig object

    Raises:
        FileNotFoundError: If config file doesn't exist
        ConfigurationError: If YAML is malformed or validation fails

    Example:
        >>> config = load_config(Path("config/regents.yaml"))
        >>> config.max_precision
        8
    """
    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, 'r') as f:
        try:
            config_dict = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Malformed YAML in {config_path}: {e}") from e

    if not isinstance(config_dict, dict):
        raise ConfigurationError(f"Config {config_path} must be a mapping")

    section: Dict[str, Any] = config_dict.get('filler', config_dict)
    if not isinstance(section, dict):
        raise ConfigurationError(f"'filler' section in {config_path} must be a mapping")

    return build_config(**section)

