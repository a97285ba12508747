"""Configuration model and I/O for numinspect.

A small pydantic model read from YAML or JSON. Every field has a default that
reproduces the legacy tool, so an empty or missing file changes nothing.
"""

from __future__ import annotations

import json
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import ConfigError, UnsupportedTypeError
from .inspector import DEFAULT_RENDER_PRECISION, ByteOrder
from .layout import WidthSelector

# Exact decimal expansions never need more digits than this (float64 subnormals)
MAX_RENDER_PRECISION = 1100


class InspectorConfig(BaseModel):
    """Options for parsing and inspection."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    default_type: WidthSelector = Field(
        default=WidthSelector.AUTO, description="Width used when none is given on the command line"
    )
    byte_order: ByteOrder = Field(
        default=ByteOrder.NATIVE, description="Storage byte order used for the bit string"
    )
    strict_parsing: bool = Field(
        default=False, description="Reject characters after the numeric prefix"
    )
    render_precision: int = Field(
        default=DEFAULT_RENDER_PRECISION, description="Significant digits in the round-trip rendering"
    )

    @field_validator("default_type", mode="before")
    @classmethod
    def resolve_aliases(cls, v: object) -> object:
        """Accept the legacy type names."""
        if isinstance(v, str):
            try:
                return WidthSelector.from_name(v)
            except UnsupportedTypeError as e:
                raise ValueError(str(e)) from e
        return v

    @field_validator("render_precision")
    @classmethod
    def validate_precision(cls, v: int) -> int:
        if not 1 <= v <= MAX_RENDER_PRECISION:
            raise ValueError(f"render_precision must be between 1 and {MAX_RENDER_PRECISION}, got {v}")
        return v


def load_config(path: str | Path) -> InspectorConfig:
    """Load configuration from a YAML or JSON file.

    Args:
        path: Path to configuration file

    Returns:
        Validated InspectorConfig

    Raises:
        ConfigError: If the file is missing, unreadable or invalid
    """
    path = Path(path)
    if not path.exists():
        raise ConfigError(f"Configuration file not found: {path}")

    try:
        with open(path, encoding="utf-8") as f:
            if path.suffix.lower() == ".json":
                data = json.load(f)
            else:
                data = yaml.safe_load(f)
    except (OSError, json.JSONDecodeError, yaml.YAMLError) as e:
        raise ConfigError(f"Failed to read config {path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config {path} must be a mapping, got {type(data).__name__}")

    try:
        return InspectorConfig(**data)
    except ValidationError as e:
        raise ConfigError(f"Invalid config {path}: {e}") from e


def save_config(config: InspectorConfig, path: str | Path) -> None:
    """Save configuration to a YAML or JSON file.

    Args:
        config: Configuration to save
        path: Output file path
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    data = config.model_dump(mode="json")

    with open(path, "w", encoding="utf-8") as f:
        if path.suffix.lower() in [".yaml", ".yml"]:
            yaml.safe_dump(data, f, default_flow_style=False, sort_keys=False)
        else:
            json.dump(data, f, indent=2)


__all__ = [
    "MAX_RENDER_PRECISION",
    "InspectorConfig",
    "load_config",
    "save_config",
]
