"""Test configuration loading, validation and round-trip serialization."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from numinspect.core.config import InspectorConfig, load_config, save_config
from numinspect.core.errors import ConfigError
from numinspect.core.inspector import ByteOrder
from numinspect.core.layout import WidthSelector


def test_defaults_match_legacy_behaviour():
    config = InspectorConfig()
    assert config.default_type is WidthSelector.AUTO
    assert config.byte_order is ByteOrder.NATIVE
    assert config.strict_parsing is False
    assert config.render_precision == 100


@pytest.mark.parametrize("suffix", [".yaml", ".yml", ".json"])
def test_round_trip(tmp_path: Path, suffix: str):
    config = InspectorConfig(
        default_type="single",
        byte_order="canonical",
        strict_parsing=True,
        render_precision=40,
    )
    path = tmp_path / f"numinspect{suffix}"
    save_config(config, path)
    assert load_config(path) == config


def test_yaml_file(tmp_path: Path):
    path = tmp_path / "cfg.yaml"
    path.write_text("default_type: double\nstrict_parsing: true\n")
    config = load_config(path)
    assert config.default_type is WidthSelector.DOUBLE
    assert config.strict_parsing is True
    assert config.byte_order is ByteOrder.NATIVE


def test_json_file(tmp_path: Path):
    path = tmp_path / "cfg.json"
    path.write_text(json.dumps({"byte_order": "canonical"}))
    assert load_config(path).byte_order is ByteOrder.CANONICAL


@pytest.mark.parametrize("name,expected", [("[deduce]", WidthSelector.AUTO), ("float", WidthSelector.SINGLE)])
def test_legacy_type_names(name, expected):
    assert InspectorConfig(default_type=name).default_type is expected


def test_empty_file_gives_defaults(tmp_path: Path):
    path = tmp_path / "empty.yaml"
    path.write_text("")
    assert load_config(path) == InspectorConfig()


def test_missing_file(tmp_path: Path):
    with pytest.raises(ConfigError, match="not found"):
        load_config(tmp_path / "nope.yaml")


@pytest.mark.parametrize(
    "content,match",
    [
        ("render_precision: 0\n", "render_precision"),
        ("render_precision: 5000\n", "render_precision"),
        ("default_type: quad\n", "default_type"),
        ("byte_order: middle\n", "byte_order"),
        ("colour: blue\n", "colour"),
        ("- 1\n- 2\n", "mapping"),
        ("default_type: [unclosed\n", "Failed to read"),
    ],
)
def test_invalid_config(tmp_path: Path, content: str, match: str):
    path = tmp_path / "bad.yaml"
    path.write_text(content)
    with pytest.raises(ConfigError, match=match):
        load_config(path)


def test_config_is_frozen():
    config = InspectorConfig()
    with pytest.raises(ValidationError):
        config.strict_parsing = True  # type: ignore[misc]
