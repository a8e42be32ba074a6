"""Shared fixtures: a small layer registry and isolated storage roots."""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from layer_configurator.assets.loader import BuiltinConfigurations
from layer_configurator.config.paths import ConfigPaths
from layer_configurator.core.layer import Layer
from layer_configurator.core.setting import SettingMeta, SettingType

VALIDATION = "VK_LAYER_KHRONOS_validation"
API_DUMP = "VK_LAYER_LUNARG_api_dump"


@pytest.fixture
def validation_layer() -> Layer:
    return Layer(
        key=VALIDATION,
        settings=[
            SettingMeta("debug_action", SettingType.FLAGS, ["VK_DBG_LAYER_ACTION_LOG_MSG"]),
            SettingMeta("log_filename", SettingType.SAVE_FILE, "stdout"),
            SettingMeta("duplicate_message_limit", SettingType.INT, 10),
            SettingMeta("enable_message_limit", SettingType.BOOL, True),
        ],
    )


@pytest.fixture
def api_dump_layer() -> Layer:
    return Layer(
        key=API_DUMP,
        settings=[
            SettingMeta("output_format", SettingType.ENUM, "text", values=("text", "html", "json")),
            SettingMeta("file", SettingType.BOOL, False),
            SettingMeta("indent_size", SettingType.INT, 4),
        ],
    )


@pytest.fixture
def available_layers(validation_layer: Layer, api_dump_layer: Layer) -> list[Layer]:
    return [validation_layer, api_dump_layer]


@pytest.fixture
def paths(tmp_path: Path) -> ConfigPaths:
    return ConfigPaths(config_dir=tmp_path / "configurations", legacy_dir=tmp_path / "legacy")


@pytest.fixture
def builtins() -> BuiltinConfigurations:
    return BuiltinConfigurations()


@pytest.fixture
def no_builtins(tmp_path: Path) -> BuiltinConfigurations:
    return BuiltinConfigurations(tmp_path / "no_builtins")


def write_json(path: Path, document: Any) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(document, indent=4), encoding="utf-8")
    return path
