from __future__ import annotations

import logging
from pathlib import Path

import pytest

from layer_configurator.assets.loader import BuiltinConfigurations
from layer_configurator.config.paths import ConfigPaths, PathType
from layer_configurator.logging_config import get_logger, setup_logging


def test_full_path_uses_name_as_file_stem(paths: ConfigPaths, tmp_path: Path) -> None:
    assert paths.get_full_path(PathType.CONFIGURATION, "API dump") == tmp_path / "configurations" / "API dump.json"
    assert paths.get_full_path(PathType.CONFIGURATION_LEGACY, "API dump") == tmp_path / "legacy" / "API dump.json"


def test_home_environment_variable_relocates_both_roots(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv(ConfigPaths.HOME_ENV, str(tmp_path))

    paths = ConfigPaths()

    assert paths.get_dir(PathType.CONFIGURATION) == tmp_path / "configurations"
    assert paths.get_dir(PathType.CONFIGURATION_LEGACY) == tmp_path / "legacy"


def test_ensure_config_dir_creates_directory(paths: ConfigPaths) -> None:
    created = paths.ensure_config_dir()

    assert created.is_dir()
    assert created == paths.config_dir


def test_builtin_configurations_are_bundled(builtins: BuiltinConfigurations) -> None:
    assert builtins.names() == ["API dump", "Frame Capture", "Synchronization", "Validation"]
    assert builtins.find("Validation").name == "Validation.json"
    assert builtins.find("Missing") is None


def test_builtin_configurations_in_missing_directory(no_builtins: BuiltinConfigurations) -> None:
    assert no_builtins.list_files() == []


def test_setup_logging_writes_to_log_file(tmp_path: Path) -> None:
    logger = setup_logging(debug=True, log_dir=tmp_path)
    try:
        get_logger("configuration").info("hello from the test")
        for handler in logger.handlers:
            handler.flush()

        assert logger.name == "layer_configurator"
        assert len(logger.handlers) == 2
        assert "hello from the test" in (tmp_path / "layer_configurator.log").read_text(encoding="utf-8")
    finally:
        for handler in list(logger.handlers):
            handler.close()
        logger.handlers.clear()
        logger.setLevel(logging.NOTSET)
