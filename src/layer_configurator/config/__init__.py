"""Storage configuration module.

This module provides storage locations and the configuration collection.

Submodules:
    paths: ConfigPaths with the current and legacy storage roots
    manager: ConfigurationManager for the set of configurations an application manages

Configurations are stored as JSON in ~/.local/share/layer_configurator/configurations
(%LOCALAPPDATA%/LayerConfigurator/configurations on Windows). Import the manager
from layer_configurator.config.manager.
"""

from .paths import ConfigPaths, PathType

__all__ = [
    "ConfigPaths",
    "PathType",
]
