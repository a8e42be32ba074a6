"""Storage locations for configuration files"""

import os
import sys
from enum import Enum
from pathlib import Path
from typing import Optional


class PathType(Enum):
    """Storage roots a configuration file can live in"""
    CONFIGURATION = "configuration"
    CONFIGURATION_LEGACY = "configuration_legacy"


class ConfigPaths:
    """Default storage paths for configuration files.

    All paths use environment variable expansion for portability. Setting
    LAYER_CONFIGURATOR_HOME relocates both roots, which is how tests and
    portable installs redirect storage.
    """

    HOME_ENV = "LAYER_CONFIGURATOR_HOME"
    FILE_SUFFIX = ".json"

    # Windows paths
    WINDOWS_CONFIG_DIR = r"%LOCALAPPDATA%\LayerConfigurator\configurations"
    WINDOWS_LEGACY_DIR = r"%APPDATA%\LayerConfigurator"

    # Linux and macOS paths
    UNIX_CONFIG_DIR = "~/.local/share/layer_configurator/configurations"
    UNIX_LEGACY_DIR = "~/.config/layer_configurator"

    def __init__(self, config_dir: Optional[Path] = None, legacy_dir: Optional[Path] = None):
        """Initialize the path table.

        Args:
            config_dir: Current storage root, defaults to the platform location
            legacy_dir: Legacy storage root, defaults to the platform location
        """
        self.config_dir = Path(config_dir) if config_dir is not None else self.default_dir(PathType.CONFIGURATION)
        self.legacy_dir = Path(legacy_dir) if legacy_dir is not None else self.default_dir(PathType.CONFIGURATION_LEGACY)

    @classmethod
    def default_dir(cls, path_type: PathType) -> Path:
        """Get the default root for a path type on this system.

        Args:
            path_type: Which storage root to resolve

        Returns:
            Expanded directory path
        """
        home = os.environ.get(cls.HOME_ENV)
        if home:
            sub_dir = "configurations" if path_type == PathType.CONFIGURATION else "legacy"
            return cls.expand_path(home) / sub_dir

        if sys.platform == "win32":
            raw = cls.WINDOWS_CONFIG_DIR if path_type == PathType.CONFIGURATION else cls.WINDOWS_LEGACY_DIR
        else:
            raw = cls.UNIX_CONFIG_DIR if path_type == PathType.CONFIGURATION else cls.UNIX_LEGACY_DIR
        return cls.expand_path(raw)

    @classmethod
    def expand_path(cls, path_str: str) -> Path:
        """Expand environment variables and the user home in a path string.

        Args:
            path_str: Path string potentially containing environment variables

        Returns:
            Path object with expanded variables
        """
        return Path(os.path.expanduser(os.path.expandvars(path_str)))

    def get_dir(self, path_type: PathType) -> Path:
        """Get the root directory of a path type."""
        if path_type == PathType.CONFIGURATION:
            return self.config_dir
        return self.legacy_dir

    def get_full_path(self, path_type: PathType, configuration_name: str) -> Path:
        """Get the file a configuration is stored in.

        Args:
            path_type: Current or legacy storage root
            configuration_name: Configuration key, used as the file stem

        Returns:
            Full path of the configuration file
        """
        return self.get_dir(path_type) / f"{configuration_name}{self.FILE_SUFFIX}"

    def ensure_config_dir(self) -> Path:
        """Ensure the current configuration directory exists.

        Returns:
            Path to the configuration directory
        """
        self.config_dir.mkdir(parents=True, exist_ok=True)
        return self.config_dir
