"""Asset loading utilities for both development and packaged modes"""

import sys
from pathlib import Path
from typing import Optional, Union


def get_asset_path(relative_path: str) -> Path:
    """Get the correct path for assets, works in both dev and packaged modes.

    Args:
        relative_path: Path relative to the assets directory (e.g., "configurations")

    Returns:
        Absolute path to the asset file
    """
    if getattr(sys, 'frozen', False):
        # Running as compiled executable (PyInstaller)
        base_path = Path(sys._MEIPASS) / "assets"
    else:
        # Running in development
        base_path = Path(__file__).parent

    return base_path / relative_path


class BuiltinConfigurations:
    """Read-only configuration files shipped with the application.

    A built-in configuration is named by its file stem, e.g.
    ``configurations/Validation.json`` is the "Validation" configuration.
    """

    def __init__(self, directory: Optional[Union[str, Path]] = None):
        """Initialize the provider.

        Args:
            directory: Directory holding the JSON files, defaults to the bundled one
        """
        self.directory = Path(directory) if directory is not None else get_asset_path("configurations")

    def list_files(self) -> list[Path]:
        """Get every built-in configuration file, sorted by name."""
        if not self.directory.is_dir():
            return []
        return sorted(path for path in self.directory.glob("*.json") if path.is_file())

    def names(self) -> list[str]:
        return [path.stem for path in self.list_files()]

    def find(self, name: str) -> Optional[Path]:
        """Get the file of the built-in configuration with a name.

        Args:
            name: Configuration name

        Returns:
            Path to the file, or None if no built-in has that name
        """
        for path in self.list_files():
            if path.stem == name:
                return path
        return None
