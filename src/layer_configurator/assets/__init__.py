"""Bundled assets.

This module handles locating assets in both development and packaged (PyInstaller) modes.

Submodules:
    loader: get_asset_path() and the BuiltinConfigurations provider

Asset Directory Structure:
    assets/
        configurations/
            API dump.json         - Dump API calls to a file
            Frame Capture.json    - Capture frames for replay
            Synchronization.json  - Synchronization validation only
            Validation.json       - Standard validation
"""

from .loader import BuiltinConfigurations, get_asset_path

__all__ = [
    "BuiltinConfigurations",
    "get_asset_path",
]
