"""Layer configurations and their persistence"""

import copy
import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Optional, Union

from ..assets.loader import BuiltinConfigurations
from ..config.paths import ConfigPaths, PathType
from ..exceptions import ConfigurationFormatError, UnknownLayerError
from ..logging_config import get_logger
from .file_format import build_document, parse_document
from .layer import Layer, find_layer
from .parameter import NO_RANK, LayerState, Parameter, find_parameter, order_parameters
from .platform import PLATFORM_ALL_BIT, PlatformType, current_platform, is_platform_enabled

logger = get_logger("configuration")

DEFAULT_CONFIGURATION_NAME = "New Configuration"

# Storage roots searched when resetting to a saved file, in order
SAVED_PATH_TYPES = (PathType.CONFIGURATION, PathType.CONFIGURATION_LEGACY)


@dataclass
class Configuration:
    """A named set of layer parameters.

    The key is the configuration's identity and the stem of the file it is
    saved to. Parameter order is the order overridden layers are applied in.
    The setting tree state belongs to the editor and is stored untouched.
    """
    key: str = DEFAULT_CONFIGURATION_NAME
    description: str = ""
    platform_flags: int = PLATFORM_ALL_BIT
    setting_tree_state: bytes = b""
    parameters: list[Parameter] = field(default_factory=list)

    def load(self, available_layers: Iterable[Layer], full_path: Union[str, Path]) -> bool:
        """Load the configuration from a file, replacing the current parameters.

        Any supported file format version is accepted. Loading a 2.0 file
        whose name cannot be recovered deletes that file and names the
        configuration "Configuration".

        Args:
            available_layers: Layers currently registered, used to default settings
            full_path: Configuration file to read

        Returns:
            True if the file was loaded, False if it could not be read or parsed
        """
        path = Path(full_path)
        available_layers = list(available_layers)

        self.parameters.clear()

        logger.debug(f"Loading configuration from {path}")
        try:
            json_root = json.loads(path.read_text(encoding="utf-8"))
            parsed = parse_document(available_layers, json_root, path)
        except (OSError, ValueError, RecursionError) as e:
            logger.warning(f"Could not read configuration {path}: {e}")
            return False
        except ConfigurationFormatError as e:
            logger.warning(f"Invalid configuration {path}: {e}")
            return False

        self.key = parsed.key
        self.description = parsed.description
        self.platform_flags = parsed.platform_flags
        self.setting_tree_state = parsed.setting_tree_state
        self.parameters = parsed.parameters
        order_parameters(self.parameters, available_layers)

        logger.debug(f"Configuration '{self.key}' loaded: {len(self.parameters)} parameters")
        return True

    def save(self, available_layers: Iterable[Layer], full_path: Union[str, Path]) -> bool:
        """Save the configuration in the current file format.

        Application controlled parameters are not written. The file is
        replaced atomically, so a failed save leaves any previous file intact.

        Args:
            available_layers: Layers currently registered
            full_path: Configuration file to write

        Returns:
            True if the file was written
        """
        path = Path(full_path)
        document = build_document(
            self.key,
            self.description,
            self.platform_flags,
            self.setting_tree_state,
            self.parameters,
        )

        logger.debug(f"Saving configuration '{self.key}' to {path}")
        temp_path = path.with_name(path.name + ".tmp")
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            temp_path.write_text(json.dumps(document, indent=4) + "\n", encoding="utf-8")
            os.replace(temp_path, path)
        except OSError as e:
            logger.warning(f"Could not save configuration '{self.key}' to {path}: {e}")
            try:
                temp_path.unlink(missing_ok=True)
            except OSError:
                pass
            return False
        return True

    def reset(
        self,
        available_layers: Iterable[Layer],
        paths: ConfigPaths,
        builtins: Optional[BuiltinConfigurations] = None,
    ) -> None:
        """Reset the configuration to its baseline.

        The baseline is, first match wins: the built-in configuration with the
        same name, the saved file for this name in the current then legacy
        storage root, or every parameter application controlled with its
        layer's default settings.

        Args:
            available_layers: Layers currently registered
            paths: Storage locations of saved configurations
            builtins: Built-in configuration files, defaults to the bundled ones

        Raises:
            UnknownLayerError: If resetting to defaults and a parameter's layer
                is not registered
        """
        available_layers = list(available_layers)
        builtins = builtins if builtins is not None else BuiltinConfigurations()

        builtin_path = builtins.find(self.key)
        if builtin_path is not None and self._reload(available_layers, builtin_path):
            logger.info(f"Configuration '{self.key}' reset to built-in {builtin_path.name}")
            return

        for path_type in SAVED_PATH_TYPES:
            full_path = paths.get_full_path(path_type, self.key)
            if full_path.is_file() and self._reload(available_layers, full_path):
                logger.info(f"Configuration '{self.key}' reset to saved file {full_path}")
                return

        layers = {}
        for parameter in self.parameters:
            layer = find_layer(available_layers, parameter.key)
            if layer is None:
                raise UnknownLayerError(parameter.key)
            layers[parameter.key] = layer

        for parameter in self.parameters:
            parameter.state = LayerState.APPLICATION_CONTROLLED
            parameter.overridden_rank = NO_RANK
            parameter.settings = layers[parameter.key].collect_defaults()

        order_parameters(self.parameters, available_layers)
        logger.info(f"Configuration '{self.key}' reset to defaults")

    def _reload(self, available_layers: list[Layer], full_path: Path) -> bool:
        # Load into a scratch object so a bad file leaves this one untouched
        candidate = Configuration(key=self.key)
        if not candidate.load(available_layers, full_path):
            logger.error(f"Could not reset '{self.key}' from {full_path}")
            return False

        self.description = candidate.description
        self.platform_flags = candidate.platform_flags
        self.setting_tree_state = candidate.setting_tree_state
        self.parameters = candidate.parameters
        order_parameters(self.parameters, available_layers)
        return True

    def has_override(self, platform: Optional[PlatformType] = None) -> bool:
        """Check whether any parameter applying to a platform overrides discovery.

        Args:
            platform: Platform to check, defaults to the current one

        Returns:
            True if an applicable parameter is overridden or excluded
        """
        for parameter in self.parameters:
            if not parameter.is_available_on_platform(platform):
                continue
            if parameter.state != LayerState.APPLICATION_CONTROLLED:
                return True
        return False

    def is_available_on_this_platform(self, platform: Optional[PlatformType] = None) -> bool:
        return is_platform_enabled(self.platform_flags, platform or current_platform())

    def is_built_in(self, builtins: Optional[BuiltinConfigurations] = None) -> bool:
        """Check whether a built-in configuration has this configuration's name."""
        builtins = builtins if builtins is not None else BuiltinConfigurations()
        return builtins.find(self.key) is not None

    def has_saved_file(self, paths: ConfigPaths) -> bool:
        """Check whether a file for this configuration exists in either storage root."""
        return any(paths.get_full_path(path_type, self.key).is_file() for path_type in SAVED_PATH_TYPES)

    def find_parameter(self, key: str) -> Optional[Parameter]:
        return find_parameter(self.parameters, key)

    def order_parameters(self, available_layers: Iterable[Layer] = ()) -> None:
        order_parameters(self.parameters, available_layers)

    def copy(self) -> "Configuration":
        return copy.deepcopy(self)
