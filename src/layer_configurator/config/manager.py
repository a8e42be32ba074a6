"""Configuration management - the set of configurations an application keeps"""

from pathlib import Path
from typing import Iterable, Optional, Union

from .paths import ConfigPaths, PathType
from ..assets.loader import BuiltinConfigurations
from ..core.configuration import DEFAULT_CONFIGURATION_NAME, Configuration
from ..core.layer import Layer
from ..core.naming import make_unique_name
from ..core.parameter import Parameter, order_parameters
from ..exceptions import ConfigurationIOError
from ..logging_config import get_logger

logger = get_logger("config_manager")


def _delete_file(path: Path) -> None:
    try:
        path.unlink()
    except OSError as e:
        raise ConfigurationIOError(f"Could not delete configuration file: {e}", path=path) from e


class ConfigurationManager:
    """Manages the configurations stored in the configuration directory.

    Handles loading and saving every configuration file, first-run import of
    the built-in configurations, and the create/duplicate/rename/remove
    operations the editor offers. Configuration names are unique within the
    manager and double as file stems.
    """

    def __init__(
        self,
        available_layers: Iterable[Layer],
        paths: Optional[ConfigPaths] = None,
        builtins: Optional[BuiltinConfigurations] = None,
    ):
        self.available_layers: list[Layer] = list(available_layers)
        self.paths = paths if paths is not None else ConfigPaths()
        self.builtins = builtins if builtins is not None else BuiltinConfigurations()
        self.configurations: list[Configuration] = []

    def is_first_run(self) -> bool:
        """Check whether the configuration directory holds no configuration yet."""
        config_dir = self.paths.get_dir(PathType.CONFIGURATION)
        return not config_dir.is_dir() or not any(config_dir.glob("*.json"))

    def load_all(self) -> list[Configuration]:
        """Load every configuration file from the configuration directory.

        On first run the built-in configurations are imported and saved
        there instead. Files that fail to load are skipped.

        Returns:
            The loaded configurations
        """
        self.configurations = []

        if self.is_first_run():
            logger.info("No saved configurations, importing built-in configurations")
            self.import_builtins()
            return self.configurations

        config_dir = self.paths.get_dir(PathType.CONFIGURATION)
        logger.debug(f"Loading configurations from {config_dir}")
        for path in sorted(config_dir.glob("*.json")):
            configuration = Configuration()
            if not configuration.load(self.available_layers, path):
                logger.warning(f"Skipping unreadable configuration file: {path}")
                continue
            if self.find(configuration.key) is not None:
                logger.warning(f"Skipping {path}: configuration '{configuration.key}' is already loaded")
                continue
            self.configurations.append(configuration)

        logger.debug(f"Loaded {len(self.configurations)} configurations")
        return self.configurations

    def import_builtins(self) -> int:
        """Add every built-in configuration not already present and save it.

        Returns:
            Number of configurations imported
        """
        imported = 0
        for path in self.builtins.list_files():
            configuration = Configuration()
            if not configuration.load(self.available_layers, path):
                logger.error(f"Built-in configuration is invalid: {path}")
                continue
            if self.find(configuration.key) is not None:
                continue
            self.configurations.append(configuration)
            self.save(configuration.key)
            imported += 1
        return imported

    def save(self, name: str) -> bool:
        """Save one configuration to its file in the configuration directory.

        Args:
            name: Configuration name

        Returns:
            True if the file was written
        """
        configuration = self.get(name)
        self.paths.ensure_config_dir()
        return configuration.save(self.available_layers, self.paths.get_full_path(PathType.CONFIGURATION, name))

    def save_all(self) -> bool:
        """Save every configuration.

        Returns:
            True if every file was written
        """
        results = [self.save(configuration.key) for configuration in self.configurations]
        return all(results)

    def find(self, name: str) -> Optional[Configuration]:
        """Get a configuration by name.

        Args:
            name: The configuration name to find

        Returns:
            The Configuration or None if not found
        """
        for configuration in self.configurations:
            if configuration.key == name:
                return configuration
        return None

    def get(self, name: str) -> Configuration:
        """Get a configuration by name.

        Raises:
            KeyError: If no configuration has that name
        """
        configuration = self.find(name)
        if configuration is None:
            raise KeyError(f"Unknown configuration: {name}")
        return configuration

    def names(self) -> list[str]:
        return [configuration.key for configuration in self.configurations]

    def create(self, name: str = DEFAULT_CONFIGURATION_NAME) -> Configuration:
        """Create an empty configuration listing every available layer.

        All parameters start application controlled with default settings.

        Args:
            name: Requested name, made unique if taken

        Returns:
            The new configuration
        """
        configuration = Configuration(key=make_unique_name(self.configurations, name))
        configuration.parameters = [
            Parameter(key=layer.key, settings=layer.collect_defaults())
            for layer in self.available_layers
        ]
        order_parameters(configuration.parameters, self.available_layers)
        self.configurations.append(configuration)
        logger.info(f"Created configuration '{configuration.key}'")
        return configuration

    def duplicate(self, name: str) -> Configuration:
        """Copy a configuration under a new unique name.

        Args:
            name: Configuration to copy

        Returns:
            The copy, e.g. "Validation (2)" for "Validation"
        """
        duplicate = self.get(name).copy()
        duplicate.key = make_unique_name(self.configurations, name)
        self.configurations.append(duplicate)
        logger.info(f"Duplicated configuration '{name}' as '{duplicate.key}'")
        return duplicate

    def rename(self, old_name: str, new_name: str) -> bool:
        """Rename a configuration and move its file.

        Args:
            old_name: Current name
            new_name: Desired name

        Returns:
            True if renamed, False if the new name is empty or taken

        Raises:
            ConfigurationIOError: If the old file cannot be deleted
        """
        configuration = self.get(old_name)
        if not new_name or self.find(new_name) is not None:
            return False

        old_path = self.paths.get_full_path(PathType.CONFIGURATION, old_name)
        configuration.key = new_name
        if old_path.is_file():
            if not self.save(new_name):
                configuration.key = old_name
                return False
            try:
                _delete_file(old_path)
            except ConfigurationIOError:
                configuration.key = old_name
                self.paths.get_full_path(PathType.CONFIGURATION, new_name).unlink(missing_ok=True)
                raise
        logger.info(f"Renamed configuration '{old_name}' to '{new_name}'")
        return True

    def remove(self, name: str) -> bool:
        """Remove a configuration and delete its file.

        Args:
            name: Configuration name

        Returns:
            True if the configuration was found and removed

        Raises:
            ConfigurationIOError: If the file cannot be deleted
        """
        for i, configuration in enumerate(self.configurations):
            if configuration.key == name:
                path = self.paths.get_full_path(PathType.CONFIGURATION, name)
                if path.is_file():
                    _delete_file(path)
                self.configurations.pop(i)
                logger.info(f"Removed configuration '{name}'")
                return True
        return False

    def reset(self, name: str) -> Configuration:
        """Reset a configuration to its built-in, saved or default state."""
        configuration = self.get(name)
        configuration.reset(self.available_layers, self.paths, self.builtins)
        return configuration

    def import_configuration(self, full_path: Union[str, Path]) -> Optional[Configuration]:
        """Load a configuration file from anywhere and add it.

        The imported configuration is renamed if its name is taken, and saved
        to the configuration directory.

        Args:
            full_path: File to import

        Returns:
            The imported configuration, or None if the file could not be loaded
        """
        configuration = Configuration()
        if not configuration.load(self.available_layers, full_path):
            return None
        configuration.key = make_unique_name(self.configurations, configuration.key)
        self.configurations.append(configuration)
        self.save(configuration.key)
        logger.info(f"Imported configuration '{configuration.key}' from {full_path}")
        return configuration

    def export_configuration(self, name: str, full_path: Union[str, Path]) -> bool:
        """Save a configuration to a file outside the configuration directory."""
        return self.get(name).save(self.available_layers, full_path)
