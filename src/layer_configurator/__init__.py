"""Layer Configurator - named, versioned layer configurations for a graphics API.

This package provides:
    - A typed model of layer configurations (parameters, states, settings)
    - Loading of three generations of configuration files (2.0, 2.1, 2.2)
    - Saving in the current file format
    - Reset to built-in or previously saved configurations
    - Unique-name generation when duplicating configurations

Package Structure:
    core: Configuration model, setting values, file format parsers
    config: Storage paths, path validation and the ConfigurationManager
    assets: Bundled built-in configuration files

Quick Start:
    Load a configuration file::

        from layer_configurator.core import Configuration, Layer

        configuration = Configuration()
        if configuration.load(available_layers, "Validation.json"):
            print(configuration.key)

Configuration:
    - Configurations: ~/.local/share/layer_configurator/configurations/*.json
    - Log file: ~/.local/share/layer_configurator/configurations/layer_configurator.log
    - Override both locations with LAYER_CONFIGURATOR_HOME
"""

__version__ = "2.2.3"
__app_name__ = "Layer Configurator"
