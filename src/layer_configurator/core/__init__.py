"""Configuration data model.

Submodules:
    setting: SettingType, SettingMeta (a layer's declaration) and SettingData (a value)
    setting_set: SettingDataSet, the ordered settings of one parameter
    layer: Layer declarations supplied by the layer registry
    parameter: LayerState, Parameter and the override ordering rule
    platform: Platform flags and tokens
    file_format: Version detection and the 2.0 / 2.1 / 2.2 parsers
    configuration: Configuration load, save and reset
    naming: Unique names for duplicated configurations
"""

from .configuration import Configuration
from .layer import Layer, find_layer
from .naming import make_unique_name
from .parameter import NO_RANK, LayerState, Parameter, find_parameter, order_parameters
from .platform import PLATFORM_ALL_BIT, PlatformType
from .setting import SettingData, SettingMeta, SettingType
from .setting_set import SettingDataSet, collect_default_setting_data

__all__ = [
    "Configuration",
    "Layer",
    "LayerState",
    "NO_RANK",
    "PLATFORM_ALL_BIT",
    "Parameter",
    "PlatformType",
    "SettingData",
    "SettingDataSet",
    "SettingMeta",
    "SettingType",
    "collect_default_setting_data",
    "find_layer",
    "find_parameter",
    "make_unique_name",
    "order_parameters",
]
