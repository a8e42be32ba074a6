"""Layer declarations as provided by the layer registry"""

from dataclasses import dataclass, field
from typing import Iterable, Optional

from .setting import SettingMeta
from .setting_set import SettingDataSet, collect_default_setting_data


@dataclass
class Layer:
    """A layer known to the system and the settings it declares"""
    key: str
    settings: list[SettingMeta] = field(default_factory=list)

    def collect_defaults(self) -> SettingDataSet:
        """Get a fresh setting set holding every declared default."""
        return collect_default_setting_data(self.settings)


def find_layer(available_layers: Iterable[Layer], key: str) -> Optional[Layer]:
    """Find a layer by key.

    Args:
        available_layers: Layers currently registered
        key: Layer key to find

    Returns:
        The Layer or None if no registered layer has that key
    """
    for layer in available_layers:
        if layer.key == key:
            return layer
    return None
