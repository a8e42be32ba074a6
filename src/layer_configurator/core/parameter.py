"""Layer parameters: how one layer takes part in a configuration"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Optional

from ..exceptions import ConfigurationFormatError
from .layer import Layer
from .platform import PLATFORM_ALL_BIT, PlatformType, current_platform, is_platform_enabled
from .setting_set import SettingDataSet

# Rank of a parameter that takes no part in override ordering
NO_RANK = -1


class LayerState(Enum):
    """Override state of a layer within a configuration"""
    APPLICATION_CONTROLLED = "APPLICATION_CONTROLLED"
    OVERRIDDEN = "OVERRIDDEN"
    EXCLUDED = "EXCLUDED"

    @property
    def token(self) -> str:
        return self.value


def get_layer_state(token: str) -> LayerState:
    """Parse a layer state token.

    Raises:
        ConfigurationFormatError: If the token names no known state
    """
    try:
        return LayerState(str(token).strip().upper())
    except ValueError:
        raise ConfigurationFormatError(f"Unknown layer state: {token!r}") from None


@dataclass
class Parameter:
    """One layer's state, rank, platforms and settings in a configuration"""
    key: str
    state: LayerState = LayerState.APPLICATION_CONTROLLED
    overridden_rank: int = NO_RANK
    platform_flags: int = PLATFORM_ALL_BIT
    settings: SettingDataSet = field(default_factory=SettingDataSet)

    @property
    def has_rank(self) -> bool:
        return self.overridden_rank != NO_RANK

    def is_available_on_platform(self, platform: Optional[PlatformType] = None) -> bool:
        """Check whether the parameter applies to a platform.

        Args:
            platform: Platform to check, defaults to the current one

        Returns:
            True if the platform's flag is set
        """
        return is_platform_enabled(self.platform_flags, platform or current_platform())


def find_parameter(parameters: Iterable[Parameter], key: str) -> Optional[Parameter]:
    """Find a parameter by layer key.

    Returns:
        The Parameter or None if no parameter has that key
    """
    for parameter in parameters:
        if parameter.key == key:
            return parameter
    return None


def order_parameters(parameters: list[Parameter], available_layers: Iterable[Layer] = ()) -> None:
    """Sort parameters in place into override order.

    Overridden parameters with a rank come first, by ascending rank, then
    overridden parameters without a rank, then excluded and application
    controlled ones in their current order. The sort is stable, so applying
    it again leaves the order unchanged.

    Args:
        parameters: Parameters to sort
        available_layers: Layers currently registered. The order does not
            depend on them; editors pass the registry they loaded with.
    """

    def sort_key(parameter: Parameter) -> tuple[int, int]:
        if parameter.state == LayerState.OVERRIDDEN:
            if parameter.has_rank:
                return (0, parameter.overridden_rank)
            return (1, 0)
        return (2, 0)

    parameters.sort(key=sort_key)
