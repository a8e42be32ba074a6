from __future__ import annotations

import sys

import pytest

from layer_configurator.core.layer import Layer
from layer_configurator.core.parameter import (
    NO_RANK,
    LayerState,
    Parameter,
    find_parameter,
    get_layer_state,
    order_parameters,
)
from layer_configurator.core.platform import (
    PLATFORM_ALL_BIT,
    PlatformType,
    current_platform,
    get_platform_flags,
    get_platform_tokens,
)
from layer_configurator.exceptions import ConfigurationFormatError


def _parameters() -> list[Parameter]:
    return [
        Parameter("a", LayerState.APPLICATION_CONTROLLED),
        Parameter("b", LayerState.OVERRIDDEN, overridden_rank=2),
        Parameter("c", LayerState.EXCLUDED),
        Parameter("d", LayerState.OVERRIDDEN, overridden_rank=0),
        Parameter("e", LayerState.OVERRIDDEN),
    ]


def test_new_parameter_is_application_controlled_on_all_platforms() -> None:
    parameter = Parameter("VK_LAYER_KHRONOS_validation")

    assert parameter.state is LayerState.APPLICATION_CONTROLLED
    assert parameter.overridden_rank == NO_RANK
    assert parameter.has_rank is False
    assert parameter.platform_flags == PLATFORM_ALL_BIT
    assert len(parameter.settings) == 0


def test_order_puts_ranked_overridden_first_then_the_rest_in_insertion_order() -> None:
    parameters = _parameters()

    order_parameters(parameters)

    assert [p.key for p in parameters] == ["d", "b", "e", "a", "c"]


def test_order_is_idempotent() -> None:
    once = _parameters()
    order_parameters(once)
    twice = _parameters()
    order_parameters(twice)
    order_parameters(twice)

    assert [p.key for p in once] == [p.key for p in twice]


def test_order_keeps_unranked_layers_in_insertion_order(validation_layer: Layer) -> None:
    parameters = [
        Parameter("VK_LAYER_unknown", LayerState.EXCLUDED),
        Parameter(validation_layer.key),
        Parameter("VK_LAYER_ranked", LayerState.OVERRIDDEN, overridden_rank=3),
        Parameter("VK_LAYER_other_unknown"),
    ]

    order_parameters(parameters, [validation_layer])

    assert [p.key for p in parameters] == [
        "VK_LAYER_ranked",
        "VK_LAYER_unknown",
        validation_layer.key,
        "VK_LAYER_other_unknown",
    ]


def test_find_parameter() -> None:
    parameters = _parameters()

    assert find_parameter(parameters, "c") is parameters[2]
    assert find_parameter(parameters, "z") is None


@pytest.mark.parametrize(
    "token, expected",
    [
        ("OVERRIDDEN", LayerState.OVERRIDDEN),
        ("excluded", LayerState.EXCLUDED),
        ("APPLICATION_CONTROLLED", LayerState.APPLICATION_CONTROLLED),
    ],
)
def test_get_layer_state(token: str, expected: LayerState) -> None:
    assert get_layer_state(token) is expected


def test_get_layer_state_rejects_unknown_token() -> None:
    with pytest.raises(ConfigurationFormatError):
        get_layer_state("ENABLED")


def test_parameter_platform_availability() -> None:
    parameter = Parameter("a", platform_flags=PlatformType.WINDOWS.bit)

    assert parameter.is_available_on_platform(PlatformType.WINDOWS)
    assert not parameter.is_available_on_platform(PlatformType.LINUX)


def test_platform_tokens() -> None:
    assert get_platform_flags(["WINDOWS", "macos", "BEOS"]) == PlatformType.WINDOWS.bit | PlatformType.MACOS.bit
    assert get_platform_tokens(PLATFORM_ALL_BIT) == ["WINDOWS", "LINUX", "MACOS"]
    assert get_platform_tokens(PlatformType.LINUX.bit) == ["LINUX"]


@pytest.mark.parametrize(
    "sys_platform, expected",
    [("win32", PlatformType.WINDOWS), ("darwin", PlatformType.MACOS), ("linux", PlatformType.LINUX)],
)
def test_current_platform(monkeypatch: pytest.MonkeyPatch, sys_platform: str, expected: PlatformType) -> None:
    monkeypatch.setattr(sys, "platform", sys_platform)
    assert current_platform() is expected
