"""Configuration file formats and their parsers.

Three generations of configuration files exist on disk:

    2.0.x   The configuration object sits under a top-level key named after
            the configuration. Layers are a map keyed by layer name with
            settings inline, and excluded layers live in a separate
            ``blacklisted_layers`` array. Files up to 2.0.1 have no version
            field and no ``name`` field.
    2.1.x   A ``configuration`` object with a ``layers`` array of
            ``{name, rank, state, platforms, settings}``; setting objects may
            omit their ``type``.
    2.2.x   As 2.1, with a ``type`` on every setting. This is what Save writes.

Each generation has its own parser. A parser turns a decoded JSON document
into a ParsedConfiguration or raises ConfigurationFormatError; the caller
applies the result, so a failed parse leaves nothing half-loaded.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Optional

from packaging.version import InvalidVersion, Version

from ..exceptions import ConfigurationFormatError
from ..logging_config import get_logger
from .layer import Layer, find_layer
from .parameter import NO_RANK, LayerState, Parameter, find_parameter, get_layer_state
from .platform import PLATFORM_ALL_BIT, get_platform_flags, get_platform_tokens
from .setting import SettingType, get_setting_type, parse_int
from .setting_set import SettingDataSet

logger = get_logger("file_format")

FILE_FORMAT_VERSION = Version("2.2.3")

# Files written before the version field existed
UNVERSIONED_FORMAT_VERSION = Version("2.0.1")

# Name given to a 2.0 configuration whose name cannot be recovered
PLACEHOLDER_NAME = "Configuration"


class FormatGeneration(Enum):
    """On-disk layouts, by the first version that used them"""
    V2_0 = Version("2.0.0")
    V2_1 = Version("2.1.0")
    V2_2 = Version("2.2.0")


@dataclass
class ParsedConfiguration:
    """Everything a parser reads out of a configuration document"""
    key: str
    description: str = ""
    platform_flags: int = PLATFORM_ALL_BIT
    setting_tree_state: bytes = b""
    parameters: list[Parameter] = field(default_factory=list)


def encode_editor_state(blob: bytes) -> str:
    """Turn the opaque editor state into a JSON-safe string, losslessly."""
    return blob.decode("utf-8", "surrogateescape")


def decode_editor_state(value: Any) -> bytes:
    """Inverse of encode_editor_state; missing state is empty."""
    if value is None:
        return b""
    if not isinstance(value, str):
        raise ConfigurationFormatError(f"editor_state must be a string, got {type(value).__name__}")
    try:
        return value.encode("utf-8", "surrogateescape")
    except UnicodeEncodeError as e:
        raise ConfigurationFormatError(f"editor_state is not encodable: {e}") from e


def detect_version(json_root: dict) -> Version:
    """Read the file format version of a document.

    Documents without a version field predate it and are read as 2.0.1.

    Raises:
        ConfigurationFormatError: If the version field is not a dotted version
    """
    raw = json_root.get("file_format_version")
    if raw is None:
        return UNVERSIONED_FORMAT_VERSION
    try:
        return Version(str(raw))
    except InvalidVersion:
        raise ConfigurationFormatError(f"Invalid file format version: {raw!r}") from None


def get_format_generation(version: Version) -> FormatGeneration:
    """Map a file format version to the layout it uses."""
    if version < FormatGeneration.V2_1.value:
        return FormatGeneration.V2_0
    if version < FormatGeneration.V2_2.value:
        return FormatGeneration.V2_1
    return FormatGeneration.V2_2


# Field helpers
def _require(json_object: dict, name: str, expected: Any, path: Optional[Path]) -> Any:
    if name not in json_object:
        raise ConfigurationFormatError(f"Missing required field '{name}'", path=path)
    value = json_object[name]
    if not isinstance(value, expected):
        expected_types = expected if isinstance(expected, tuple) else (expected,)
        expected_name = " or ".join(t.__name__ for t in expected_types)
        raise ConfigurationFormatError(
            f"Field '{name}' must be {expected_name}, got {type(value).__name__}", path=path
        )
    return value


def _optional(json_object: dict, name: str, expected: type, default: Any, path: Optional[Path]) -> Any:
    if name not in json_object or json_object[name] is None:
        return default
    return _require(json_object, name, expected, path)


def _read_platforms(json_object: dict, default: int, path: Optional[Path]) -> int:
    tokens = _optional(json_object, "platforms", list, None, path)
    if tokens is None:
        return default
    return get_platform_flags(tokens)


def _default_settings(available_layers: list[Layer], layer_key: str) -> SettingDataSet:
    layer = find_layer(available_layers, layer_key)
    if layer is None:
        logger.debug(f"Layer {layer_key} is not registered, settings will not be defaulted")
        return SettingDataSet()
    return layer.collect_defaults()


def _remove_corrupt_file(path: Optional[Path]) -> None:
    if path is None:
        return
    try:
        path.unlink(missing_ok=True)
    except OSError as e:
        logger.warning(f"Could not delete configuration file with no name {path}: {e}")
        return
    logger.warning(f"Deleted configuration file with no name: {path}")


def parse_v2_0(available_layers: list[Layer], json_root: dict, path: Optional[Path] = None) -> ParsedConfiguration:
    """Parse a 2.0.x configuration document.

    An entry whose name resolves empty is unrecoverable: it gets the
    placeholder name and its file is deleted.

    Args:
        available_layers: Layers currently registered
        json_root: Decoded document
        path: File the document was read from, if any

    Returns:
        The parsed configuration

    Raises:
        ConfigurationFormatError: If the document does not have the 2.0 layout
    """
    version = detect_version(json_root)

    entry_keys = [key for key in json_root if key != "file_format_version"]
    if not entry_keys:
        raise ConfigurationFormatError("No configuration entry in document", path=path)
    entry_key = entry_keys[0]
    entry = json_root[entry_key]
    if not isinstance(entry, dict):
        raise ConfigurationFormatError(f"Configuration entry '{entry_key}' is not an object", path=path)

    if version <= UNVERSIONED_FORMAT_VERSION:
        name = entry_key
    else:
        name = _optional(entry, "name", str, "", path)

    if not name:
        name = PLACEHOLDER_NAME
        _remove_corrupt_file(path)

    result = ParsedConfiguration(
        key=name,
        description=_optional(entry, "description", str, "", path),
        platform_flags=_read_platforms(entry, PLATFORM_ALL_BIT, path),
        setting_tree_state=decode_editor_state(entry.get("editor_state")),
    )

    layer_options = _require(entry, "layer_options", dict, path)
    for layer_key, layer_object in layer_options.items():
        if not isinstance(layer_object, dict):
            raise ConfigurationFormatError(f"Layer '{layer_key}' is not an object", path=path)

        rank = NO_RANK
        if "layer_rank" in layer_object:
            rank = parse_int(layer_object["layer_rank"])

        settings = _default_settings(available_layers, layer_key)
        for setting_key, setting_object in layer_object.items():
            if setting_key == "layer_rank":
                continue
            if not isinstance(setting_object, dict):
                raise ConfigurationFormatError(
                    f"Setting '{setting_key}' of layer '{layer_key}' is not an object", path=path
                )
            setting_type = get_setting_type(_require(setting_object, "type", str, path))
            settings.create(setting_key, setting_type).load_legacy(setting_object)

        result.parameters.append(Parameter(
            key=layer_key,
            state=LayerState.OVERRIDDEN,
            overridden_rank=rank,
            settings=settings,
        ))

    excluded_layers = _require(entry, "blacklisted_layers", list, path)
    for layer_key in excluded_layers:
        if not isinstance(layer_key, str):
            raise ConfigurationFormatError(f"Excluded layer must be a string, got {layer_key!r}", path=path)
        parameter = find_parameter(result.parameters, layer_key)
        if parameter is not None:
            parameter.state = LayerState.EXCLUDED
        else:
            result.parameters.append(Parameter(key=layer_key, state=LayerState.EXCLUDED, overridden_rank=NO_RANK))

    return result


def _parse_configuration_object(
    available_layers: list[Layer],
    json_root: dict,
    path: Optional[Path],
    read_setting_type: Callable[[dict, SettingDataSet, Optional[Path]], SettingType],
) -> ParsedConfiguration:
    json_configuration = _require(json_root, "configuration", dict, path)

    result = ParsedConfiguration(
        key=_require(json_configuration, "name", str, path),
        description=_optional(json_configuration, "description", str, "", path),
        platform_flags=_read_platforms(json_configuration, PLATFORM_ALL_BIT, path),
        setting_tree_state=decode_editor_state(json_configuration.get("editor_state")),
    )

    for json_layer in _require(json_configuration, "layers", list, path):
        if not isinstance(json_layer, dict):
            raise ConfigurationFormatError("Layer entry is not an object", path=path)

        parameter = Parameter(
            key=_require(json_layer, "name", str, path),
            state=get_layer_state(_require(json_layer, "state", str, path)),
            overridden_rank=parse_int(_require(json_layer, "rank", (int, str), path)),
            platform_flags=_read_platforms(json_layer, PLATFORM_ALL_BIT, path),
        )
        if find_parameter(result.parameters, parameter.key) is not None:
            raise ConfigurationFormatError(f"Layer '{parameter.key}' is listed twice", path=path)

        settings = _default_settings(available_layers, parameter.key)
        for json_setting in _optional(json_layer, "settings", list, [], path):
            if not isinstance(json_setting, dict):
                raise ConfigurationFormatError(f"Setting of layer '{parameter.key}' is not an object", path=path)
            setting_key = _require(json_setting, "key", str, path)
            setting_type = read_setting_type(json_setting, settings, path)
            settings.create(setting_key, setting_type).load(json_setting)

        parameter.settings = settings
        result.parameters.append(parameter)

    return result


def _read_v2_1_setting_type(json_setting: dict, settings: SettingDataSet, path: Optional[Path]) -> SettingType:
    # 2.1 writers did not always tag settings
    if "type" in json_setting:
        return get_setting_type(_require(json_setting, "type", str, path))
    existing = settings.get(json_setting["key"])
    return existing.type if existing is not None else SettingType.STRING


def _read_v2_2_setting_type(json_setting: dict, settings: SettingDataSet, path: Optional[Path]) -> SettingType:
    return get_setting_type(_require(json_setting, "type", str, path))


def parse_v2_1(available_layers: list[Layer], json_root: dict, path: Optional[Path] = None) -> ParsedConfiguration:
    """Parse a 2.1.x configuration document."""
    return _parse_configuration_object(available_layers, json_root, path, _read_v2_1_setting_type)


def parse_v2_2(available_layers: list[Layer], json_root: dict, path: Optional[Path] = None) -> ParsedConfiguration:
    """Parse a 2.2.x configuration document."""
    return _parse_configuration_object(available_layers, json_root, path, _read_v2_2_setting_type)


Parser = Callable[[list[Layer], dict, Optional[Path]], ParsedConfiguration]

PARSERS: dict[FormatGeneration, Parser] = {
    FormatGeneration.V2_0: parse_v2_0,
    FormatGeneration.V2_1: parse_v2_1,
    FormatGeneration.V2_2: parse_v2_2,
}


def get_parser(version: Version) -> Parser:
    """Get the parser for a file format version."""
    return PARSERS[get_format_generation(version)]


def parse_document(available_layers: list[Layer], json_root: Any, path: Optional[Path] = None) -> ParsedConfiguration:
    """Parse a decoded configuration document of any supported version.

    Args:
        available_layers: Layers currently registered
        json_root: Decoded JSON document
        path: File the document was read from, if any

    Returns:
        The parsed configuration

    Raises:
        ConfigurationFormatError: If the document is not a valid configuration
    """
    if not isinstance(json_root, dict):
        raise ConfigurationFormatError("Configuration document is not a JSON object", path=path)

    version = detect_version(json_root)
    generation = get_format_generation(version)
    logger.debug(f"Parsing {path or 'document'} as file format {version} ({generation.name})")
    return PARSERS[generation](available_layers, json_root, path)


def build_document(
    key: str,
    description: str,
    platform_flags: int,
    setting_tree_state: bytes,
    parameters: list[Parameter],
) -> dict:
    """Build a current-format document.

    Application controlled parameters carry no override and are left out.
    """
    json_layers = []
    for parameter in parameters:
        if parameter.state == LayerState.APPLICATION_CONTROLLED:
            continue
        json_layers.append({
            "name": parameter.key,
            "rank": parameter.overridden_rank,
            "state": parameter.state.token,
            "platforms": get_platform_tokens(parameter.platform_flags),
            "settings": parameter.settings.save(),
        })

    return {
        "file_format_version": str(FILE_FORMAT_VERSION),
        "configuration": {
            "name": key,
            "description": description,
            "platforms": get_platform_tokens(platform_flags),
            "editor_state": encode_editor_state(setting_tree_state),
            "layers": json_layers,
        },
    }
