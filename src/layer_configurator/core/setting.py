"""Layer setting kinds, schema entries and typed values.

A setting value is a small tagged union: a SettingType tag plus a payload
whose shape the tag fixes (text, integer, boolean, or a list of strings).
The tag is fixed when the value is created; only the payload changes.
"""

import copy
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable

from ..exceptions import ConfigurationFormatError


class SettingType(Enum):
    """Setting kinds, valued by their file token"""
    STRING = "STRING"
    INT = "INT"
    BOOL = "BOOL"
    BOOL_NUMERIC_DEPRECATED = "BOOL_NUMERIC_DEPRECATED"
    ENUM = "ENUM"
    FLAGS = "FLAGS"
    VUID_FILTER = "VUID_EXCLUDE"
    SAVE_FILE = "SAVE_FILE"
    LOAD_FILE = "LOAD_FILE"
    SAVE_FOLDER = "SAVE_FOLDER"

    @property
    def token(self) -> str:
        return self.value


# Tokens written by older releases
_TYPE_ALIASES = {
    "MULTI_ENUM": SettingType.FLAGS,
    "BOOL_NUMERIC": SettingType.BOOL_NUMERIC_DEPRECATED,
    "LIST": SettingType.VUID_FILTER,
}

_BOOL_TYPES = frozenset({SettingType.BOOL, SettingType.BOOL_NUMERIC_DEPRECATED})
_LIST_TYPES = frozenset({SettingType.FLAGS, SettingType.VUID_FILTER})


def get_setting_type(token: str) -> SettingType:
    """Parse a setting type token, case-insensitively.

    Args:
        token: Type token from a configuration or layer file

    Returns:
        The matching SettingType

    Raises:
        ConfigurationFormatError: If the token names no known kind
    """
    normalized = str(token).strip().upper()
    if normalized in _TYPE_ALIASES:
        return _TYPE_ALIASES[normalized]
    try:
        return SettingType(normalized)
    except ValueError:
        raise ConfigurationFormatError(f"Unknown setting type: {token!r}") from None


def default_value(setting_type: SettingType) -> Any:
    """Get the zero value of a setting kind."""
    if setting_type == SettingType.INT:
        return 0
    if setting_type in _BOOL_TYPES:
        return False
    if setting_type in _LIST_TYPES:
        return []
    return ""


def parse_int(raw: Any) -> int:
    """Parse an integer field, accepting numeric strings.

    Raises:
        ConfigurationFormatError: If the value is not an integer
    """
    if isinstance(raw, bool):
        raise ConfigurationFormatError(f"Expected an integer, got {raw!r}")
    if isinstance(raw, int):
        return raw
    if isinstance(raw, float) and raw.is_integer():
        return int(raw)
    if isinstance(raw, str):
        try:
            return int(raw.strip())
        except ValueError:
            pass
    raise ConfigurationFormatError(f"Expected an integer, got {raw!r}")


def _parse_bool(raw: Any) -> bool:
    if isinstance(raw, bool):
        return raw
    if isinstance(raw, int) and raw in (0, 1):
        return bool(raw)
    if isinstance(raw, str):
        normalized = raw.strip().upper()
        if normalized in ("TRUE", "1"):
            return True
        if normalized in ("FALSE", "0", ""):
            return False
    raise ConfigurationFormatError(f"Expected a boolean, got {raw!r}")


def _parse_text(raw: Any) -> str:
    if raw is None:
        return ""
    if isinstance(raw, str):
        return raw
    if isinstance(raw, (int, float)) and not isinstance(raw, bool):
        return str(raw)
    raise ConfigurationFormatError(f"Expected a string, got {raw!r}")


def _parse_list(raw: Any) -> list[str]:
    if raw is None:
        return []
    if isinstance(raw, str):
        return raw.split(",")
    if isinstance(raw, list):
        return [_parse_text(item) for item in raw]
    raise ConfigurationFormatError(f"Expected a list of strings, got {raw!r}")


def _parse_legacy_bool(raw: Any) -> bool:
    # 2.0 files store "TRUE"/"FALSE"
    if isinstance(raw, str):
        return raw.strip().upper() == "TRUE"
    return _parse_bool(raw)


def _parse_legacy_numeric_bool(raw: Any) -> bool:
    # 2.0 files store "1"/"0"
    if isinstance(raw, str):
        return raw.strip() == "1"
    return _parse_bool(raw)


def coerce_value(setting_type: SettingType, raw: Any) -> Any:
    """Convert a raw document value to the payload shape of a kind.

    Args:
        setting_type: Kind of the setting
        raw: Value as found in a JSON document

    Returns:
        Payload of the right shape

    Raises:
        ConfigurationFormatError: If the value cannot be converted
    """
    if setting_type == SettingType.INT:
        return parse_int(raw)
    if setting_type in _BOOL_TYPES:
        return _parse_bool(raw)
    if setting_type in _LIST_TYPES:
        return _parse_list(raw)
    return _parse_text(raw)


_LEGACY_PARSERS: dict[SettingType, Callable[[Any], Any]] = {
    SettingType.BOOL: _parse_legacy_bool,
    SettingType.BOOL_NUMERIC_DEPRECATED: _parse_legacy_numeric_bool,
}


def coerce_legacy_value(setting_type: SettingType, raw: Any) -> Any:
    """Convert a 2.0 inline "default" value to the payload shape of a kind."""
    parser = _LEGACY_PARSERS.get(setting_type)
    if parser is not None:
        return parser(raw)
    return coerce_value(setting_type, raw)


@dataclass
class SettingMeta:
    """Declaration of one configurable setting of a layer"""
    key: str
    type: SettingType
    default: Any = None
    label: str = ""
    values: tuple[str, ...] = ()  # Allowed values for ENUM and FLAGS, informational

    def __post_init__(self):
        if self.default is None:
            self.default = default_value(self.type)
        else:
            self.default = coerce_value(self.type, self.default)


@dataclass
class SettingData:
    """Value of one setting within a layer parameter.

    The ``type`` tag cannot be reassigned once the value exists.
    """
    key: str
    type: SettingType
    value: Any = None

    def __post_init__(self):
        if self.value is None:
            self.value = default_value(self.type)
        else:
            self.value = coerce_value(self.type, self.value)

    def __setattr__(self, name: str, value: Any) -> None:
        if name == "type" and "type" in self.__dict__:
            raise AttributeError(f"Setting '{self.key}' kind is fixed at {self.type.token}")
        super().__setattr__(name, value)

    @classmethod
    def from_meta(cls, meta: SettingMeta) -> "SettingData":
        """Create a value initialized to a schema entry's default."""
        return cls(key=meta.key, type=meta.type, value=copy.deepcopy(meta.default))

    def load(self, json_setting: dict) -> None:
        """Read the payload from a 2.1/2.2 ``{"key", "type", "value"}`` object.

        Raises:
            ConfigurationFormatError: If the value does not fit the kind
        """
        if "value" not in json_setting:
            raise ConfigurationFormatError(f"Setting '{self.key}' has no value")
        self.value = coerce_value(self.type, json_setting["value"])

    def load_legacy(self, json_setting: dict) -> None:
        """Read the payload from a 2.0 inline ``{"type", "default"}`` object."""
        raw = json_setting.get("default")
        if self.type == SettingType.INT and (raw is None or raw == ""):
            raise ConfigurationFormatError(f"Setting '{self.key}' has an empty integer default")
        self.value = coerce_legacy_value(self.type, raw)

    def save(self) -> dict:
        """Serialize to a ``{"key", "type", "value"}`` object."""
        value = list(self.value) if self.type in _LIST_TYPES else self.value
        return {"key": self.key, "type": self.type.token, "value": value}
