from __future__ import annotations

import pytest

from layer_configurator.core.setting import (
    SettingData,
    SettingMeta,
    SettingType,
    default_value,
    get_setting_type,
)
from layer_configurator.exceptions import ConfigurationFormatError


@pytest.mark.parametrize(
    "token, expected",
    [
        ("STRING", SettingType.STRING),
        ("int", SettingType.INT),
        ("Bool", SettingType.BOOL),
        ("MULTI_ENUM", SettingType.FLAGS),
        ("flags", SettingType.FLAGS),
        ("bool_numeric", SettingType.BOOL_NUMERIC_DEPRECATED),
        ("VUID_EXCLUDE", SettingType.VUID_FILTER),
        ("LIST", SettingType.VUID_FILTER),
        ("save_folder", SettingType.SAVE_FOLDER),
    ],
)
def test_get_setting_type_accepts_tokens_and_aliases(token: str, expected: SettingType) -> None:
    assert get_setting_type(token) is expected


def test_get_setting_type_rejects_unknown_token() -> None:
    with pytest.raises(ConfigurationFormatError):
        get_setting_type("FLOAT")


def test_new_value_starts_at_zero_value_of_its_kind() -> None:
    assert SettingData("a", SettingType.INT).value == 0
    assert SettingData("b", SettingType.BOOL).value is False
    assert SettingData("c", SettingType.FLAGS).value == []
    assert SettingData("d", SettingType.LOAD_FILE).value == ""
    assert default_value(SettingType.VUID_FILTER) == []


def test_kind_cannot_be_reassigned_but_value_can() -> None:
    setting = SettingData("duplicate_message_limit", SettingType.INT, 3)

    with pytest.raises(AttributeError):
        setting.type = SettingType.STRING

    setting.value = 5
    assert setting.type is SettingType.INT
    assert setting.value == 5


@pytest.mark.parametrize(
    "setting_type, raw, expected",
    [
        (SettingType.INT, 42, 42),
        (SettingType.INT, "42", 42),
        (SettingType.BOOL, True, True),
        (SettingType.BOOL, "TRUE", True),
        (SettingType.BOOL, 0, False),
        (SettingType.BOOL_NUMERIC_DEPRECATED, "1", True),
        (SettingType.FLAGS, ["error", "warn"], ["error", "warn"]),
        (SettingType.FLAGS, "error,warn", ["error", "warn"]),
        (SettingType.VUID_FILTER, None, []),
        (SettingType.ENUM, "html", "html"),
        (SettingType.SAVE_FILE, "/tmp/out.txt", "/tmp/out.txt"),
    ],
)
def test_load_reads_value_into_payload_of_kind(setting_type: SettingType, raw, expected) -> None:
    setting = SettingData("key", setting_type)
    setting.load({"key": "key", "type": setting_type.token, "value": raw})
    assert setting.value == expected


@pytest.mark.parametrize("raw", ["abc", True, 1.5, None, [1]])
def test_load_rejects_non_integer_for_int(raw) -> None:
    setting = SettingData("indent_size", SettingType.INT)
    with pytest.raises(ConfigurationFormatError):
        setting.load({"value": raw})


def test_load_without_value_fails() -> None:
    with pytest.raises(ConfigurationFormatError):
        SettingData("file", SettingType.BOOL).load({"key": "file", "type": "BOOL"})


def test_load_legacy_reads_inline_default_encodings() -> None:
    flag = SettingData("enable", SettingType.BOOL)
    flag.load_legacy({"type": "bool", "default": "FALSE"})
    assert flag.value is False
    flag.load_legacy({"type": "bool", "default": "TRUE"})
    assert flag.value is True

    numeric = SettingData("file", SettingType.BOOL_NUMERIC_DEPRECATED)
    numeric.load_legacy({"type": "bool_numeric", "default": "1"})
    assert numeric.value is True
    numeric.load_legacy({"type": "bool_numeric", "default": "0"})
    assert numeric.value is False

    limit = SettingData("limit", SettingType.INT)
    limit.load_legacy({"type": "int", "default": "7"})
    assert limit.value == 7


def test_load_legacy_splits_flag_string_on_every_comma() -> None:
    actions = SettingData("debug_action", SettingType.FLAGS)
    actions.load_legacy({"type": "multi_enum", "default": "log, break,,"})
    assert actions.value == ["log", " break", "", ""]

    vuids = SettingData("message_id_filter", SettingType.VUID_FILTER)
    vuids.load_legacy({"type": "vuid_exclude", "default": ""})
    assert vuids.value == [""]


def test_load_legacy_rejects_empty_integer() -> None:
    with pytest.raises(ConfigurationFormatError):
        SettingData("limit", SettingType.INT).load_legacy({"type": "int", "default": ""})


def test_save_writes_key_type_token_and_a_copy_of_lists() -> None:
    setting = SettingData("report_flags", SettingType.FLAGS, ["error"])
    saved = setting.save()

    assert saved == {"key": "report_flags", "type": "FLAGS", "value": ["error"]}
    saved["value"].append("warn")
    assert setting.value == ["error"]


def test_meta_default_is_coerced_to_kind() -> None:
    assert SettingMeta("limit", SettingType.INT, "10").default == 10
    assert SettingMeta("actions", SettingType.FLAGS).default == []


def test_from_meta_does_not_share_default_list() -> None:
    meta = SettingMeta("debug_action", SettingType.FLAGS, ["VK_DBG_LAYER_ACTION_LOG_MSG"])
    setting = SettingData.from_meta(meta)
    setting.value.append("VK_DBG_LAYER_ACTION_BREAK")

    assert meta.default == ["VK_DBG_LAYER_ACTION_LOG_MSG"]
