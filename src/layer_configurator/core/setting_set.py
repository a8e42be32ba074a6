"""Ordered collection of setting values for one layer parameter"""

import copy
from typing import Iterable, Iterator, Optional

from .setting import SettingData, SettingMeta, SettingType


class SettingDataSet:
    """Ordered setting values, unique by key.

    Entries keep their insertion order, which is also the order they are
    written to configuration files.
    """

    def __init__(self, data: Optional[Iterable[SettingData]] = None):
        self.data: list[SettingData] = []
        for setting_data in data or ():
            if self.get(setting_data.key) is not None:
                raise ValueError(f"Duplicate setting key: {setting_data.key}")
            self.data.append(setting_data)

    def create(self, key: str, setting_type: SettingType) -> SettingData:
        """Insert or return the entry for a key.

        An existing entry of another kind is replaced in place by a fresh
        zero-valued entry of the requested kind, so the kind read from a
        file wins over the kind a layer declares.

        Args:
            key: Setting key
            setting_type: Kind the entry must have

        Returns:
            The entry for the key
        """
        for index, setting_data in enumerate(self.data):
            if setting_data.key != key:
                continue
            if setting_data.type == setting_type:
                return setting_data
            replacement = SettingData(key=key, type=setting_type)
            self.data[index] = replacement
            return replacement

        setting_data = SettingData(key=key, type=setting_type)
        self.data.append(setting_data)
        return setting_data

    def get(self, key: str) -> Optional[SettingData]:
        for setting_data in self.data:
            if setting_data.key == key:
                return setting_data
        return None

    def keys(self) -> list[str]:
        return [setting_data.key for setting_data in self.data]

    def copy(self) -> "SettingDataSet":
        return SettingDataSet(copy.deepcopy(self.data))

    def save(self) -> list[dict]:
        """Serialize to a list of ``{"key", "type", "value"}`` objects."""
        return [setting_data.save() for setting_data in self.data]

    def __iter__(self) -> Iterator[SettingData]:
        return iter(self.data)

    def __len__(self) -> int:
        return len(self.data)

    def __contains__(self, key: object) -> bool:
        return any(setting_data.key == key for setting_data in self.data)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SettingDataSet):
            return NotImplemented
        return self.data == other.data

    def __repr__(self) -> str:
        return f"SettingDataSet({self.data!r})"


def collect_default_setting_data(settings_meta: Iterable[SettingMeta]) -> SettingDataSet:
    """Build a setting set holding each declared setting at its default.

    Args:
        settings_meta: Setting declarations of a layer

    Returns:
        New SettingDataSet, one entry per declaration
    """
    return SettingDataSet(SettingData.from_meta(meta) for meta in settings_meta)
