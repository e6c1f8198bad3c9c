"""Enum-valued settings with change notification.

Settings are keyed by their stable name in a plain dict. Values persist
as enum member names, either in a value tree map or a string mapping.
Values that no longer parse are logged and skipped, leaving the current
value in place.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Generic, Mapping, TypeVar

from core.errors import UnsupportedSettingError
from core.logging_config import get_logger
from core.value_tree import LeafKind, TreeLeaf, TreeMap, leaf

E = TypeVar("E", bound=Enum)

_LOGGER = get_logger(__name__)


@dataclass(frozen=True)
class Setting(Generic[E]):
    """Named setting bound to one enum type.

    Attributes:
        name: Stable persisted key.
        enum_type: Enum class of allowed values.
    """

    name: str
    enum_type: type[E]

    def parse(self, raw_value: str) -> E:
        """Parse a persisted member name.

        Raises:
            ValueError: If raw_value names no member of enum_type.
        """
        try:
            return self.enum_type[raw_value]
        except KeyError as error:
            raise ValueError(
                f"'{raw_value}' is not a valid {self.enum_type.__name__} value"
            ) from error


SettingListener = Callable[["ConfigManager", Setting], None]


class ConfigManager:
    """Registered settings with current values."""

    def __init__(self, listener: SettingListener | None = None) -> None:
        self._settings: dict[str, tuple[Setting, Enum]] = {}
        self._listener = listener

    @classmethod
    def with_change_callback(cls, callback: Callable[[], None]) -> "ConfigManager":
        """Build a manager whose listener ignores which setting changed."""
        return cls(lambda manager, setting: callback())

    @property
    def settings(self) -> tuple[Setting, ...]:
        return tuple(setting for setting, _ in self._settings.values())

    def register_setting(self, setting: Setting[E], default_value: E) -> None:
        _check_member(setting, default_value)
        self._settings[setting.name] = (setting, default_value)

    def get_setting(self, setting: Setting[E]) -> E:
        """Return the current value.

        Raises:
            UnsupportedSettingError: If setting is not registered.
        """
        _, value = self._require(setting)
        return value  # type: ignore[return-value]

    def put_setting(self, setting: Setting[E], value: E) -> None:
        """Store a new value and notify the listener.

        Raises:
            UnsupportedSettingError: If setting is not registered.
            TypeError: If value is not a member of the setting's enum.
        """
        registered, _ = self._require(setting)
        _check_member(registered, value)
        self._settings[setting.name] = (registered, value)
        if self._listener is not None:
            self._listener(self, registered)

    def write_to_tree(self, tree: TreeMap) -> TreeMap:
        """Return tree with one string entry per registered setting."""
        for setting, value in self._settings.values():
            tree = tree.with_entry(setting.name, leaf(value.name))
        return tree

    def read_from_tree(self, tree: TreeMap) -> bool:
        """Apply persisted values found in tree.

        Returns:
            Whether any setting was read.
        """
        raw_values = {}
        for setting, _ in self._settings.values():
            value = tree.get(setting.name)
            if isinstance(value, TreeLeaf) and value.kind is LeafKind.STRING:
                raw_values[setting.name] = str(value.value)
        return self.import_settings(raw_values)

    def import_settings(self, raw_values: Mapping[str, str]) -> bool:
        """Apply persisted values from a name to member-name mapping.

        Returns:
            Whether any setting was read.
        """
        anything_read = False
        for setting in self.settings:
            raw_value = raw_values.get(setting.name)
            if raw_value is None:
                continue
            try:
                parsed_value = setting.parse(raw_value)
            except ValueError as error:
                _LOGGER.warning(
                    "setting_load_failed",
                    setting=setting.name,
                    value=raw_value,
                    reason=str(error),
                )
                continue
            self.put_setting(setting, parsed_value)
            anything_read = True
        return anything_read

    def export_settings(self) -> dict[str, str]:
        return {setting.name: value.name for setting, value in self._settings.values()}

    def _require(self, setting: Setting) -> tuple[Setting, Enum]:
        entry = self._settings.get(setting.name)
        if entry is None or entry[0] != setting:
            raise UnsupportedSettingError(f"Setting {setting.name} is not supported.")
        return entry


def _check_member(setting: Setting, value: object) -> None:
    if not isinstance(value, setting.enum_type):
        raise TypeError(
            f"Setting {setting.name} takes {setting.enum_type.__name__} values, got {value!r}."
        )
