"""
Boolean preference stores for the two persisted toggles (coupling and
adjust-by-semitones).

QSettingsPreferences is what the dialog uses; MemoryPreferences keeps values
for the lifetime of the process only.
"""

from __future__ import annotations

from typing import Optional, Protocol

from PySide6 import QtCore

from config import SETTINGS_APPLICATION, SETTINGS_ORGANIZATION


class PreferenceStore(Protocol):
    def get_bool(self, key: str, default: bool) -> bool:
        ...

    def set_bool(self, key: str, value: bool) -> None:
        ...


class MemoryPreferences:
    def __init__(self, values: Optional[dict[str, bool]] = None):
        self._values: dict[str, bool] = dict(values or {})

    def get_bool(self, key: str, default: bool) -> bool:
        return bool(self._values.get(key, default))

    def set_bool(self, key: str, value: bool) -> None:
        self._values[key] = bool(value)


class QSettingsPreferences:
    def __init__(self, settings: Optional[QtCore.QSettings] = None):
        if settings is None:
            settings = QtCore.QSettings(SETTINGS_ORGANIZATION, SETTINGS_APPLICATION)
        self.settings = settings

    def get_bool(self, key: str, default: bool) -> bool:
        return bool(self.settings.value(key, default, type=bool))

    def set_bool(self, key: str, value: bool) -> None:
        self.settings.setValue(key, bool(value))

    def sync(self) -> None:
        self.settings.sync()
