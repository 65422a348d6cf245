from __future__ import annotations

from .keys import DEVICE_POWER_MODE_KEY, DEVICE_POWER_MODE_PROPERTY, DISPLAY_ENGINE_MODE_KEY
from .store import DeviceSettings, SettingsObserver, SettingsStore

__all__ = [
    "DEVICE_POWER_MODE_KEY",
    "DEVICE_POWER_MODE_PROPERTY",
    "DISPLAY_ENGINE_MODE_KEY",
    "DeviceSettings",
    "SettingsObserver",
    "SettingsStore",
]
