"""Display engine radio selector backed by the secure settings namespace."""

from __future__ import annotations

import logging
from enum import IntEnum
from typing import Optional, Union

from .settings import DISPLAY_ENGINE_MODE_KEY, DeviceSettings

logger = logging.getLogger(__name__)


class DisplayEngineMode(IntEnum):
    DEFAULT = 0
    X_REALITY = 1
    VIVID = 2
    TRILUMINOUS = 3

    @property
    def label(self) -> str:
        return DISPLAY_ENGINE_LABELS[self]

    @classmethod
    def parse(cls, value: object) -> Optional["DisplayEngineMode"]:
        if isinstance(value, cls):
            return value
        if isinstance(value, int):
            try:
                return cls(value)
            except ValueError:
                return None
        s = str(value or "").strip()
        if not s:
            return None
        if s.lstrip("-").isdigit():
            return cls.parse(int(s))
        try:
            return cls[s.upper().replace("-", "_")]
        except KeyError:
            return None


DISPLAY_ENGINE_LABELS: dict[DisplayEngineMode, str] = {
    DisplayEngineMode.DEFAULT: "Default",
    DisplayEngineMode.X_REALITY: "X-Reality",
    DisplayEngineMode.VIVID: "Vivid",
    DisplayEngineMode.TRILUMINOUS: "Triluminous",
}


class DisplayEnginePreference:
    key = DISPLAY_ENGINE_MODE_KEY

    def __init__(self, settings: DeviceSettings | None = None):
        self.settings = settings or DeviceSettings()
        self._current = int(DisplayEngineMode.DEFAULT)

    @property
    def current_value(self) -> int:
        return self._current

    def on_bind(self) -> Optional[DisplayEngineMode]:
        """Read the stored mode; returns the option to show as checked.

        Returns None when the stored value matches no option.
        """

        self._current = self.settings.secure.get_int(DISPLAY_ENGINE_MODE_KEY, int(DisplayEngineMode.DEFAULT))
        return DisplayEngineMode.parse(self._current)

    def select(self, mode: Union[DisplayEngineMode, int, str]) -> bool:
        """Persist *mode* if it differs from the current value.

        Unrecognised choices select DEFAULT. Returns True when a write happened.
        """

        new_mode = DisplayEngineMode.parse(mode)
        if new_mode is None:
            logger.debug("Unknown display engine mode %r, using default", mode)
            new_mode = DisplayEngineMode.DEFAULT

        if int(new_mode) == self._current:
            return False

        if not self.settings.secure.put_int(DISPLAY_ENGINE_MODE_KEY, int(new_mode)):
            logger.warning("Could not store display engine mode %s", new_mode.label)
            return False
        self._current = int(new_mode)
        return True
