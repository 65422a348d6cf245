"""Quick-toggle tile for the power mode.

Each click advances to the next supported mode (wrapping around) and
applies it. The tile also follows the stored mode, so a change made from
the settings screen or the CLI shows up here without a click.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from powermode.core.settings import DEVICE_POWER_MODE_KEY, DeviceSettings
from powermode.core.system_power import MODE_LABELS, PowerMode, PowerModeController

logger = logging.getLogger(__name__)

TILE_LABEL = "Power mode"


class TileState(Enum):
    UNAVAILABLE = 0
    INACTIVE = 1
    ACTIVE = 2


@dataclass(frozen=True)
class ModeTileInfo:
    label: str
    icon: str
    color: tuple[int, int, int]


MODE_TILE_INFO: dict[PowerMode, ModeTileInfo] = {
    PowerMode.DEFAULT: ModeTileInfo(MODE_LABELS[PowerMode.DEFAULT], "ic_power_default", (120, 144, 156)),
    PowerMode.CONSERVATIVE: ModeTileInfo(MODE_LABELS[PowerMode.CONSERVATIVE], "ic_battery_plus", (67, 160, 71)),
    PowerMode.POWERSAVE: ModeTileInfo(MODE_LABELS[PowerMode.POWERSAVE], "ic_battery_plus", (124, 179, 66)),
    PowerMode.PERFORMANCE: ModeTileInfo(MODE_LABELS[PowerMode.PERFORMANCE], "ic_performance_mode", (251, 140, 0)),
    PowerMode.GAMEBOOST: ModeTileInfo(MODE_LABELS[PowerMode.GAMEBOOST], "ic_fire", (229, 57, 53)),
}


@dataclass
class Tile:
    label: str = TILE_LABEL
    subtitle: str = ""
    icon: str = ""
    state: TileState = TileState.UNAVAILABLE
    on_update: Optional[Callable[["Tile"], None]] = None

    def update_tile(self) -> None:
        if self.on_update is not None:
            self.on_update(self)


class PowerModeTile:
    def __init__(
        self,
        controller: PowerModeController,
        *,
        settings: DeviceSettings | None = None,
        tile: Tile | None = None,
    ):
        self.controller = controller
        self.settings = settings or controller.settings
        self.tile = tile or Tile()
        self.current_mode = PowerMode.DEFAULT
        self._listening = False
        # Clicks (menu thread) and settings observers (watcher thread) both refresh the tile.
        self._lock = threading.RLock()

    # ---- lifecycle

    def on_start_listening(self) -> None:
        if not self._listening:
            self.settings.system.register_observer(DEVICE_POWER_MODE_KEY, self._on_settings_changed)
            self._listening = True
        self.update_tile_state()

    def on_stop_listening(self) -> None:
        if self._listening:
            self.settings.system.unregister_observer(DEVICE_POWER_MODE_KEY, self._on_settings_changed)
            self._listening = False

    @property
    def listening(self) -> bool:
        return self._listening

    def on_click(self) -> None:
        with self._lock:
            self.toggle_power_mode()
            self.update_tile_state()

    # ---- state

    def _on_settings_changed(self, _key: str) -> None:
        self.update_tile_state()

    def update_tile_state(self) -> None:
        with self._lock:
            stored = self.settings.system.get_string(DEVICE_POWER_MODE_KEY)
            self.current_mode = PowerMode.parse(stored if stored is not None else PowerMode.DEFAULT) or PowerMode.DEFAULT

            info = MODE_TILE_INFO[self.current_mode]
            self.tile.label = TILE_LABEL
            self.tile.subtitle = info.label
            self.tile.icon = info.icon
            self.tile.state = TileState.INACTIVE if self.current_mode is PowerMode.DEFAULT else TileState.ACTIVE
            self.tile.update_tile()

    def next_mode(self) -> Optional[PowerMode]:
        available = self.controller.available_modes
        if not available:
            return None
        try:
            current_index = available.index(self.current_mode)
        except ValueError:
            current_index = -1
        return available[(current_index + 1) % len(available)]

    def toggle_power_mode(self) -> Optional[PowerMode]:
        new_mode = self.next_mode()
        if new_mode is None:
            logger.warning("No power modes available on this device; ignoring toggle")
            return None
        self.current_mode = new_mode
        self.controller.apply_power_mode(new_mode)
        return new_mode
