"""Tray application class.

The tray icon plays the role of the power mode tile: its image and title
follow the tile state, a left click cycles modes, and the menu offers the
same single-select list as the settings screen.
"""

from __future__ import annotations

import logging
from pathlib import Path

from powermode.core.config import Config
from powermode.core.settings import DeviceSettings
from powermode.core.system_power import PowerModeController
from powermode.core.utils.periodic import PeriodicTask

from . import icon as icon_mod
from . import menu as menu_mod
from . import runtime
from .tile import PowerModeTile, Tile

logger = logging.getLogger(__name__)


class PowerModeTray:
    """System tray front-end for the power mode tile."""

    def __init__(
        self,
        *,
        config: Config | None = None,
        settings: DeviceSettings | None = None,
        controller: PowerModeController | None = None,
        cpufreq_root: Path | None = None,
    ):
        self.config = config or Config()
        self.settings = settings or DeviceSettings()
        self.controller = controller or PowerModeController(self.settings, cpufreq_root=cpufreq_root)
        self.icon = None
        self.tile = PowerModeTile(self.controller, settings=self.settings, tile=Tile(on_update=self._on_tile_updated))

        # Picks up writes made by other processes (CLI, another front-end).
        self._settings_watcher = PeriodicTask(
            self._poll_settings,
            interval_s=self.config.settings_poll_interval_s,
            name="settings-watcher",
        )

    # ---- settings

    def _poll_settings(self) -> None:
        self.settings.system.reload()
        self.settings.properties.reload()

    def maybe_restore_mode(self) -> None:
        if not self.config.restore_on_start:
            return
        self.controller.restore_persisted_mode()

    # ---- tile -> icon

    def _on_tile_updated(self, tile: Tile) -> None:
        if self.icon is None:
            return
        self.icon.icon = icon_mod.icon_for_tile(tile, self.tile.current_mode)
        self.icon.title = menu_mod.tile_title(self)
        update_menu = getattr(self.icon, "update_menu", None)
        if callable(update_menu):
            update_menu()

    # ---- menu callbacks

    def _on_toggle_clicked(self, _icon, _item) -> None:
        self.tile.on_click()

    def _on_quit_clicked(self, icon, _item) -> None:
        self.stop()
        icon.stop()

    # ---- run

    def start(self) -> None:
        self.tile.on_start_listening()
        self._settings_watcher.start()

    def stop(self) -> None:
        self._settings_watcher.stop()
        self.tile.on_stop_listening()

    def run(self) -> None:
        pystray, item = runtime.get_pystray()

        self.maybe_restore_mode()

        logger.info("Creating tray icon...")
        self.tile.update_tile_state()
        self.icon = pystray.Icon(
            "powermode",
            icon_mod.icon_for_tile(self.tile.tile, self.tile.current_mode),
            menu_mod.tile_title(self),
            menu=menu_mod.build_menu(self, pystray=pystray, item=item),
        )

        self.start()
        logger.info("Power mode tray started")
        logger.info("Available modes: %s", [m.value for m in self.controller.available_modes])
        logger.info("Current mode: %s", self.tile.current_mode.value)
        try:
            self.icon.run()
        finally:
            self.stop()
