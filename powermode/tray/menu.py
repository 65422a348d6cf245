from __future__ import annotations

import logging
from typing import Any

from powermode.core.logging_utils import log_throttled
from powermode.core.system_power import PowerMode, mode_label

logger = logging.getLogger(__name__)


def tile_title(tray: Any) -> str:
    return f"{tray.tile.tile.label}: {tray.tile.tile.subtitle or mode_label(tray.tile.current_mode)}"


def _make_mode_cb(tray: Any, mode: PowerMode):
    def _cb(_icon, _item):
        try:
            tray.controller.apply_power_mode(mode)
        except Exception as exc:
            log_throttled(
                logger,
                "tray.menu.apply",
                interval_s=60,
                level=logging.ERROR,
                msg=f"Applying power mode {mode.value} failed",
                exc=exc,
            )

    return _cb


def build_menu_items(tray: Any, *, pystray: Any, item: Any) -> list[Any]:
    """Build the tray menu: toggle entry, one radio per available mode, Quit."""

    available = tray.controller.available_modes

    items: list[Any] = [
        # Default item: activated by a left click on the icon, like tapping a tile.
        item(
            lambda _i: tile_title(tray),
            tray._on_toggle_clicked,
            default=True,
            enabled=bool(available),
        ),
        pystray.Menu.SEPARATOR,
    ]

    for mode in available:
        items.append(
            item(
                mode_label(mode),
                _make_mode_cb(tray, mode),
                checked=lambda _i, m=mode: tray.tile.current_mode is m,
                radio=True,
            )
        )

    if not available:
        items.append(item("No switchable governors", None, enabled=False))

    items.append(pystray.Menu.SEPARATOR)
    items.append(item("Quit", tray._on_quit_clicked))
    return items


def build_menu(tray: Any, *, pystray: Any, item: Any):
    return pystray.Menu(*build_menu_items(tray, pystray=pystray, item=item))
