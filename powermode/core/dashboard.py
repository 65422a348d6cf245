"""System settings dashboard.

Builds the system screen (power mode list, display engine selector) and
decides whether its trailing entries are folded behind "advanced".
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

from .display_engine import DISPLAY_ENGINE_LABELS, DisplayEngineMode, DisplayEnginePreference
from .preferences import ListPreference, PreferenceGroup, PreferenceScreen
from .settings import DEVICE_POWER_MODE_KEY, DISPLAY_ENGINE_MODE_KEY, DeviceSettings
from .system_power import PowerModeController

logger = logging.getLogger(__name__)


def count_visible_preferences(group: PreferenceGroup) -> int:
    """Visible leaf preferences under *group*; nested groups are not counted themselves."""

    visible = 0
    for preference in group.children:
        if isinstance(preference, PreferenceGroup):
            visible += count_visible_preferences(preference)
        elif preference.visible:
            visible += 1
    return visible


def build_system_screen(*, initial_expanded_children_count: int = 1) -> PreferenceScreen:
    screen = PreferenceScreen(
        key="system_dashboard",
        title="System",
        initial_expanded_children_count=initial_expanded_children_count,
    )
    screen.add(ListPreference(key=DEVICE_POWER_MODE_KEY, title="Power mode"))
    display = ListPreference(key=DISPLAY_ENGINE_MODE_KEY, title="Display engine")
    display.set_entries(
        [DISPLAY_ENGINE_LABELS[m] for m in DisplayEngineMode],
        [str(int(m)) for m in DisplayEngineMode],
    )
    screen.add(display)
    return screen


class SystemDashboard:
    def __init__(
        self,
        settings: DeviceSettings | None = None,
        *,
        screen: PreferenceScreen | None = None,
        cpufreq_root: Path | None = None,
        core_count: int | None = None,
    ):
        self.settings = settings or DeviceSettings()
        self.screen = screen if screen is not None else build_system_screen()
        self._cpufreq_root = cpufreq_root
        self._core_count = core_count
        self.power_mode_controller: Optional[PowerModeController] = None
        self.display_engine: Optional[DisplayEnginePreference] = None

    def on_create(self) -> None:
        # An "advanced" fold hiding a single entry is pointless; show everything.
        if count_visible_preferences(self.screen) == self.screen.initial_expanded_children_count + 1:
            self.screen.initial_expanded_children_count = sys.maxsize

    def create_preference_controllers(self) -> list[object]:
        self.power_mode_controller = PowerModeController(
            self.settings,
            cpufreq_root=self._cpufreq_root,
            core_count=self._core_count,
        )
        self.display_engine = DisplayEnginePreference(self.settings)
        return [self.power_mode_controller, self.display_engine]

    def refresh(self) -> None:
        """Push current controller state into the screen's preferences."""

        if self.power_mode_controller is None or self.display_engine is None:
            self.create_preference_controllers()
        assert self.power_mode_controller is not None and self.display_engine is not None

        power_pref = self.screen.find(DEVICE_POWER_MODE_KEY)
        if isinstance(power_pref, ListPreference):
            self.power_mode_controller.update_state(power_pref)

        display_pref = self.screen.find(DISPLAY_ENGINE_MODE_KEY)
        if isinstance(display_pref, ListPreference):
            checked = self.display_engine.on_bind()
            display_pref.value = None if checked is None else str(int(checked))
            display_pref.summary = None if checked is None else checked.label
