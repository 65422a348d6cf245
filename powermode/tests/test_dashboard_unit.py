from __future__ import annotations

import sys

from powermode.core.dashboard import SystemDashboard, build_system_screen, count_visible_preferences
from powermode.core.display_engine import DisplayEnginePreference
from powermode.core.preferences import ListPreference, Preference, PreferenceGroup, PreferenceScreen
from powermode.core.settings import DEVICE_POWER_MODE_KEY, DISPLAY_ENGINE_MODE_KEY
from powermode.core.system_power import PowerModeController


def test_count_visible_preferences_recurses_into_groups() -> None:
    screen = PreferenceScreen(key="s")
    screen.add(Preference(key="a"))
    screen.add(Preference(key="hidden", visible=False))
    nested = PreferenceGroup(key="group", visible=False)
    nested.add(Preference(key="b"))
    nested.add(Preference(key="c"))
    screen.add(nested)

    assert count_visible_preferences(screen) == 3


def test_single_hidden_entry_expands_everything(settings) -> None:
    screen = PreferenceScreen(key="s", initial_expanded_children_count=1)
    screen.add(Preference(key="a"))
    screen.add(Preference(key="b"))

    dashboard = SystemDashboard(settings, screen=screen)
    dashboard.on_create()

    assert screen.initial_expanded_children_count == sys.maxsize


def test_several_hidden_entries_keep_fold(settings) -> None:
    screen = PreferenceScreen(key="s", initial_expanded_children_count=1)
    for key in ("a", "b", "c"):
        screen.add(Preference(key=key))

    SystemDashboard(settings, screen=screen).on_create()

    assert screen.initial_expanded_children_count == 1


def test_controllers_and_refresh_fill_the_screen(make_policy, cpufreq_root, settings) -> None:
    make_policy(0, "schedutil performance")
    settings.system.put_string(DEVICE_POWER_MODE_KEY, "performance")
    settings.secure.put_int(DISPLAY_ENGINE_MODE_KEY, 2)

    dashboard = SystemDashboard(settings, cpufreq_root=cpufreq_root, core_count=1)
    controllers = dashboard.create_preference_controllers()
    assert isinstance(controllers[0], PowerModeController)
    assert isinstance(controllers[1], DisplayEnginePreference)

    dashboard.refresh()

    power = dashboard.screen.find(DEVICE_POWER_MODE_KEY)
    assert isinstance(power, ListPreference)
    assert power.entry_values == ["default", "performance", "gameboost"]
    assert power.summary == "Performance"

    display = dashboard.screen.find(DISPLAY_ENGINE_MODE_KEY)
    assert isinstance(display, ListPreference)
    assert display.value == "2"
    assert display.summary == "Vivid"


def test_default_screen_has_power_and_display_entries() -> None:
    screen = build_system_screen()
    assert [p.key for p in screen] == [DEVICE_POWER_MODE_KEY, DISPLAY_ENGINE_MODE_KEY]
    assert screen.find("missing") is None
