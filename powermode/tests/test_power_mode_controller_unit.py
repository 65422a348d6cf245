from __future__ import annotations

import errno
import logging
from pathlib import Path

import pytest

from powermode.core.preferences import ListPreference
from powermode.core.settings import DEVICE_POWER_MODE_KEY, DEVICE_POWER_MODE_PROPERTY
from powermode.core.system_power import PowerMode, PowerModeController
from powermode.core.system_power import sysfs


def _governor(pol: Path) -> str:
    return (pol / "scaling_governor").read_text(encoding="utf-8").strip()


def test_available_modes_follow_fixed_order_and_skip_unresolved(make_policy, cpufreq_root, settings) -> None:
    make_policy(0, "schedutil performance powersave")
    controller = PowerModeController(settings, cpufreq_root=cpufreq_root, core_count=1)

    assert controller.available_modes == [
        PowerMode.DEFAULT,
        PowerMode.POWERSAVE,
        PowerMode.PERFORMANCE,
        PowerMode.GAMEBOOST,
    ]


def test_available_modes_all_when_every_governor_present(make_policy, cpufreq_root, settings) -> None:
    make_policy(0, "performance powersave conservative sched_pixel")
    controller = PowerModeController(settings, cpufreq_root=cpufreq_root, core_count=1)
    assert [m.value for m in controller.available_modes] == [
        "default",
        "conservative",
        "powersave",
        "performance",
        "gameboost",
    ]


def test_available_modes_empty_without_policy0(cpufreq_root, settings) -> None:
    controller = PowerModeController(settings, cpufreq_root=cpufreq_root, core_count=4)
    assert controller.available_modes == []


def test_available_modes_are_cached(make_policy, cpufreq_root, settings) -> None:
    pol = make_policy(0, "schedutil performance")
    controller = PowerModeController(settings, cpufreq_root=cpufreq_root, core_count=1)
    (pol / "scaling_available_governors").write_text("schedutil performance powersave conservative\n")
    assert PowerMode.POWERSAVE not in controller.available_modes


def test_apply_writes_same_governor_to_every_available_group(make_policy, cpufreq_root, settings) -> None:
    p0 = make_policy(0, "schedutil performance powersave")
    # Other groups advertise different sets; group 0 decides the governor.
    p4 = make_policy(4, "performance")
    controller = PowerModeController(settings, cpufreq_root=cpufreq_root, core_count=8)

    result = controller.apply_power_mode(PowerMode.GAMEBOOST)

    assert _governor(p0) == "performance"
    assert _governor(p4) == "performance"
    assert result.governor == "performance"
    assert result.applied == (0, 4)
    assert result.unavailable == (1, 2, 3, 5, 6, 7)
    assert result.changed is True
    assert settings.system.get_string(DEVICE_POWER_MODE_KEY) == "gameboost"
    assert settings.properties.get_string(DEVICE_POWER_MODE_PROPERTY) == "gameboost"


def test_apply_persists_even_when_every_probe_fails(cpufreq_root, settings) -> None:
    controller = PowerModeController(settings, cpufreq_root=cpufreq_root, core_count=4)

    result = controller.apply_power_mode("performance")

    assert result.applied == ()
    assert result.unavailable == (0, 1, 2, 3)
    assert result.changed is False
    assert settings.system.get_string(DEVICE_POWER_MODE_KEY) == "performance"
    assert settings.properties.get_string(DEVICE_POWER_MODE_PROPERTY) == "performance"


def test_apply_unresolved_mode_logs_error_and_persists(make_policy, cpufreq_root, settings, caplog) -> None:
    p0 = make_policy(0, "schedutil performance powersave")
    controller = PowerModeController(settings, cpufreq_root=cpufreq_root, core_count=1)

    with caplog.at_level(logging.ERROR):
        result = controller.apply_power_mode(PowerMode.CONSERVATIVE)

    assert result.governor is None
    assert result.unresolved == (0,)
    assert _governor(p0) == "schedutil"
    assert "No suitable governor found for power mode: conservative" in caplog.text
    assert controller.current_mode() == "conservative"


def test_apply_continues_after_write_failure(make_policy, cpufreq_root, settings, monkeypatch) -> None:
    make_policy(0, "schedutil performance")
    p1 = make_policy(1, "schedutil performance")
    controller = PowerModeController(settings, cpufreq_root=cpufreq_root, core_count=2)

    real_write = sysfs.write_scaling_governor

    def flaky_write(index: int, governor: str, *, root=None) -> None:
        if index == 0:
            raise PermissionError(errno.EACCES, "Permission denied")
        real_write(index, governor, root=root)

    monkeypatch.setattr(sysfs, "write_scaling_governor", flaky_write)

    result = controller.apply_power_mode(PowerMode.PERFORMANCE)

    assert result.failed == (0,)
    assert result.applied == (1,)
    assert _governor(p1) == "performance"
    assert controller.current_mode() == "performance"


def test_restore_prefers_property_mirror(make_policy, cpufreq_root, settings) -> None:
    p0 = make_policy(0, "schedutil performance powersave")
    settings.system.put_string(DEVICE_POWER_MODE_KEY, "powersave")
    settings.properties.put_string(DEVICE_POWER_MODE_PROPERTY, "performance")
    controller = PowerModeController(settings, cpufreq_root=cpufreq_root, core_count=1)

    result = controller.restore_persisted_mode()

    assert result is not None and result.mode == "performance"
    assert _governor(p0) == "performance"


def test_restore_falls_back_to_durable_key_and_noops_when_unset(make_policy, cpufreq_root, settings) -> None:
    p0 = make_policy(0, "schedutil performance powersave")
    controller = PowerModeController(settings, cpufreq_root=cpufreq_root, core_count=1)

    assert controller.restore_persisted_mode() is None
    assert _governor(p0) == "schedutil"

    settings.system.put_string(DEVICE_POWER_MODE_KEY, "powersave")
    controller.restore_persisted_mode()
    assert _governor(p0) == "powersave"


def test_update_state_and_preference_change(make_policy, cpufreq_root, settings) -> None:
    make_policy(0, "schedutil performance powersave")
    settings.system.put_string(DEVICE_POWER_MODE_KEY, "powersave")
    controller = PowerModeController(settings, cpufreq_root=cpufreq_root, core_count=1)
    pref = ListPreference(key=DEVICE_POWER_MODE_KEY)

    controller.update_state(pref)

    assert pref.entries == ["Default", "Powersave", "Performance", "Game Boost"]
    assert pref.entry_values == ["default", "powersave", "performance", "gameboost"]
    assert pref.value == "powersave"
    assert pref.summary == "Powersave"

    assert controller.on_preference_change(pref, "gameboost") is True
    assert pref.value == "gameboost"
    assert controller.current_mode() == "gameboost"


@pytest.mark.parametrize("governors, expected", [("interactive performance", "interactive"), ("sched_pixel schedutil", "sched_pixel")])
def test_governor_for_default_mode(make_policy, cpufreq_root, settings, governors, expected) -> None:
    make_policy(0, governors)
    controller = PowerModeController(settings, cpufreq_root=cpufreq_root, core_count=1)
    assert controller.governor_for_mode("default") == expected


def test_apply_persists_canonical_mode_name(make_policy, cpufreq_root, settings) -> None:
    pol = make_policy(0, "schedutil performance powersave")
    controller = PowerModeController(settings, cpufreq_root=cpufreq_root, core_count=1)

    result = controller.apply_power_mode("PERFORMANCE")

    assert result.mode == "performance"
    assert _governor(pol) == "performance"
    assert settings.system.get_string(DEVICE_POWER_MODE_KEY) == "performance"
    assert settings.properties.get_string(DEVICE_POWER_MODE_PROPERTY) == "performance"
