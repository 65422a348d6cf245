from __future__ import annotations

import json
from pathlib import Path

from powermode.core.settings import DeviceSettings, SettingsStore


def test_missing_key_returns_default(tmp_path: Path) -> None:
    store = SettingsStore("system", path=tmp_path / "system.json")
    assert store.get_string("device_power_mode") is None
    assert store.get_string("device_power_mode", "default") == "default"
    assert store.get_int("display_engine_mode", 0) == 0


def test_put_string_persists_to_disk(tmp_path: Path) -> None:
    path = tmp_path / "system.json"
    store = SettingsStore("system", path=path)

    assert store.put_string("device_power_mode", "performance") is True

    assert json.loads(path.read_text(encoding="utf-8")) == {"device_power_mode": "performance"}
    assert SettingsStore("system", path=path).get_string("device_power_mode") == "performance"


def test_put_none_removes_key(tmp_path: Path) -> None:
    store = SettingsStore("system", path=tmp_path / "system.json")
    store.put_string("k", "v")
    store.put_string("k", None)
    assert store.get_string("k") is None


def test_int_values_round_trip_and_bad_values_fall_back(tmp_path: Path) -> None:
    path = tmp_path / "secure.json"
    store = SettingsStore("secure", path=path)
    store.put_int("display_engine_mode", 2)
    assert store.get_int("display_engine_mode", 0) == 2

    path.write_text(json.dumps({"display_engine_mode": "vivid"}), encoding="utf-8")
    store.reload()
    assert store.get_int("display_engine_mode", 0) == 0


def test_put_merges_writes_from_other_instances(tmp_path: Path) -> None:
    path = tmp_path / "system.json"
    a = SettingsStore("system", path=path)
    b = SettingsStore("system", path=path)

    a.put_string("one", "1")
    b.put_string("two", "2")

    assert json.loads(path.read_text(encoding="utf-8")) == {"one": "1", "two": "2"}


def test_observers_fire_on_change_only(tmp_path: Path) -> None:
    store = SettingsStore("system", path=tmp_path / "system.json")
    calls: list[str] = []
    store.register_observer("device_power_mode", calls.append)

    store.put_string("device_power_mode", "powersave")
    store.put_string("device_power_mode", "powersave")
    store.put_string("other", "x")

    assert calls == ["device_power_mode"]

    store.unregister_observer("device_power_mode", calls.append)
    store.put_string("device_power_mode", "performance")
    assert calls == ["device_power_mode"]


def test_reload_notifies_for_external_changes(tmp_path: Path) -> None:
    path = tmp_path / "system.json"
    store = SettingsStore("system", path=path)
    calls: list[str] = []
    store.register_observer("device_power_mode", calls.append)

    SettingsStore("system", path=path).put_string("device_power_mode", "gameboost")

    assert store.reload() == ["device_power_mode"]
    assert calls == ["device_power_mode"]
    assert store.reload() == []


def test_failing_observer_does_not_break_put(tmp_path: Path) -> None:
    store = SettingsStore("system", path=tmp_path / "system.json")

    def boom(_key: str) -> None:
        raise RuntimeError("observer failure")

    seen: list[str] = []
    store.register_observer("k", boom)
    store.register_observer("k", seen.append)

    assert store.put_string("k", "v") is True
    assert seen == ["k"]


def test_corrupt_file_keeps_previous_values(tmp_path: Path) -> None:
    path = tmp_path / "system.json"
    store = SettingsStore("system", path=path)
    store.put_string("device_power_mode", "powersave")

    path.write_text("{not json", encoding="utf-8")

    assert store.reload() == []
    assert store.get_string("device_power_mode") == "powersave"


def test_device_settings_locations(isolated_settings_dirs: Path, tmp_path: Path) -> None:
    settings = DeviceSettings()
    assert settings.system.path == isolated_settings_dirs / "settings" / "system.json"
    assert settings.secure.path == isolated_settings_dirs / "settings" / "secure.json"
    assert settings.properties.path == tmp_path / "run" / "properties.json"


def test_non_utf8_file_loads_as_empty_store(tmp_path: Path) -> None:
    path = tmp_path / "system.json"
    path.write_bytes(b'{"device_power_mode": "\xff\xfe"}')

    store = SettingsStore("system", path=path)

    assert store.get_string("device_power_mode") is None


def test_reload_keeps_values_when_file_is_not_utf8(tmp_path: Path) -> None:
    path = tmp_path / "system.json"
    store = SettingsStore("system", path=path)
    store.put_string("device_power_mode", "powersave")

    path.write_bytes(b"\xff\xfe")

    assert store.reload() == []
    assert store.get_string("device_power_mode") == "powersave"


def test_apply_overwrites_garbled_settings_file(make_policy, cpufreq_root, settings) -> None:
    from powermode.core.settings import DEVICE_POWER_MODE_KEY
    from powermode.core.system_power import PowerModeController

    pol = make_policy(0, "schedutil performance powersave")
    settings.system.put_string(DEVICE_POWER_MODE_KEY, "default")
    settings.system.path.write_bytes(b"\xff\xfe")
    controller = PowerModeController(settings, cpufreq_root=cpufreq_root, core_count=1)

    result = controller.apply_power_mode("performance")

    assert result.applied == (0,)
    assert (pol / "scaling_governor").read_text(encoding="utf-8").strip() == "performance"
    assert settings.system.get_string(DEVICE_POWER_MODE_KEY) == "performance"
    assert json.loads(settings.system.path.read_text(encoding="utf-8"))[DEVICE_POWER_MODE_KEY] == "performance"
