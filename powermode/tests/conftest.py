from __future__ import annotations

import os
import tempfile
from pathlib import Path
from typing import Callable, Optional

import pytest


# Safety default: during pytest, avoid touching the user's real settings.
os.environ.setdefault("POWERMODE_CONFIG_DIR", tempfile.mkdtemp(prefix="powermode-test-config-"))
os.environ.setdefault("POWERMODE_RUNTIME_DIR", tempfile.mkdtemp(prefix="powermode-test-runtime-"))


@pytest.fixture(autouse=True)
def isolated_settings_dirs(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    """Give every test its own config and runtime directories."""

    config = tmp_path / "config"
    monkeypatch.setenv("POWERMODE_CONFIG_DIR", str(config))
    monkeypatch.setenv("POWERMODE_RUNTIME_DIR", str(tmp_path / "run"))
    monkeypatch.delenv("POWERMODE_CONFIG_PATH", raising=False)
    return config


@pytest.fixture
def cpufreq_root(tmp_path: Path) -> Path:
    root = tmp_path / "cpufreq"
    root.mkdir()
    return root


@pytest.fixture
def make_policy(cpufreq_root: Path) -> Callable[..., Path]:
    """Create ``policy<N>`` with the given advertised governors."""

    def _make(index: int, governors: Optional[str] = "schedutil performance powersave", *, current: str = "schedutil") -> Path:
        pol = cpufreq_root / f"policy{index}"
        pol.mkdir(parents=True, exist_ok=True)
        if governors is not None:
            (pol / "scaling_available_governors").write_text(f"{governors}\n", encoding="utf-8")
        (pol / "scaling_governor").write_text(f"{current}\n", encoding="utf-8")
        return pol

    return _make


@pytest.fixture
def settings():
    from powermode.core.settings import DeviceSettings

    return DeviceSettings()
