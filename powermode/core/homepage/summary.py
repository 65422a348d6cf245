"""Connectivity summaries for the top-level settings entries.

Everything here is best-effort: a source that cannot answer reports "not
connected" and the caller falls back to the static summary text.
"""

from __future__ import annotations

import os
import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

NETWORK_KEY = "top_level_network"
CONNECTED_DEVICES_KEY = "top_level_connected_devices"

SUMMARY_KEYS = frozenset({NETWORK_KEY, CONNECTED_DEVICES_KEY})

NETWORK_SUMMARY_MOBILE = "Mobile, Wi-Fi, hotspot"
NETWORK_SUMMARY_NO_MOBILE = "Wi-Fi, hotspot"
CONNECTED_DEVICES_SUMMARY = "Bluetooth, pairing"

_MOBILE_TYPE_LABELS = {
    "NR": "5G",
    "LTE": "4G",
    "HSPAP": "3G",
    "EDGE": "2G",
}


@dataclass(frozen=True)
class NetworkStatus:
    kind: str  # "wifi" | "mobile"
    ssid: Optional[str] = None
    operator: Optional[str] = None
    network_type: Optional[str] = None


NetworkSource = Callable[[], Optional[NetworkStatus]]
BluetoothSource = Callable[[], Optional[str]]
MobileAvailableSource = Callable[[], bool]


def summary_visible(key: Optional[str]) -> bool:
    return key in SUMMARY_KEYS


def strip_ssid_quotes(ssid: Optional[str]) -> Optional[str]:
    if ssid is not None and len(ssid) >= 2 and ssid.startswith('"') and ssid.endswith('"'):
        return ssid[1:-1]
    return ssid


def mobile_type_label(network_type: Optional[str]) -> str:
    return _MOBILE_TYPE_LABELS.get(str(network_type or "").upper(), "Data")


def format_network_status(status: Optional[NetworkStatus]) -> Optional[str]:
    if status is None:
        return None
    if status.kind == "wifi":
        return strip_ssid_quotes(status.ssid)
    if status.kind == "mobile":
        return f"{status.operator or ''} - {mobile_type_label(status.network_type)}"
    return None


# ---- default Linux sources


def _sysfs_net_root() -> Path:
    # Test hook: allow overriding the sysfs net class root.
    return Path(os.environ.get("POWERMODE_SYSFS_NET_ROOT", "/sys/class/net"))


def _run_command(argv: list[str], *, timeout_s: float = 1.5) -> Optional[str]:
    """Run a small read-only command; None when missing or failing."""

    if not argv or not shutil.which(argv[0]):
        return None
    try:
        proc = subprocess.run(
            argv,
            check=False,
            stdout=subprocess.PIPE,
            stderr=subprocess.DEVNULL,
            text=True,
            timeout=timeout_s,
        )
    except (OSError, subprocess.SubprocessError):
        return None
    if proc.returncode != 0:
        return None
    out = (proc.stdout or "").strip()
    return out or None


def _interfaces_up() -> list[Path]:
    root = _sysfs_net_root()
    out: list[Path] = []
    try:
        children = sorted(root.iterdir(), key=lambda p: p.name)
    except OSError:
        return []
    for iface in children:
        if iface.name == "lo":
            continue
        try:
            state = (iface / "operstate").read_text(encoding="utf-8").strip()
        except OSError:
            continue
        if state == "up":
            out.append(iface)
    return out


def linux_network_status() -> Optional[NetworkStatus]:
    for iface in _interfaces_up():
        if (iface / "wireless").exists():
            ssid = _run_command(["iwgetid", "-r", iface.name])
            return NetworkStatus(kind="wifi", ssid=ssid or iface.name)
        if iface.name.startswith("wwan"):
            return NetworkStatus(kind="mobile", operator=iface.name)
    return None


def linux_mobile_available() -> bool:
    root = _sysfs_net_root()
    try:
        return any(p.name.startswith("wwan") for p in root.iterdir())
    except OSError:
        return False


def linux_connected_bluetooth_device() -> Optional[str]:
    out = _run_command(["bluetoothctl", "devices", "Connected"])
    if not out:
        return None
    for line in out.splitlines():
        # "Device AA:BB:CC:DD:EE:FF Name With Spaces"
        parts = line.strip().split(" ", 2)
        if len(parts) == 3 and parts[0] == "Device":
            return parts[2]
    return None


class HomepageSummarySource:
    """Computes the summary text for a top-level settings key."""

    def __init__(
        self,
        *,
        network: NetworkSource = linux_network_status,
        bluetooth: BluetoothSource = linux_connected_bluetooth_device,
        mobile_available: MobileAvailableSource = linux_mobile_available,
    ):
        self._network = network
        self._bluetooth = bluetooth
        self._mobile_available = mobile_available

    def summary_for(self, key: Optional[str]) -> Optional[str]:
        if key == NETWORK_KEY:
            connected = format_network_status(self._network())
            if connected is not None:
                return connected
            return NETWORK_SUMMARY_MOBILE if self._mobile_available() else NETWORK_SUMMARY_NO_MOBILE
        if key == CONNECTED_DEVICES_KEY:
            return self._bluetooth() or CONNECTED_DEVICES_SUMMARY
        return None
