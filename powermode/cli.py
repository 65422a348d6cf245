"""`powermode` command line front-end."""

from __future__ import annotations

import argparse
import logging
import sys
import time
from pathlib import Path
from typing import Iterable, Optional

from .core.config import Config
from .core.display_engine import DisplayEngineMode, DisplayEnginePreference
from .core.homepage import CONNECTED_DEVICES_KEY, NETWORK_KEY, HomepagePreference, HomepageSummarySource
from .core.logging_utils import configure_logging
from .core.preferences import Preference
from .core.settings import DEVICE_POWER_MODE_KEY, DeviceSettings
from .core.system_power import ApplyResult, PowerMode, PowerModeController, mode_label
from .core.system_power import sysfs

logger = logging.getLogger(__name__)


def _controller(args: argparse.Namespace, settings: DeviceSettings) -> PowerModeController:
    return PowerModeController(settings, cpufreq_root=args.cpufreq_root)


def _print_result(result: ApplyResult) -> None:
    print(f"Power mode: {mode_label(result.mode)} ({result.mode})")
    if result.governor is None:
        print("  no matching governor; no policy groups changed")
        return
    print(f"  governor: {result.governor}")
    print(f"  applied:  {', '.join(f'policy{i}' for i in result.applied) or '-'}")
    if result.failed:
        print(f"  failed:   {', '.join(f'policy{i}' for i in result.failed)}")


def _cmd_modes(args: argparse.Namespace, settings: DeviceSettings) -> int:
    controller = _controller(args, settings)
    current = controller.current_mode()
    available = controller.available_modes
    if not available:
        print("No power modes available (cpufreq governors not readable).")
        return 0
    for mode in available:
        marker = "*" if mode.value == current else " "
        print(f"{marker} {mode.value:<13} {mode_label(mode):<13} -> {controller.governor_for_mode(mode)}")
    return 0


def _cmd_get(args: argparse.Namespace, settings: DeviceSettings) -> int:
    current = settings.system.get_string(DEVICE_POWER_MODE_KEY)
    print(current if current is not None else "unset")
    return 0


def _cmd_set(args: argparse.Namespace, settings: DeviceSettings) -> int:
    mode = PowerMode.parse(args.mode)
    if mode is None:
        print(f"Unknown power mode: {args.mode!r}", file=sys.stderr)
        return 2
    controller = _controller(args, settings)
    if mode not in controller.available_modes:
        logger.warning("Power mode %s is not supported on this device", mode.value)
    _print_result(controller.apply_power_mode(mode))
    return 0


def _cmd_cycle(args: argparse.Namespace, settings: DeviceSettings) -> int:
    from .tray.tile import PowerModeTile

    tile = PowerModeTile(_controller(args, settings), settings=settings)
    tile.update_tile_state()
    tile.on_click()
    print(f"{tile.tile.label}: {tile.tile.subtitle}")
    return 0


def _cmd_restore(args: argparse.Namespace, settings: DeviceSettings) -> int:
    result = _controller(args, settings).restore_persisted_mode()
    if result is None:
        print("No persisted power mode.")
        return 0
    _print_result(result)
    return 0


def _cmd_status(args: argparse.Namespace, settings: DeviceSettings) -> int:
    root = args.cpufreq_root or sysfs.cpufreq_root()
    for index in range(sysfs.core_count()):
        governors = sysfs.read_available_governors(index, root=root)
        if governors is None:
            continue
        current = sysfs.read_scaling_governor(index, root=root) or "?"
        print(f"policy{index}: {current:<14} available: {' '.join(governors)}")
    return 0


def _cmd_display_engine(args: argparse.Namespace, settings: DeviceSettings) -> int:
    pref = DisplayEnginePreference(settings)
    checked = pref.on_bind()
    if args.mode is None:
        print(checked.label if checked is not None else f"unknown ({pref.current_value})")
        return 0

    mode = DisplayEngineMode.parse(args.mode)
    if mode is None:
        print(f"Unknown display engine mode: {args.mode!r}", file=sys.stderr)
        return 2
    pref.select(mode)
    print(mode.label)
    return 0


def _cmd_summary(args: argparse.Namespace, settings: DeviceSettings) -> int:
    source = HomepageSummarySource()
    if not args.watch:
        print(f"Network & internet: {source.summary_for(NETWORK_KEY)}")
        print(f"Connected devices:  {source.summary_for(CONNECTED_DEVICES_KEY)}")
        return 0

    interval_s = Config().summary_refresh_interval_s
    entries = [
        HomepagePreference(Preference(key=key, title=title), source=source, interval_s=interval_s, initial_delay_s=0.0)
        for key, title in ((NETWORK_KEY, "Network & internet"), (CONNECTED_DEVICES_KEY, "Connected devices"))
    ]
    for entry in entries:
        entry.on_bind()

    shown: dict[str, Optional[str]] = {}
    try:
        while True:
            for entry in entries:
                pref = entry.preference
                if pref.summary is not None and shown.get(pref.key) != pref.summary:
                    shown[pref.key] = pref.summary
                    print(f"{pref.title}: {pref.summary}", flush=True)
            time.sleep(interval_s)
    except KeyboardInterrupt:
        return 0
    finally:
        for entry in entries:
            entry.on_detached()


def _cmd_tray(args: argparse.Namespace, settings: DeviceSettings) -> int:
    from .tray.entrypoint import main as tray_main

    tray_main()
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="powermode", description="Switch CPU power modes via cpufreq governors")
    parser.add_argument("--cpufreq-root", type=Path, default=None, help="cpufreq sysfs root (for testing)")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")

    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("modes", help="List power modes supported on this device").set_defaults(func=_cmd_modes)
    sub.add_parser("get", help="Print the selected power mode").set_defaults(func=_cmd_get)

    p_set = sub.add_parser("set", help="Apply a power mode")
    p_set.add_argument("mode", help="default, conservative, powersave, performance or gameboost")
    p_set.set_defaults(func=_cmd_set)

    sub.add_parser("cycle", help="Advance to the next supported power mode").set_defaults(func=_cmd_cycle)
    sub.add_parser("restore", help="Re-apply the last selected power mode").set_defaults(func=_cmd_restore)
    sub.add_parser("status", help="Show governors per policy group").set_defaults(func=_cmd_status)

    p_de = sub.add_parser("display-engine", help="Show or set the display engine mode")
    p_de.add_argument("mode", nargs="?", default=None, help="default, x-reality, vivid, triluminous or 0-3")
    p_de.set_defaults(func=_cmd_display_engine)

    p_sum = sub.add_parser("summary", help="Print connectivity summaries")
    p_sum.add_argument("--watch", action="store_true", help="Keep refreshing until interrupted")
    p_sum.set_defaults(func=_cmd_summary)
    sub.add_parser("tray", help="Run the tray toggle").set_defaults(func=_cmd_tray)
    return parser


def main(argv: Iterable[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)

    configure_logging()
    if args.debug:
        logging.getLogger().setLevel(logging.DEBUG)

    return int(args.func(args, DeviceSettings()))


if __name__ == "__main__":
    raise SystemExit(main())
