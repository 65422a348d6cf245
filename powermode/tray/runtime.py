from __future__ import annotations

import importlib
import importlib.util
import logging
import os
import sys
from contextlib import suppress

from powermode.core.config.paths import config_dir


_pystray_mod = None
_pystray_item = None
_instance_lock_fh = None


logger = logging.getLogger(__name__)


def _is_broken_gi_error(exc: BaseException) -> bool:
    """Detect the partial-`gi` failure pystray's AppIndicator backend hits.

        AttributeError: module 'gi' has no attribute 'require_version'

    Forcing the Xorg backend is sufficient in that case.
    """

    cur: BaseException | None = exc
    depth = 0
    while cur is not None and depth < 10:
        if isinstance(cur, AttributeError):
            msg = str(cur)
            if "module 'gi'" in msg and "require_version" in msg:
                return True
        nxt = cur.__cause__ or cur.__context__
        if nxt is cur:
            break
        cur = nxt
        depth += 1
    return False


def _gi_is_working() -> bool:
    """Return True if PyGObject appears usable."""

    # Avoid a static `import gi`; it's only needed for the AppIndicator backend.
    try:
        if importlib.util.find_spec("gi") is None:
            return False
        gi = importlib.import_module("gi")
        return hasattr(gi, "require_version")
    except Exception:
        return False


def _clear_failed_import(name: str) -> None:
    # Drop a partially-initialized module so a backend retry imports cleanly.
    sys.modules.pop(name, None)


def get_pystray():
    """Import pystray only when the tray UI is actually needed.

    Importing `pystray` on Linux may connect to an X display immediately,
    which breaks headless environments that still import tray modules.
    """

    global _pystray_mod, _pystray_item

    if _pystray_mod is not None and _pystray_item is not None:
        return _pystray_mod, _pystray_item

    # Backend selection:
    # - respect an explicit PYSTRAY_BACKEND
    # - prefer AppIndicator when PyGObject works, fall back to Xorg
    explicit_backend = "PYSTRAY_BACKEND" in os.environ

    if not explicit_backend and _gi_is_working():
        os.environ["PYSTRAY_BACKEND"] = "appindicator"
        logger.info("pystray backend: appindicator (auto)")
        try:
            _pystray_mod = importlib.import_module("pystray")
        except Exception:
            _clear_failed_import("pystray")
            os.environ["PYSTRAY_BACKEND"] = "xorg"
            logger.info("pystray backend: xorg (fallback)")
            _pystray_mod = importlib.import_module("pystray")
    else:
        try:
            if explicit_backend:
                logger.info("pystray backend: %s (explicit)", os.environ.get("PYSTRAY_BACKEND"))
            _pystray_mod = importlib.import_module("pystray")
        except Exception as exc:  # pragma: no cover (depends on desktop env)
            if not _is_broken_gi_error(exc):
                raise RuntimeError(
                    "pystray could not be initialized. The tray requires a desktop "
                    "session (X11/Wayland)."
                ) from exc
            _clear_failed_import("pystray")
            os.environ.setdefault("PYSTRAY_BACKEND", "xorg")
            logger.info("pystray backend: xorg (broken-gi fallback)")
            _pystray_mod = importlib.import_module("pystray")

    _pystray_item = getattr(_pystray_mod, "MenuItem")
    return _pystray_mod, _pystray_item


def acquire_single_instance_lock() -> bool:
    """Ensure only one tray instance owns the power mode tile."""

    global _instance_lock_fh

    try:
        import fcntl  # Linux/Unix
    except ImportError:
        return True

    lock_dir = config_dir()
    with suppress(OSError):
        lock_dir.mkdir(parents=True, exist_ok=True)
    lock_path = lock_dir / "powermode-tray.lock"

    try:
        fh = open(lock_path, "a+")
    except OSError as exc:
        logger.warning("Cannot open lock file %s: %s", lock_path, exc)
        return True

    try:
        fcntl.flock(fh.fileno(), fcntl.LOCK_EX | fcntl.LOCK_NB)
    except OSError:
        fh.close()
        return False

    fh.seek(0)
    fh.truncate()
    fh.write(f"pid={os.getpid()}\n")
    fh.flush()
    _instance_lock_fh = fh
    return True
