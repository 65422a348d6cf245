"""Tray startup entrypoint.

Owns the startup sequence (logging, single-instance) and then launches the
`PowerModeTray` application.
"""

from __future__ import annotations

import logging
import sys

from powermode.core.logging_utils import configure_logging

from . import runtime
from .application import PowerModeTray

logger = logging.getLogger(__name__)


def acquire_single_instance_or_exit() -> None:
    """Acquire the tray single-instance lock or exit with code 0."""

    if runtime.acquire_single_instance_lock():
        return

    logger.error("powermode tray is already running (lock held). Not starting a second instance.")
    sys.exit(0)


def main() -> None:
    try:
        configure_logging()
        acquire_single_instance_or_exit()

        app = PowerModeTray()
        app.run()

    except KeyboardInterrupt:
        logger.info("Shutting down...")
        sys.exit(0)
    except Exception as exc:
        logger.exception("Unhandled error: %s", exc)
        sys.exit(1)
