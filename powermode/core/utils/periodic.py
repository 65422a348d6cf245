"""Background periodic callbacks.

Small replacement for a UI handler's `postDelayed` loop: a daemon thread
calls a function after an initial delay and then at a fixed interval until
`stop()` is called. The owner must stop the task when it goes away.
"""

from __future__ import annotations

import logging
import threading
from typing import Callable

from ..logging_utils import log_throttled

logger = logging.getLogger(__name__)


class PeriodicTask:
    def __init__(
        self,
        callback: Callable[[], None],
        *,
        interval_s: float,
        initial_delay_s: float | None = None,
        name: str = "powermode-periodic",
    ):
        self._callback = callback
        self.interval_s = float(interval_s)
        self.initial_delay_s = float(self.interval_s if initial_delay_s is None else initial_delay_s)
        self._name = name
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> bool:
        """Start the loop. Returns False if it is already running."""

        if self.running:
            return False

        self._stop = threading.Event()
        self._thread = threading.Thread(target=self._run, name=self._name, daemon=True)
        self._thread.start()
        return True

    def stop(self, *, timeout: float = 2.0) -> None:
        self._stop.set()
        thread = self._thread
        self._thread = None
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout=timeout)

    def _run(self) -> None:
        stop = self._stop
        if stop.wait(self.initial_delay_s):
            return
        while not stop.is_set():
            try:
                self._callback()
            except Exception as exc:
                log_throttled(
                    logger,
                    f"periodic.{self._name}",
                    interval_s=60,
                    level=logging.WARNING,
                    msg=f"Periodic task {self._name} failed: {exc}",
                    exc=exc,
                )
            if stop.wait(self.interval_s):
                return
