"""powermode Config implementation."""

from __future__ import annotations

import logging

from ._props import bool_prop, int_prop
from .defaults import DEFAULTS as _DEFAULTS
from .file_storage import load_json_settings, save_json_settings_atomic
from .paths import config_dir, config_file_path

logger = logging.getLogger(__name__)


class Config:
    """Configuration manager for powermode front-ends."""

    DEFAULTS = _DEFAULTS

    def __init__(self):
        # Recompute at runtime so test harnesses can set env vars in conftest.
        self.CONFIG_DIR = config_dir()
        self.CONFIG_FILE = config_file_path()
        loaded = self._load()
        self._settings = loaded if loaded is not None else self.DEFAULTS.copy()

    def _load(self, *, retries: int = 3, retry_delay: float = 0.02):
        return load_json_settings(
            path=self.CONFIG_FILE,
            defaults=self.DEFAULTS,
            retries=retries,
            retry_delay=retry_delay,
            logger=logger,
        )

    def reload(self):
        loaded = self._load()
        # If the file was transiently unreadable, keep the previous in-memory settings.
        if loaded is not None:
            self._settings = loaded

    def _save(self):
        save_json_settings_atomic(path=self.CONFIG_FILE, settings=self._settings, logger=logger)

    @property
    def settings_poll_interval_s(self) -> float:
        return self.settings_poll_ms / 1000.0

    @property
    def summary_refresh_interval_s(self) -> float:
        return self.summary_refresh_ms / 1000.0

    restore_on_start = bool_prop("restore_on_start", default=True)
    settings_poll_ms = int_prop("settings_poll_ms", default=1000, min_v=100, max_v=10_000)
    summary_refresh_ms = int_prop("summary_refresh_ms", default=2000, min_v=500, max_v=60_000)
