"""String-keyed settings stores backed by JSON files.

Each store is one namespace file. Values are kept as strings (ints are
stored in their decimal form) so every reader sees the same representation
regardless of which front-end wrote the value.
"""

from __future__ import annotations

import logging
from pathlib import Path
from threading import RLock
from typing import Callable, Optional

from ..config.file_storage import load_json_settings, save_json_settings_atomic
from ..config.paths import runtime_dir, settings_dir

logger = logging.getLogger(__name__)

SettingsObserver = Callable[[str], None]


class SettingsStore:
    """A single settings namespace (e.g. ``system``) persisted as JSON."""

    def __init__(self, namespace: str, *, path: Path | None = None):
        self.namespace = namespace
        self.path = Path(path) if path is not None else settings_dir() / f"{namespace}.json"
        self._lock = RLock()
        self._observers: dict[str, list[SettingsObserver]] = {}
        loaded = self._load()
        self._values: dict[str, str] = loaded if loaded is not None else {}

    def _load(self) -> Optional[dict[str, str]]:
        loaded = load_json_settings(path=self.path, defaults={}, logger=logger)
        if loaded is None:
            return None
        return {str(k): str(v) for k, v in loaded.items() if v is not None}

    # ---- reads

    def get_string(self, key: str, default: Optional[str] = None) -> Optional[str]:
        with self._lock:
            return self._values.get(key, default)

    def get_int(self, key: str, default: int) -> int:
        raw = self.get_string(key)
        if raw is None:
            return default
        try:
            return int(raw.strip())
        except ValueError:
            logger.debug("%s/%s holds non-integer value %r", self.namespace, key, raw)
            return default

    # ---- writes

    def put_string(self, key: str, value: Optional[str]) -> bool:
        """Store *value* under *key* (None removes it).

        Returns False when the namespace file could not be written; the
        in-memory value is left unchanged in that case.
        """

        with self._lock:
            # Merge with changes other processes made since our last read.
            self.reload()

            before = self._values.get(key)
            updated = dict(self._values)
            if value is None:
                updated.pop(key, None)
            else:
                updated[key] = str(value)

            if not save_json_settings_atomic(path=self.path, settings=updated, logger=logger):
                return False
            self._values = updated

        if before != updated.get(key):
            self._notify(key)
        return True

    def put_int(self, key: str, value: int) -> bool:
        return self.put_string(key, str(int(value)))

    def reload(self) -> list[str]:
        """Re-read the namespace file and notify observers of changed keys.

        Returns the list of keys whose value changed.
        """

        with self._lock:
            loaded = self._load()
            # Keep the previous values if the file was transiently unreadable.
            if loaded is None:
                return []
            before = self._values
            self._values = loaded
            changed = sorted(k for k in set(before) | set(loaded) if before.get(k) != loaded.get(k))

        for key in changed:
            self._notify(key)
        return changed

    # ---- observers

    def register_observer(self, key: str, callback: SettingsObserver) -> None:
        with self._lock:
            callbacks = self._observers.setdefault(key, [])
            if callback not in callbacks:
                callbacks.append(callback)

    def unregister_observer(self, key: str, callback: SettingsObserver) -> None:
        with self._lock:
            callbacks = self._observers.get(key)
            if not callbacks:
                return
            try:
                callbacks.remove(callback)
            except ValueError:
                return
            if not callbacks:
                del self._observers[key]

    def _notify(self, key: str) -> None:
        with self._lock:
            callbacks = list(self._observers.get(key, ()))
        for cb in callbacks:
            try:
                cb(key)
            except Exception:
                logger.exception("Settings observer for %s/%s failed", self.namespace, key)


class DeviceSettings:
    """The three stores the settings components read and write.

    - ``system``: durable, holds the selected power mode.
    - ``secure``: durable, holds display engine state.
    - ``properties``: lives under the runtime dir, so it survives a process
      restart but not a reboot.
    """

    def __init__(
        self,
        *,
        system: SettingsStore | None = None,
        secure: SettingsStore | None = None,
        properties: SettingsStore | None = None,
    ):
        self.system = system or SettingsStore("system")
        self.secure = secure or SettingsStore("secure")
        self.properties = properties or SettingsStore("properties", path=runtime_dir() / "properties.json")

    def reload(self) -> None:
        for store in (self.system, self.secure, self.properties):
            store.reload()
