from __future__ import annotations


def bool_prop(key: str, *, default: bool) -> property:
    def _get(self) -> bool:
        v = self._settings.get(key, default)
        if isinstance(v, str):
            return v.strip().lower() in ("1", "true", "yes", "on")
        try:
            return bool(v)
        except (TypeError, ValueError):
            return bool(default)

    def _set(self, value: bool) -> None:
        self._settings[key] = bool(value)
        self._save()

    return property(_get, _set)


def int_prop(key: str, *, default: int, min_v: int | None = None, max_v: int | None = None) -> property:
    def _clamp(v: int) -> int:
        if min_v is not None:
            v = max(int(min_v), v)
        if max_v is not None:
            v = min(int(max_v), v)
        return v

    def _get(self) -> int:
        try:
            v = int(self._settings.get(key, default))
        except (TypeError, ValueError):
            v = int(default)
        return _clamp(v)

    def _set(self, value: int) -> None:
        try:
            v = int(value)
        except (TypeError, ValueError):
            v = int(default)
        self._settings[key] = _clamp(v)
        self._save()

    return property(_get, _set)
