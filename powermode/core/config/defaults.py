"""Default configuration values."""

from __future__ import annotations

DEFAULTS: dict = {
    # Re-apply the last selected power mode when the tray starts.
    "restore_on_start": True,
    # How often the tray re-reads the settings store for changes made by
    # other processes (ms).
    "settings_poll_ms": 1000,
    # Homepage summary refresh period (ms).
    "summary_refresh_ms": 2000,
}
