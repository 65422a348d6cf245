"""powermode configuration.

`from powermode.core.config import Config` is the public entry point; the
path helpers are shared with the settings store.
"""

from __future__ import annotations

from .config import Config
from .file_storage import load_json_settings, save_json_settings_atomic
from .paths import config_dir, config_file_path, runtime_dir, settings_dir


__all__ = [
    "Config",
    "config_dir",
    "config_file_path",
    "load_json_settings",
    "runtime_dir",
    "save_json_settings_atomic",
    "settings_dir",
]
