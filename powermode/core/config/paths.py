"""Config path helpers.

Kept separate from the Config object so the settings store can share the
same directory resolution without importing the config manager.
"""

from __future__ import annotations

import os
from pathlib import Path


def config_dir() -> Path:
    """Return the directory used for powermode configuration.

    Priority:
    - POWERMODE_CONFIG_DIR
    - XDG_CONFIG_HOME/powermode
    - ~/.config/powermode
    """

    p = os.environ.get("POWERMODE_CONFIG_DIR")
    if p:
        return Path(p)

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "powermode"

    return Path.home() / ".config" / "powermode"


def config_file_path() -> Path:
    """Return the powermode config.json path.

    Priority:
    - POWERMODE_CONFIG_PATH (explicit file override)
    - config_dir()/config.json
    """

    p = os.environ.get("POWERMODE_CONFIG_PATH")
    if p:
        return Path(p)
    return config_dir() / "config.json"


def settings_dir() -> Path:
    """Directory holding the durable settings namespaces (system, secure)."""

    return config_dir() / "settings"


def runtime_dir() -> Path:
    """Directory for values that must not outlive a reboot.

    Priority:
    - POWERMODE_RUNTIME_DIR
    - XDG_RUNTIME_DIR/powermode (tmpfs on most systems)
    - settings_dir()
    """

    p = os.environ.get("POWERMODE_RUNTIME_DIR")
    if p:
        return Path(p)

    xdg = os.environ.get("XDG_RUNTIME_DIR")
    if xdg:
        return Path(xdg) / "powermode"

    return settings_dir()
