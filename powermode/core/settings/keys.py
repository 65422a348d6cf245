"""Setting keys shared between the controllers and front-ends."""

from __future__ import annotations

# system namespace
DEVICE_POWER_MODE_KEY = "device_power_mode"

# properties namespace; mirrors DEVICE_POWER_MODE_KEY.
DEVICE_POWER_MODE_PROPERTY = "persist.sys." + DEVICE_POWER_MODE_KEY

# secure namespace
DISPLAY_ENGINE_MODE_KEY = "display_engine_mode"
