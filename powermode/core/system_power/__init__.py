from __future__ import annotations

from .controller import ApplyResult, PowerModeController
from .modes import MODE_LABELS, MODE_ORDER, PowerMode, mode_label, resolve_governor

__all__ = [
    "ApplyResult",
    "MODE_LABELS",
    "MODE_ORDER",
    "PowerMode",
    "PowerModeController",
    "mode_label",
    "resolve_governor",
]
