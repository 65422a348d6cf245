from __future__ import annotations

from enum import Enum
from typing import Optional, Sequence, Union


class PowerMode(str, Enum):
    DEFAULT = "default"
    CONSERVATIVE = "conservative"
    POWERSAVE = "powersave"
    PERFORMANCE = "performance"
    GAMEBOOST = "gameboost"

    @classmethod
    def parse(cls, value: object) -> Optional["PowerMode"]:
        if isinstance(value, cls):
            return value
        if value is None:
            return None
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return None


# Order in which modes are offered to the user.
MODE_ORDER: tuple[PowerMode, ...] = (
    PowerMode.DEFAULT,
    PowerMode.CONSERVATIVE,
    PowerMode.POWERSAVE,
    PowerMode.PERFORMANCE,
    PowerMode.GAMEBOOST,
)

MODE_LABELS: dict[PowerMode, str] = {
    PowerMode.DEFAULT: "Default",
    PowerMode.CONSERVATIVE: "Conservative",
    PowerMode.POWERSAVE: "Powersave",
    PowerMode.PERFORMANCE: "Performance",
    PowerMode.GAMEBOOST: "Game Boost",
}

# Governors preferred for the default mode, best first.
DEFAULT_GOVERNOR_PREFERENCE: tuple[str, ...] = ("sched_pixel", "schedutil")

# Governors that belong to a named mode and therefore never count as the
# vendor default.
NAMED_MODE_GOVERNORS: frozenset[str] = frozenset({"powersave", "conservative", "performance"})


def mode_label(value: Union[PowerMode, str]) -> str:
    mode = PowerMode.parse(value)
    if mode is None:
        return str(value)
    return MODE_LABELS[mode]


def resolve_governor(mode: Union[PowerMode, str], governors: Optional[Sequence[str]]) -> Optional[str]:
    """Pick the governor implementing *mode* from an advertised governor list.

    Returns None when the list is unavailable, the mode is unknown, or no
    advertised governor fits.
    """

    if governors is None:
        return None

    m = PowerMode.parse(mode)
    if m is None:
        return None

    if m is PowerMode.CONSERVATIVE:
        return "conservative" if "conservative" in governors else None
    if m is PowerMode.POWERSAVE:
        return "powersave" if "powersave" in governors else None
    if m in (PowerMode.PERFORMANCE, PowerMode.GAMEBOOST):
        return "performance" if "performance" in governors else None

    for preferred in DEFAULT_GOVERNOR_PREFERENCE:
        if preferred in governors:
            return preferred

    # No known scheduler governor: assume whatever the vendor shipped that is
    # not one of the named-mode governors is the default. Devices advertising
    # several extra governors get the first of them.
    for governor in governors:
        if governor not in NAMED_MODE_GOVERNORS:
            return governor
    return None
