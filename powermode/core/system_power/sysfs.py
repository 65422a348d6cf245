"""cpufreq sysfs access.

Each frequency-scaling policy group ``N`` is a directory ``policy<N>`` under
the cpufreq root. Reads are best-effort (a missing or unreadable node means
"this group does not support mode switching"); writes raise so callers can
decide how to report them.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

_CPUFREQ_ROOT_DEFAULT = Path("/sys/devices/system/cpu/cpufreq")

SCALING_GOVERNOR = "scaling_governor"
SCALING_AVAILABLE_GOVERNORS = "scaling_available_governors"


def cpufreq_root() -> Path:
    # Test hook: allow overriding the sysfs root.
    root = os.environ.get("POWERMODE_CPUFREQ_ROOT")
    return Path(root) if root else _CPUFREQ_ROOT_DEFAULT


def policy_path(index: int, *, root: Path | None = None) -> Path:
    return (root if root is not None else cpufreq_root()) / f"policy{int(index)}"


def core_count() -> int:
    return max(1, os.cpu_count() or 1)


def _read_text(path: Path) -> Optional[str]:
    if not path.exists():
        return None
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        logger.debug("Unable to read %s: %s", path, exc)
        return None


def read_available_governors(index: int, *, root: Path | None = None) -> Optional[list[str]]:
    """Return the governors advertised by policy group *index*, in kernel order.

    Returns None when the group's ``scaling_available_governors`` is absent
    or unreadable.
    """

    raw = _read_text(policy_path(index, root=root) / SCALING_AVAILABLE_GOVERNORS)
    if raw is None:
        return None
    return raw.split()


def read_scaling_governor(index: int, *, root: Path | None = None) -> Optional[str]:
    raw = _read_text(policy_path(index, root=root) / SCALING_GOVERNOR)
    if raw is None:
        return None
    return raw.strip() or None


def write_scaling_governor(index: int, governor: str, *, root: Path | None = None) -> None:
    """Write *governor* to policy group *index*. Raises OSError on failure."""

    path = policy_path(index, root=root) / SCALING_GOVERNOR
    with open(path, "w", encoding="utf-8") as f:
        f.write(governor)
