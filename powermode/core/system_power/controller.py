"""Power mode controller.

Applies a power mode by writing the matching cpufreq governor to every
policy group, and records the user's selection in the settings store.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from ..preferences import ListPreference
from ..settings import DEVICE_POWER_MODE_KEY, DEVICE_POWER_MODE_PROPERTY, DeviceSettings
from ..utils.exceptions import is_invalid_value, is_not_found, is_permission_denied
from . import sysfs
from .modes import MODE_ORDER, PowerMode, mode_label, resolve_governor

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ApplyResult:
    """What happened to each policy group during one apply.

    Informational only: an apply never fails as a whole.
    """

    mode: str
    governor: Optional[str]
    applied: tuple[int, ...] = ()
    unavailable: tuple[int, ...] = ()
    unresolved: tuple[int, ...] = ()
    failed: tuple[int, ...] = ()

    @property
    def changed(self) -> bool:
        return bool(self.applied)


class PowerModeController:
    """Offers the power modes the device supports and applies the chosen one."""

    def __init__(
        self,
        settings: DeviceSettings | None = None,
        *,
        cpufreq_root: Path | None = None,
        core_count: int | None = None,
        preference_key: str = DEVICE_POWER_MODE_KEY,
    ):
        self.settings = settings or DeviceSettings()
        self.preference_key = preference_key
        self._root = Path(cpufreq_root) if cpufreq_root is not None else sysfs.cpufreq_root()
        self._core_count = int(core_count) if core_count is not None else sysfs.core_count()
        self._available_modes = self._initialize_available_modes()

    # ---- discovery

    def _initialize_available_modes(self) -> list[PowerMode]:
        governors = sysfs.read_available_governors(0, root=self._root)
        if governors is None:
            logger.error("Unable to read available governors from %s", sysfs.policy_path(0, root=self._root))
            return []
        modes = [mode for mode in MODE_ORDER if resolve_governor(mode, governors) is not None]
        logger.debug("Available power modes: %s (governors: %s)", [m.value for m in modes], governors)
        return modes

    @property
    def available_modes(self) -> list[PowerMode]:
        return list(self._available_modes)

    def governor_for_mode(self, mode: Union[PowerMode, str]) -> Optional[str]:
        governors = sysfs.read_available_governors(0, root=self._root)
        if governors is None:
            logger.error("Unable to read available governors.")
            return None
        return resolve_governor(mode, governors)

    def current_mode(self) -> Optional[str]:
        return self.settings.system.get_string(DEVICE_POWER_MODE_KEY)

    # ---- apply

    def apply_power_mode(self, power_mode: Union[PowerMode, str]) -> ApplyResult:
        """Switch every policy group to the governor for *power_mode*.

        Groups that cannot be read, have no matching governor, or reject the
        write are logged and skipped. The selection is persisted regardless,
        so the stored mode records what the user asked for, not what the
        hardware accepted.
        """

        parsed = PowerMode.parse(power_mode)
        mode_str = parsed.value if parsed is not None else str(power_mode)
        governor = self.governor_for_mode(mode_str)

        applied: list[int] = []
        unavailable: list[int] = []
        unresolved: list[int] = []
        failed: list[int] = []

        for index in range(self._core_count):
            if sysfs.read_available_governors(index, root=self._root) is None:
                unavailable.append(index)
                continue

            if governor is None:
                logger.error("No suitable governor found for power mode: %s", mode_str)
                unresolved.append(index)
                continue

            try:
                sysfs.write_scaling_governor(index, governor, root=self._root)
            except OSError as exc:
                failed.append(index)
                if is_permission_denied(exc):
                    logger.warning("Permission denied writing governor %s to policy%d: %s", governor, index, exc)
                elif is_not_found(exc):
                    logger.warning("policy%d disappeared before governor %s could be written: %s", index, governor, exc)
                elif is_invalid_value(exc):
                    logger.warning("policy%d rejected governor %s: %s", index, governor, exc)
                else:
                    logger.warning("Failed to write governor %s to policy%d: %s", governor, index, exc)
                continue

            applied.append(index)
            logger.debug("Applying governor: %s to policy%d", governor, index)

        self._persist(mode_str)

        result = ApplyResult(
            mode=mode_str,
            governor=governor,
            applied=tuple(applied),
            unavailable=tuple(unavailable),
            unresolved=tuple(unresolved),
            failed=tuple(failed),
        )
        logger.info(
            "Power mode %s: governor=%s applied=%s failed=%s",
            mode_str,
            governor,
            list(result.applied),
            list(result.failed),
        )
        return result

    def _persist(self, mode_str: str) -> None:
        if not self.settings.system.put_string(DEVICE_POWER_MODE_KEY, mode_str):
            logger.warning("Could not persist power mode %s", mode_str)
        if not self.settings.properties.put_string(DEVICE_POWER_MODE_PROPERTY, mode_str):
            logger.warning("Could not mirror power mode %s to %s", mode_str, DEVICE_POWER_MODE_PROPERTY)

    def restore_persisted_mode(self) -> Optional[ApplyResult]:
        """Re-apply the last selected mode, if any.

        The property mirror wins over the durable key since it reflects the
        most recent apply of this boot.
        """

        mode = self.settings.properties.get_string(DEVICE_POWER_MODE_PROPERTY) or self.current_mode()
        if not mode:
            logger.debug("No persisted power mode to restore")
            return None
        logger.info("Restoring power mode %s", mode)
        return self.apply_power_mode(mode)

    # ---- preference binding

    def preference_entries(self) -> list[tuple[str, str]]:
        """(label, value) pairs for the selectable modes."""

        return [(mode_label(mode), mode.value) for mode in self._available_modes]

    def update_state(self, preference: ListPreference) -> None:
        entries = self.preference_entries()
        preference.set_entries([label for label, _ in entries], [value for _, value in entries])
        preference.value = self.current_mode()
        preference.summary = preference.entry_for_value(preference.value)

    def on_preference_change(self, preference: ListPreference, new_value: str) -> bool:
        self.apply_power_mode(new_value)
        preference.value = new_value
        preference.summary = preference.entry_for_value(new_value)
        return True
