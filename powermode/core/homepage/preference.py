from __future__ import annotations

import logging
from typing import Optional

from ..preferences import Preference
from ..utils.periodic import PeriodicTask
from .summary import HomepageSummarySource, summary_visible

logger = logging.getLogger(__name__)


class HomepagePreference:
    """Top-level entry whose summary tracks live connectivity.

    Binding starts a refresh timer; `on_detached()` must be called when the
    entry goes away so the timer does not outlive it.
    """

    def __init__(
        self,
        preference: Preference,
        *,
        source: HomepageSummarySource | None = None,
        interval_s: float = 2.0,
        initial_delay_s: float = 1.0,
    ):
        self.preference = preference
        self._source = source or HomepageSummarySource()
        self._bound = False
        self._task = PeriodicTask(
            self.notify_changes,
            interval_s=interval_s,
            initial_delay_s=initial_delay_s,
            name=f"homepage-{preference.key}",
        )

    @property
    def refreshing(self) -> bool:
        return self._task.running

    def on_bind(self) -> None:
        self._bound = True
        self.preference.summary_visible = summary_visible(self.preference.key)
        self._task.start()

    def notify_changes(self) -> Optional[str]:
        if not self._bound:
            return None
        summary = self._source.summary_for(self.preference.key)
        if summary is not None and summary != self.preference.summary:
            logger.debug("Summary for %s: %s", self.preference.key, summary)
            self.preference.summary = summary
        return summary

    def on_detached(self) -> None:
        self._bound = False
        self._task.stop()
