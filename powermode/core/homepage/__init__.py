from __future__ import annotations

from .preference import HomepagePreference
from .summary import (
    CONNECTED_DEVICES_KEY,
    NETWORK_KEY,
    HomepageSummarySource,
    NetworkStatus,
    format_network_status,
    mobile_type_label,
    strip_ssid_quotes,
    summary_visible,
)

__all__ = [
    "CONNECTED_DEVICES_KEY",
    "HomepagePreference",
    "HomepageSummarySource",
    "NETWORK_KEY",
    "NetworkStatus",
    "format_network_status",
    "mobile_type_label",
    "strip_ssid_quotes",
    "summary_visible",
]
