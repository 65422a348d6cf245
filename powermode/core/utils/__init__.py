from __future__ import annotations

from .exceptions import is_invalid_value, is_not_found, is_permission_denied
from .periodic import PeriodicTask

__all__ = [
    "PeriodicTask",
    "is_invalid_value",
    "is_not_found",
    "is_permission_denied",
]
