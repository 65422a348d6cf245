"""Tray application implementation.

Holds the power mode tile state machine and its pystray front-end.
"""

from .application import PowerModeTray
from .entrypoint import main

__all__ = ["PowerModeTray", "main"]
