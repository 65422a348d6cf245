"""`python -m powermode.tray` entrypoint.

For installed usage, prefer the `powermode-tray` console script.
"""

from __future__ import annotations

from .entrypoint import main


if __name__ == "__main__":
    main()
