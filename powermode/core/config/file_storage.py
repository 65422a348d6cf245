from __future__ import annotations

import json
import os
import tempfile
import time
from pathlib import Path
from typing import Any


def load_json_settings(
    *,
    path: Path,
    defaults: dict[str, Any],
    retries: int = 3,
    retry_delay: float = 0.02,
    logger,
) -> dict[str, Any] | None:
    """Load a JSON settings file with retries for transient partial writes.

    Returns a merged dict of `{**defaults, **loaded}` when successful.
    Returns a copy of `defaults` when the file does not exist.
    Returns None when loading fails after retries.
    """

    if not path.exists():
        return dict(defaults)

    last_error: Exception | None = None
    for _ in range(max(1, retries)):
        try:
            with open(path, "r", encoding="utf-8") as f:
                loaded = json.load(f)
            if not isinstance(loaded, dict):
                loaded = {}
            return {**defaults, **loaded}
        except json.JSONDecodeError as e:
            last_error = e
            time.sleep(retry_delay)
        except (OSError, UnicodeDecodeError) as e:
            last_error = e
            break

    logger.warning("Failed to load %s: %s", path, last_error)
    return None


def save_json_settings_atomic(*, path: Path, settings: dict[str, Any], logger) -> bool:
    """Save a JSON settings file atomically (write temp file then replace).

    Returns False (after logging) when the file could not be written.
    """

    directory = path.parent
    try:
        directory.mkdir(parents=True, exist_ok=True)

        tmp_fd, tmp_path = tempfile.mkstemp(prefix=f"{path.stem}.", suffix=".tmp", dir=str(directory))
        try:
            with os.fdopen(tmp_fd, "w", encoding="utf-8") as f:
                json.dump(settings, f, indent=2, sort_keys=True)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, path)
        finally:
            try:
                if os.path.exists(tmp_path):
                    os.unlink(tmp_path)
            except OSError as exc:
                logger.debug("Failed to remove temp settings file %s: %s", tmp_path, exc)

    except (OSError, TypeError, ValueError) as e:
        logger.warning("Failed to save %s: %s", path, e)
        return False
    return True
