from __future__ import annotations

import errno as _errno


def is_permission_denied(exc: BaseException) -> bool:
    """Best-effort check for permission/authorization failures.

    Used to word log messages when a governor write is rejected because the
    process is not privileged enough to write sysfs.
    """

    if isinstance(exc, PermissionError):
        return True

    code = getattr(exc, "errno", None)
    if code in (_errno.EPERM, _errno.EACCES):
        return True

    try:
        msg = str(exc).lower()
    except Exception:
        return False

    return "permission denied" in msg or "not permitted" in msg


def is_not_found(exc: BaseException) -> bool:
    """Best-effort check for a vanished sysfs node (hotplugged CPU, missing policy)."""

    if isinstance(exc, FileNotFoundError):
        return True

    return getattr(exc, "errno", None) in (_errno.ENOENT, _errno.ENODEV)


def is_invalid_value(exc: BaseException) -> bool:
    """The kernel rejects unknown governor names with EINVAL."""

    return getattr(exc, "errno", None) == _errno.EINVAL
