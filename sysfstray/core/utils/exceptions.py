from __future__ import annotations

import errno as _errno


class SysfsTrayError(RuntimeError):
    """Base class for errors raised by sysfs-tray."""


class ConfigError(SysfsTrayError):
    """A command-line attribute descriptor is missing or malformed."""


class DisplayConnectionError(SysfsTrayError):
    """The X server could not be reached (or the connection broke)."""


class NotificationStreamError(SysfsTrayError):
    """The inotify stream could not be created."""


class WatchRegistrationError(SysfsTrayError):
    """A single attribute file could not be watched.

    Never fatal: the attribute keeps its last read state and gets no live
    updates.
    """

    def __init__(self, path: str, reason: str):
        super().__init__(f"cannot watch {path} ({reason})")
        self.path = path
        self.reason = reason


class FatalWaitError(SysfsTrayError):
    """The readiness wait of the event loop failed for a non-signal reason."""


def is_interrupted(exc: BaseException) -> bool:
    """Best-effort check for a wait interrupted by a signal (EINTR)."""

    if isinstance(exc, InterruptedError):
        return True
    return getattr(exc, "errno", None) == _errno.EINTR


def is_permission_denied(exc: BaseException) -> bool:
    """Best-effort check for permission failures.

    inotify on some sysfs nodes and unreadable attribute files surface as
    PermissionError or a plain OSError carrying EPERM/EACCES.
    """

    if isinstance(exc, PermissionError):
        return True

    errno = getattr(exc, "errno", None)
    if errno in (_errno.EPERM, _errno.EACCES):
        return True

    try:
        msg = str(exc).lower()
    except Exception:
        return False

    return "permission denied" in msg or "not permitted" in msg


def describe_os_error(exc: BaseException) -> str:
    """Short human reason for an OSError, like C's strerror()."""

    strerror = getattr(exc, "strerror", None)
    if strerror:
        return str(strerror)
    if is_permission_denied(exc):
        return "Permission denied"
    return str(exc) or type(exc).__name__
