from __future__ import annotations

import time


_last_log_times: dict[str, float] = {}


def log_throttled(
    logger,
    key: str,
    *,
    interval_s: float,
    level: int,
    msg: str,
    args: tuple = (),
) -> bool:
    """Log at most once per *interval_s* for a given *key*.

    Returns True if the message was logged. The tray is single threaded, so
    the bookkeeping dict needs no lock.
    """

    now = time.monotonic()
    last = _last_log_times.get(key)
    if last is not None and (now - last) < interval_s:
        return False
    _last_log_times[key] = now

    logger.log(level, msg, *args)
    return True


def reset_throttle() -> None:
    """Forget all throttle timestamps (test hook)."""

    _last_log_times.clear()
