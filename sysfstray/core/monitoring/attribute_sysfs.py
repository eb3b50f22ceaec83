from __future__ import annotations

import re
from typing import Optional

from sysfstray.core.attributes import AttrState
from sysfstray.core.config.defaults import READ_MAX_BYTES


_LEADING_INT = re.compile(rb"\s*([+-]?\d+)")


def parse_leading_int(raw: bytes) -> int:
    """Parse a leading integer the way C atoi() does (no digits -> 0)."""

    m = _LEADING_INT.match(raw)
    if not m:
        return 0
    return int(m.group(1))


def read_raw(path: str, *, limit: int = READ_MAX_BYTES) -> Optional[bytes]:
    try:
        with open(path, "rb") as f:
            raw = f.read(limit)
    except OSError:
        return None
    return raw or None


def read_state(path: str) -> AttrState:
    """Read one boolean attribute file.

    Never raises: an unreadable or empty file is a normal transient
    condition and maps to UNKNOWN.
    """

    raw = read_raw(path)
    if raw is None:
        return AttrState.UNKNOWN
    return AttrState.ACTIVE if parse_leading_int(raw) != 0 else AttrState.INACTIVE
