"""Configuration for sysfs-tray.

Constants live in `defaults`; environment overrides in `env`.
"""

from __future__ import annotations

from .defaults import (
    DEFAULT_BG_ACTIVE,
    DEFAULT_BG_INACTIVE,
    DEFAULT_FG,
    ICON_SIZE,
    LABEL_MAX_CHARS,
    READ_MAX_BYTES,
)
from .env import debug_enabled, icon_size


__all__ = [
    "DEFAULT_BG_ACTIVE",
    "DEFAULT_BG_INACTIVE",
    "DEFAULT_FG",
    "ICON_SIZE",
    "LABEL_MAX_CHARS",
    "READ_MAX_BYTES",
    "debug_enabled",
    "icon_size",
]
