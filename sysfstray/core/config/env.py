"""Environment overrides.

Priority for every setting: environment variable, then the constant in
`defaults`.
"""

from __future__ import annotations

import logging
import os

from .defaults import ICON_SIZE


logger = logging.getLogger(__name__)


def debug_enabled() -> bool:
    return bool(os.environ.get("SYSFSTRAY_DEBUG"))


def icon_size() -> int:
    """Return the tray slot size.

    - SYSFSTRAY_ICON_SIZE (positive integer)
    - ICON_SIZE
    """

    raw = os.environ.get("SYSFSTRAY_ICON_SIZE")
    if not raw:
        return ICON_SIZE

    try:
        size = int(raw.strip())
    except ValueError:
        logger.warning("Ignoring invalid SYSFSTRAY_ICON_SIZE=%r", raw)
        return ICON_SIZE

    if size <= 0:
        logger.warning("Ignoring non-positive SYSFSTRAY_ICON_SIZE=%r", raw)
        return ICON_SIZE
    return size
