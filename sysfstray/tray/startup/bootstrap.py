from __future__ import annotations

import logging

from sysfstray.core.config.env import debug_enabled


def configure_logging() -> None:
    """Configure root logging for the tray.

    If callers already configured logging handlers, we don't override them.
    """

    if logging.getLogger().handlers:
        return

    level = logging.DEBUG if debug_enabled() else logging.INFO
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")
