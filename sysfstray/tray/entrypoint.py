"""Tray startup entrypoint.

This module owns the startup sequence (arguments, logging) and then launches
the `AttributeTray` application.

Exit codes: 1 for usage errors, for a missing X server or inotify, and for
unexpected errors; 0 when the event loop stops on a failed wait.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, Sequence

from sysfstray import __version__
from sysfstray.core.attributes import parse_descriptors
from sysfstray.core.config.defaults import DEFAULT_BG_ACTIVE, DEFAULT_BG_INACTIVE, DEFAULT_FG, LABEL_MAX_CHARS
from sysfstray.core.utils.exceptions import (
    ConfigError,
    DisplayConnectionError,
    FatalWaitError,
    NotificationStreamError,
)

from .app.application import AttributeTray
from .startup import configure_logging

logger = logging.getLogger(__name__)


_EPILOG = f"""\
Each attribute is PATH:LABEL:FG:BG1:BG0
  PATH   file containing 0 (inactive) or non-zero (active), e.g. a sysfs LED
  LABEL  up to {LABEL_MAX_CHARS} characters, shown only while active
  FG     label colour                 (default {DEFAULT_FG})
  BG1    background while active      (default {DEFAULT_BG_ACTIVE})
  BG0    background while inactive    (default {DEFAULT_BG_INACTIVE})

Colours are integer literals: hex 0xRRGGBB, decimal, or 0o/0b prefixed.
A leading zero is not octal: write 0o10, not 010.

Icons appear in the tray in the order given on the command line.
"""


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message: str):  # type: ignore[override]
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog="sysfs-tray",
        description="Show boolean sysfs attributes as system tray icons.",
        epilog=_EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("attributes", nargs="*", metavar="PATH:LABEL:FG:BG1:BG0")
    parser.add_argument("--display", default=None, help="X display to use (default: $DISPLAY)")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        descriptors = parse_descriptors(args.attributes)
    except ConfigError as exc:
        parser.error(str(exc))
        return

    configure_logging()
    app = AttributeTray(descriptors, display_name=args.display)
    try:
        app.run()
    except FatalWaitError as exc:
        logger.error("Event loop stopped: %s", exc)
    except (DisplayConnectionError, NotificationStreamError) as exc:
        logger.error("%s", exc)
        sys.exit(1)
    except Exception as exc:
        logger.exception("Unhandled error: %s", exc)
        sys.exit(1)
    finally:
        app.close()
