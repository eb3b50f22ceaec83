"""X11 connection wrapper (xcffib)."""

from .connection import XConnection

__all__ = ["XConnection"]
