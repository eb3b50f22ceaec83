"""Attribute file monitoring (reads + inotify watches)."""

from __future__ import annotations

from .attribute_sysfs import read_state
from .attribute_watch import AttributeWatcher, resolve_initial_states


__all__ = ["AttributeWatcher", "read_state", "resolve_initial_states"]
