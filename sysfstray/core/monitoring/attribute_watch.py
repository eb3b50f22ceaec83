"""inotify-backed attribute watcher.

Holds the notification stream and one watch per attribute file, and applies
the update policy when a change record arrives:

- unreadable file: keep the cached state, no redraw;
- readable and different: store the new state, redraw;
- readable and equal: no redraw.

There is no polling fallback: an attribute whose watch could not be
registered keeps its last read state for the rest of the process.
"""

from __future__ import annotations

import logging
from typing import Callable, Iterable

from inotify_simple import INotify, flags

from sysfstray.core.attributes import AttributeDescriptor, AttrState
from sysfstray.core.logging_utils import log_throttled
from sysfstray.core.utils.exceptions import (
    NotificationStreamError,
    WatchRegistrationError,
    describe_os_error,
)

from .attribute_sysfs import read_state


logger = logging.getLogger(__name__)

WATCH_MASK = flags.MODIFY | flags.ATTRIB | flags.CLOSE_WRITE


def resolve_initial_states(descriptors: Iterable[AttributeDescriptor]) -> None:
    for d in descriptors:
        d.state = read_state(d.path)
        logger.debug("Initial state of %s: %s", d.path, d.state.value)


class AttributeWatcher:
    def __init__(self, stream, *, reader: Callable[[str], AttrState] = read_state):
        self._stream = stream
        self._reader = reader
        self._by_watch: dict[int, list[AttributeDescriptor]] = {}

    @classmethod
    def open(cls) -> "AttributeWatcher":
        try:
            stream = INotify(nonblocking=True)
        except OSError as exc:
            raise NotificationStreamError(f"inotify_init1: {describe_os_error(exc)}") from exc
        return cls(stream)

    def fileno(self) -> int:
        return self._stream.fileno()

    def _add_watch(self, descriptor: AttributeDescriptor) -> int:
        try:
            return self._stream.add_watch(descriptor.path, WATCH_MASK)
        except OSError as exc:
            raise WatchRegistrationError(descriptor.path, describe_os_error(exc)) from exc

    def register_watch(self, descriptor: AttributeDescriptor) -> bool:
        """Watch *descriptor*'s file for modify/attrib/close-write.

        Returns False (and logs a warning) when the watch cannot be added.
        """

        if descriptor.watch is not None:
            return True

        try:
            wd = self._add_watch(descriptor)
        except WatchRegistrationError as exc:
            logger.warning("%s", exc)
            return False

        # The kernel hands out one wd per inode, so several descriptors naming
        # the same file share it.
        descriptor.watch = wd
        self._by_watch.setdefault(wd, []).append(descriptor)
        return True

    def descriptors_for(self, wd: int) -> list[AttributeDescriptor]:
        return list(self._by_watch.get(wd, ()))

    def read_batch(self) -> list:
        """Return the change records currently queued (never blocks)."""

        return self._stream.read(timeout=0)

    def refresh(self, descriptor: AttributeDescriptor) -> bool:
        """Re-read *descriptor* and return True when it needs a redraw."""

        new_state = self._reader(descriptor.path)
        if new_state is AttrState.UNKNOWN:
            log_throttled(
                logger,
                f"unreadable:{descriptor.path}",
                interval_s=60.0,
                level=logging.DEBUG,
                msg="Cannot read %s; keeping %s",
                args=(descriptor.path, descriptor.state.value),
            )
            return False

        if new_state is descriptor.state:
            return False

        logger.debug("%s: %s -> %s", descriptor.path, descriptor.state.value, new_state.value)
        descriptor.state = new_state
        return True

    def close(self) -> None:
        for wd, descriptors in self._by_watch.items():
            try:
                self._stream.rm_watch(wd)
            except OSError:
                # Already gone (file removed -> IN_IGNORED).
                pass
            for d in descriptors:
                d.watch = None
        self._by_watch.clear()
        self._stream.close()
