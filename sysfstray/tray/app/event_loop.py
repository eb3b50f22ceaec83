"""Single-threaded dispatch loop.

Blocks (no timeout) until the X connection or the inotify stream is
readable, then dispatches:

- X: drain every pending event; Expose repaints the owning icon.
- inotify: read one batch; each record re-reads its attribute and repaints
  only when the state actually changed.

X events are always drained before notification records in the same wake.
"""

from __future__ import annotations

import logging
import selectors
from typing import Callable

from sysfstray.core.utils.exceptions import FatalWaitError, is_interrupted

from ..protocols import EXPOSE
from ..ui.icon_draw import IconRenderer
from .context import TrayContext


logger = logging.getLogger(__name__)

DISPLAY = "display"
NOTIFY = "notify"


class EventLoop:
    def __init__(
        self,
        ctx: TrayContext,
        *,
        renderer: IconRenderer,
        selector_factory: Callable[[], selectors.BaseSelector] = selectors.DefaultSelector,
    ):
        self.ctx = ctx
        self.renderer = renderer
        self._selector_factory = selector_factory

    def run(self) -> None:
        """Dispatch forever; only returns by raising FatalWaitError."""

        with self._selector_factory() as selector:
            selector.register(self.ctx.display.fileno(), selectors.EVENT_READ, DISPLAY)
            selector.register(self.ctx.watcher.fileno(), selectors.EVENT_READ, NOTIFY)

            while True:
                # Replies read during a sync can leave events queued in the
                # client library with nothing left on the socket.
                self.drain_display()
                self.dispatch(self.wait(selector))

    def wait(self, selector: selectors.BaseSelector) -> set[str]:
        while True:
            try:
                ready = selector.select()
            except OSError as exc:
                if is_interrupted(exc):
                    continue
                raise FatalWaitError(f"select: {exc}") from exc
            return {key.data for key, _mask in ready}

    def dispatch(self, ready: set[str]) -> None:
        if DISPLAY in ready:
            self.drain_display()
        if NOTIFY in ready:
            self.process_notifications()

    def drain_display(self) -> int:
        """Handle every pending X event. Returns the number of repaints."""

        repaints = 0
        while True:
            event = self.ctx.display.poll_event()
            if event is None:
                return repaints
            if event.kind != EXPOSE:
                continue

            descriptor = self.ctx.descriptor_for_window(event.window)
            if descriptor is None:
                continue
            self.renderer.draw(self.ctx, descriptor)
            repaints += 1

    def process_notifications(self) -> int:
        """Apply one batch of inotify records. Returns the number of repaints."""

        watcher = self.ctx.watcher
        repaints = 0
        for record in watcher.read_batch():
            for descriptor in self.ctx.descriptors_for_watch(record.wd):
                if watcher.refresh(descriptor):
                    self.renderer.draw(self.ctx, descriptor)
                    repaints += 1
        return repaints
