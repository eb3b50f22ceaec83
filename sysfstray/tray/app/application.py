"""Tray application class.

Startup order:

1. read every attribute once (initial states);
2. connect to the X server;
3. create, dock and paint one window per attribute, in reverse input order;
4. open the inotify stream and watch every attribute file;
5. run the event loop.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional, Sequence

from sysfstray.core.attributes import AttributeDescriptor
from sysfstray.core.config.env import icon_size as configured_icon_size
from sysfstray.core.monitoring.attribute_watch import AttributeWatcher, resolve_initial_states

from ..docking import TrayDocker
from ..protocols import DisplayConnection, NotificationWatcher
from ..ui.icon_draw import IconRenderer
from ..x11.connection import XConnection
from .context import TrayContext
from .event_loop import EventLoop


logger = logging.getLogger(__name__)


class AttributeTray:
    """One tray icon per attribute descriptor."""

    def __init__(
        self,
        descriptors: Sequence[AttributeDescriptor],
        *,
        display_name: Optional[str] = None,
        icon_size: Optional[int] = None,
        display_factory: Callable[[Optional[str]], DisplayConnection] = XConnection.open,
        watcher_factory: Callable[[], NotificationWatcher] = AttributeWatcher.open,
        docker: Optional[TrayDocker] = None,
        renderer: Optional[IconRenderer] = None,
        loop_factory: Callable[..., EventLoop] = EventLoop,
    ):
        size = icon_size if icon_size is not None else configured_icon_size()
        self.ctx = TrayContext(descriptors=list(descriptors), icon_size=size)
        self.display_name = display_name
        self.docker = docker or TrayDocker()
        self.renderer = renderer or IconRenderer(size)
        self._display_factory = display_factory
        self._watcher_factory = watcher_factory
        self._loop_factory = loop_factory
        self._closed = False

    def start(self) -> None:
        ctx = self.ctx
        resolve_initial_states(ctx.descriptors)

        ctx.display = self._display_factory(self.display_name)
        self.docker.dock_all(ctx, on_created=lambda d: self.renderer.draw(ctx, d))

        ctx.watcher = self._watcher_factory()
        watched = sum(1 for d in ctx.descriptors if ctx.watcher.register_watch(d))
        logger.info("Tracking %d attribute(s), %d with live updates", len(ctx.descriptors), watched)

    def run(self) -> None:
        """Start up and dispatch until a fatal wait error (FatalWaitError)."""

        self.start()
        self._loop_factory(self.ctx, renderer=self.renderer).run()

    def close(self) -> None:
        """Release watches, windows and connections. Safe to call twice."""

        if self._closed:
            return
        self._closed = True

        ctx = self.ctx
        if ctx.watcher is not None:
            ctx.watcher.close()
            ctx.watcher = None

        if ctx.display is not None:
            try:
                for window in list(ctx.by_window):
                    ctx.display.destroy_window(window)
            finally:
                ctx.display.close()
                ctx.display = None
