"""System tray docking (freedesktop System Tray Protocol + XEmbed).

The tray manager owns the selection ``_NET_SYSTEM_TRAY_S<screen>``. A client
docks a window by setting ``_XEMBED_INFO`` on it and sending the owner a
``_NET_SYSTEM_TRAY_OPCODE`` client message carrying SYSTEM_TRAY_REQUEST_DOCK
and the window id.

Trays append each newly docked icon at one end of their row, so windows are
docked in reverse input order to make the on-screen order match the
command line.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional

from sysfstray.core.attributes import AttributeDescriptor

from .app.context import TrayContext


logger = logging.getLogger(__name__)

TRAY_SELECTION = "_NET_SYSTEM_TRAY_S{screen}"
TRAY_OPCODE = "_NET_SYSTEM_TRAY_OPCODE"
XEMBED_INFO = "_XEMBED_INFO"

CURRENT_TIME = 0
SYSTEM_TRAY_REQUEST_DOCK = 0
XEMBED_VERSION = 0
XEMBED_FLAGS = 0


class TrayDocker:
    def locate_tray(self, ctx: TrayContext) -> Optional[int]:
        """Return the tray manager window, or None when no tray is running."""

        selection = TRAY_SELECTION.format(screen=ctx.display.screen_number)
        return ctx.display.selection_owner(selection)

    def create_and_dock(self, ctx: TrayContext, descriptor: AttributeDescriptor) -> bool:
        """Create *descriptor*'s window and ask the tray to embed it.

        Returns True when a dock request was sent. Without a tray the window
        still exists (unmanaged) and keeps receiving draws; docking is not
        retried later.
        """

        display = ctx.display
        window = display.create_window(ctx.icon_size)
        ctx.bind_window(descriptor, window)

        display.set_property32(window, XEMBED_INFO, XEMBED_INFO, [XEMBED_VERSION, XEMBED_FLAGS])
        display.select_exposure(window)
        display.map_window(window)

        tray = self.locate_tray(ctx)
        if tray is None:
            logger.debug("No system tray; %s stays undocked", descriptor.path)
            return False

        display.send_client_message(
            tray,
            TRAY_OPCODE,
            [CURRENT_TIME, SYSTEM_TRAY_REQUEST_DOCK, window, 0, 0],
        )
        return True

    def dock_all(
        self,
        ctx: TrayContext,
        *,
        on_created: Optional[Callable[[AttributeDescriptor], None]] = None,
    ) -> int:
        """Create and dock every descriptor's window in reverse order.

        *on_created* runs right after each window is docked (used to paint it).
        Returns how many dock requests were sent.
        """

        docked = 0
        for descriptor in reversed(ctx.descriptors):
            if self.create_and_dock(ctx, descriptor):
                docked += 1
            if on_created is not None:
                on_created(descriptor)

        if docked == 0 and ctx.descriptors:
            logger.info("No system tray found; icons are not docked")
        return docked
