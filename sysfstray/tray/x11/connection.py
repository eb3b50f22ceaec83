"""Minimal X11 client used by the tray.

Wraps an xcffib connection and exposes only the requests the tray needs:
atoms, selection lookup, window creation, properties, client messages,
image upload and event polling.
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence

import xcffib
import xcffib.xproto
from PIL import Image
from xcffib.xproto import CW, EventMask, ExposeEvent, ImageFormat, ImageOrder, PropMode, WindowClass

from sysfstray.core.utils.exceptions import DisplayConnectionError

from ..protocols import EXPOSE, OTHER, WindowEvent


logger = logging.getLogger(__name__)


class XConnection:
    def __init__(self, conn):
        self._conn = conn
        self._core = conn.core
        setup = conn.get_setup()
        self.screen_number: int = conn.pref_screen
        self._screen = setup.roots[self.screen_number]
        self._check_pixmap_format(setup)
        # Byte order of 32-bit ZPixmap pixels follows the server.
        self._raw_mode = "XRGB" if setup.image_byte_order == ImageOrder.MSBFirst else "BGRX"
        self._atoms: dict[str, int] = {}
        self._gcs: dict[int, int] = {}
        self._broken = False

    @classmethod
    def open(cls, display: Optional[str] = None) -> "XConnection":
        try:
            conn = xcffib.connect(display=display)
        except xcffib.ConnectionException as exc:
            raise DisplayConnectionError(f"cannot open display {display or '(default)'}: {exc}") from exc
        try:
            return cls(conn)
        except DisplayConnectionError:
            conn.disconnect()
            raise

    def _check_pixmap_format(self, setup) -> None:
        """Icons are uploaded as 32 bits per pixel; refuse any other layout."""

        depth = self._screen.root_depth
        for fmt in setup.pixmap_formats:
            if fmt.depth == depth:
                if fmt.bits_per_pixel != 32:
                    raise DisplayConnectionError(
                        f"unsupported root depth {depth}: {fmt.bits_per_pixel} bits per pixel, need 32"
                    )
                return
        raise DisplayConnectionError(f"unsupported root depth {depth}: no pixmap format")

    def fileno(self) -> int:
        return self._conn.get_file_descriptor()

    def atom(self, name: str) -> int:
        cached = self._atoms.get(name)
        if cached is not None:
            return cached
        value = self._core.InternAtom(False, len(name), name).reply().atom
        self._atoms[name] = value
        return value

    def selection_owner(self, selection: str) -> Optional[int]:
        owner = self._core.GetSelectionOwner(self.atom(selection)).reply().owner
        return owner or None

    def create_window(self, size: int) -> int:
        wid = self._conn.generate_id()
        self._core.CreateWindow(
            self._screen.root_depth,
            wid,
            self._screen.root,
            0,
            0,
            size,
            size,
            0,
            WindowClass.InputOutput,
            self._screen.root_visual,
            CW.BackPixel | CW.BorderPixel,
            [self._screen.black_pixel, self._screen.black_pixel],
        )
        return wid

    def set_property32(self, window: int, name: str, type_name: str, values: Sequence[int]) -> None:
        values = list(values)
        self._core.ChangeProperty(
            PropMode.Replace,
            window,
            self.atom(name),
            self.atom(type_name),
            32,
            len(values),
            values,
        )

    def select_exposure(self, window: int) -> None:
        self._core.ChangeWindowAttributes(window, CW.EventMask, [EventMask.Exposure])

    def map_window(self, window: int) -> None:
        self._core.MapWindow(window)

    def send_client_message(self, destination: int, message_type: str, data: Sequence[int]) -> None:
        longs = (list(data) + [0] * 5)[:5]
        union = xcffib.xproto.ClientMessageData.synthetic(longs, "I" * 5)
        event = xcffib.xproto.ClientMessageEvent.synthetic(
            format=32,
            window=destination,
            type=self.atom(message_type),
            data=union,
        )
        self._core.SendEvent(False, destination, EventMask.NoEvent, event.pack())

    def _gc_for(self, window: int) -> int:
        gc = self._gcs.get(window)
        if gc is None:
            gc = self._conn.generate_id()
            self._core.CreateGC(gc, window, 0, [])
            self._gcs[window] = gc
        return gc

    def put_image(self, window: int, image: Image.Image) -> None:
        width, height = image.size
        data = image.convert("RGB").tobytes("raw", self._raw_mode)
        self._core.PutImage(
            ImageFormat.ZPixmap,
            window,
            self._gc_for(window),
            width,
            height,
            0,
            0,
            0,
            self._screen.root_depth,
            len(data),
            data,
        )

    def _lost(self, exc: Exception) -> DisplayConnectionError:
        self._broken = True
        return DisplayConnectionError(f"X connection lost: {exc}")

    def sync(self) -> None:
        """Flush and wait for a round trip so earlier requests are processed."""

        try:
            self._core.GetInputFocus().reply()
        except xcffib.ConnectionException as exc:
            raise self._lost(exc) from exc

    def poll_event(self) -> Optional[WindowEvent]:
        try:
            event = self._conn.poll_for_event()
        except xcffib.ConnectionException as exc:
            raise self._lost(exc) from exc
        except xcffib.ProtocolException as exc:
            logger.warning("Ignoring X protocol error: %s", exc)
            return WindowEvent(OTHER)

        if event is None:
            return None
        if isinstance(event, ExposeEvent):
            return WindowEvent(EXPOSE, event.window)
        return WindowEvent(OTHER, getattr(event, "window", 0))

    def destroy_window(self, window: int) -> None:
        gc = self._gcs.pop(window, None)
        if self._broken:
            return
        if gc is not None:
            self._core.FreeGC(gc)
        self._core.DestroyWindow(window)

    def close(self) -> None:
        if not self._broken:
            self._conn.flush()
        self._conn.disconnect()
