from __future__ import annotations

import errno
import os
from collections import deque
from pathlib import Path
from types import SimpleNamespace

import pytest

from sysfstray.core.logging_utils import reset_throttle


class FakeDisplay:
    """Records the requests the tray makes instead of talking to X."""

    def __init__(self, *, tray_owner: int | None = 0x500, screen_number: int = 0):
        self.screen_number = screen_number
        self.owners: dict[str, int] = {}
        if tray_owner is not None:
            self.owners[f"_NET_SYSTEM_TRAY_S{screen_number}"] = tray_owner
        self.calls: list[tuple] = []
        self.windows: list[int] = []
        self.properties: dict[tuple[int, str], tuple[str, list[int]]] = {}
        self.messages: list[tuple[int, str, list[int]]] = []
        self.images: list[tuple[int, object]] = []
        self.syncs = 0
        self.events: deque = deque()
        self.destroyed: list[int] = []
        self.closed = False
        self._next_id = 0x1000

    def fileno(self) -> int:
        return 10

    def selection_owner(self, selection: str):
        self.calls.append(("selection_owner", selection))
        return self.owners.get(selection)

    def create_window(self, size: int) -> int:
        wid = self._next_id
        self._next_id += 1
        self.windows.append(wid)
        self.calls.append(("create_window", wid, size))
        return wid

    def set_property32(self, window, name, type_name, values):
        self.properties[(window, name)] = (type_name, list(values))
        self.calls.append(("set_property32", window, name))

    def select_exposure(self, window):
        self.calls.append(("select_exposure", window))

    def map_window(self, window):
        self.calls.append(("map_window", window))

    def send_client_message(self, destination, message_type, data):
        self.messages.append((destination, message_type, list(data)))
        self.calls.append(("send_client_message", destination))

    def put_image(self, window, image):
        self.images.append((window, image))
        self.calls.append(("put_image", window))

    def sync(self):
        self.syncs += 1
        self.calls.append(("sync",))

    def poll_event(self):
        if not self.events:
            return None
        return self.events.popleft()

    def destroy_window(self, window):
        self.destroyed.append(window)

    def close(self):
        self.closed = True

    def images_for(self, window: int) -> list:
        return [img for wid, img in self.images if wid == window]


class FakeINotify:
    """In-memory stand-in for inotify_simple.INotify."""

    def __init__(self):
        self.watches: dict[int, str] = {}
        self.removed: list[int] = []
        self.queue: list[list] = []
        self.closed = False
        self._next_wd = 1

    def fileno(self) -> int:
        return 11

    def add_watch(self, path, mask) -> int:
        if not os.path.exists(path):
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), path)
        for wd, watched in self.watches.items():
            if watched == str(path):
                # Same inode: the kernel returns the existing wd.
                return wd
        wd = self._next_wd
        self._next_wd += 1
        self.watches[wd] = str(path)
        return wd

    def rm_watch(self, wd) -> None:
        self.removed.append(wd)
        self.watches.pop(wd, None)

    def push(self, *wds: int) -> None:
        """Queue one batch of change records."""

        self.queue.append([SimpleNamespace(wd=wd, mask=0x2, cookie=0, name="") for wd in wds])

    def read(self, timeout=None, read_delay=None) -> list:
        if not self.queue:
            return []
        return self.queue.pop(0)

    def close(self) -> None:
        self.closed = True


@pytest.fixture(autouse=True)
def _reset_log_throttle():
    reset_throttle()
    yield
    reset_throttle()


@pytest.fixture
def fake_display() -> FakeDisplay:
    return FakeDisplay()


@pytest.fixture
def fake_inotify() -> FakeINotify:
    return FakeINotify()


@pytest.fixture
def attr_file(tmp_path: Path):
    """Factory writing an attribute file and returning its path as str."""

    def _make(name: str, content: str) -> str:
        p = tmp_path / name
        p.write_text(content)
        return str(p)

    return _make
