"""Typed interfaces for the tray runtime.

The event loop, docker and renderer only talk to the X server and the
notification stream through these Protocols, so tests can substitute small
fakes for xcffib and inotify.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional, Protocol, Sequence, runtime_checkable


if TYPE_CHECKING:
    from PIL import Image

    from sysfstray.core.attributes import AttributeDescriptor


EXPOSE = "expose"
OTHER = "other"


@dataclass(frozen=True)
class WindowEvent:
    """An X event reduced to what the dispatch loop looks at."""

    kind: str
    window: int = 0


@runtime_checkable
class DisplayConnection(Protocol):
    screen_number: int

    def fileno(self) -> int: ...

    def selection_owner(self, selection: str) -> Optional[int]: ...

    def create_window(self, size: int) -> int: ...

    def set_property32(self, window: int, name: str, type_name: str, values: Sequence[int]) -> None: ...

    def select_exposure(self, window: int) -> None: ...

    def map_window(self, window: int) -> None: ...

    def send_client_message(self, destination: int, message_type: str, data: Sequence[int]) -> None: ...

    def put_image(self, window: int, image: "Image.Image") -> None: ...

    def sync(self) -> None: ...

    def poll_event(self) -> Optional[WindowEvent]: ...

    def destroy_window(self, window: int) -> None: ...

    def close(self) -> None: ...


@runtime_checkable
class NotificationWatcher(Protocol):
    def fileno(self) -> int: ...

    def register_watch(self, descriptor: "AttributeDescriptor") -> bool: ...

    def descriptors_for(self, wd: int) -> list["AttributeDescriptor"]: ...

    def read_batch(self) -> list: ...

    def refresh(self, descriptor: "AttributeDescriptor") -> bool: ...

    def close(self) -> None: ...
