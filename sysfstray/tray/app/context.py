from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from sysfstray.core.attributes import AttributeDescriptor
from sysfstray.core.config.defaults import ICON_SIZE

from ..protocols import DisplayConnection, NotificationWatcher


@dataclass
class TrayContext:
    """Everything the tray runtime shares, owned by the event loop.

    Passed explicitly to the docker, renderer and loop instead of module
    globals.
    """

    descriptors: list[AttributeDescriptor]
    icon_size: int = ICON_SIZE
    display: Optional[DisplayConnection] = None
    watcher: Optional[NotificationWatcher] = None
    by_window: dict[int, AttributeDescriptor] = field(default_factory=dict)

    def bind_window(self, descriptor: AttributeDescriptor, window: int) -> None:
        if descriptor.window is not None:
            raise RuntimeError(f"{descriptor.path} already owns window {descriptor.window:#x}")
        descriptor.window = window
        self.by_window[window] = descriptor

    def descriptor_for_window(self, window: int) -> Optional[AttributeDescriptor]:
        return self.by_window.get(window)

    def descriptors_for_watch(self, wd: int) -> list[AttributeDescriptor]:
        if self.watcher is None:
            return []
        return self.watcher.descriptors_for(wd)
