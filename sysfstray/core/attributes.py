"""Attribute descriptors.

One descriptor per tracked boolean file. Command-line arguments use the form::

    PATH:LABEL:FG:BG1:BG0

where FG/BG1/BG0 are integer literals (``0xRRGGBB``, decimal, ...). Empty or
missing colour fields take the defaults from `sysfstray.core.config`.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional

from sysfstray.core.config.defaults import (
    DEFAULT_BG_ACTIVE,
    DEFAULT_BG_INACTIVE,
    DEFAULT_FG,
    LABEL_MAX_CHARS,
)
from sysfstray.core.utils.exceptions import ConfigError


class AttrState(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    UNKNOWN = "unknown"


@dataclass
class AttributeDescriptor:
    path: str
    label: str
    fg: int
    bg_active: int
    bg_inactive: int
    state: AttrState = AttrState.UNKNOWN

    # inotify watch descriptor; None when registration failed.
    watch: Optional[int] = None

    # X window id; assigned once by the tray docker.
    window: Optional[int] = None

    def __post_init__(self) -> None:
        self.label = self.label[:LABEL_MAX_CHARS]

    @property
    def is_active(self) -> bool:
        return self.state is AttrState.ACTIVE

    @property
    def background(self) -> int:
        # UNKNOWN intentionally shares the inactive look.
        return self.bg_active if self.is_active else self.bg_inactive


def parse_color(raw: Optional[str], default: str, *, field: str = "colour") -> int:
    """Parse a 24-bit colour literal, substituting *default* when empty."""

    text = (raw or "").strip() or default
    try:
        value = int(text, 0)
    except ValueError:
        raise ConfigError(f"invalid {field} value {text!r}") from None

    if not 0 <= value <= 0xFFFFFF:
        raise ConfigError(f"{field} value {text!r} is outside 0x000000-0xFFFFFF")
    return value


def parse_descriptor(arg: str) -> AttributeDescriptor:
    # Fields past BG0 are ignored.
    parts = arg.split(":")[:5]
    parts += [""] * (5 - len(parts))
    path, label, fg, bg_active, bg_inactive = parts

    if not path:
        raise ConfigError(f"missing PATH in {arg!r}")

    return AttributeDescriptor(
        path=path,
        label=label,
        fg=parse_color(fg, DEFAULT_FG, field="FG"),
        bg_active=parse_color(bg_active, DEFAULT_BG_ACTIVE, field="BG1"),
        bg_inactive=parse_color(bg_inactive, DEFAULT_BG_INACTIVE, field="BG0"),
    )


def parse_descriptors(args: Iterable[str]) -> list[AttributeDescriptor]:
    descriptors = [parse_descriptor(a) for a in args]
    if not descriptors:
        raise ConfigError("at least one PATH:LABEL:FG:BG1:BG0 argument is required")
    return descriptors


def rgb(value: int) -> tuple[int, int, int]:
    """Split a 0xRRGGBB integer into an (r, g, b) tuple."""

    return ((value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF)
