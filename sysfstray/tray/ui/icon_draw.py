from __future__ import annotations

import logging
from functools import lru_cache

from PIL import Image, ImageDraw, ImageFont

from sysfstray.core.attributes import AttributeDescriptor, rgb
from sysfstray.core.config.defaults import ICON_SIZE, LABEL_BASELINE_FROM_BOTTOM, LABEL_LEFT


logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def _label_font():
    return ImageFont.load_default()


def _label_top(font, size: int) -> int:
    baseline = size - LABEL_BASELINE_FROM_BOTTOM
    try:
        ascent, _ = font.getmetrics()
    except AttributeError:
        # Bitmap fonts have no metrics; the glyph box of a capital is close enough.
        ascent = font.getbbox("A")[3]
    return max(0, baseline - ascent)


def render_icon(descriptor: AttributeDescriptor, size: int = ICON_SIZE) -> Image.Image:
    """Return the icon for *descriptor*'s cached state.

    Background is bg_active when active, bg_inactive otherwise (unknown looks
    inactive). The label is only drawn, in fg, when active.
    """

    img = Image.new("RGB", (size, size), color=rgb(descriptor.background))
    if descriptor.is_active and descriptor.label:
        draw = ImageDraw.Draw(img)
        # No antialiasing: pixels are either background or fg.
        draw.fontmode = "1"
        font = _label_font()
        draw.text((LABEL_LEFT, _label_top(font, size)), descriptor.label, fill=rgb(descriptor.fg), font=font)
    return img


class IconRenderer:
    def __init__(self, size: int = ICON_SIZE):
        self.size = size

    def render(self, descriptor: AttributeDescriptor) -> Image.Image:
        return render_icon(descriptor, self.size)

    def draw(self, ctx, descriptor: AttributeDescriptor) -> None:
        """Paint *descriptor*'s window and wait until the server has it."""

        if descriptor.window is None:
            logger.debug("No window for %s yet; skipping draw", descriptor.path)
            return

        ctx.display.put_image(descriptor.window, self.render(descriptor))
        ctx.display.sync()
