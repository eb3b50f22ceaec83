"""Default configuration values.

Split out from `sysfstray.core.config` so the constants can be imported
without pulling in environment handling.
"""

from __future__ import annotations

# Tray slot size in pixels. Most trays (JWM, stalonetray, trayer) use 24.
ICON_SIZE = 24

# Visible label length; longer labels are silently truncated.
LABEL_MAX_CHARS = 7

# Attribute files hold a short integer ("0\n", "1\n").
READ_MAX_BYTES = 7

DEFAULT_FG = "0x000000"
DEFAULT_BG_ACTIVE = "0xFFFFFF"
DEFAULT_BG_INACTIVE = "0x303030"

# Label origin: left offset and distance of the text baseline from the bottom.
LABEL_LEFT = 3
LABEL_BASELINE_FROM_BOTTOM = 8
