"""`python -m sysfstray.tray` entrypoint.

For installed usage, prefer the `sysfs-tray` console script.
"""

from __future__ import annotations

from .entrypoint import main


if __name__ == "__main__":
    main()
