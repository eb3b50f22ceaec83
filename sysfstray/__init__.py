"""sysfs-tray: one X11 system tray icon per boolean sysfs attribute."""

__version__ = "0.1.0"
