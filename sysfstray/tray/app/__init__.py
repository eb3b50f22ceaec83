"""Tray runtime: context object, event loop and the application class.

Kept import-free so `sysfstray.tray.docking` can import the context without
pulling in the application module.
"""
