"""Tray application implementation.

Docking, icon rendering and the event loop live here; attribute reading and
watching live in `sysfstray.core`.
"""
