from .bootstrap import configure_logging

__all__ = [
    "configure_logging",
]
