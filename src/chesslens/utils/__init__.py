"""Utility exports for the chesslens package."""

from .logger import get_logger, resolve_level, set_level

__all__ = [
    "get_logger",
    "resolve_level",
    "set_level",
]
