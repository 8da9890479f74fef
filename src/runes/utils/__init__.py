"""Utility modules for the runes front-end."""

from .rich_display import MatchDisplay, setup_rich_logging

__all__ = [
    "MatchDisplay",
    "setup_rich_logging",
]
