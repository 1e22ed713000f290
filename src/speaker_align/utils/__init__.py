"""Utilities: logging, decorators."""

from speaker_align.utils.logging import setup_logging, get_logger
from speaker_align.utils.decorators import timed, logged

__all__ = [
    "setup_logging",
    "get_logger",
    "timed",
    "logged",
]
