"""Reusable decorators for logging and timing."""

import functools
import time
import logging
from typing import Callable, TypeVar, ParamSpec

P = ParamSpec("P")
R = TypeVar("R")

logger = logging.getLogger(__name__)


def timed(func: Callable[P, R]) -> Callable[P, R]:
    """Log execution time of a function."""
    @functools.wraps(func)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
        start = time.perf_counter()
        result = func(*args, **kwargs)
        elapsed = time.perf_counter() - start
        logger.debug(f"{func.__qualname__} completed in {elapsed * 1000:.1f}ms")
        return result
    return wrapper


def logged(func: Callable[P, R]) -> Callable[P, R]:
    """Log function entry and exit."""
    @functools.wraps(func)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
        logger.debug(f"{func.__qualname__} called")
        try:
            result = func(*args, **kwargs)
            logger.debug(f"{func.__qualname__} succeeded")
            return result
        except Exception as e:
            logger.error(f"{func.__qualname__} failed: {e}")
            raise
    return wrapper
