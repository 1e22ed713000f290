"""Resilience patterns for graceful degradation."""

from speaker_align.core.resilience.fallback import (
    FallbackChain,
    FallbackOption,
    FallbackExhaustedError,
)

__all__ = [
    "FallbackChain",
    "FallbackOption",
    "FallbackExhaustedError",
]
