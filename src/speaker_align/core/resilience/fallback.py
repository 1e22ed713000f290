"""Fallback chain pattern for graceful degradation."""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Generic, List, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class FallbackOption:
    """A single fallback option in the chain."""
    name: str
    func: Callable[..., Any]
    is_available: Callable[[], bool] = lambda: True
    priority: int = 0  # Lower = higher priority


class FallbackExhaustedError(Exception):
    """Raised when all fallback options have failed."""

    def __init__(self, chain_name: str, errors: List[tuple]):
        self.chain_name = chain_name
        self.errors = errors  # List of (option_name, exception)

        error_summary = "; ".join(
            f"{name}: {type(e).__name__}" for name, e in errors
        )
        super().__init__(
            f"All fallbacks exhausted for '{chain_name}': {error_summary}"
        )


class FallbackChain(Generic[T]):
    """
    Execute a chain of fallback options until one succeeds.

    Only exceptions of the types in `recoverable` move the chain on to the
    next option; anything else propagates unchanged.

    Usage:
        chain = FallbackChain("speaker_assignment", recoverable=(AlignmentError,))
        chain.add("diarization", diarized.assign, is_available=lambda: bool(segments))
        chain.add("names", by_name.assign)

        assignment = chain.execute(lines, segments)
    """

    def __init__(self, name: str, recoverable: tuple = (Exception,)):
        self.name = name
        self.recoverable = recoverable
        self._options: List[FallbackOption] = []

    def add(
        self,
        name: str,
        func: Callable[..., T],
        is_available: Callable[[], bool] = lambda: True,
        priority: int = 0,
    ) -> "FallbackChain[T]":
        """Add a fallback option to the chain."""
        self._options.append(FallbackOption(
            name=name,
            func=func,
            is_available=is_available,
            priority=priority,
        ))
        # Stable sort keeps insertion order within a priority
        self._options.sort(key=lambda x: x.priority)
        return self

    @property
    def options(self) -> list[str]:
        return [option.name for option in self._options]

    def execute(self, *args, **kwargs) -> T:
        """Run options in priority order and return the first result.

        Raises:
            FallbackExhaustedError: If no option is available or all fail
        """
        result, _ = self.execute_named(*args, **kwargs)
        return result

    def execute_named(self, *args, **kwargs) -> tuple[T, str]:
        """Like `execute`, but also return the name of the option that won."""
        errors: List[tuple] = []

        for option in self._options:
            if not option.is_available():
                logger.debug(
                    f"Fallback '{option.name}' in chain '{self.name}' "
                    "is not available, skipping"
                )
                continue

            try:
                logger.debug(
                    f"Trying fallback '{option.name}' in chain '{self.name}'"
                )
                result = option.func(*args, **kwargs)
                logger.debug(
                    f"Fallback '{option.name}' in chain '{self.name}' succeeded"
                )
                return result, option.name
            except self.recoverable as e:
                logger.warning(
                    f"Fallback '{option.name}' in chain '{self.name}' "
                    f"failed: {e}"
                )
                errors.append((option.name, e))

        raise FallbackExhaustedError(self.name, errors)
