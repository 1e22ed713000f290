"""Tests for fallback chain pattern."""

import pytest
from speaker_align.core import AlignmentError, NoDiarizationEvidence
from speaker_align.core.resilience import (
    FallbackChain,
    FallbackExhaustedError,
)


def fail(exc):
    def raiser(*args, **kwargs):
        raise exc
    return raiser


class TestFallbackChain:
    def test_first_option_succeeds(self):
        chain = FallbackChain("test")
        chain.add("primary", lambda: "primary_result")
        chain.add("backup", lambda: "backup_result")

        result = chain.execute()
        assert result == "primary_result"

    def test_falls_back_on_failure(self):
        chain = FallbackChain("test")
        chain.add("primary", fail(ValueError("fail")))
        chain.add("backup", lambda: "backup_result")

        result = chain.execute()
        assert result == "backup_result"

    def test_skips_unavailable_options(self):
        chain = FallbackChain("test")
        chain.add("unavailable", lambda: "should_skip", is_available=lambda: False)
        chain.add("available", lambda: "success")

        result = chain.execute()
        assert result == "success"

    def test_respects_priority_order(self):
        results = []

        chain = FallbackChain("test")
        chain.add("low", lambda: results.append("low") or "low", priority=2)
        chain.add("high", lambda: results.append("high") or "high", priority=0)
        chain.add("medium", lambda: results.append("medium") or "medium", priority=1)

        result = chain.execute()
        assert result == "high"
        assert results == ["high"]
        assert chain.options == ["high", "medium", "low"]

    def test_equal_priority_keeps_insertion_order(self):
        chain = FallbackChain("test")
        chain.add("diarization", lambda: 1)
        chain.add("names", lambda: 2)
        assert chain.options == ["diarization", "names"]

    def test_raises_when_all_fail(self):
        chain = FallbackChain("test")
        chain.add("first", fail(ValueError("fail1")))
        chain.add("second", fail(TypeError("fail2")))

        with pytest.raises(FallbackExhaustedError) as exc_info:
            chain.execute()

        assert exc_info.value.chain_name == "test"
        assert len(exc_info.value.errors) == 2
        assert "first: ValueError" in str(exc_info.value)

    def test_passes_arguments(self):
        chain = FallbackChain("test")
        chain.add("primary", lambda x, y: x + y)

        result = chain.execute(2, 3)
        assert result == 5

    def test_passes_kwargs(self):
        chain = FallbackChain("test")
        chain.add("primary", lambda name="default": f"Hello, {name}")

        result = chain.execute(name="World")
        assert result == "Hello, World"

    def test_empty_chain_raises(self):
        chain = FallbackChain("test")

        with pytest.raises(FallbackExhaustedError):
            chain.execute()

    def test_all_unavailable_raises(self):
        chain = FallbackChain("test")
        chain.add("first", lambda: "result", is_available=lambda: False)
        chain.add("second", lambda: "result", is_available=lambda: False)

        with pytest.raises(FallbackExhaustedError) as exc_info:
            chain.execute()
        assert exc_info.value.errors == []


class TestRecoverableErrors:
    def test_only_recoverable_errors_fall_through(self):
        chain = FallbackChain("test", recoverable=(AlignmentError,))
        chain.add("primary", fail(NoDiarizationEvidence("no segments")))
        chain.add("backup", lambda: "backup_result")

        assert chain.execute() == "backup_result"

    def test_other_errors_propagate(self):
        chain = FallbackChain("test", recoverable=(AlignmentError,))
        chain.add("primary", fail(KeyError("bug")))
        chain.add("backup", lambda: "backup_result")

        with pytest.raises(KeyError):
            chain.execute()

    def test_execute_named_reports_winner(self):
        chain = FallbackChain("test", recoverable=(AlignmentError,))
        chain.add("diarization", fail(AlignmentError("empty")))
        chain.add("names", lambda: "assigned")

        assert chain.execute_named() == ("assigned", "names")
