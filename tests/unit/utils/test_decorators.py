"""Tests for logging decorators."""

import logging

import pytest

from speaker_align.utils import get_logger, logged, timed


class TestTimed:
    def test_returns_result_and_logs_duration(self, caplog):
        @timed
        def add(x, y):
            return x + y

        with caplog.at_level(logging.DEBUG, logger="speaker_align.utils.decorators"):
            assert add(2, 3) == 5

        assert "add completed in" in caplog.text
        assert add.__name__ == "add"


class TestLogged:
    def test_logs_success(self, caplog):
        @logged
        def greet(name):
            return f"Hallo {name}"

        with caplog.at_level(logging.DEBUG, logger="speaker_align.utils.decorators"):
            assert greet("Anna") == "Hallo Anna"

        assert "greet succeeded" in caplog.text

    def test_logs_and_reraises_failure(self, caplog):
        @logged
        def broken():
            raise ValueError("boom")

        with caplog.at_level(logging.DEBUG, logger="speaker_align.utils.decorators"):
            with pytest.raises(ValueError, match="boom"):
                broken()

        assert "broken failed: boom" in caplog.text


def test_get_logger_uses_module_name():
    assert get_logger("speaker_align.alignment").name == "speaker_align.alignment"
