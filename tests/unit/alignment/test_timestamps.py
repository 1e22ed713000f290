"""Tests for timestamp parsing."""

import math

import pytest

from speaker_align.alignment import parse_timestamp, first_timestamp, line_timing
from speaker_align.core import TranscriptLine


class TestParseTimestamp:
    def test_numeric_seconds(self):
        assert parse_timestamp(4) == 4.0
        assert parse_timestamp(2.5) == 2.5
        assert parse_timestamp(0) == 0.0

    def test_srt_comma_format(self):
        assert parse_timestamp("00:00:04,000") == 4.0
        assert parse_timestamp("01:02:03,250") == pytest.approx(3723.25)

    def test_dotted_format(self):
        assert parse_timestamp("00:01:02.500") == pytest.approx(62.5)

    def test_short_fraction_is_padded_to_millis(self):
        assert parse_timestamp("00:00:01,5") == pytest.approx(1.5)
        assert parse_timestamp("00:00:01.05") == pytest.approx(1.05)

    def test_single_digit_hours(self):
        assert parse_timestamp("1:00:00,000") == 3600.0

    def test_plain_decimal_string(self):
        assert parse_timestamp("12.75") == 12.75
        assert parse_timestamp(" 3 ") == 3.0

    def test_decimal_comma_string(self):
        assert parse_timestamp("3,5") == 3.5

    @pytest.mark.parametrize("value", [
        None, "", "   ", "abc", "00:xx:01,000", "-00:00:01,000", "-1", -2.0,
        float("nan"), float("inf"), True, [1], {"s": 1},
    ])
    def test_unparseable_returns_none(self, value):
        assert parse_timestamp(value) is None

    def test_never_returns_non_finite(self):
        for value in ("1e400", "inf", "nan"):
            result = parse_timestamp(value)
            assert result is None or math.isfinite(result)


class TestFirstTimestamp:
    def test_skips_unparseable_values(self):
        assert first_timestamp([None, "bad", "00:00:02,000", 5]) == 2.0

    def test_all_unparseable(self):
        assert first_timestamp([None, ""]) is None


class TestLineTiming:
    def test_window_and_midpoint(self):
        timing = line_timing(TranscriptLine(index=0, start=2.0, end=4.0))
        assert (timing.start, timing.end, timing.mid) == (2.0, 4.0, 3.0)

    def test_inverted_window_is_ordered(self):
        timing = line_timing(TranscriptLine(index=0, start=6.0, end=4.0))
        assert (timing.start, timing.end) == (4.0, 6.0)

    def test_accepts_raw_strings(self):
        timing = line_timing(TranscriptLine(index=0, start="00:00:01,000", end="00:00:03,000"))
        assert timing.mid == 2.0

    def test_missing_timing(self):
        assert line_timing(TranscriptLine(index=0, start=None, end=4.0)) is None
        assert line_timing(TranscriptLine(index=0, start="garbage", end=4.0)) is None
