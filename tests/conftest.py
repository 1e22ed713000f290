"""Shared test fixtures."""

import pytest

from speaker_align.core import TranscriptLine
from speaker_align.transcript import lines_from_records


def make_lines(*windows, texts=None):
    """Build lines from (start, end) pairs."""
    texts = texts or [f"line {i}" for i in range(len(windows))]
    return [
        TranscriptLine(index=i, start=start, end=end, text=text)
        for i, ((start, end), text) in enumerate(zip(windows, texts))
    ]


@pytest.fixture
def line_factory():
    """Factory building transcript lines from (start, end) pairs."""
    return make_lines


@pytest.fixture
def interview_lines():
    """Three four-second SRT lines: host intro, guest answer, follow-up."""
    return lines_from_records([
        {"startTime": "00:00:00,000", "endTime": "00:00:04,000", "text": "Intro"},
        {"startTime": "00:00:04,000", "endTime": "00:00:08,000", "text": "Antwort"},
        {"startTime": "00:00:08,000", "endTime": "00:00:12,000", "text": "Nachfrage"},
    ])


@pytest.fixture
def interview_segments():
    """Host speaks 0-5s, guest 5-12s."""
    return [
        {"start": 0, "end": 5, "speaker": 1},
        {"start": 5, "end": 12, "speaker": 2},
    ]


@pytest.fixture
def introduction_lines():
    """Podcast opening where the hosts introduce themselves by name."""
    return lines_from_records([
        {"startTime": "00:00:00,000", "endTime": "00:00:04,000",
         "text": "Herzlich willkommen zum Podcast."},
        {"startTime": "00:00:04,000", "endTime": "00:00:08,000",
         "text": "Ich bin Anna Müller und heute begleitet mich Ben Schulz."},
        {"startTime": "00:00:08,000", "endTime": "00:00:12,000",
         "text": "Ben Schulz: Danke, Anna. Schön hier zu sein."},
        {"startTime": "00:00:12,000", "endTime": "00:00:16,000",
         "text": "Lass uns starten."},
    ])


@pytest.fixture
def known_names():
    return ["Anna Müller", "Ben Schulz"]
