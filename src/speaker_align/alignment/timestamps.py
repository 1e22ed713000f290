"""Timestamp parsing for transcript lines.

Transcription engines hand out timing as float seconds, SRT clock strings
(`00:01:02,500`), dotted clock strings (`00:01:02.5`) or plain decimal
strings. Everything here returns `None` instead of raising so that one bad
line never aborts a whole alignment pass.
"""

import math
import re
from typing import Any

from speaker_align.core import LineTiming, TranscriptLine

_CLOCK_RE = re.compile(r"^(\d{1,2}):(\d{2}):(\d{2})(?:[.,](\d{1,3}))?$")


def parse_timestamp(value: Any) -> float | None:
    """Parse a timestamp into seconds.

    Args:
        value: Number of seconds, `HH:MM:SS[,.]mmm` string or decimal string

    Returns:
        Seconds as float, or None if the value is unparseable or negative
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, (int, float)):
        seconds = float(value)
        return seconds if math.isfinite(seconds) and seconds >= 0 else None

    if not isinstance(value, str):
        return None

    text = value.strip()
    if not text:
        return None

    match = _CLOCK_RE.match(text)
    if match:
        hours, minutes, seconds, fraction = match.groups()
        # "5" -> 500ms, "05" -> 50ms
        millis = int((fraction or "").ljust(3, "0"))
        return int(hours) * 3600 + int(minutes) * 60 + int(seconds) + millis / 1000

    try:
        seconds = float(text.replace(",", "."))
    except ValueError:
        return None
    return seconds if math.isfinite(seconds) and seconds >= 0 else None


def first_timestamp(values: list[Any]) -> float | None:
    """Return the first value that parses as a timestamp."""
    for value in values:
        parsed = parse_timestamp(value)
        if parsed is not None:
            return parsed
    return None


def line_timing(line: TranscriptLine) -> LineTiming | None:
    """Usable time window of a line, or None when its timing is unparseable.

    Raw strings are accepted too, so lines built by hand from SRT fields
    behave like lines built by the transcript reader.
    """
    start = parse_timestamp(line.start)
    end = parse_timestamp(line.end)
    if start is None or end is None:
        return None
    start, end = min(start, end), max(start, end)
    return LineTiming(start=start, end=end, mid=(start + end) / 2)
