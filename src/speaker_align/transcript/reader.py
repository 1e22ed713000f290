"""Readers for transcripts and diarization output."""

import json
import re
from pathlib import Path
from typing import Any, Iterable, Mapping

from speaker_align.alignment.timestamps import first_timestamp, parse_timestamp
from speaker_align.core import TranscriptLine, TranscriptError
from speaker_align.utils import get_logger, logged

logger = get_logger(__name__)

START_KEYS = ("startTime", "start", "begin", "timecodeStart")
END_KEYS = ("endTime", "end", "finish", "timecodeEnd")

_BLOCK_SPLIT_RE = re.compile(r"\n\s*\n")
_ARROW = "-->"


def line_from_record(record: Mapping[str, Any], index: int) -> TranscriptLine:
    """Build a transcript line from a loosely-keyed record.

    Timing is read from the first parseable of several key spellings; a
    `duration` key completes a missing start or end.

    Args:
        record: e.g. {"startTime": "00:00:01,000", "endTime": "...", "text": "..."}
        index: Position of the line in the transcript

    Returns:
        TranscriptLine with None for any unparseable timing
    """
    start = first_timestamp([record.get(key) for key in START_KEYS])
    end = first_timestamp([record.get(key) for key in END_KEYS])
    duration = parse_timestamp(record.get("duration"))

    if duration is not None:
        if end is None and start is not None:
            end = start + duration
        elif start is None and end is not None:
            start = max(0.0, end - duration)

    return TranscriptLine(
        index=index,
        start=start,
        end=end,
        text=str(record.get("text") or "").strip(),
    )


def lines_from_records(records: Iterable[Mapping[str, Any]]) -> list[TranscriptLine]:
    """Convert transcript records (dicts) into lines."""
    return [line_from_record(record, index) for index, record in enumerate(records)]


def parse_srt(text: str) -> list[TranscriptLine]:
    """Parse SRT subtitle text into transcript lines.

    Blocks without a `-->` timing line are skipped; blocks whose timing does
    not parse are kept with None timing.
    """
    lines: list[TranscriptLine] = []
    content = (text or "").replace("\r\n", "\n").replace("\r", "\n").strip()

    for block in _BLOCK_SPLIT_RE.split(content):
        rows = [row.strip() for row in block.strip().split("\n")]
        timing_row = next((i for i, row in enumerate(rows) if _ARROW in row), None)
        if timing_row is None:
            continue

        start_raw, _, end_raw = rows[timing_row].partition(_ARROW)
        # Drop SRT position hints after the end time ("... X1:40 X2:600")
        end_raw = end_raw.strip().split(" ")[0] if end_raw.strip() else ""
        lines.append(
            TranscriptLine(
                index=len(lines),
                start=parse_timestamp(start_raw),
                end=parse_timestamp(end_raw),
                text=" ".join(row for row in rows[timing_row + 1:] if row),
            )
        )

    logger.debug(f"Parsed {len(lines)} SRT cues")
    return lines


def _read_json(path: Path) -> Any:
    try:
        with open(path, encoding="utf-8") as f:
            return json.load(f)
    except OSError as e:
        raise TranscriptError(f"Cannot read {path}: {e}")
    except json.JSONDecodeError as e:
        raise TranscriptError(f"Invalid JSON in {path}: {e}")
    except UnicodeDecodeError as e:
        raise TranscriptError(f"{path} is not valid UTF-8: {e}")


def _record_list(data: Any, path: Path) -> list[Any]:
    if isinstance(data, Mapping):
        data = data.get("segments")
    if not isinstance(data, list):
        raise TranscriptError(f"Expected a list of records in {path}")
    return data


@logged
def load_transcript(path: Path | str) -> list[TranscriptLine]:
    """Load a transcript from an `.srt` file or a JSON list of records.

    Raises:
        TranscriptError: If the file cannot be read or has the wrong shape
    """
    path = Path(path)
    if path.suffix.lower() == ".srt":
        try:
            return parse_srt(path.read_text(encoding="utf-8"))
        except OSError as e:
            raise TranscriptError(f"Cannot read {path}: {e}")
        except UnicodeDecodeError as e:
            raise TranscriptError(f"{path} is not valid UTF-8: {e}")

    records = _record_list(_read_json(path), path)
    if not all(isinstance(record, Mapping) for record in records):
        raise TranscriptError(f"Transcript records must be objects: {path}")
    return lines_from_records(records)


@logged
def load_segments(path: Path | str) -> list[Any]:
    """Load raw diarization records from JSON.

    Accepts a list of records or an object with a `segments` list.

    Raises:
        TranscriptError: If the file cannot be read or has the wrong shape
    """
    path = Path(path)
    return _record_list(_read_json(path), path)


def read_speaker_list(path: Path | str) -> str:
    """Read a "Speaker N: Name" listing as text.

    Raises:
        TranscriptError: If the file cannot be read or is not UTF-8
    """
    path = Path(path)
    try:
        return path.read_text(encoding="utf-8")
    except OSError as e:
        raise TranscriptError(f"Cannot read {path}: {e}")
    except UnicodeDecodeError as e:
        raise TranscriptError(f"{path} is not valid UTF-8: {e}")
