"""Transcript and diarization readers."""

from speaker_align.transcript.reader import (
    line_from_record,
    lines_from_records,
    parse_srt,
    load_transcript,
    load_segments,
    read_speaker_list,
)

__all__ = [
    "line_from_record",
    "lines_from_records",
    "parse_srt",
    "load_transcript",
    "load_segments",
    "read_speaker_list",
]
