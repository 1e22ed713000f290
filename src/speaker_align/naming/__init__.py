"""Speaker name mapping module."""

from speaker_align.naming.mapper import (
    LabeledLine,
    speaker_key,
    parse_speaker_list,
    build_name_map,
    apply_speaker_mapping,
    expected_speaker_count,
)

__all__ = [
    "LabeledLine",
    "speaker_key",
    "parse_speaker_list",
    "build_name_map",
    "apply_speaker_mapping",
    "expected_speaker_count",
]
