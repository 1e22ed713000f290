"""Transcript-diarization alignment module."""

from speaker_align.alignment.base import AssignerRegistry
from speaker_align.alignment.timestamps import parse_timestamp, first_timestamp, line_timing
from speaker_align.alignment.segments import (
    LabelKind,
    LabelParse,
    parse_speaker_label,
    to_zero_based,
    normalize_segments,
    merge_segments,
    limit_speakers,
    speaker_durations,
    rank_speakers,
)
from speaker_align.alignment.scoring import score_speakers, evaluate_lines, best_speaker
from speaker_align.alignment.remap import remap_speakers
from speaker_align.alignment.assigner import (
    DiarizationAssigner,
    assign_from_diarization,
    desired_speaker_count,
    ensure_coverage,
    restrict_to_speakers,
)
from speaker_align.alignment.fallback import (
    NameMentionAssigner,
    assign_without_diarization,
    find_named_speaker,
)

__all__ = [
    "AssignerRegistry",
    # Timestamps
    "parse_timestamp",
    "first_timestamp",
    "line_timing",
    # Segments
    "LabelKind",
    "LabelParse",
    "parse_speaker_label",
    "to_zero_based",
    "normalize_segments",
    "merge_segments",
    "limit_speakers",
    "speaker_durations",
    "rank_speakers",
    # Scoring
    "score_speakers",
    "evaluate_lines",
    "best_speaker",
    # Assignment
    "remap_speakers",
    "DiarizationAssigner",
    "assign_from_diarization",
    "desired_speaker_count",
    "ensure_coverage",
    "restrict_to_speakers",
    "NameMentionAssigner",
    "assign_without_diarization",
    "find_named_speaker",
]
