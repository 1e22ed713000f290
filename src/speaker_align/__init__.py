"""speaker-align - decide who spoke each line of a transcript.

Aligns time-stamped transcript lines with speaker-diarization intervals,
or falls back to name mentions when no diarization is available.

Usage:
    from speaker_align import SpeakerAligner, load_transcript

    aligner = SpeakerAligner.from_config(env="development")
    lines = load_transcript("episode.transcript.srt")

    result = aligner.align(lines, segments, known_names=["Anna Müller", "Ben Schulz"])
    for speaker_id, speaker_lines in result.speakers.items():
        print(speaker_id, len(speaker_lines))
"""

from speaker_align.pipeline import SpeakerAligner, AlignmentResult
from speaker_align.config import SpeakerAlignConfig, load_config
from speaker_align.core import TranscriptLine, DiarizationSegment, SpeakerAssignment
from speaker_align.alignment import assign_from_diarization, assign_without_diarization
from speaker_align.transcript import load_transcript, load_segments

__version__ = "0.1.0"

__all__ = [
    "SpeakerAligner",
    "AlignmentResult",
    "SpeakerAlignConfig",
    "TranscriptLine",
    "DiarizationSegment",
    "SpeakerAssignment",
    "assign_from_diarization",
    "assign_without_diarization",
    "load_config",
    "load_transcript",
    "load_segments",
]
