"""Pipeline module - alignment orchestration."""

from speaker_align.pipeline.aligner import SpeakerAligner, AlignmentResult

__all__ = [
    "SpeakerAligner",
    "AlignmentResult",
]
