"""Core components: registry, data classes, exceptions."""

from speaker_align.core.registry import Registry
from speaker_align.core.base import (
    TranscriptLine,
    LineTiming,
    DiarizationSegment,
    SpeakerScore,
    SpeakerAssignment,
    BaseSpeakerAssigner,
)
from speaker_align.core.exceptions import (
    SpeakerAlignError,
    ConfigError,
    RegistryError,
    AlignmentError,
    NoDiarizationEvidence,
    TranscriptError,
)

__all__ = [
    # Registry
    "Registry",
    # Data classes
    "TranscriptLine",
    "LineTiming",
    "DiarizationSegment",
    "SpeakerScore",
    "SpeakerAssignment",
    # Base classes
    "BaseSpeakerAssigner",
    # Exceptions
    "SpeakerAlignError",
    "ConfigError",
    "RegistryError",
    "AlignmentError",
    "NoDiarizationEvidence",
    "TranscriptError",
]
