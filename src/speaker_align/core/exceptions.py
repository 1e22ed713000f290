"""Custom exceptions for the speaker alignment system."""


class SpeakerAlignError(Exception):
    """Base exception for all speaker alignment errors."""
    pass


class ConfigError(SpeakerAlignError):
    """Configuration loading or validation error."""
    pass


class RegistryError(SpeakerAlignError):
    """Component registry error."""
    pass


class AlignmentError(SpeakerAlignError):
    """Transcript-diarization alignment error."""
    pass


class NoDiarizationEvidence(AlignmentError):
    """Diarization input yields nothing to align against.

    Not a failure: it tells the caller to use the no-diarization fallback.
    """
    pass


class TranscriptError(SpeakerAlignError):
    """Transcript or diarization file could not be read."""
    pass
