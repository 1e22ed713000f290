"""Pydantic configuration schemas with validation."""

from typing import Literal
from pydantic import BaseModel, Field, field_validator

# Heuristics tuned on podcast audio, not derived values
MERGE_GAP_SECONDS = 0.35
SIGNIFICANT_SPEAKER_SHARE = 0.2
TIE_EPSILON = 1e-6
DISTANCE_PENALTY = 0.01


class AlignmentConfig(BaseModel):
    """Transcript-diarization alignment configuration."""
    # Pause (seconds) across which two same-speaker turns count as one
    merge_gap: float = Field(default=MERGE_GAP_SECONDS, ge=0.0)
    # Share of total airtime that makes a speaker too large to drop
    significant_share: float = Field(default=SIGNIFICANT_SPEAKER_SHARE, ge=0.0, le=1.0)
    tie_epsilon: float = Field(default=TIE_EPSILON, gt=0.0)
    # Weight of the midpoint distance when a speaker does overlap a line
    distance_penalty: float = Field(default=DISTANCE_PENALTY, ge=0.0)
    # Also refuse to drop speakers whose turns kept speakers do not cover
    require_covered_reassignment: bool = False
    # "auto" keeps labels as-is when the provider counts from zero (SPEAKER_00)
    zero_based_labels: Literal["auto", "never"] = "never"


class FallbackConfig(BaseModel):
    """Strategy order and no-diarization fallback configuration."""
    strategies: list[Literal["diarization", "names"]] = Field(
        default_factory=lambda: ["diarization", "names"],
        min_length=1,
    )
    rotation: list[int] = Field(default_factory=lambda: [1, 2], min_length=1)

    @field_validator("rotation")
    @classmethod
    def _positive_ids(cls, value: list[int]) -> list[int]:
        if any(speaker_id < 1 for speaker_id in value):
            raise ValueError("rotation ids must be >= 1")
        return value


class NamingConfig(BaseModel):
    """Speaker name mapping configuration."""
    allow_names: bool = True  # False = keep anonymous "Speaker N" labels
    known_confidence: float = Field(default=0.9, ge=0.0, le=1.0)
    unknown_confidence: float = Field(default=0.5, ge=0.0, le=1.0)
    fixes: dict[str, str] = Field(default_factory=dict)


class SpeakerAlignConfig(BaseModel):
    """Root configuration for the speaker alignment system."""
    alignment: AlignmentConfig = Field(default_factory=AlignmentConfig)
    fallback: FallbackConfig = Field(default_factory=FallbackConfig)
    naming: NamingConfig = Field(default_factory=NamingConfig)

    # Global settings
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["simple", "detailed"] = "simple"
