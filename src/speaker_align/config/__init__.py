"""Configuration management."""

from speaker_align.config.schema import (
    SpeakerAlignConfig,
    AlignmentConfig,
    FallbackConfig,
    NamingConfig,
)
from speaker_align.config.loader import load_config, load_yaml, deep_merge

__all__ = [
    # Main config
    "SpeakerAlignConfig",
    "load_config",
    # Sub-configs
    "AlignmentConfig",
    "FallbackConfig",
    "NamingConfig",
    # Utilities
    "load_yaml",
    "deep_merge",
]
