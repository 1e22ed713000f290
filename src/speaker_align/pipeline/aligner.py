"""Main entry point for speaker alignment."""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Sequence

from speaker_align.alignment import AssignerRegistry, assign_without_diarization
from speaker_align.config import SpeakerAlignConfig, load_config
from speaker_align.core import (
    AlignmentError,
    BaseSpeakerAssigner,
    SpeakerAssignment,
    TranscriptLine,
)
from speaker_align.core.resilience import FallbackChain, FallbackExhaustedError
from speaker_align.naming import LabeledLine, apply_speaker_mapping, expected_speaker_count
from speaker_align.utils import get_logger, setup_logging, timed

logger = get_logger(__name__)


@dataclass
class AlignmentResult:
    """Result of aligning one transcript."""
    assignment: SpeakerAssignment
    strategy: str  # name of the strategy that produced the assignment
    expected_speakers: int

    @property
    def lines(self) -> list[TranscriptLine]:
        return self.assignment.lines

    @property
    def speakers(self) -> dict[int, list[TranscriptLine]]:
        return self.assignment.speakers

    @property
    def num_speakers(self) -> int:
        return self.assignment.num_speakers


class SpeakerAligner:
    """Decide who spoke each transcript line.

    Runs the configured strategies in order (by default diarization first,
    then name mentions) and returns the first assignment that succeeds. Data
    problems never raise: the last resort is the name-mention fallback, which
    always produces an assignment.

    Usage:
        aligner = SpeakerAligner.from_config(env="development")

        result = aligner.align(lines, segments, known_names=["Anna", "Ben"])
        for line in aligner.label(result, {"Speaker 1": "Anna"}):
            print(line.speaker, line.text)
    """

    def __init__(self, config: SpeakerAlignConfig | None = None):
        self.config = config or SpeakerAlignConfig()

        setup_logging(level=self.config.log_level, format_style=self.config.log_format)

        # Lazy-loaded strategies, keyed by registry name
        self._assigners: dict[str, BaseSpeakerAssigner] = {}

        logger.debug(f"SpeakerAligner initialized: strategies={self.config.fallback.strategies}")

    @classmethod
    def from_config(
        cls,
        config_path: Path | str | None = None,
        env: str | None = None,
        config_dir: Path | str = "configs",
    ) -> "SpeakerAligner":
        """Create a SpeakerAligner from configuration files.

        Args:
            config_path: Optional specific config file
            env: Environment (development, production)
            config_dir: Directory containing config files

        Returns:
            Configured SpeakerAligner instance
        """
        config = load_config(
            config_path=config_path,
            env=env,
            config_dir=config_dir,
        )
        return cls(config)

    def assigner(self, name: str) -> BaseSpeakerAssigner:
        """Get (and lazily create) a registered assignment strategy."""
        if name not in self._assigners:
            strategy_configs = {
                "diarization": self.config.alignment,
                "names": self.config.fallback,
            }
            self._assigners[name] = AssignerRegistry.create(
                name,
                config=strategy_configs.get(name),
            )
        return self._assigners[name]

    @timed
    def align(
        self,
        lines: Sequence[TranscriptLine],
        segments: Sequence[Any] | None = None,
        known_names: Sequence[str] = (),
        expected_speakers: int | None = None,
    ) -> AlignmentResult:
        """Attribute every transcript line to a speaker.

        Args:
            lines: Transcript lines (not modified)
            segments: Raw diarization records, or None when unavailable
            known_names: Speaker names from metadata, in id order
            expected_speakers: Expected speaker count; derived from
                `known_names` and `segments` when None

        Returns:
            AlignmentResult with annotated lines and per-speaker groups
        """
        lines = list(lines or ())
        segments = list(segments or ())
        known_names = list(known_names or ())

        if expected_speakers is None:
            expected_speakers = expected_speaker_count(known_names, segments)

        chain = FallbackChain[SpeakerAssignment](
            "speaker_assignment",
            recoverable=(AlignmentError,),
        )
        for priority, name in enumerate(self.config.fallback.strategies):
            assigner = self.assigner(name)
            chain.add(
                name,
                assigner.assign,
                is_available=lambda assigner=assigner: assigner.is_available(segments),
                priority=priority,
            )

        try:
            assignment, strategy = chain.execute_named(
                lines, segments, known_names, expected_speakers
            )
        except FallbackExhaustedError as e:
            logger.warning(f"{e}; using name-mention fallback")
            assignment = assign_without_diarization(
                lines, known_names, self.config.fallback.rotation
            )
            strategy = "names"

        logger.info(
            f"Aligned {len(lines)} lines: {assignment.num_speakers} speakers "
            f"via '{strategy}' (expected={expected_speakers})"
        )
        return AlignmentResult(
            assignment=assignment,
            strategy=strategy,
            expected_speakers=expected_speakers,
        )

    def label(
        self,
        result: AlignmentResult,
        name_map: Mapping[str, str] | None = None,
        known_names: Sequence[str] = (),
        allow_names: bool | None = None,
    ) -> list[LabeledLine]:
        """Attach display names to an alignment result.

        Args:
            result: Result of `align`
            name_map: "Speaker N" -> name (see `naming.build_name_map`)
            known_names: Names from metadata
            allow_names: Override of `naming.allow_names`

        Returns:
            Labeled lines in transcript order
        """
        if allow_names is None:
            allow_names = self.config.naming.allow_names
        return apply_speaker_mapping(
            result.lines,
            name_map or {},
            known_names,
            allow_names=allow_names,
            config=self.config.naming,
        )
