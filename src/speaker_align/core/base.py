"""Data classes and abstract interfaces shared by all components."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Sequence


@dataclass(frozen=True)
class TranscriptLine:
    """A transcript line with timing and (once assigned) a speaker id."""
    index: int
    start: float | None  # seconds, None = unparseable
    end: float | None  # seconds, None = unparseable
    text: str = ""
    speaker_id: int | None = None  # 1-based


@dataclass(frozen=True)
class LineTiming:
    """Usable time window of a transcript line."""
    start: float
    end: float
    mid: float


@dataclass(frozen=True)
class DiarizationSegment:
    """A normalized speaker turn: [start, end) with a 0-based speaker id."""
    start: float
    end: float
    speaker: int

    @property
    def duration(self) -> float:
        return self.end - self.start


@dataclass
class SpeakerScore:
    """Affinity of one line to one candidate speaker."""
    overlap: float = 0.0
    distance: float = float("inf")
    score: float = float("-inf")


@dataclass
class SpeakerAssignment:
    """Final speaker attribution for a transcript.

    `lines` keeps input order; `speakers` groups the same lines by final
    speaker id, in order of first appearance.
    """
    lines: list[TranscriptLine] = field(default_factory=list)
    speakers: dict[int, list[TranscriptLine]] = field(default_factory=dict)

    @classmethod
    def from_lines(cls, lines: Sequence[TranscriptLine]) -> "SpeakerAssignment":
        """Group already-annotated lines by speaker id."""
        speakers: dict[int, list[TranscriptLine]] = {}
        for line in lines:
            speakers.setdefault(line.speaker_id, []).append(line)
        return cls(lines=list(lines), speakers=speakers)

    @property
    def speaker_ids(self) -> list[int]:
        """Speaker id per line, index-aligned with `lines`."""
        return [line.speaker_id for line in self.lines]

    @property
    def num_speakers(self) -> int:
        return len(self.speakers)

    def __bool__(self) -> bool:
        return bool(self.lines)


class BaseSpeakerAssigner(ABC):
    """Abstract base class for speaker assignment strategies."""

    @abstractmethod
    def assign(
        self,
        lines: Sequence[TranscriptLine],
        segments: Sequence[Any] | None = None,
        known_names: Sequence[str] = (),
        expected_speakers: int = 0,
    ) -> SpeakerAssignment:
        """Attribute every line to a speaker."""
        pass

    def is_available(self, segments: Sequence[Any] | None) -> bool:
        """Whether this strategy can run on the given evidence."""
        return True
