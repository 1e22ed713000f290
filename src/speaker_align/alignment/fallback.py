"""Speaker assignment without diarization.

Used when the diarization provider returned nothing. Speakers are inferred
from self-introductions ("Ich bin Anna ...") in the text, carried forward to
following lines, and dealt round-robin when no name is ever mentioned.
"""

from dataclasses import replace
from typing import Any, Sequence

from speaker_align.alignment.base import AssignerRegistry
from speaker_align.config.schema import FallbackConfig
from speaker_align.core import BaseSpeakerAssigner, SpeakerAssignment, TranscriptLine
from speaker_align.utils import get_logger

logger = get_logger(__name__)

DEFAULT_ROTATION = (1, 2)


def find_named_speaker(text: str, candidates: Sequence[tuple[int, str]]) -> int | None:
    """Id of the candidate name mentioned earliest in `text`.

    Matching is case-insensitive; equal positions go to the lower id.
    """
    haystack = (text or "").lower()
    best: tuple[int, int] | None = None  # (position, id)
    for speaker_id, needle in candidates:
        position = haystack.find(needle)
        if position == -1:
            continue
        if best is None or (position, speaker_id) < best:
            best = (position, speaker_id)
    return None if best is None else best[1]


def assign_without_diarization(
    lines: Sequence[TranscriptLine],
    known_names: Sequence[str] = (),
    rotation: Sequence[int] = DEFAULT_ROTATION,
) -> SpeakerAssignment:
    """Attribute lines to speakers from name mentions alone.

    Speaker ids are positions in `known_names` (1-based), so they line up with
    "Speaker N" name maps built from the same list.

    Args:
        lines: Transcript lines (not modified)
        known_names: Candidate speaker names, in id order
        rotation: Ids to cycle through when no known name is usable

    Returns:
        SpeakerAssignment grouped by speaker id in order of first appearance
    """
    lines = list(lines or ())
    if not lines:
        return SpeakerAssignment()

    candidates = [
        (position, str(name).strip().lower())
        for position, name in enumerate(known_names or (), start=1)
        if name is not None and str(name).strip()
    ]

    ids: list[int | None] = [find_named_speaker(line.text, candidates) for line in lines]
    matched = sum(1 for speaker_id in ids if speaker_id is not None)

    last: int | None = None
    for i, speaker_id in enumerate(ids):
        if speaker_id is not None:
            last = speaker_id
        elif last is not None:
            ids[i] = last

    first = next((i for i, speaker_id in enumerate(ids) if speaker_id is not None), None)
    if first:
        ids[:first] = [ids[first]] * first

    if first is None:
        cycle = [position for position, _ in candidates] or list(rotation) or list(DEFAULT_ROTATION)
        ids = [cycle[i % len(cycle)] for i in range(len(lines))]
        logger.info(f"No speaker names found in transcript, rotating over {cycle}")
    else:
        logger.info(f"Found {matched} name mentions across {len(lines)} lines")

    return SpeakerAssignment.from_lines(
        [replace(line, speaker_id=speaker_id) for line, speaker_id in zip(lines, ids)]
    )


@AssignerRegistry.register("names")
class NameMentionAssigner(BaseSpeakerAssigner):
    """Assign speakers from known-name mentions in the transcript text."""

    def __init__(self, config: FallbackConfig | None = None):
        self.config = config or FallbackConfig()

    def assign(
        self,
        lines: Sequence[TranscriptLine],
        segments: Sequence[Any] | None = None,
        known_names: Sequence[str] = (),
        expected_speakers: int = 0,
    ) -> SpeakerAssignment:
        return assign_without_diarization(lines, known_names, self.config.rotation)
