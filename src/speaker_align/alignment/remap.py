"""Dense renumbering of internal speaker ids."""

from dataclasses import replace
from typing import Sequence

from speaker_align.core import SpeakerAssignment, TranscriptLine


def remap_speakers(
    lines: Sequence[TranscriptLine],
    internal_ids: Sequence[int | None],
) -> SpeakerAssignment:
    """Renumber 0-based internal ids to 1..N in order of first appearance.

    Lines without an id fall back to internal speaker 0.

    Args:
        lines: Transcript lines
        internal_ids: Internal speaker id per line (index-aligned)

    Returns:
        SpeakerAssignment with new, annotated lines
    """
    remap: dict[int, int] = {}
    annotated: list[TranscriptLine] = []

    for line, internal in zip(lines, internal_ids):
        internal = 0 if internal is None else internal
        if internal not in remap:
            remap[internal] = len(remap) + 1
        annotated.append(replace(line, speaker_id=remap[internal]))

    return SpeakerAssignment.from_lines(annotated)
