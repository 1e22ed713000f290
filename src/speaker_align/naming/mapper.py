"""Speaker name mapping.

Turns anonymous "Speaker N" ids into display names, given a name listing
(typically produced upstream by a language model, "Speaker 1: Anna") and the
speaker names known from episode metadata.
"""

import re
from dataclasses import dataclass
from typing import Any, Mapping, Sequence

from speaker_align.alignment.segments import normalize_segments
from speaker_align.config.schema import NamingConfig
from speaker_align.core import TranscriptLine
from speaker_align.utils import get_logger

logger = get_logger(__name__)

# Name = run of letters, hyphens and apostrophes
_SPEAKER_LINE_RE = re.compile(r"Speaker\s*(\d+):\s*((?:[^\W\d_]|[-'])+)", re.IGNORECASE)


@dataclass(frozen=True)
class LabeledLine:
    """A transcript line with its display speaker name."""
    index: int
    start: float | None
    end: float | None
    text: str
    speaker_id: int
    speaker: str
    confidence: float


def speaker_key(speaker_id: int) -> str:
    return f"Speaker {speaker_id}"


def _usable_names(known_names: Sequence[str]) -> list[tuple[int, str]]:
    return [
        (position, str(name).strip())
        for position, name in enumerate(known_names or (), start=1)
        if name is not None and str(name).strip()
    ]


def parse_speaker_list(text: str) -> dict[int, str]:
    """Parse "Speaker N: Name" occurrences from free text.

    Args:
        text: e.g. "Speaker 1: Dennis\\nSpeaker 2: Gavin"

    Returns:
        Speaker id -> name; a repeated id keeps its last name
    """
    return {
        int(match.group(1)): match.group(2)
        for match in _SPEAKER_LINE_RE.finditer(text or "")
    }


def build_name_map(
    parsed: Mapping[int, str],
    known_names: Sequence[str] = (),
    fixes: Mapping[str, str] | None = None,
) -> dict[str, str]:
    """Build the "Speaker N" -> name map.

    With known names, each parsed (often short) name is expanded to the first
    known name containing it, and ids the listing did not mention are filled
    from `known_names` in order. Finally `fixes` corrects recurring
    misrecognitions ({"Kevin": "Gavin"}).

    Args:
        parsed: Speaker id -> name, from `parse_speaker_list`
        known_names: Speaker names from metadata, in id order
        fixes: Wrong name -> corrected name

    Returns:
        Mapping from "Speaker N" keys to names
    """
    known = _usable_names(known_names)
    name_map: dict[str, str] = {}

    if known:
        for speaker_id, short_name in parsed.items():
            full = next((name for _, name in known if short_name.lower() in name.lower()), None)
            name_map[speaker_key(speaker_id)] = full or short_name
        for position, name in known:
            name_map.setdefault(speaker_key(position), name)
    else:
        name_map = {speaker_key(speaker_id): name for speaker_id, name in parsed.items()}

    for key, name in list(name_map.items()):
        fix = (fixes or {}).get(name)
        if fix and fix != name:
            logger.info(f"Corrected speaker name: {name} -> {fix} ({key})")
            name_map[key] = fix

    return name_map


def apply_speaker_mapping(
    lines: Sequence[TranscriptLine],
    name_map: Mapping[str, str],
    known_names: Sequence[str] = (),
    allow_names: bool = True,
    config: NamingConfig | None = None,
) -> list[LabeledLine]:
    """Label assigned lines with speaker names.

    Args:
        lines: Lines with final speaker ids
        name_map: "Speaker N" -> name
        known_names: Names from metadata; mapping to one of these is trusted
        allow_names: False keeps the anonymous "Speaker N" labels
        config: Naming configuration (confidence values)

    Returns:
        Labeled lines, in input order
    """
    config = config or NamingConfig()
    known = {name for _, name in _usable_names(known_names)}

    labeled = []
    for line in lines:
        speaker_id = line.speaker_id or 1
        key = speaker_key(speaker_id)
        name = name_map.get(key) or key
        labeled.append(
            LabeledLine(
                index=line.index,
                start=line.start,
                end=line.end,
                text=line.text,
                speaker_id=speaker_id,
                speaker=name if allow_names else key,
                confidence=config.known_confidence if name in known else config.unknown_confidence,
            )
        )
    return labeled


def expected_speaker_count(
    known_names: Sequence[str] = (),
    segments: Sequence[Any] | None = None,
) -> int:
    """Expected speaker count hint from metadata names and diarization.

    Returns:
        max(known names, diarized speakers), at least 2 when diarization
        shows two or more speakers; 0 when nothing is known
    """
    diarized = len({seg.speaker for seg in normalize_segments(segments)})
    expected = max(len(_usable_names(known_names)), diarized)
    if diarized > 1:
        expected = max(2, expected)
    return expected
