"""Diarization segment normalization, merging and speaker-count limiting."""

import math
import re
from dataclasses import dataclass, replace
from enum import Enum
from collections.abc import Mapping
from typing import Any, Iterable, Sequence

from speaker_align.config.schema import AlignmentConfig, MERGE_GAP_SECONDS
from speaker_align.core import DiarizationSegment
from speaker_align.utils import get_logger

logger = get_logger(__name__)

_INTEGER_RE = re.compile(r"^[+-]?\d+$")
_PREFIXED_RE = re.compile(r"speaker[_\s-]*(\d+)", re.IGNORECASE)
_ALPHA_RE = re.compile(r"^[A-Za-z]+$")

SPEAKER_KEYS = ("speaker", "speaker_id", "speakerId")


class LabelKind(str, Enum):
    """How a raw speaker label was encoded."""
    NUMERIC = "numeric"  # 2, "2", 2.0
    PREFIXED = "prefixed"  # "speaker_2", "Speaker-2", "SPEAKER_02"
    ALPHABETIC = "alphabetic"  # "B", "AA" (base 26, A=1)
    UNPARSEABLE = "unparseable"


@dataclass(frozen=True)
class LabelParse:
    """Result of decoding a raw speaker label."""
    kind: LabelKind
    value: int | None = None

    @property
    def ok(self) -> bool:
        return self.kind is not LabelKind.UNPARSEABLE


UNPARSEABLE = LabelParse(LabelKind.UNPARSEABLE)


def parse_speaker_label(value: Any) -> LabelParse:
    """Decode a provider speaker label into an integer.

    Args:
        value: Integer, numeric string, "speaker_N"-style string or letter code

    Returns:
        LabelParse with the decoded (still provider-based) value
    """
    if value is None or isinstance(value, bool):
        return UNPARSEABLE

    if isinstance(value, int):
        return LabelParse(LabelKind.NUMERIC, value)

    if isinstance(value, float):
        if not math.isfinite(value):
            return UNPARSEABLE
        return LabelParse(LabelKind.NUMERIC, math.floor(value))

    text = str(value).strip()
    if not text:
        return UNPARSEABLE

    if _INTEGER_RE.match(text):
        return LabelParse(LabelKind.NUMERIC, int(text))

    prefixed = _PREFIXED_RE.search(text)
    if prefixed:
        return LabelParse(LabelKind.PREFIXED, int(prefixed.group(1)))

    if _ALPHA_RE.match(text):
        code = 0
        for char in text.upper():
            code = code * 26 + (ord(char) - ord("A") + 1)
        return LabelParse(LabelKind.ALPHABETIC, code)

    try:
        number = float(text)
    except ValueError:
        return UNPARSEABLE
    if not math.isfinite(number):
        return UNPARSEABLE
    return LabelParse(LabelKind.NUMERIC, math.floor(number))


def to_zero_based(label: LabelParse, zero_based: bool = False) -> int:
    """Canonical 0-based speaker id for a decoded label.

    Providers number speakers from 1 unless told otherwise; letter codes are
    1-based by construction. Unparseable labels map to speaker 0.
    """
    if not label.ok or label.value is None:
        return 0
    if label.value > 0 and not zero_based:
        return label.value - 1
    return max(0, label.value)


def _field(record: Any, *names: str) -> Any:
    """First non-None field of a mapping or attribute object."""
    for name in names:
        if isinstance(record, Mapping):
            value = record.get(name)
        else:
            value = getattr(record, name, None)
        if value is not None:
            return value
    return None


def _to_seconds(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        seconds = float(value)
    except (TypeError, ValueError):
        return None
    return seconds if math.isfinite(seconds) else None


def normalize_segments(
    records: Iterable[Any] | None,
    config: AlignmentConfig | None = None,
) -> list[DiarizationSegment]:
    """Convert raw diarization records into sorted canonical segments.

    Records without finite timing, or with `end <= start`, are dropped.
    Positive labels are decremented to 0-based ids. With
    `zero_based_labels="auto"`, a batch in which any label decodes to 0
    (pyannote's "SPEAKER_00") is taken to count from zero and used as-is.

    Args:
        records: Mappings or objects with start, end and a speaker label
        config: Alignment configuration

    Returns:
        Segments sorted by (start, speaker)
    """
    parsed: list[tuple[float, float, LabelParse]] = []
    total = 0
    for record in records or ():
        total += 1
        start = _to_seconds(_field(record, "start"))
        end = _to_seconds(_field(record, "end"))
        if start is None or end is None or end <= start:
            continue
        label = _field(record, *SPEAKER_KEYS)
        parsed.append((start, end, parse_speaker_label(label)))

    config = config or AlignmentConfig()
    zero_based = config.zero_based_labels == "auto" and any(
        label.kind in (LabelKind.NUMERIC, LabelKind.PREFIXED) and label.value == 0
        for _, _, label in parsed
    )

    segments = [
        DiarizationSegment(start=start, end=end, speaker=to_zero_based(label, zero_based))
        for start, end, label in parsed
    ]
    segments.sort(key=lambda seg: (seg.start, seg.speaker))

    if total > len(segments):
        logger.debug(f"Dropped {total - len(segments)} invalid diarization records")

    return segments


def merge_segments(
    segments: Sequence[DiarizationSegment],
    gap: float = MERGE_GAP_SECONDS,
) -> list[DiarizationSegment]:
    """Join consecutive same-speaker segments separated by at most `gap`.

    Args:
        segments: Segments sorted by start
        gap: Largest pause (seconds) bridged by a merge

    Returns:
        New list of merged segments
    """
    merged: list[DiarizationSegment] = []
    for seg in segments:
        last = merged[-1] if merged else None
        if last is not None and last.speaker == seg.speaker and seg.start <= last.end + gap:
            merged[-1] = replace(last, end=max(last.end, seg.end))
        else:
            merged.append(seg)
    return merged


def speaker_durations(segments: Iterable[DiarizationSegment]) -> dict[int, float]:
    """Total spoken duration per speaker."""
    durations: dict[int, float] = {}
    for seg in segments:
        durations[seg.speaker] = durations.get(seg.speaker, 0.0) + seg.duration
    return durations


def rank_speakers(segments: Iterable[DiarizationSegment]) -> list[int]:
    """Speakers by descending total duration, ties by lower id."""
    durations = speaker_durations(segments)
    return [speaker for speaker, _ in sorted(durations.items(), key=lambda kv: (-kv[1], kv[0]))]


def _midpoint_distance(mid: float, seg: DiarizationSegment) -> float:
    if mid < seg.start:
        return seg.start - mid
    if mid > seg.end:
        return mid - seg.end
    return 0.0


def _covered(seg: DiarizationSegment, kept: Sequence[DiarizationSegment], epsilon: float) -> bool:
    covered = 0.0
    for target in kept:
        overlap = min(seg.end, target.end) - max(seg.start, target.start)
        if overlap > 0:
            covered += overlap
            if covered >= seg.duration - epsilon:
                return True
    return False


def limit_speakers(
    segments: Sequence[DiarizationSegment],
    expected: int,
    config: AlignmentConfig | None = None,
) -> list[DiarizationSegment]:
    """Fold the least dominant speakers into their nearest retained neighbour.

    Keeps the `expected` speakers with the most airtime. Each dropped segment
    goes to the kept speaker whose segment lies closest to its midpoint.
    The input is returned unchanged when a dropped speaker held at least
    `significant_share` of the total airtime, since that airtime would vanish
    instead of merging into a kept speaker.

    Args:
        segments: Merged segments sorted by (start, speaker)
        expected: Expected number of speakers, 0 = unconstrained
        config: Alignment configuration

    Returns:
        New list of segments, re-merged if any reassignment happened
    """
    config = config or AlignmentConfig()
    eps = config.tie_epsilon
    original = list(segments)

    expected = max(0, int(expected or 0))
    if expected == 0:
        return original

    durations = speaker_durations(original)
    if len(durations) <= expected:
        return original

    keep = rank_speakers(original)[:expected]
    keep_set = set(keep)
    kept_segments = [seg for seg in original if seg.speaker in keep_set]
    if not kept_segments:
        return original

    if config.require_covered_reassignment:
        uncovered = [
            seg for seg in original
            if seg.speaker not in keep_set and not _covered(seg, kept_segments, eps)
        ]
        if uncovered:
            logger.debug(
                f"Speaker limit {expected} skipped: {len(uncovered)} dropped segments "
                "are not covered by kept speakers"
            )
            return original

    reassigned: list[DiarizationSegment] = []
    for seg in original:
        if seg.speaker in keep_set:
            reassigned.append(seg)
            continue

        mid = (seg.start + seg.end) / 2
        best_speaker = keep[0]
        best_distance = math.inf
        for target in kept_segments:
            distance = _midpoint_distance(mid, target)
            if distance < best_distance - eps or (
                abs(distance - best_distance) <= eps and target.speaker < best_speaker
            ):
                best_distance = distance
                best_speaker = target.speaker
        reassigned.append(replace(seg, speaker=best_speaker))

    total = sum(durations.values())
    threshold = total * config.significant_share
    reduced = speaker_durations(reassigned)
    lost = [
        speaker for speaker, duration in durations.items()
        if threshold > 0 and duration >= threshold and reduced.get(speaker, 0.0) <= eps
    ]
    if lost:
        logger.warning(
            f"Not limiting to {expected} speakers: would drop significant "
            f"speakers {sorted(lost)}"
        )
        return original

    logger.debug(
        f"Limited {len(durations)} speakers to {expected}: "
        f"dropped {sorted(set(durations) - keep_set)}"
    )
    reassigned.sort(key=lambda seg: (seg.start, seg.speaker))
    return merge_segments(reassigned, config.merge_gap)
