"""Diarization-driven speaker assignment.

Pipeline: normalize → merge → limit → score → assign → repair coverage →
restrict to allowed speakers → remap.
"""

import math
from typing import Any, Sequence

from speaker_align.alignment.base import AssignerRegistry
from speaker_align.alignment.remap import remap_speakers
from speaker_align.alignment.scoring import LineScores, best_speaker, evaluate_lines
from speaker_align.alignment.segments import (
    limit_speakers,
    merge_segments,
    normalize_segments,
    rank_speakers,
)
from speaker_align.alignment.timestamps import line_timing
from speaker_align.config.schema import AlignmentConfig
from speaker_align.core import (
    BaseSpeakerAssigner,
    DiarizationSegment,
    LineTiming,
    NoDiarizationEvidence,
    SpeakerAssignment,
    TranscriptLine,
)
from speaker_align.utils import get_logger, timed

logger = get_logger(__name__)


def desired_speaker_count(diarized: int, expected: int) -> int:
    """Number of distinct speakers the assignment should end up with.

    The expected count caps what diarization reports, but a diarization
    with two or more speakers never collapses to fewer than two.
    """
    if expected > 0:
        desired = min(expected, diarized) if diarized else expected
    else:
        desired = diarized
    if diarized > 1:
        desired = max(2, desired)
    return desired or diarized or 1


def expand_segments(
    segments: Sequence[DiarizationSegment],
    padding: float,
) -> list[DiarizationSegment]:
    """Widen every segment by `padding` on both sides, clamping start at 0."""
    return [
        DiarizationSegment(
            start=max(0.0, seg.start - padding),
            end=seg.end + padding,
            speaker=seg.speaker,
        )
        for seg in segments
    ]


def _distinct(current: Sequence[int | None]) -> int:
    return len({speaker for speaker in current if speaker is not None})


def _apply_best(
    current: list[int | None],
    scores_by_line: Sequence[LineScores | None],
    speaker_ids: Sequence[int],
    epsilon: float,
) -> None:
    for i, scores in enumerate(scores_by_line):
        speaker = best_speaker(scores, speaker_ids, epsilon)
        if speaker is not None:
            current[i] = speaker


def ensure_coverage(
    current: list[int | None],
    timings: Sequence[LineTiming | None],
    scores_by_line: Sequence[LineScores | None],
    speaker_ids: Sequence[int],
    desired: int,
    epsilon: float,
) -> int:
    """Force missing speakers onto their best lines until `desired` are present.

    Each missing speaker takes the single timed line it scores highest on.
    If that still leaves speakers out, timed lines are dealt round-robin in
    start order until the desired count is reached.

    Args:
        current: Internal speaker id per line, updated in place
        timings: Line windows (None for untimed lines)
        scores_by_line: Scores per line
        speaker_ids: Candidate speakers, ascending
        desired: Target number of distinct speakers
        epsilon: Score tolerance

    Returns:
        Number of distinct speakers after repair
    """
    if desired <= 1 or not speaker_ids or _distinct(current) >= desired:
        return _distinct(current)

    ordered = sorted(
        (i for i, timing in enumerate(timings) if timing is not None),
        key=lambda i: (timings[i].start, i),
    )

    assigned = set(current)
    missing = [speaker for speaker in speaker_ids if speaker not in assigned]
    for speaker in missing:
        if _distinct(current) >= desired:
            break

        best_idx = None
        best_score = -math.inf
        for i in ordered:
            data = (scores_by_line[i] or {}).get(speaker)
            if data is None or not math.isfinite(data.score):
                continue
            if data.score > best_score + epsilon:
                best_idx = i
                best_score = data.score

        if best_idx is not None:
            logger.debug(f"Coverage repair: line {best_idx} -> speaker {speaker}")
            current[best_idx] = speaker

    if _distinct(current) >= desired:
        return _distinct(current)

    if len(speaker_ids) > 1 and ordered:
        logger.debug(f"Coverage repair: round-robin over {len(speaker_ids)} speakers")
        for pointer, i in enumerate(ordered):
            current[i] = speaker_ids[pointer % len(speaker_ids)]
            if _distinct(current) >= desired:
                break

    return _distinct(current)


def restrict_to_speakers(
    current: list[int | None],
    scores_by_line: Sequence[LineScores | None],
    allowed: Sequence[int],
    epsilon: float,
) -> None:
    """Move every line off a disallowed speaker to its best allowed one.

    Lines without usable scores go to the first (most dominant) allowed
    speaker.
    """
    allowed_set = set(allowed)
    candidates = sorted(allowed)
    for i, speaker in enumerate(current):
        if speaker is not None and speaker in allowed_set:
            continue
        best = best_speaker(scores_by_line[i], candidates, epsilon)
        current[i] = allowed[0] if best is None else best


@timed
def assign_from_diarization(
    lines: Sequence[TranscriptLine],
    segments: Sequence[Any] | None,
    expected_speakers: int = 0,
    config: AlignmentConfig | None = None,
) -> SpeakerAssignment:
    """Attribute transcript lines to diarized speakers.

    Args:
        lines: Transcript lines (not modified)
        segments: Raw diarization records ({start, end, speaker})
        expected_speakers: Expected speaker count, 0 = unknown
        config: Alignment configuration

    Returns:
        SpeakerAssignment with dense ids 1..N, or an empty assignment when
        there is no diarization evidence to align against
    """
    config = config or AlignmentConfig()
    eps = config.tie_epsilon
    lines = list(lines or ())
    if not lines:
        return SpeakerAssignment()

    normalized = normalize_segments(segments, config)
    if not normalized:
        logger.info("No usable diarization segments")
        return SpeakerAssignment()

    timings = [line_timing(line) for line in lines]
    if all(timing is None for timing in timings):
        logger.info("No transcript line has usable timing")
        return SpeakerAssignment()

    expected = max(0, int(expected_speakers or 0))
    merged = merge_segments(normalized, config.merge_gap)
    limited = limit_speakers(merged, expected, config)
    active = merge_segments(limited, config.merge_gap) or merged

    speaker_ids = sorted({seg.speaker for seg in active})
    scores = evaluate_lines(
        timings, active, speaker_ids, config.merge_gap, config.distance_penalty
    )

    current: list[int | None] = [None] * len(lines)
    _apply_best(current, scores, speaker_ids, eps)

    diarized = len(speaker_ids)
    desired = desired_speaker_count(diarized, expected)

    if _distinct(current) < desired:
        expanded = expand_segments(active, config.merge_gap)
        expanded_scores = evaluate_lines(
            timings, expanded, speaker_ids, config.merge_gap, config.distance_penalty
        )
        _apply_best(current, expanded_scores, speaker_ids, eps)
        if _distinct(current) < desired:
            ensure_coverage(current, timings, expanded_scores, speaker_ids, desired, eps)

    allowed = speaker_ids if desired >= diarized else rank_speakers(active)[:desired]
    if allowed and _distinct(current) > len(allowed):
        logger.debug(f"Restricting assignment to speakers {list(allowed)}")
        restrict_to_speakers(current, scores, allowed, eps)

    assignment = remap_speakers(lines, current)
    untimed = sum(1 for timing in timings if timing is None)
    logger.info(
        f"Assigned {len(lines)} lines to {assignment.num_speakers} speakers "
        f"(diarized={diarized}, expected={expected}, untimed={untimed})"
    )
    return assignment


@AssignerRegistry.register("diarization")
class DiarizationAssigner(BaseSpeakerAssigner):
    """Assign speakers by temporal overlap with diarization segments."""

    def __init__(self, config: AlignmentConfig | None = None):
        self.config = config or AlignmentConfig()

    def is_available(self, segments: Sequence[Any] | None) -> bool:
        return bool(segments)

    def assign(
        self,
        lines: Sequence[TranscriptLine],
        segments: Sequence[Any] | None = None,
        known_names: Sequence[str] = (),
        expected_speakers: int = 0,
    ) -> SpeakerAssignment:
        """Run the diarization pipeline.

        Raises:
            NoDiarizationEvidence: If the segments give nothing to align on
        """
        assignment = assign_from_diarization(lines, segments, expected_speakers, self.config)
        if not assignment and lines:
            raise NoDiarizationEvidence("diarization produced no assignment")
        return assignment
