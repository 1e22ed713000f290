"""Line-to-speaker affinity scoring."""

import math
from typing import Sequence

from speaker_align.config.schema import MERGE_GAP_SECONDS, DISTANCE_PENALTY
from speaker_align.core import DiarizationSegment, LineTiming, SpeakerScore

LineScores = dict[int, SpeakerScore]


def score_speakers(
    timing: LineTiming,
    segments: Sequence[DiarizationSegment],
    speaker_ids: Sequence[int],
    margin: float = MERGE_GAP_SECONDS,
    distance_penalty: float = DISTANCE_PENALTY,
) -> LineScores:
    """Score one line against every candidate speaker.

    Each segment is padded by `margin` on both sides. A speaker's score is
    the total overlap of the line with its padded segments, minus a small
    penalty for the distance from the line midpoint to the nearest segment.
    Without any overlap the score is the negated distance, so nearby speakers
    still rank above distant ones.

    Args:
        timing: Line window
        segments: Diarization segments
        speaker_ids: Candidate speakers
        margin: Padding applied to each segment (seconds)
        distance_penalty: Weight of the midpoint distance when overlapping

    Returns:
        Score per candidate speaker
    """
    scores = {speaker: SpeakerScore() for speaker in speaker_ids}
    margin = max(0.0, margin)

    for seg in segments:
        data = scores.get(seg.speaker)
        if data is None:
            continue

        start = seg.start - margin
        end = seg.end + margin
        overlap = min(timing.end, end) - max(timing.start, start)
        if overlap > 0:
            data.overlap += overlap

        if timing.mid < start:
            distance = start - timing.mid
        elif timing.mid > end:
            distance = timing.mid - end
        else:
            distance = 0.0
        data.distance = min(data.distance, distance)

    for data in scores.values():
        if data.overlap > 0:
            penalty = 0.0 if math.isinf(data.distance) else data.distance * distance_penalty
            data.score = data.overlap - penalty
        elif math.isfinite(data.distance):
            data.score = -data.distance

    return scores


def evaluate_lines(
    timings: Sequence[LineTiming | None],
    segments: Sequence[DiarizationSegment],
    speaker_ids: Sequence[int],
    margin: float = MERGE_GAP_SECONDS,
    distance_penalty: float = DISTANCE_PENALTY,
) -> list[LineScores | None]:
    """Score every timed line; untimed lines get None."""
    if not speaker_ids or not segments:
        return [None] * len(timings)
    return [
        score_speakers(timing, segments, speaker_ids, margin, distance_penalty)
        if timing is not None else None
        for timing in timings
    ]


def best_speaker(
    scores: LineScores | None,
    speaker_ids: Sequence[int],
    epsilon: float,
) -> int | None:
    """Highest-scoring speaker; ties within `epsilon` go to the lower id.

    Returns None when no candidate has a finite score.
    """
    if not scores:
        return None

    best: int | None = None
    best_score = -math.inf
    for speaker in speaker_ids:
        data = scores.get(speaker)
        if data is None or not math.isfinite(data.score):
            continue
        if best is None or data.score > best_score + epsilon or (
            abs(data.score - best_score) <= epsilon and speaker < best
        ):
            best = speaker
            best_score = data.score
    return best
