#!/usr/bin/env python
"""CLI for speaker alignment."""

import argparse
import json
import sys
from dataclasses import asdict
from pathlib import Path

# Add src to path for development
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from speaker_align import SpeakerAligner, load_segments, load_transcript
from speaker_align.transcript import read_speaker_list
from speaker_align.core import SpeakerAlignError
from speaker_align.naming import build_name_map, parse_speaker_list


def _align(args):
    aligner = SpeakerAligner.from_config(env=args.env, config_dir=args.config_dir)

    lines = load_transcript(args.transcript)
    segments = load_segments(args.diarization) if args.diarization else None

    result = aligner.align(
        lines,
        segments,
        known_names=args.names or [],
        expected_speakers=args.expected,
    )
    return aligner, result


def cmd_align(args):
    """Align a transcript and write labeled lines as JSON."""
    try:
        aligner, result = _align(args)
    except SpeakerAlignError as e:
        print(f"✗ Error: {e}", file=sys.stderr)
        return 1

    parsed = {}
    if args.speaker_list:
        try:
            parsed = parse_speaker_list(read_speaker_list(args.speaker_list))
        except SpeakerAlignError as e:
            print(f"✗ Error: {e}", file=sys.stderr)
            return 1
    name_map = build_name_map(parsed, args.names or [], aligner.config.naming.fixes)

    labeled = aligner.label(
        result,
        name_map,
        known_names=args.names or [],
        allow_names=not args.anonymous,
    )
    payload = json.dumps([asdict(line) for line in labeled], ensure_ascii=False, indent=2)

    if args.output:
        Path(args.output).write_text(payload, encoding="utf-8")
        print(f"✓ {len(labeled)} lines, {result.num_speakers} speakers → {args.output}")
    else:
        print(payload)
    return 0


def cmd_summary(args):
    """Print per-speaker line counts."""
    try:
        _, result = _align(args)
    except SpeakerAlignError as e:
        print(f"✗ Error: {e}", file=sys.stderr)
        return 1

    print(f"\nStrategy: {result.strategy}")
    print(f"Expected speakers: {result.expected_speakers}")
    print(f"Speakers: {result.num_speakers}")
    print("-" * 50)

    for speaker_id, lines in result.speakers.items():
        print(f"  Speaker {speaker_id}: {len(lines)} lines")
    return 0


def main():
    parser = argparse.ArgumentParser(
        description="speaker-align - attribute transcript lines to speakers",
    )
    parser.add_argument("--env", "-e", default="development", help="Environment")
    parser.add_argument("--config-dir", "-c", default="configs", help="Config directory")

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    def add_inputs(p):
        p.add_argument("transcript", help="Transcript (.srt or JSON)")
        p.add_argument("--diarization", "-d", help="Diarization segments (JSON)")
        p.add_argument("--names", "-n", nargs="*", help="Known speaker names, in id order")
        p.add_argument("--expected", "-k", type=int, help="Expected speaker count")

    # Align
    p = subparsers.add_parser("align", help="Align and label a transcript")
    add_inputs(p)
    p.add_argument("--speaker-list", "-s", help="Text file with 'Speaker N: Name' lines")
    p.add_argument("--anonymous", action="store_true", help="Keep 'Speaker N' labels")
    p.add_argument("--output", "-o", help="Output JSON path (default: stdout)")
    p.set_defaults(func=cmd_align)

    # Summary
    p = subparsers.add_parser("summary", help="Show per-speaker line counts")
    add_inputs(p)
    p.set_defaults(func=cmd_summary)

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        return 0

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
