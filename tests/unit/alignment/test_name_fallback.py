"""Tests for speaker assignment from name mentions."""

from speaker_align.alignment import (
    AssignerRegistry,
    NameMentionAssigner,
    assign_without_diarization,
    find_named_speaker,
)
from speaker_align.config import FallbackConfig


class TestFindNamedSpeaker:
    def test_earliest_mention_wins(self):
        candidates = [(1, "anna"), (2, "ben")]
        assert find_named_speaker("Hallo Ben, hier ist Anna", candidates) == 2

    def test_same_position_prefers_lower_id(self):
        candidates = [(2, "anna"), (1, "anna müller")]
        assert find_named_speaker("Ich bin Anna Müller", candidates) == 1

    def test_case_insensitive(self):
        assert find_named_speaker("ANNA MÜLLER hier", [(1, "anna müller")]) == 1

    def test_no_mention(self):
        assert find_named_speaker("Guten Morgen", [(1, "anna")]) is None
        assert find_named_speaker("", [(1, "anna")]) is None


class TestAssignWithoutDiarization:
    def test_introductions(self, introduction_lines, known_names):
        assignment = assign_without_diarization(introduction_lines, known_names)

        assert assignment.speaker_ids == [1, 1, 2, 2]
        assert len(assignment.speakers[1]) == 2
        assert len(assignment.speakers[2]) == 2

    def test_does_not_modify_input(self, introduction_lines, known_names):
        assign_without_diarization(introduction_lines, known_names)
        assert all(line.speaker_id is None for line in introduction_lines)

    def test_round_robin_without_mentions(self, line_factory):
        lines = line_factory((0, 1), (1, 2), (2, 3), (3, 4))
        assert assign_without_diarization(lines).speaker_ids == [1, 2, 1, 2]

    def test_round_robin_over_known_names(self, line_factory):
        lines = line_factory((0, 1), (1, 2), (2, 3), (3, 4))
        assignment = assign_without_diarization(lines, ["Anna", "Ben", "Cem"])
        assert assignment.speaker_ids == [1, 2, 3, 1]

    def test_custom_rotation(self, line_factory):
        lines = line_factory((0, 1), (1, 2), (2, 3))
        assert assign_without_diarization(lines, rotation=[3]).speaker_ids == [3, 3, 3]

    def test_blank_names_are_ignored(self, introduction_lines):
        names = ["", "  ", None, "Ben Schulz"]
        assignment = assign_without_diarization(introduction_lines, names)
        # ids are positions in the name list
        assert assignment.speaker_ids == [4, 4, 4, 4]

    def test_untimed_lines_are_fine(self, line_factory):
        lines = line_factory((None, None), (None, None), texts=["Anna hier", "weiter"])
        assert assign_without_diarization(lines, ["Anna"]).speaker_ids == [1, 1]

    def test_empty(self):
        assert not assign_without_diarization([], ["Anna"])


class TestNameMentionAssigner:
    def test_registered(self):
        assigner = AssignerRegistry.create("names", config=FallbackConfig(rotation=[2, 1]))
        assert isinstance(assigner, NameMentionAssigner)

    def test_uses_configured_rotation(self, line_factory):
        lines = line_factory((0, 1), (1, 2))
        assigner = NameMentionAssigner(FallbackConfig(rotation=[2, 1]))
        assert assigner.assign(lines).speaker_ids == [2, 1]

    def test_assign_ignores_segments(self, introduction_lines, known_names):
        assignment = NameMentionAssigner().assign(
            introduction_lines, [{"start": 0, "end": 5, "speaker": 1}], known_names
        )
        assert assignment.speaker_ids == [1, 1, 2, 2]
