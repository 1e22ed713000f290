"""Speaker assignment strategy registry."""

from speaker_align.core import Registry, BaseSpeakerAssigner

# Assigner Registry - all speaker assignment strategies register here
AssignerRegistry = Registry[BaseSpeakerAssigner]("assigner")
