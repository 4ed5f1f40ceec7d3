"""Temporal module — confirmation of held seals into a sequence."""

from handseal.temporal.sequence_tracker import SealSequenceTracker

__all__ = ["SealSequenceTracker"]
