"""Frame-to-frame detection memory."""

from __future__ import annotations

from dataclasses import dataclass

from handseal.landmarks.hand_analysis import HandAnalysis
from handseal.landmarks.relationship import HandRelationship


@dataclass(frozen=True, slots=True)
class DetectionMemory:
    """What the detector remembers from the previous frame.

    Immutable: every successful detection returns a new instance that the
    caller passes back in with the next frame.
    """
    left: HandAnalysis | None = None
    right: HandAnalysis | None = None
    relationship: HandRelationship | None = None

    @classmethod
    def empty(cls) -> DetectionMemory:
        return cls()

    @property
    def is_empty(self) -> bool:
        return self.left is None and self.right is None and self.relationship is None
