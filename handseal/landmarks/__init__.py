"""Landmarks module — geometry, single-hand analysis, and hand-pair relationship."""

from handseal.landmarks.hand_analysis import FingerPositions, HandAnalysis, ThumbPosition, analyze_hand
from handseal.landmarks.relationship import HandRelationship, analyze_relationship

__all__ = [
    "FingerPositions",
    "HandAnalysis",
    "ThumbPosition",
    "analyze_hand",
    "HandRelationship",
    "analyze_relationship",
]
