"""Inference module — decision tree and the public detection entry point."""

from handseal.inference.decision_tree import BUCKETS, SealBucket, classify
from handseal.inference.detector import DetectionOutcome, HandSealDetector, detect_hand_seal
from handseal.inference.memory import DetectionMemory

__all__ = [
    "BUCKETS",
    "SealBucket",
    "classify",
    "DetectionOutcome",
    "HandSealDetector",
    "detect_hand_seal",
    "DetectionMemory",
]
