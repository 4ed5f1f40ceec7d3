"""Hand seal recognition core.

Classifies two-hand landmark frames into one of twelve hand seals with a
confidence score. Camera capture lives in ``handseal.vision``; everything
else is pure Python over in-memory values.
"""

from handseal.inference.detector import DetectionOutcome, HandSealDetector, detect_hand_seal
from handseal.inference.memory import DetectionMemory
from handseal.types import Handedness, HandPosition, Seal, SealDetectionResult

__version__ = "0.1.0"

__all__ = [
    "DetectionMemory",
    "DetectionOutcome",
    "HandSealDetector",
    "detect_hand_seal",
    "Handedness",
    "HandPosition",
    "Seal",
    "SealDetectionResult",
]
