"""Public hand seal detection entry point.

Flow for one frame: two HandPositions → single-hand analysis (×2, with
the previous frame's analyses as fallback) → relationship analysis →
priority decision tree → SealDetectionResult.

The pure ``detect_hand_seal`` threads memory explicitly. ``HandSealDetector``
keeps that memory for a frame loop.
"""

from __future__ import annotations

import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from threading import Lock

from loguru import logger

from handseal.inference.decision_tree import classify
from handseal.inference.memory import DetectionMemory
from handseal.landmarks.hand_analysis import HandAnalysis, analyze_hand
from handseal.landmarks.relationship import HandRelationship, analyze_relationship, find_hand
from handseal.types import Handedness, HandPosition, SealDetectionResult


@dataclass(frozen=True, slots=True)
class DetectionOutcome:
    """Result of one detection call plus the memory for the next one.

    Attributes:
        result: Seal and confidence for this frame.
        memory: Memory to pass into the next call.
        error: Reason an internal fault was turned into a null result, or None.
    """
    result: SealDetectionResult
    memory: DetectionMemory = field(default_factory=DetectionMemory.empty)
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def detect_hand_seal(
    hands: Sequence[HandPosition],
    memory: DetectionMemory | None = None,
) -> DetectionOutcome:
    """Classify one frame of two-hand landmarks.

    Never raises. Anything other than exactly one usable Left and one
    usable Right hand gives a null result with the memory left as is.

    Args:
        hands: HandPositions tracked in the current frame.
        memory: Memory returned by the previous call (None for the first frame).

    Returns:
        DetectionOutcome with the result and the updated memory.
    """
    memory = memory or DetectionMemory.empty()

    try:
        if len(hands) != 2:
            return DetectionOutcome(SealDetectionResult.none(), memory)

        left_hand = find_hand(hands, Handedness.LEFT)
        right_hand = find_hand(hands, Handedness.RIGHT)
        if left_hand is None or right_hand is None or left_hand.is_empty or right_hand.is_empty:
            return DetectionOutcome(SealDetectionResult.none(), memory)

        left = analyze_hand(left_hand.landmarks, memory.left)
        right = analyze_hand(right_hand.landmarks, memory.right)
        if left is None or right is None:
            return DetectionOutcome(SealDetectionResult.none(), memory)

        relationship = analyze_relationship((left_hand, right_hand), memory.relationship)
        new_memory = DetectionMemory(left=left, right=right, relationship=relationship)
        return DetectionOutcome(classify(left, right, relationship), new_memory)
    except Exception as exc:
        logger.exception(f"Hand seal detection failed: {exc!r}")
        return DetectionOutcome(SealDetectionResult.none(), memory, error=repr(exc))


class HandSealDetector:
    """Stateful detector for a real-time frame loop.

    Holds the detection memory between frames and swaps it atomically, so
    each frame sees exactly the memory written by the frame before it.

    Usage:
        >>> detector = HandSealDetector()
        >>> # In your frame loop:
        >>> result = detector.detect(hand_positions)
        >>> if result.seal:
        ...     print(f"{result.name}: {result.confidence:.2f}")
    """

    def __init__(
        self,
        debug_log_interval_s: float = 5.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize the detector.

        Args:
            debug_log_interval_s: Minimum seconds between debug dumps of the
                hand features (0 logs every frame).
            clock: Monotonic time source, in seconds.
        """
        self._memory = DetectionMemory.empty()
        self._lock = Lock()
        self._debug_log_interval_s = debug_log_interval_s
        self._clock = clock
        self._last_debug_log: float | None = None
        self._last_error: str | None = None

    @property
    def memory(self) -> DetectionMemory:
        with self._lock:
            return self._memory

    @property
    def last_error(self) -> str | None:
        """Reason of the most recent internal fault, if the last frame had one."""
        return self._last_error

    def detect(self, hands: Sequence[HandPosition]) -> SealDetectionResult:
        """Classify one frame and remember it for the next."""
        with self._lock:
            previous = self._memory
            outcome = detect_hand_seal(hands, previous)
            self._memory = outcome.memory
            self._last_error = outcome.error
            if outcome.memory is not previous:
                self._maybe_log_features(outcome)
        return outcome.result

    def reset(self) -> None:
        """Forget the previous frame."""
        with self._lock:
            self._memory = DetectionMemory.empty()
            self._last_debug_log = None
            self._last_error = None

    def _maybe_log_features(self, outcome: DetectionOutcome) -> None:
        now = self._clock()
        if (
            self._last_debug_log is not None
            and now - self._last_debug_log <= self._debug_log_interval_s
        ):
            return
        self._last_debug_log = now

        memory = outcome.memory
        logger.debug(
            f"Left: {_describe(memory.left)} | Right: {_describe(memory.right)} | "
            f"Relationship: {_describe_relationship(memory.relationship)} | "
            f"Result: {outcome.result.name} ({outcome.result.confidence:.2f})"
        )


def _describe(analysis: HandAnalysis | None) -> str:
    if analysis is None:
        return "none"
    flags = {
        "vertical": analysis.is_vertical,
        "horizontal": analysis.is_horizontal,
        "thumb_up": analysis.thumb_position.is_up,
        "thumb_outside": analysis.thumb_position.is_outside,
        "thumb_on_top": analysis.thumb_position.is_on_top,
        "together": analysis.finger_positions.are_all_fingers_together,
        "straight": analysis.finger_positions.are_fingers_straight,
        "curled": analysis.finger_positions.are_fingers_curled,
        "thumb_on_pinky": analysis.finger_positions.thumb_on_pinky,
        "stale": analysis.previous_state is not None,
    }
    return ",".join(name for name, on in flags.items() if on) or "-"


def _describe_relationship(relationship: HandRelationship | None) -> str:
    if relationship is None:
        return "none"
    return (
        f"dist={relationship.distance:.3f} "
        f"dy={relationship.vertical_alignment:.3f} "
        f"dx={relationship.horizontal_alignment:.3f} "
        f"triangle={relationship.is_triangle_formation} "
        f"together={relationship.are_hands_together} "
        f"thumbs={relationship.are_thumbs_together} "
        f"index={relationship.are_index_fingers_together} "
        f"occlusion={relationship.possible_occlusion}"
    )
