"""Single-hand feature analysis.

Reduces the 21 raw landmarks of one hand into a compact set of boolean
features (orientation, thumb relation, finger togetherness, straightness
and curl) that the seal scorers consume.
"""

from __future__ import annotations

from dataclasses import dataclass, replace

import numpy as np

from handseal.landmarks.geometry import close, finger_up, is_valid_point
from handseal.types import (
    CRITICAL_LANDMARKS,
    INDEX_BASE,
    INDEX_TIP,
    MIDDLE_BASE,
    MIDDLE_TIP,
    PINKY_TIP,
    RING_TIP,
    THUMB_TIP,
    WRIST,
)

ORIENTATION_TOLERANCE = 0.1
THUMB_UP_MARGIN = 0.1
THUMB_ON_PINKY_THRESHOLD = 0.08


@dataclass(frozen=True, slots=True)
class ThumbPosition:
    is_up: bool
    is_outside: bool
    is_on_top: bool


@dataclass(frozen=True, slots=True)
class FingerPositions:
    are_index_middle_together: bool
    are_all_fingers_together: bool
    are_fingers_straight: bool
    is_index_up: bool
    is_middle_up: bool
    are_fingers_curled: bool
    thumb_on_pinky: bool


@dataclass(frozen=True, slots=True)
class HandAnalysis:
    """Per-frame features of one hand.

    Attributes:
        is_vertical: Index and pinky tips share roughly the same x.
        is_horizontal: Index and pinky tips share roughly the same y.
        thumb_position: Thumb relation to wrist and index finger.
        finger_positions: Togetherness, straightness and curl flags.
        previous_state: Last frame's analysis, attached only when this
            frame's critical landmarks were unusable.
    """
    is_vertical: bool
    is_horizontal: bool
    thumb_position: ThumbPosition
    finger_positions: FingerPositions
    previous_state: HandAnalysis | None = None


def are_fingers_curled(landmarks: np.ndarray) -> bool:
    """Index, middle and ring tips each hang below their preceding joint."""
    return all(
        float(landmarks[tip, 1]) > float(landmarks[tip - 1, 1])
        for tip in (INDEX_TIP, MIDDLE_TIP, RING_TIP)
    )


def has_valid_critical_landmarks(landmarks: np.ndarray) -> bool:
    return all(is_valid_point(landmarks, idx) for idx in CRITICAL_LANDMARKS)


def analyze_hand(
    landmarks: np.ndarray,
    previous: HandAnalysis | None = None,
) -> HandAnalysis | None:
    """Compute the HandAnalysis of one hand.

    When the critical landmarks (wrist and the thumb, index, middle and
    pinky tips) are not all finite, the previous frame's analysis is
    reused with ``previous_state`` pointing at it. Without a previous
    analysis there is no usable hand and None is returned.

    Args:
        landmarks: (21, 2|3) array of normalized coordinates.
        previous: Analysis of the same hand from the previous frame.

    Returns:
        A fully populated HandAnalysis, or None.
    """
    if not has_valid_critical_landmarks(landmarks):
        if previous is None:
            return None
        # Keep lookback at exactly one frame
        last = replace(previous, previous_state=None)
        return replace(last, previous_state=last)

    wrist = landmarks[WRIST]
    thumb_tip = landmarks[THUMB_TIP]
    index_base = landmarks[INDEX_BASE]
    index_tip = landmarks[INDEX_TIP]
    middle_base = landmarks[MIDDLE_BASE]
    middle_tip = landmarks[MIDDLE_TIP]
    ring_tip = landmarks[RING_TIP]
    pinky_tip = landmarks[PINKY_TIP]

    index_up = finger_up(index_base, index_tip)
    middle_up = finger_up(middle_base, middle_tip)

    thumb = ThumbPosition(
        is_up=float(thumb_tip[1]) < float(wrist[1]) - THUMB_UP_MARGIN,
        is_outside=float(thumb_tip[0]) < float(index_tip[0]),
        is_on_top=float(thumb_tip[1]) < float(index_tip[1]),
    )
    fingers = FingerPositions(
        are_index_middle_together=close(index_tip, middle_tip),
        are_all_fingers_together=(
            close(index_tip, middle_tip)
            and close(middle_tip, ring_tip)
            and close(ring_tip, pinky_tip)
        ),
        are_fingers_straight=index_up and middle_up,
        is_index_up=index_up,
        is_middle_up=middle_up,
        are_fingers_curled=are_fingers_curled(landmarks),
        thumb_on_pinky=close(thumb_tip, pinky_tip, THUMB_ON_PINKY_THRESHOLD),
    )

    return HandAnalysis(
        is_vertical=abs(float(index_tip[0]) - float(pinky_tip[0])) < ORIENTATION_TOLERANCE,
        is_horizontal=abs(float(index_tip[1]) - float(pinky_tip[1])) < ORIENTATION_TOLERANCE,
        thumb_position=thumb,
        finger_positions=fingers,
    )
