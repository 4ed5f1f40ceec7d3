"""Pairwise features between the left and right hand."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from handseal.errors import HandsMissingError
from handseal.landmarks.geometry import close, distance
from handseal.types import INDEX_TIP, THUMB_TIP, WRIST, Handedness, HandPosition

HANDS_TOGETHER_DISTANCE = 0.3
TRIANGLE_INDEX_SEPARATION = 0.1
OCCLUSION_JUMP = 0.2


@dataclass(frozen=True, slots=True)
class HandRelationship:
    """Relationship between both hands for one frame.

    Attributes:
        distance: Wrist-to-wrist distance.
        vertical_alignment: Absolute y difference of the wrists.
        horizontal_alignment: Absolute x difference of the wrists.
        is_triangle_formation: Thumb tips joined, index tips spread vertically.
        are_hands_together: Wrists nearer than 0.3.
        are_thumbs_together: Thumb tips close.
        are_index_fingers_together: Index tips close.
        possible_occlusion: Wrist distance jumped by more than 0.2 since
            the previous frame.
        last_known_distance: Distance carried forward for the next frame.
    """
    distance: float
    vertical_alignment: float
    horizontal_alignment: float
    is_triangle_formation: bool
    are_hands_together: bool
    are_thumbs_together: bool
    are_index_fingers_together: bool
    possible_occlusion: bool
    last_known_distance: float | None = None


def find_hand(hands: Sequence[HandPosition], handedness: Handedness) -> HandPosition | None:
    """Return the first hand with the given handedness, if any."""
    return next((h for h in hands if h.handedness is handedness), None)


def analyze_relationship(
    hands: Sequence[HandPosition],
    previous: HandRelationship | None = None,
) -> HandRelationship:
    """Compute the HandRelationship for a Left/Right pair.

    Raises:
        HandsMissingError: If the Left or Right hand is absent.
    """
    left_hand = find_hand(hands, Handedness.LEFT)
    right_hand = find_hand(hands, Handedness.RIGHT)
    if left_hand is None or right_hand is None:
        raise HandsMissingError("Both hands required")

    left = left_hand.landmarks
    right = right_hand.landmarks

    left_wrist = left[WRIST]
    right_wrist = right[WRIST]
    wrist_distance = distance(left_wrist, right_wrist)

    possible_occlusion = False
    if previous is not None:
        # A stored distance of 0.0 counts as unknown
        reference = previous.last_known_distance or wrist_distance
        possible_occlusion = abs(wrist_distance - reference) > OCCLUSION_JUMP

    thumbs_together = close(left[THUMB_TIP], right[THUMB_TIP])

    return HandRelationship(
        distance=wrist_distance,
        vertical_alignment=abs(float(left_wrist[1]) - float(right_wrist[1])),
        horizontal_alignment=abs(float(left_wrist[0]) - float(right_wrist[0])),
        is_triangle_formation=(
            thumbs_together
            and abs(float(left[INDEX_TIP, 1]) - float(right[INDEX_TIP, 1])) > TRIANGLE_INDEX_SEPARATION
        ),
        are_hands_together=wrist_distance < HANDS_TOGETHER_DISTANCE,
        are_thumbs_together=thumbs_together,
        are_index_fingers_together=close(left[INDEX_TIP], right[INDEX_TIP]),
        possible_occlusion=possible_occlusion,
        last_known_distance=wrist_distance,
    )
