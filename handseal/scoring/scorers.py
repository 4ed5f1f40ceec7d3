"""Per-seal confidence scorers.

Every scorer sums fixed weights for the sub-conditions that hold,
optionally subtracts penalties, and reports a match when the total
exceeds the seal's threshold. The weights and thresholds are empirically
tuned reference values; the order of the additions is preserved so the
floating-point totals stay the same.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from handseal.landmarks.hand_analysis import FingerPositions, HandAnalysis
from handseal.landmarks.relationship import HandRelationship
from handseal.types import Seal

OCCLUSION_RESCUE_CONFIDENCE = 0.7

THRESHOLDS: dict[Seal, float] = {
    Seal.BIRD: 0.8,
    Seal.DRAGON: 0.7,
    Seal.TIGER: 0.9,
    Seal.BOAR: 0.8,
    Seal.HARE: 0.8,
    Seal.MONKEY: 0.7,
    Seal.RAT: 0.75,
    Seal.SERPENT: 0.85,
    Seal.RAM: 0.8,
    Seal.HORSE: 0.8,
    Seal.DOG: 0.8,
    Seal.OX: 0.8,
}

HORSE_CONFIDENCE = 0.85
DOG_CONFIDENCE = 0.9
OX_CONFIDENCE = 0.9


@dataclass(frozen=True, slots=True)
class SealScore:
    matches: bool
    confidence: float


SealScorer = Callable[[HandAnalysis, HandAnalysis, HandRelationship], SealScore]


def _score(seal: Seal, confidence: float) -> SealScore:
    # Rat's terms can add up past 1.0; every threshold is below 1.0
    return SealScore(matches=confidence > THRESHOLDS[seal], confidence=min(confidence, 1.0))


def _held_last_frame(
    left: HandAnalysis,
    right: HandAnalysis,
    condition: Callable[[FingerPositions], bool],
) -> bool:
    """True when both hands carry a previous state in which ``condition`` held."""
    if left.previous_state is None or right.previous_state is None:
        return False
    return condition(left.previous_state.finger_positions) and condition(
        right.previous_state.finger_positions
    )


def _rescue(
    confidence: float,
    left: HandAnalysis,
    right: HandAnalysis,
    relationship: HandRelationship,
    condition: Callable[[FingerPositions], bool],
) -> float:
    if relationship.possible_occlusion and _held_last_frame(left, right, condition):
        return max(confidence, OCCLUSION_RESCUE_CONFIDENCE)
    return confidence


# ---------------------------------------------------------------------------
# Weighted scorers
# ---------------------------------------------------------------------------

def score_bird(left: HandAnalysis, right: HandAnalysis, relationship: HandRelationship) -> SealScore:
    confidence = 0.0
    # Triangle formation is the decisive cue
    confidence += 0.4 if relationship.is_triangle_formation else 0
    confidence += 0.3 if relationship.are_thumbs_together else 0
    confidence += 0.2 if (left.thumb_position.is_on_top and right.thumb_position.is_on_top) else 0
    confidence += 0.1 if relationship.are_index_fingers_together else 0
    return _score(Seal.BIRD, confidence)


def score_dragon(left: HandAnalysis, right: HandAnalysis, relationship: HandRelationship) -> SealScore:
    confidence = 0.0
    confidence += 0.3 if relationship.are_hands_together else 0
    confidence += 0.3 if left.thumb_position.is_on_top else 0
    # Interlocked fingers
    confidence += 0.2 if relationship.are_index_fingers_together else 0
    confidence += 0.2 if (
        left.finger_positions.are_all_fingers_together
        and right.finger_positions.are_all_fingers_together
    ) else 0
    return _score(Seal.DRAGON, confidence)


def score_tiger(left: HandAnalysis, right: HandAnalysis, relationship: HandRelationship) -> SealScore:
    confidence = 0.0
    confidence += 0.3 if (left.thumb_position.is_up and right.thumb_position.is_up) else 0
    confidence += 0.2 if (
        left.finger_positions.is_index_up and right.finger_positions.is_index_up
    ) else 0
    confidence += 0.2 if relationship.are_index_fingers_together else 0
    confidence += 0.2 if relationship.are_hands_together else 0
    confidence += 0.1 if relationship.vertical_alignment < 0.1 else 0
    return _score(Seal.TIGER, confidence)


def score_boar(left: HandAnalysis, right: HandAnalysis, relationship: HandRelationship) -> SealScore:
    confidence = 0.0
    confidence += 0.3 if (left.is_vertical and right.is_vertical) else 0
    confidence += 0.2 if relationship.are_hands_together else 0
    confidence += 0.3 if (
        left.finger_positions.are_all_fingers_together
        and right.finger_positions.are_all_fingers_together
    ) else 0
    confidence += 0.2 if relationship.are_thumbs_together else 0
    return _score(Seal.BOAR, confidence)


def score_hare(left: HandAnalysis, right: HandAnalysis, relationship: HandRelationship) -> SealScore:
    confidence = 0.0
    # Flat left hand over a right "finger gun"
    confidence += 0.3 if left.is_horizontal else 0
    confidence += 0.3 if right.finger_positions.are_fingers_straight else 0
    confidence += 0.2 if relationship.are_hands_together else 0
    confidence += 0.2 if left.thumb_position.is_on_top else 0
    return _score(Seal.HARE, confidence)


def score_monkey(left: HandAnalysis, right: HandAnalysis, relationship: HandRelationship) -> SealScore:
    confidence = 0.0
    confidence += 0.4 if (
        left.finger_positions.thumb_on_pinky and right.finger_positions.thumb_on_pinky
    ) else 0
    confidence += 0.3 if relationship.are_hands_together else 0
    confidence += 0.3 if (
        left.finger_positions.are_all_fingers_together
        and right.finger_positions.are_all_fingers_together
    ) else 0
    confidence = _rescue(confidence, left, right, relationship, lambda f: f.thumb_on_pinky)
    return _score(Seal.MONKEY, confidence)


def score_rat(left: HandAnalysis, right: HandAnalysis, relationship: HandRelationship) -> SealScore:
    lf = left.finger_positions
    rf = right.finger_positions

    confidence = 0.0
    # Left hand
    if left.is_vertical:
        confidence += 0.15
    if lf.are_fingers_curled:
        confidence += 0.15
    if lf.are_all_fingers_together or lf.thumb_on_pinky:
        confidence += 0.15

    # Right hand
    if right.is_vertical and not right.is_horizontal:
        confidence += 0.15
    if rf.are_fingers_curled:
        confidence += 0.15
    if rf.are_all_fingers_together:
        confidence += 0.15
    if right.thumb_position.is_outside and right.thumb_position.is_up:
        confidence += 0.15

    # Relationship
    if relationship.are_hands_together:
        confidence += 0.1
    if relationship.distance < 0.3:
        confidence += 0.1
    if relationship.vertical_alignment < 0.3:
        confidence += 0.1
    if relationship.horizontal_alignment < 0.15:
        confidence += 0.1

    # Penalties
    if lf.are_fingers_straight or rf.are_fingers_straight:
        confidence -= 0.3
    if not left.is_vertical or not right.is_vertical:
        confidence -= 0.3

    confidence = max(0.0, confidence)
    confidence = _rescue(confidence, left, right, relationship, lambda f: f.are_fingers_curled)
    return _score(Seal.RAT, confidence)


def score_serpent(left: HandAnalysis, right: HandAnalysis, relationship: HandRelationship) -> SealScore:
    confidence = 0.0
    confidence += 0.3 if (
        left.finger_positions.are_all_fingers_together
        and right.finger_positions.are_all_fingers_together
    ) else 0
    confidence += 0.2 if relationship.are_hands_together else 0
    confidence += 0.2 if relationship.vertical_alignment < 0.1 else 0
    confidence += 0.2 if (left.is_vertical and right.is_vertical) else 0
    confidence += 0.1 if (not left.thumb_position.is_up and not right.thumb_position.is_up) else 0
    confidence = _rescue(
        confidence, left, right, relationship, lambda f: f.are_all_fingers_together
    )
    return _score(Seal.SERPENT, confidence)


def score_ram(left: HandAnalysis, right: HandAnalysis, relationship: HandRelationship) -> SealScore:
    confidence = 0.0
    confidence += 0.2 if (left.is_vertical and right.is_vertical) else 0
    confidence += 0.2 if left.thumb_position.is_on_top else 0
    confidence += 0.2 if relationship.are_hands_together else 0
    confidence += 0.2 if (
        left.finger_positions.are_all_fingers_together
        and right.finger_positions.are_all_fingers_together
    ) else 0
    confidence += 0.2 if relationship.are_index_fingers_together else 0
    return _score(Seal.RAM, confidence)


# ---------------------------------------------------------------------------
# Rule-based scorers (all-or-nothing)
# ---------------------------------------------------------------------------

def score_horse(left: HandAnalysis, right: HandAnalysis, relationship: HandRelationship) -> SealScore:
    holds = (
        relationship.are_index_fingers_together
        and left.finger_positions.are_fingers_straight
        and right.finger_positions.are_fingers_straight
    )
    return _score(Seal.HORSE, HORSE_CONFIDENCE if holds else 0.0)


def score_dog(left: HandAnalysis, right: HandAnalysis, relationship: HandRelationship) -> SealScore:
    """Flat left hand resting on a right fist."""
    holds = (
        left.is_horizontal
        and not left.is_vertical
        and left.finger_positions.are_all_fingers_together
        and not left.finger_positions.are_fingers_curled
        and right.finger_positions.are_fingers_curled
        and left.thumb_position.is_on_top
        and relationship.are_hands_together
    )
    return _score(Seal.DOG, DOG_CONFIDENCE if holds else 0.0)


def score_ox(left: HandAnalysis, right: HandAnalysis, relationship: HandRelationship) -> SealScore:
    holds = right.is_horizontal and left.is_vertical
    return _score(Seal.OX, OX_CONFIDENCE if holds else 0.0)


SCORERS: dict[Seal, SealScorer] = {
    Seal.MONKEY: score_monkey,
    Seal.DRAGON: score_dragon,
    Seal.RAT: score_rat,
    Seal.BIRD: score_bird,
    Seal.SERPENT: score_serpent,
    Seal.OX: score_ox,
    Seal.DOG: score_dog,
    Seal.HORSE: score_horse,
    Seal.TIGER: score_tiger,
    Seal.BOAR: score_boar,
    Seal.RAM: score_ram,
    Seal.HARE: score_hare,
}
