"""Shared test fixtures and synthetic hand builders."""

from __future__ import annotations

from typing import Any

import numpy as np
import pytest

from handseal.landmarks.hand_analysis import FingerPositions, HandAnalysis, ThumbPosition
from handseal.landmarks.relationship import HandRelationship
from handseal.types import Handedness, HandPosition

# Open, spread hand pointing up, as offsets from the wrist.
# Not vertical, not horizontal, fingers straight, thumb up and outside.
OPEN_HAND_OFFSETS: list[tuple[float, float]] = [
    (0.0, 0.0),                                                      # wrist
    (-0.05, -0.03), (-0.09, -0.07), (-0.12, -0.11), (-0.15, -0.15),  # thumb
    (-0.04, -0.18), (-0.045, -0.24), (-0.05, -0.29), (-0.055, -0.34),  # index
    (0.0, -0.19), (0.0, -0.26), (0.0, -0.32), (0.0, -0.38),          # middle
    (0.04, -0.17), (0.05, -0.23), (0.06, -0.28), (0.07, -0.32),      # ring
    (0.08, -0.14), (0.10, -0.17), (0.12, -0.19), (0.14, -0.20),      # pinky
]


def hand_points(
    wrist: tuple[float, float] = (0.5, 0.7),
    overrides: dict[int, Any] | None = None,
) -> list[Any]:
    """Open-hand points around ``wrist``; ``overrides`` replace absolute points."""
    wx, wy = wrist
    points: list[Any] = [(wx + dx, wy + dy) for dx, dy in OPEN_HAND_OFFSETS]
    for idx, point in (overrides or {}).items():
        points[idx] = point
    return points


def make_hand(
    handedness: Handedness,
    wrist: tuple[float, float] = (0.5, 0.7),
    overrides: dict[int, Any] | None = None,
) -> HandPosition:
    return HandPosition.from_points(hand_points(wrist, overrides), handedness)


def make_analysis(previous_state: HandAnalysis | None = None, **flags: bool) -> HandAnalysis:
    """HandAnalysis with every flag False except those given by name."""
    thumb_fields = {f: flags.pop(f, False) for f in ThumbPosition.__dataclass_fields__}
    finger_fields = {f: flags.pop(f, False) for f in FingerPositions.__dataclass_fields__}
    is_vertical = flags.pop("is_vertical", False)
    is_horizontal = flags.pop("is_horizontal", False)
    assert not flags, f"Unknown flags: {sorted(flags)}"
    return HandAnalysis(
        is_vertical=is_vertical,
        is_horizontal=is_horizontal,
        thumb_position=ThumbPosition(**thumb_fields),
        finger_positions=FingerPositions(**finger_fields),
        previous_state=previous_state,
    )


def make_relationship(**kwargs: Any) -> HandRelationship:
    """Far-apart, unaligned hands unless overridden."""
    values: dict[str, Any] = {
        "distance": 0.5,
        "vertical_alignment": 0.5,
        "horizontal_alignment": 0.5,
        "is_triangle_formation": False,
        "are_hands_together": False,
        "are_thumbs_together": False,
        "are_index_fingers_together": False,
        "possible_occlusion": False,
    }
    values.update(kwargs)
    values.setdefault("last_known_distance", values["distance"])
    return HandRelationship(**values)


@pytest.fixture
def open_left() -> HandPosition:
    return make_hand(Handedness.LEFT, wrist=(0.35, 0.8))


@pytest.fixture
def open_right() -> HandPosition:
    return make_hand(Handedness.RIGHT, wrist=(0.65, 0.8))


@pytest.fixture
def bird_hands() -> list[HandPosition]:
    """Thumb tips joined on top, index tips spread vertically."""
    left = make_hand(
        Handedness.LEFT,
        wrist=(0.35, 0.8),
        overrides={4: (0.50, 0.40), 8: (0.40, 0.55)},
    )
    right = make_hand(
        Handedness.RIGHT,
        wrist=(0.65, 0.8),
        overrides={4: (0.52, 0.40), 8: (0.60, 0.70)},
    )
    return [left, right]


@pytest.fixture
def far_apart_hands() -> list[HandPosition]:
    """Open hands 0.5 apart with no seal features."""
    return [
        make_hand(Handedness.LEFT, wrist=(0.25, 0.8)),
        make_hand(Handedness.RIGHT, wrist=(0.75, 0.8)),
    ]


@pytest.fixture
def dummy_bgr_frame() -> np.ndarray:
    """Generate a dummy 480x640 BGR frame."""
    return np.random.default_rng(42).integers(
        0, 256, (480, 640, 3), dtype=np.uint8
    )
