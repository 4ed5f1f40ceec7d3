"""Shared types and constants for the hand seal core."""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from numbers import Real
from typing import TYPE_CHECKING, Any

import numpy as np

if TYPE_CHECKING:
    from numpy.typing import NDArray


# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

NUM_HAND_LANDMARKS = 21

# Landmark indices (MediaPipe hand model)
WRIST = 0
THUMB_TIP = 4
INDEX_BASE = 5
INDEX_TIP = 8
MIDDLE_BASE = 9
MIDDLE_TIP = 12
RING_TIP = 16
PINKY_TIP = 20

# Points that must be well-formed for a frame's analysis to be trusted
CRITICAL_LANDMARKS: tuple[int, ...] = (WRIST, THUMB_TIP, INDEX_TIP, MIDDLE_TIP, PINKY_TIP)


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class Handedness(Enum):
    LEFT = "Left"
    RIGHT = "Right"

    @classmethod
    def from_label(cls, label: str) -> Handedness | None:
        """Map a tracker label ("Left", "right", ...) to a Handedness."""
        normalized = label.strip().lower()
        for member in cls:
            if member.value.lower() == normalized:
                return member
        return None


class Seal(Enum):
    """The closed catalogue of twelve hand seals."""
    MONKEY = "Monkey"
    DRAGON = "Dragon"
    RAT = "Rat"
    BIRD = "Bird"
    SERPENT = "Serpent"
    OX = "Ox"
    DOG = "Dog"
    HORSE = "Horse"
    TIGER = "Tiger"
    BOAR = "Boar"
    RAM = "Ram"
    HARE = "Hare"

    @classmethod
    def from_name(cls, name: str) -> Seal:
        """Look up a seal by name, case-insensitively.

        "Snake" is accepted as an alias of Serpent.

        Raises:
            ValueError: If the name is not a known seal.
        """
        normalized = name.strip().lower()
        if normalized == "snake":
            return cls.SERPENT
        for member in cls:
            if member.value.lower() == normalized:
                return member
        raise ValueError(f"Unknown seal: {name!r}")


# ---------------------------------------------------------------------------
# Core Data Structures
# ---------------------------------------------------------------------------

def _coerce_coordinate(value: Any) -> float:
    if isinstance(value, Real) and not isinstance(value, bool):
        return float(value)
    return math.nan


def _coerce_point(point: Any) -> tuple[float, float, float]:
    """Convert a landmark-like object into (x, y, z), NaN where unusable."""
    if point is None:
        return (math.nan, math.nan, math.nan)
    if hasattr(point, "x") and hasattr(point, "y"):
        return (
            _coerce_coordinate(point.x),
            _coerce_coordinate(point.y),
            _coerce_coordinate(getattr(point, "z", 0.0)),
        )
    try:
        values = list(point)
    except TypeError:
        return (math.nan, math.nan, math.nan)
    if len(values) < 2:
        return (math.nan, math.nan, math.nan)
    z = values[2] if len(values) > 2 else 0.0
    return (
        _coerce_coordinate(values[0]),
        _coerce_coordinate(values[1]),
        _coerce_coordinate(z),
    )


@dataclass(frozen=True, slots=True)
class HandPosition:
    """One tracked hand for a single frame.

    Attributes:
        landmarks: (N, 2) or (N, 3) float array of normalized coordinates.
            N is 21 for a complete hand. Missing or non-numeric
            coordinates are stored as NaN.
        handedness: Left or right hand, as labelled by the tracker.
    """
    landmarks: NDArray[np.float64]
    handedness: Handedness

    def __post_init__(self) -> None:
        assert self.landmarks.ndim == 2 and self.landmarks.shape[1] in (2, 3), (
            f"Expected shape (N, 2) or (N, 3), got {self.landmarks.shape}"
        )

    @classmethod
    def from_points(cls, points: Iterable[Any], handedness: Handedness | str) -> HandPosition:
        """Build a HandPosition from tuples or landmark objects with .x/.y.

        Anything that is not a finite real number ends up as NaN, so
        corrupted points reach the analyzer instead of failing here.
        """
        if isinstance(handedness, str):
            label = Handedness.from_label(handedness)
            if label is None:
                raise ValueError(f"Unknown handedness: {handedness!r}")
            handedness = label
        rows = [_coerce_point(p) for p in points]
        if not rows:
            array = np.empty((0, 3), dtype=np.float64)
        else:
            array = np.array(rows, dtype=np.float64)
        array.setflags(write=False)
        return cls(landmarks=array, handedness=handedness)

    @property
    def is_empty(self) -> bool:
        return self.landmarks.shape[0] == 0


@dataclass(frozen=True, slots=True)
class SealDetectionResult:
    """Result of classifying one frame.

    Attributes:
        seal: Recognized seal, or None.
        confidence: Heuristic confidence in [0, 1].
    """
    seal: Seal | None = None
    confidence: float = 0.0

    @classmethod
    def none(cls) -> SealDetectionResult:
        return cls(seal=None, confidence=0.0)

    @property
    def name(self) -> str | None:
        return self.seal.value if self.seal is not None else None
