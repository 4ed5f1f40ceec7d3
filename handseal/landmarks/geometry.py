"""Geometry primitives over normalized 2-D landmark coordinates.

Points are array rows ``[x, y]`` or ``[x, y, z]``; only x and y are used.
Image space has y growing downwards, so "up" means a smaller y.
"""

from __future__ import annotations

import math

import numpy as np

DEFAULT_CLOSE_THRESHOLD = 0.05
DEFAULT_FINGER_UP_MARGIN = 0.1


def distance(p: np.ndarray, q: np.ndarray) -> float:
    """Euclidean distance between two points in the image plane."""
    return math.hypot(float(p[0]) - float(q[0]), float(p[1]) - float(q[1]))


def close(p: np.ndarray, q: np.ndarray, threshold: float = DEFAULT_CLOSE_THRESHOLD) -> bool:
    """True when the two points are strictly nearer than ``threshold``."""
    return distance(p, q) < threshold


def finger_up(base: np.ndarray, tip: np.ndarray, margin: float = DEFAULT_FINGER_UP_MARGIN) -> bool:
    """True when the tip sits more than ``margin`` above its base joint."""
    return float(tip[1]) < float(base[1]) - margin


def is_valid_point(landmarks: np.ndarray, index: int) -> bool:
    """True when ``landmarks[index]`` exists and has finite x and y."""
    if index >= landmarks.shape[0]:
        return False
    return bool(np.isfinite(landmarks[index, :2]).all())
