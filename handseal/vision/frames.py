"""Frame preparation before hand tracking.

Validates raw BGR camera frames, mirrors them into selfie view (MediaPipe
labels handedness assuming a mirrored image) and caps their size.
"""

from __future__ import annotations

from dataclasses import dataclass

import cv2
import numpy as np


@dataclass(frozen=True, slots=True)
class FrameConfig:
    """Configuration for frame preparation.

    Attributes:
        mirror: Flip horizontally so Left/Right labels match the user's hands.
        max_dimension: Downscale frames whose longest side exceeds this.
    """
    mirror: bool = True
    max_dimension: int = 1280


def validate_frame(frame: np.ndarray | None) -> None:
    """Raise ValueError unless ``frame`` is a non-empty (H, W, 3) image."""
    if frame is None:
        raise ValueError("Frame is None")
    if frame.ndim != 3 or frame.shape[2] != 3:
        raise ValueError(f"Expected (H, W, 3) BGR frame, got shape {frame.shape}")
    if frame.size == 0:
        raise ValueError("Frame is empty")


def prepare_frame(frame: np.ndarray, config: FrameConfig | None = None) -> np.ndarray:
    """Return the RGB frame to hand to the tracker.

    Raises:
        ValueError: If the frame is not a valid BGR image.
    """
    config = config or FrameConfig()
    validate_frame(frame)

    result = cv2.flip(frame, 1) if config.mirror else frame

    h, w = result.shape[:2]
    longest = max(h, w)
    if longest > config.max_dimension:
        scale = config.max_dimension / longest
        result = cv2.resize(
            result,
            (int(w * scale), int(h * scale)),
            interpolation=cv2.INTER_AREA,
        )

    rgb = cv2.cvtColor(result, cv2.COLOR_BGR2RGB)
    rgb.flags.writeable = False
    return rgb
