"""MediaPipe-based landmark source.

Turns camera frames into the HandPositions the seal detector consumes.
"""

from __future__ import annotations

import time
from typing import Any

import mediapipe as mp
import numpy as np
from loguru import logger

from handseal.types import Handedness, HandPosition
from handseal.vision.frames import FrameConfig, prepare_frame


class MediaPipeHandSource:
    """Hand landmark source backed by MediaPipe Hands.

    Usage:
        >>> with MediaPipeHandSource() as source:
        ...     hands = source.detect(bgr_frame)
        ...     result = detector.detect(hands)
    """

    def __init__(
        self,
        max_hands: int = 2,
        min_detection_confidence: float = 0.5,
        min_tracking_confidence: float = 0.5,
        frame_config: FrameConfig | None = None,
    ) -> None:
        self._frame_config = frame_config or FrameConfig()
        self._mp_hands = mp.solutions.hands
        self._hands = self._mp_hands.Hands(
            static_image_mode=False,
            max_num_hands=max_hands,
            model_complexity=1,
            min_detection_confidence=min_detection_confidence,
            min_tracking_confidence=min_tracking_confidence,
        )
        self._mp_drawing = mp.solutions.drawing_utils
        self._last_results: Any = None
        self._last_inference_ms: float = 0.0
        self._closed = False

    @property
    def last_inference_ms(self) -> float:
        return self._last_inference_ms

    @property
    def frame_config(self) -> FrameConfig:
        return self._frame_config

    def detect(self, frame: np.ndarray) -> list[HandPosition]:
        """Track hands in a BGR frame.

        Coordinates refer to the prepared (mirrored, when enabled) frame.
        Hands whose label is neither Left nor Right are dropped.

        Raises:
            ValueError: If frame is not a valid BGR image.
        """
        rgb = prepare_frame(frame, self._frame_config)

        t_start = time.perf_counter()
        results = self._hands.process(rgb)
        self._last_inference_ms = (time.perf_counter() - t_start) * 1000.0
        self._last_results = results

        if not results.multi_hand_landmarks:
            return []

        hands: list[HandPosition] = []
        for idx, hand_lms in enumerate(results.multi_hand_landmarks):
            if not results.multi_handedness or idx >= len(results.multi_handedness):
                continue
            label = results.multi_handedness[idx].classification[0].label
            handedness = Handedness.from_label(label)
            if handedness is None:
                logger.debug(f"Dropping hand with unknown label {label!r}")
                continue
            hands.append(HandPosition.from_points(hand_lms.landmark, handedness))

        return hands

    def draw_landmarks(self, frame: np.ndarray) -> np.ndarray:
        """Draw the last tracked hands onto a prepared-orientation BGR copy of ``frame``."""
        annotated = np.ascontiguousarray(frame[:, ::-1]) if self._frame_config.mirror else frame.copy()
        if self._last_results is not None and self._last_results.multi_hand_landmarks:
            for hand_lms in self._last_results.multi_hand_landmarks:
                self._mp_drawing.draw_landmarks(
                    annotated,
                    hand_lms,
                    self._mp_hands.HAND_CONNECTIONS,
                )
        return annotated

    def close(self) -> None:
        """Release MediaPipe resources."""
        if not self._closed:
            self._hands.close()
            self._closed = True

    def __enter__(self) -> MediaPipeHandSource:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()
