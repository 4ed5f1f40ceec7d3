"""Vision module — frame preparation and the MediaPipe landmark source.

The source lives in ``handseal.vision.source`` and needs the ``vision`` extra.
"""

from handseal.vision.frames import FrameConfig, prepare_frame, validate_frame

__all__ = ["FrameConfig", "prepare_frame", "validate_frame"]
