"""Confirmation of held seals into a seal sequence.

A seal only counts once it has been held for a short time. Confirmed
seals are appended to a sequence that is later matched against the
jutsu catalogue. Thread-safe.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from threading import Lock

from loguru import logger

from handseal.types import Seal, SealDetectionResult


class SealSequenceTracker:
    """Turns per-frame detections into a confirmed seal sequence.

    A result is a candidate when it names a seal with confidence at or
    above ``confidence_threshold``. A candidate different from the last
    confirmed seal starts a pending timer (restarted when a different
    candidate shows up). Once the pending seal has been held for
    ``hold_seconds`` it is confirmed. Frames without a candidate leave
    the pending seal untouched.

    Usage:
        >>> tracker = SealSequenceTracker()
        >>> confirmed = tracker.update(detector.detect(hands))
        >>> if confirmed:
        ...     print(tracker.sequence)
    """

    def __init__(
        self,
        hold_seconds: float = 1.0,
        confidence_threshold: float = 0.8,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._hold_seconds = hold_seconds
        self._confidence_threshold = confidence_threshold
        self._clock = clock
        self._sequence: list[Seal] = []
        self._last_confirmed: Seal | None = None
        self._pending: Seal | None = None
        self._pending_since = 0.0
        self._lock = Lock()

    @property
    def sequence(self) -> tuple[Seal, ...]:
        with self._lock:
            return tuple(self._sequence)

    @property
    def pending(self) -> Seal | None:
        with self._lock:
            return self._pending

    @property
    def last_confirmed(self) -> Seal | None:
        with self._lock:
            return self._last_confirmed

    def update(self, result: SealDetectionResult, now: float | None = None) -> Seal | None:
        """Feed one frame's result.

        Args:
            result: Detection result for the frame.
            now: Timestamp in seconds (defaults to the tracker's clock).

        Returns:
            The seal confirmed on this frame, or None.
        """
        now = self._clock() if now is None else now
        with self._lock:
            candidate = result.seal if result.confidence >= self._confidence_threshold else None

            if candidate is not None and candidate is not self._last_confirmed:
                if candidate is not self._pending:
                    self._pending = candidate
                    self._pending_since = now

            if self._pending is None or now - self._pending_since < self._hold_seconds:
                return None

            confirmed = self._pending
            self._sequence.append(confirmed)
            self._last_confirmed = confirmed
            self._pending = None
            length = len(self._sequence)
        logger.info(f"Confirmed seal: {confirmed.value} (sequence length {length})")
        return confirmed

    def reset(self) -> None:
        """Clear the sequence and any pending seal."""
        with self._lock:
            self._sequence.clear()
            self._last_confirmed = None
            self._pending = None
            self._pending_since = 0.0
