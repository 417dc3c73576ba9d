"""Hand-off of captured frames between the capture thread and the tracker."""

from __future__ import annotations

import threading

import numpy as np
from numpy.typing import NDArray

from marker_tracker.core.types import Frame


class FrameBuffer:
    """Single-slot buffer holding the most recently captured frame.

    The producer publishes a private copy of each image; consumers receive
    that copy as a read-only snapshot, so the lock is only held for the
    pointer swap and never while a frame is being detected.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._latest: Frame | None = None
        self._published = 0

    @property
    def has_data(self) -> bool:
        """Check if any frame has been published."""
        with self._lock:
            return self._latest is not None

    @property
    def published_count(self) -> int:
        """Number of frames published so far."""
        with self._lock:
            return self._published

    def publish(self, image: NDArray[np.uint8], timestamp: float) -> Frame:
        """Publish a newly captured image.

        Args:
            image: Captured image (copied before publishing)
            timestamp: Capture timestamp in seconds

        Returns:
            The published frame
        """
        snapshot = np.array(image, copy=True)
        snapshot.setflags(write=False)

        with self._lock:
            frame = Frame(image=snapshot, timestamp=timestamp, index=self._published)
            self._latest = frame
            self._published += 1

        return frame

    def snapshot(self) -> Frame | None:
        """Get the latest published frame, or None if nothing was captured yet."""
        with self._lock:
            return self._latest

    def clear(self) -> None:
        """Drop the latest frame."""
        with self._lock:
            self._latest = None
