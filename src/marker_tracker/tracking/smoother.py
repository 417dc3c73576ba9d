"""Moving-average smoothing of marker transforms."""

from __future__ import annotations

from collections import deque

import numpy as np

from marker_tracker.core.logging import get_logger
from marker_tracker.core.types import Transform
from marker_tracker.tracking.affine import is_affine

logger = get_logger(__name__)

DEFAULT_WINDOW_SIZE = 10


class PoseSmoother:
    """Moving average filter over the most recent marker transforms.

    Keeps a bounded FIFO of accepted 4x4 transforms (oldest evicted first)
    and returns their element-wise mean. This damps per-frame detection
    jitter at the cost of a few frames of lag.
    """

    def __init__(self, window_size: int = DEFAULT_WINDOW_SIZE) -> None:
        """Initialize smoother.

        Args:
            window_size: Maximum number of transforms kept in the window
        """
        if window_size < 1:
            raise ValueError(f"window_size must be positive, got {window_size}")

        self.window_size = window_size
        self._buffer: deque[Transform] = deque(maxlen=window_size)

    def __len__(self) -> int:
        return len(self._buffer)

    @property
    def is_full(self) -> bool:
        """Check if the window is at capacity."""
        return len(self._buffer) >= self.window_size

    def reset(self) -> None:
        """Clear the transform window."""
        self._buffer.clear()

    def add(self, transform: Transform) -> bool:
        """Add a transform to the window.

        Args:
            transform: 4x4 affine transform

        Returns:
            True if the transform was stored, False if it was rejected
            as non-affine
        """
        if not is_affine(transform):
            logger.debug("Not adding a non-affine matrix")
            return False

        # deque(maxlen) evicts the oldest entry at capacity
        self._buffer.append(np.array(transform, dtype=np.float64))
        return True

    def compute(self) -> Transform | None:
        """Average the stored transforms.

        Returns:
            Element-wise mean of the window, or None if it is empty
        """
        if not self._buffer:
            return None

        return np.mean(self._buffer, axis=0)
