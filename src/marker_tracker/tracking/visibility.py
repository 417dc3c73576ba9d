"""Loss-hysteresis visibility state machine.

This module is pure logic with no I/O and no direct OpenCV calls.
"""

from __future__ import annotations

from enum import Enum, auto

from marker_tracker.core.types import Visibility
from marker_tracker.tracking.state import MarkerTrackState

DEFAULT_MAX_LOST_FRAMES = 50


class VisibilityEvent(Enum):
    """Visibility transitions produced by the state machine."""

    SHOWN = auto()
    HIDDEN = auto()


class VisibilityStateMachine:
    """Frame-driven hysteresis deciding whether a marker is shown.

    Transitions:
        any → VISIBLE: Accepted detection (resets the loss counter)
        VISIBLE → HIDDEN: Loss counter exceeds ``max_lost_frames``

    A match below the confidence threshold changes nothing. Counting frames
    rather than time keeps the behaviour independent of frame rate.

    The machine holds no per-marker data; it mutates the MarkerTrackState
    it is given, so one instance serves every slot.
    """

    def __init__(self, max_lost_frames: int = DEFAULT_MAX_LOST_FRAMES) -> None:
        """Initialize state machine.

        Args:
            max_lost_frames: Consecutive misses tolerated before hiding
        """
        self.max_lost_frames = max_lost_frames

    def on_missing(self, state: MarkerTrackState) -> VisibilityEvent | None:
        """Handle a frame in which the marker was not matched at all.

        Returns:
            HIDDEN if the marker was visible and has now been lost too long
        """
        state.lost_count += 1

        if state.lost_count > self.max_lost_frames and state.is_visible:
            state.visibility = Visibility.HIDDEN
            return VisibilityEvent.HIDDEN

        return None

    def on_rejected(self, state: MarkerTrackState) -> VisibilityEvent | None:
        """Handle a match that was not trustworthy enough to apply."""
        return None

    def on_accepted(self, state: MarkerTrackState) -> VisibilityEvent | None:
        """Handle an accepted detection.

        Returns:
            SHOWN if the marker was hidden before this detection
        """
        state.lost_count = 0

        if state.is_visible:
            return None

        state.visibility = Visibility.VISIBLE
        return VisibilityEvent.SHOWN
