"""Pure tracking logic: matching, smoothing, decomposition and visibility.

These modules work on numpy arrays only and never call OpenCV directly
or do I/O (OpenCV is only loaded indirectly through core.logging).
"""

from marker_tracker.tracking.decomposer import PoseDecomposer
from marker_tracker.tracking.matcher import ConfidenceGate, find_best_detection
from marker_tracker.tracking.registry import MarkerRegistry
from marker_tracker.tracking.smoother import PoseSmoother
from marker_tracker.tracking.state import MarkerTrackState
from marker_tracker.tracking.visibility import VisibilityEvent, VisibilityStateMachine

__all__ = [
    "PoseSmoother",
    "PoseDecomposer",
    "VisibilityStateMachine",
    "VisibilityEvent",
    "ConfidenceGate",
    "find_best_detection",
    "MarkerRegistry",
    "MarkerTrackState",
]
