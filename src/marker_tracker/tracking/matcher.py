"""Selection of the best raw detection for each registered marker.

This module is pure logic with no I/O and no direct OpenCV calls.
"""

from __future__ import annotations

from collections.abc import Sequence

from marker_tracker.core.types import RawDetection

DEFAULT_MIN_CONFIDENCE = 0.3
CONFIDENCE_SCALE = 1000


def to_fixed_confidence(confidence: float, scale: int = CONFIDENCE_SCALE) -> int:
    """Convert a [0, 1] confidence to truncated fixed point (0.9994 -> 999)."""
    return int(confidence * scale)


def from_fixed_confidence(fixed: int, scale: int = CONFIDENCE_SCALE) -> float:
    """Convert a fixed-point confidence back to a float."""
    return fixed / scale


def find_best_detection_index(
    detections: Sequence[RawDetection],
    slot: int,
) -> int | None:
    """Find the index of the most confident detection for a marker slot.

    Args:
        detections: All raw detections of the current frame, in detector order
        slot: Marker slot to look for

    Returns:
        Index into ``detections`` or None if nothing matched. On exactly
        equal confidences the first detection wins.
    """
    best_idx: int | None = None
    best_conf = -1.0

    for i, detection in enumerate(detections):
        if detection.slot == slot and detection.confidence > best_conf:
            best_idx = i
            best_conf = detection.confidence

    return best_idx


def find_best_detection(
    detections: Sequence[RawDetection],
    slot: int,
) -> RawDetection | None:
    """Return the most confident detection for a marker slot, or None."""
    idx = find_best_detection_index(detections, slot)
    return detections[idx] if idx is not None else None


class ConfidenceGate:
    """Accepts matches whose fixed-point confidence reaches the threshold."""

    def __init__(
        self,
        min_confidence: float = DEFAULT_MIN_CONFIDENCE,
        scale: int = CONFIDENCE_SCALE,
    ) -> None:
        """Initialize gate.

        Args:
            min_confidence: Smallest confidence accepted for finding a marker
            scale: Fixed-point scale for confidence interchange
        """
        self.min_confidence = min_confidence
        self.scale = scale
        self._threshold = round(min_confidence * scale)

    def quantize(self, confidence: float) -> float:
        """Round-trip a confidence through fixed point (truncating)."""
        return from_fixed_confidence(to_fixed_confidence(confidence, self.scale), self.scale)

    def accepts(self, confidence: float) -> bool:
        """Check whether a confidence is high enough to apply the match."""
        return to_fixed_confidence(confidence, self.scale) >= self._threshold
