"""Frame capture and the capture-to-tracker hand-off."""

from marker_tracker.capture.buffer import FrameBuffer
from marker_tracker.capture.stream import CameraStream

__all__ = ["FrameBuffer", "CameraStream"]
