"""Computer vision operations: camera calibration and marker detection."""

from marker_tracker.vision.calibration import CameraCalibration, load_camera_calibration
from marker_tracker.vision.detector import (
    ArucoMarkerDetector,
    MarkerDetector,
    collect_detections,
)

__all__ = [
    "CameraCalibration",
    "load_camera_calibration",
    "MarkerDetector",
    "ArucoMarkerDetector",
    "collect_detections",
]
