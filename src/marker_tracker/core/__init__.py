"""Core infrastructure: config, types, exceptions, and logging."""

from marker_tracker.core.config import Settings, get_settings
from marker_tracker.core.exceptions import (
    CalibrationError,
    DetectorError,
    DetectorSetupError,
    MarkerTrackerError,
    NonAffineTransformError,
    PatternLoadError,
    SetupError,
    VideoStreamError,
)
from marker_tracker.core.logging import get_logger, setup_logging
from marker_tracker.core.types import (
    Frame,
    MarkerDefinition,
    MarkerReport,
    PoseEstimate,
    RawDetection,
    Visibility,
)

__all__ = [
    # Config
    "Settings",
    "get_settings",
    # Types
    "Frame",
    "MarkerDefinition",
    "RawDetection",
    "Visibility",
    "PoseEstimate",
    "MarkerReport",
    # Exceptions
    "MarkerTrackerError",
    "NonAffineTransformError",
    "DetectorError",
    "VideoStreamError",
    "SetupError",
    "CalibrationError",
    "PatternLoadError",
    "DetectorSetupError",
    # Logging
    "setup_logging",
    "get_logger",
]
