"""Custom exceptions for Marker Tracker."""


class MarkerTrackerError(Exception):
    """Base exception for all Marker Tracker errors."""

    pass


class NonAffineTransformError(MarkerTrackerError):
    """A transform failed the affine-consistency check."""

    def __init__(self, message: str = "Transform is not affine") -> None:
        self.message = message
        super().__init__(self.message)


class DetectorError(MarkerTrackerError):
    """The marker detector failed while processing a frame."""

    def __init__(self, message: str = "Marker detection failed") -> None:
        self.message = message
        super().__init__(self.message)


class VideoStreamError(MarkerTrackerError):
    """Error with video stream capture."""

    def __init__(self, message: str = "Video stream error") -> None:
        self.message = message
        super().__init__(self.message)


class SetupError(MarkerTrackerError):
    """Configuration problem detected while building the tracker.

    Setup errors are fatal: they are reported once and the process exits.
    """

    def __init__(self, message: str = "Tracker setup failed") -> None:
        self.message = message
        super().__init__(self.message)


class CalibrationError(SetupError):
    """Camera calibration data is missing or invalid."""

    def __init__(self, message: str = "Camera calibration failed") -> None:
        super().__init__(message)


class PatternLoadError(SetupError):
    """A marker pattern could not be loaded or is not recognised."""

    def __init__(self, message: str = "Marker pattern could not be loaded") -> None:
        super().__init__(message)


class DetectorSetupError(SetupError):
    """The marker detector could not be constructed."""

    def __init__(self, message: str = "Could not create markers detector") -> None:
        super().__init__(message)
