"""Frame processing pipeline orchestration."""

from marker_tracker.pipeline.tracker import MarkerTracker, TrackingReport

__all__ = ["MarkerTracker", "TrackingReport"]
