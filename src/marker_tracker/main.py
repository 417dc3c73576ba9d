"""Main entry point for Marker Tracker application."""

from __future__ import annotations

import sys

import cv2

from marker_tracker.capture.stream import CameraStream
from marker_tracker.core.config import Settings, get_settings
from marker_tracker.core.exceptions import SetupError, VideoStreamError
from marker_tracker.core.logging import get_logger, setup_logging
from marker_tracker.pipeline.tracker import MarkerTracker
from marker_tracker.render.commands import SceneRenderer, SceneState
from marker_tracker.tracking.registry import MarkerRegistry
from marker_tracker.ui.status import format_status, render_status
from marker_tracker.vision.calibration import load_camera_calibration
from marker_tracker.vision.detector import ArucoMarkerDetector

logger = get_logger(__name__)


def build_tracker(settings: Settings, renderer: SceneRenderer | None = None) -> MarkerTracker:
    """Register markers, load calibration and create the tracker.

    Args:
        settings: Application settings
        renderer: Scene receiving render commands

    Returns:
        Ready-to-use MarkerTracker

    Raises:
        SetupError: If markers, calibration or the detector cannot be set up
    """
    registry = MarkerRegistry.from_config(settings.markers)
    if len(registry) == 0:
        raise SetupError("No markers configured")

    calibration = load_camera_calibration(settings.camera.calibration_file).scaled_to(
        settings.camera.width, settings.camera.height
    )
    detector = ArucoMarkerDetector(registry.markers, calibration, settings.detector)

    return MarkerTracker(registry.markers, detector, settings.tracking, renderer)


def run_tracking_session(settings: Settings | None = None, max_frames: int | None = None) -> int:
    """Run the main tracking session.

    Args:
        settings: Application settings (uses cached settings if None)
        max_frames: Stop after this many frames (runs until quit if None)

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    settings = settings or get_settings()
    setup_logging(settings.logging.level, settings.logging.file)

    logger.info("Starting Marker Tracker")

    scene = SceneState()
    stream = CameraStream(settings.camera)

    try:
        tracker = build_tracker(settings, scene)
        stream.start()
    except (SetupError, VideoStreamError) as e:
        logger.error("Setup failed: %s", e)
        return 1

    show_window = settings.ui.show_window
    interval = max(1, settings.ui.status_interval_frames)
    processed = 0

    logger.info("Starting tracking loop (press 'q' to quit, 'r' to reset)")

    try:
        for frame in stream.frames():
            report = tracker.process_frame(frame)
            processed += 1

            if processed % interval == 0:
                logger.info("Frame %d status:\n%s", frame.index, format_status(report))

            if show_window:
                cv2.imshow(settings.ui.window_name, render_status(frame.image, report))
                key = cv2.waitKey(1) & 0xFF
                if key in (ord("q"), 27):
                    logger.info("Quit requested")
                    break
                if key == ord("r"):
                    tracker.reset()

            if max_frames is not None and processed >= max_frames:
                break

    except KeyboardInterrupt:
        logger.info("Interrupted by user")

    finally:
        stream.stop()
        if show_window:
            cv2.destroyAllWindows()
        logger.info(
            "Marker Tracker stopped (%d frames, %d skipped)",
            processed,
            tracker.skipped_frames,
        )

    return 0


def main() -> None:
    """CLI entry point."""
    import argparse
    import os

    parser = argparse.ArgumentParser(
        description="Marker Tracker - multi-marker pose tracking from a live camera"
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--no-window",
        action="store_true",
        help="Do not open a status window",
    )
    parser.add_argument(
        "--max-frames",
        type=int,
        default=None,
        help="Stop after this many frames",
    )

    args = parser.parse_args()

    if args.debug:
        os.environ["LOG_LEVEL"] = "DEBUG"
    if args.no_window:
        os.environ["SHOW_WINDOW"] = "false"

    sys.exit(run_tracking_session(max_frames=args.max_frames))


if __name__ == "__main__":
    main()
