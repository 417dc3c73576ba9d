"""Background camera capture into a FrameBuffer."""

from __future__ import annotations

import threading
import time
from collections.abc import Generator

import cv2

from marker_tracker.capture.buffer import FrameBuffer
from marker_tracker.core.config import CameraSettings
from marker_tracker.core.exceptions import VideoStreamError
from marker_tracker.core.logging import get_logger
from marker_tracker.core.types import Frame

logger = get_logger(__name__)


class CameraStream:
    """Reads frames from an OpenCV capture device on a background thread.

    Every captured image is published to a FrameBuffer; ``frames()`` yields
    each newly published frame once.
    """

    def __init__(
        self,
        settings: CameraSettings | None = None,
        buffer: FrameBuffer | None = None,
    ) -> None:
        """Initialize stream.

        Args:
            settings: Camera settings (uses defaults if None)
            buffer: Frame buffer to publish into (creates one if None)
        """
        self.settings = settings or CameraSettings()
        self.buffer = buffer or FrameBuffer()
        self._capture: cv2.VideoCapture | None = None
        self._thread: threading.Thread | None = None
        self._running = threading.Event()
        self._new_frame = threading.Condition()
        self._start_time: float | None = None

    @property
    def is_running(self) -> bool:
        """Check if stream is active."""
        return self._running.is_set()

    def start(self) -> None:
        """Open the camera and start the capture thread.

        Raises:
            VideoStreamError: If the camera cannot be opened
        """
        if self.is_running:
            return

        capture = cv2.VideoCapture(self.settings.device)
        if not capture.isOpened():
            capture.release()
            raise VideoStreamError(f"Could not open camera {self.settings.device!r}")

        capture.set(cv2.CAP_PROP_FRAME_WIDTH, self.settings.width)
        capture.set(cv2.CAP_PROP_FRAME_HEIGHT, self.settings.height)

        self._capture = capture
        self._start_time = time.time()
        self._running.set()
        self._thread = threading.Thread(
            target=self._capture_loop,
            args=(capture,),
            name="camera-capture",
            daemon=True,
        )
        self._thread.start()
        logger.info("Video stream started (device %r)", self.settings.device)

    def stop(self) -> None:
        """Stop the capture thread and release the camera."""
        self._running.clear()
        with self._new_frame:
            self._new_frame.notify_all()

        if self._thread is not None:
            self._thread.join(timeout=2.0)
            self._thread = None

        if self._capture is not None:
            self._capture.release()
            self._capture = None

        logger.info("Video stream stopped (captured %d frames)", self.buffer.published_count)

    def _capture_loop(self, capture: cv2.VideoCapture) -> None:
        """Read frames from ``capture`` until stopped."""
        while self._running.is_set():
            ok, image = capture.read()
            if not ok:
                logger.warning("Camera read failed, stopping capture")
                self._running.clear()
                break

            timestamp = time.time() - (self._start_time or time.time())
            self.buffer.publish(image, timestamp)
            with self._new_frame:
                self._new_frame.notify_all()

        with self._new_frame:
            self._new_frame.notify_all()

    def frames(self, timeout: float = 1.0) -> Generator[Frame, None, None]:
        """Yield each newly published frame.

        Args:
            timeout: Seconds to wait for a new frame before re-checking state

        Yields:
            Frames in capture order (frames captured while the consumer
            was busy are skipped)
        """
        if not self.is_running:
            self.start()

        last_index = -1
        while True:
            with self._new_frame:
                self._new_frame.wait_for(
                    lambda: not self.is_running or self._has_new(last_index),
                    timeout=timeout,
                )

            frame = self.buffer.snapshot()
            if frame is not None and frame.index != last_index:
                last_index = frame.index
                yield frame
            elif not self.is_running:
                break

    def _has_new(self, last_index: int) -> bool:
        frame = self.buffer.snapshot()
        return frame is not None and frame.index != last_index

    def __iter__(self) -> Generator[Frame, None, None]:
        """Allow direct iteration over stream."""
        return self.frames()

    def __enter__(self) -> CameraStream:
        """Context manager entry."""
        self.start()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        """Context manager exit."""
        self.stop()
