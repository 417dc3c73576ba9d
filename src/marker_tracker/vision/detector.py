"""Marker detector interface and the OpenCV ArUco implementation."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol

import cv2
import numpy as np
from numpy.typing import NDArray

from marker_tracker.core.config import DetectorSettings
from marker_tracker.core.exceptions import DetectorError, DetectorSetupError, PatternLoadError
from marker_tracker.core.logging import get_logger
from marker_tracker.core.types import MarkerDefinition, RawDetection, Transform
from marker_tracker.vision.calibration import CameraCalibration

logger = get_logger(__name__)

# ArUco dictionary mapping
ARUCO_DICTS = {
    "DICT_4X4_50": cv2.aruco.DICT_4X4_50,
    "DICT_4X4_100": cv2.aruco.DICT_4X4_100,
    "DICT_5X5_50": cv2.aruco.DICT_5X5_50,
    "DICT_5X5_100": cv2.aruco.DICT_5X5_100,
    "DICT_6X6_50": cv2.aruco.DICT_6X6_50,
    "DICT_6X6_100": cv2.aruco.DICT_6X6_100,
    "DICT_ARUCO_ORIGINAL": cv2.aruco.DICT_ARUCO_ORIGINAL,
}


class MarkerDetector(Protocol):
    """Black-box marker recognizer consumed by the tracker.

    ``detect`` processes one image and returns the number of detections;
    the accessors then describe detection ``index`` in ``[0, count)``.
    """

    def detect(self, image: NDArray[np.uint8]) -> int: ...

    def matched_slot(self, index: int) -> int: ...

    def confidence(self, index: int) -> float: ...

    def transform(self, index: int) -> Transform: ...


def collect_detections(detector: MarkerDetector, image: NDArray[np.uint8]) -> list[RawDetection]:
    """Run the detector on one image and snapshot its results.

    Args:
        detector: Marker detector
        image: Frame image

    Returns:
        Raw detections in detector order

    Raises:
        DetectorError: If the detector fails for this frame
    """
    try:
        count = detector.detect(image)
        return [
            RawDetection(
                slot=int(detector.matched_slot(i)),
                confidence=float(detector.confidence(i)),
                transform=np.asarray(detector.transform(i), dtype=np.float64),
            )
            for i in range(count)
        ]
    except Exception as e:
        raise DetectorError(f"Detection failed: {e}") from e


@dataclass(slots=True)
class _ArucoResult:
    slot: int
    confidence: float
    transform: Transform


def _square_object_points(width: float) -> NDArray[np.float64]:
    """Marker corners in the order required by SOLVEPNP_IPPE_SQUARE."""
    half = width / 2.0
    return np.array(
        [
            [-half, half, 0.0],
            [half, half, 0.0],
            [half, -half, 0.0],
            [-half, -half, 0.0],
        ],
        dtype=np.float64,
    )


class ArucoMarkerDetector:
    """MarkerDetector backed by OpenCV's ArUco module.

    Each registered marker's pattern is an ArUco id from the configured
    dictionary. Poses come from ``cv2.solvePnP`` using the marker's
    physical width; confidence falls linearly from 1 to 0 as the mean
    corner reprojection error grows to ``max_reprojection_error_px``.
    """

    def __init__(
        self,
        markers: Sequence[MarkerDefinition],
        calibration: CameraCalibration,
        settings: DetectorSettings | None = None,
    ) -> None:
        """Create a single detector for all the markers.

        Args:
            markers: Registered markers in slot order
            calibration: Camera intrinsics for the capture resolution
            settings: Detector settings (uses defaults if None)

        Raises:
            DetectorSetupError: If the dictionary is unknown or OpenCV fails
            PatternLoadError: If a marker pattern is not a valid id
        """
        self.settings = settings or DetectorSettings()
        self.calibration = calibration

        dict_type = ARUCO_DICTS.get(self.settings.dictionary)
        if dict_type is None:
            raise DetectorSetupError(f"Unknown ArUco dictionary: {self.settings.dictionary}")

        try:
            aruco_dict = cv2.aruco.getPredefinedDictionary(dict_type)
            parameters = cv2.aruco.DetectorParameters()
            self._detector = cv2.aruco.ArucoDetector(aruco_dict, parameters)
        except cv2.error as e:
            raise DetectorSetupError(f"Could not create markers detector: {e}") from e

        dict_size = int(aruco_dict.bytesList.shape[0])
        self._markers_by_id: dict[int, MarkerDefinition] = {}
        for marker in markers:
            if not isinstance(marker.pattern, int) or not 0 <= marker.pattern < dict_size:
                raise PatternLoadError(
                    f"Marker '{marker.name}' pattern {marker.pattern!r} is not an id "
                    f"in {self.settings.dictionary}"
                )
            self._markers_by_id[marker.pattern] = marker

        self._results: list[_ArucoResult] = []
        logger.info(
            "ArUco detector ready (%s, %d markers)",
            self.settings.dictionary,
            len(self._markers_by_id),
        )

    def detect(self, image: NDArray[np.uint8]) -> int:
        """Detect registered markers in an image.

        Args:
            image: BGR or grayscale image

        Returns:
            Number of detections available through the accessors
        """
        gray = cv2.cvtColor(image, cv2.COLOR_BGR2GRAY) if image.ndim == 3 else image
        corners, ids, _ = self._detector.detectMarkers(gray)

        self._results = []
        if ids is None:
            return 0

        for marker_corners, marker_id in zip(corners, ids.flatten(), strict=True):
            marker = self._markers_by_id.get(int(marker_id))
            if marker is None:
                logger.debug("Ignoring unregistered ArUco id %d", int(marker_id))
                continue

            result = self._estimate(marker, marker_corners.reshape(4, 2))
            if result is not None:
                self._results.append(result)

        return len(self._results)

    def matched_slot(self, index: int) -> int:
        return self._results[index].slot

    def confidence(self, index: int) -> float:
        return self._results[index].confidence

    def transform(self, index: int) -> Transform:
        return self._results[index].transform

    def _estimate(
        self,
        marker: MarkerDefinition,
        image_points: NDArray[np.float32],
    ) -> _ArucoResult | None:
        """Estimate one marker's pose from its detected corners."""
        object_points = _square_object_points(marker.width)
        image_points = image_points.astype(np.float64)
        camera_matrix = self.calibration.camera_matrix
        dist_coeffs = self.calibration.dist_coeffs

        ok, rvec, tvec = cv2.solvePnP(
            object_points,
            image_points,
            camera_matrix,
            dist_coeffs,
            flags=cv2.SOLVEPNP_IPPE_SQUARE,
        )
        if not ok:
            logger.debug("solvePnP failed for marker %d", marker.slot)
            return None

        projected, _ = cv2.projectPoints(object_points, rvec, tvec, camera_matrix, dist_coeffs)
        error = float(np.mean(np.linalg.norm(projected.reshape(4, 2) - image_points, axis=1)))
        confidence = max(0.0, 1.0 - error / self.settings.max_reprojection_error_px)

        rotation, _ = cv2.Rodrigues(rvec)
        transform = np.eye(4, dtype=np.float64)
        transform[:3, :3] = rotation
        transform[:3, 3] = tvec.reshape(3)

        if self.settings.flip_xy:
            # camera frame (y down) to scene frame (y up, looking down -z)
            transform[0, :] = -transform[0, :]
            transform[1, :] = -transform[1, :]

        return _ArucoResult(slot=marker.slot, confidence=confidence, transform=transform)
