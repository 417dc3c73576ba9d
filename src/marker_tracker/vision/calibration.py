"""Camera intrinsics loading for marker pose estimation."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path

import cv2
import numpy as np
from numpy.typing import NDArray

from marker_tracker.core.exceptions import CalibrationError
from marker_tracker.core.logging import get_logger

logger = get_logger(__name__)


@dataclass(slots=True)
class CameraCalibration:
    """Pinhole camera intrinsics.

    Attributes:
        camera_matrix: 3x3 intrinsic matrix
        dist_coeffs: Distortion coefficients (OpenCV order)
        image_size: (width, height) the intrinsics were computed for
    """

    camera_matrix: NDArray[np.float64]
    dist_coeffs: NDArray[np.float64]
    image_size: tuple[int, int] | None = None

    def scaled_to(self, width: int, height: int) -> CameraCalibration:
        """Rescale the intrinsics to a different capture resolution.

        Args:
            width: Target image width in pixels
            height: Target image height in pixels

        Returns:
            New calibration for the target size (self if size is unknown)
        """
        if self.image_size is None or self.image_size == (width, height):
            return self

        sx = width / self.image_size[0]
        sy = height / self.image_size[1]

        matrix = self.camera_matrix.copy()
        matrix[0, 0] *= sx
        matrix[0, 2] *= sx
        matrix[1, 1] *= sy
        matrix[1, 2] *= sy

        return CameraCalibration(
            camera_matrix=matrix,
            dist_coeffs=self.dist_coeffs.copy(),
            image_size=(width, height),
        )


def _validate(
    camera_matrix: NDArray[np.float64] | None,
    dist_coeffs: NDArray[np.float64] | None,
    path: Path,
) -> tuple[NDArray[np.float64], NDArray[np.float64]]:
    if camera_matrix is None or camera_matrix.shape != (3, 3):
        raise CalibrationError(f"Missing or malformed camera_matrix in {path}")

    if dist_coeffs is None or dist_coeffs.size == 0:
        dist_coeffs = np.zeros(5, dtype=np.float64)

    return camera_matrix.astype(np.float64), dist_coeffs.reshape(-1).astype(np.float64)


def _load_json(path: Path) -> CameraCalibration:
    with open(path) as f:
        data = json.load(f)

    raw_matrix = data.get("camera_matrix")
    camera_matrix, dist_coeffs = _validate(
        np.asarray(raw_matrix, dtype=np.float64) if raw_matrix is not None else None,
        np.asarray(data.get("dist_coeffs", []), dtype=np.float64),
        path,
    )

    image_size = None
    if "image_width" in data and "image_height" in data:
        image_size = (int(data["image_width"]), int(data["image_height"]))

    return CameraCalibration(camera_matrix, dist_coeffs, image_size)


def _load_opencv(path: Path) -> CameraCalibration:
    fs = cv2.FileStorage(str(path), cv2.FILE_STORAGE_READ)
    try:
        if not fs.isOpened():
            raise CalibrationError(f"Could not read camera parameters from {path}")

        camera_matrix, dist_coeffs = _validate(
            fs.getNode("camera_matrix").mat(),
            fs.getNode("dist_coeffs").mat(),
            path,
        )

        image_size = None
        width_node = fs.getNode("image_width")
        height_node = fs.getNode("image_height")
        if not width_node.empty() and not height_node.empty():
            image_size = (int(width_node.real()), int(height_node.real()))
    finally:
        fs.release()

    return CameraCalibration(camera_matrix, dist_coeffs, image_size)


def load_camera_calibration(path: str | Path) -> CameraCalibration:
    """Load camera intrinsics from disk.

    Supports OpenCV FileStorage files (.yml, .yaml, .xml) and JSON with
    ``camera_matrix``, ``dist_coeffs`` and optional ``image_width`` /
    ``image_height`` keys.

    Args:
        path: Calibration file path

    Returns:
        Loaded CameraCalibration

    Raises:
        CalibrationError: If the file is missing or invalid
    """
    path = Path(path)
    if not path.exists():
        raise CalibrationError(f"Calibration file not found: {path}")

    try:
        if path.suffix.lower() == ".json":
            calibration = _load_json(path)
        else:
            calibration = _load_opencv(path)
    except CalibrationError:
        raise
    except Exception as e:
        raise CalibrationError(f"Failed to load calibration from {path}: {e}") from e

    logger.info("Loaded camera calibration from %s", path)
    return calibration


def save_camera_calibration(calibration: CameraCalibration, path: str | Path) -> None:
    """Save camera intrinsics as JSON.

    Args:
        calibration: Intrinsics to save
        path: Output file path
    """
    path = Path(path)
    data: dict[str, object] = {
        "camera_matrix": calibration.camera_matrix.tolist(),
        "dist_coeffs": calibration.dist_coeffs.tolist(),
    }
    if calibration.image_size is not None:
        data["image_width"], data["image_height"] = calibration.image_size

    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        json.dump(data, f, indent=2)

    logger.info("Saved camera calibration to %s", path)
