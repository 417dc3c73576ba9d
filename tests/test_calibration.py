"""Tests for camera calibration loading."""

from __future__ import annotations

import json
from pathlib import Path

import cv2
import numpy as np
import pytest

from marker_tracker.core.exceptions import CalibrationError
from marker_tracker.vision.calibration import (
    CameraCalibration,
    load_camera_calibration,
    save_camera_calibration,
)

CAMERA_MATRIX = np.array([[600.0, 0.0, 320.0], [0.0, 610.0, 240.0], [0.0, 0.0, 1.0]])


class TestLoadCameraCalibration:
    """Tests for load_camera_calibration."""

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(CalibrationError, match="not found"):
            load_camera_calibration(tmp_path / "nope.yml")

    def test_json_round_trip(self, tmp_path: Path) -> None:
        path = tmp_path / "calib" / "camera.json"
        original = CameraCalibration(CAMERA_MATRIX, np.array([0.1, -0.05, 0.0, 0.0, 0.0]), (640, 480))

        save_camera_calibration(original, path)
        loaded = load_camera_calibration(path)

        np.testing.assert_allclose(loaded.camera_matrix, CAMERA_MATRIX)
        np.testing.assert_allclose(loaded.dist_coeffs, original.dist_coeffs)
        assert loaded.image_size == (640, 480)

    def test_json_without_distortion(self, tmp_path: Path) -> None:
        path = tmp_path / "camera.json"
        path.write_text(json.dumps({"camera_matrix": CAMERA_MATRIX.tolist()}))

        loaded = load_camera_calibration(path)

        np.testing.assert_array_equal(loaded.dist_coeffs, np.zeros(5))
        assert loaded.image_size is None

    def test_malformed_json(self, tmp_path: Path) -> None:
        path = tmp_path / "camera.json"
        path.write_text(json.dumps({"camera_matrix": [[1.0, 2.0]]}))

        with pytest.raises(CalibrationError):
            load_camera_calibration(path)

    def test_opencv_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "camera.yml"
        fs = cv2.FileStorage(str(path), cv2.FILE_STORAGE_WRITE)
        fs.write("image_width", 640)
        fs.write("image_height", 480)
        fs.write("camera_matrix", CAMERA_MATRIX)
        fs.write("dist_coeffs", np.zeros((1, 5)))
        fs.release()

        loaded = load_camera_calibration(path)

        np.testing.assert_allclose(loaded.camera_matrix, CAMERA_MATRIX)
        assert loaded.dist_coeffs.shape == (5,)
        assert loaded.image_size == (640, 480)

    def test_opencv_yaml_without_matrix(self, tmp_path: Path) -> None:
        path = tmp_path / "camera.yml"
        fs = cv2.FileStorage(str(path), cv2.FILE_STORAGE_WRITE)
        fs.write("image_width", 640)
        fs.release()

        with pytest.raises(CalibrationError):
            load_camera_calibration(path)

    def test_bundled_parameters_load(self) -> None:
        path = Path(__file__).parent.parent / "data" / "camera_params.yml"
        loaded = load_camera_calibration(path)
        assert loaded.image_size == (640, 480)


class TestCameraCalibration:
    """Tests for the CameraCalibration class."""

    def test_scaled_to_half_resolution(self) -> None:
        calibration = CameraCalibration(CAMERA_MATRIX, np.zeros(5), (640, 480))

        scaled = calibration.scaled_to(320, 240)

        assert scaled.image_size == (320, 240)
        np.testing.assert_allclose(
            scaled.camera_matrix,
            [[300.0, 0.0, 160.0], [0.0, 305.0, 120.0], [0.0, 0.0, 1.0]],
        )
        # original untouched
        assert calibration.camera_matrix[0, 0] == 600.0

    def test_scaled_to_same_size_is_noop(self) -> None:
        calibration = CameraCalibration(CAMERA_MATRIX, np.zeros(5), (640, 480))
        assert calibration.scaled_to(640, 480) is calibration

    def test_unknown_size_is_not_scaled(self) -> None:
        calibration = CameraCalibration(CAMERA_MATRIX, np.zeros(5))
        assert calibration.scaled_to(320, 240) is calibration
