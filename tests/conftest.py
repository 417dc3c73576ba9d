"""Pytest fixtures for Marker Tracker tests."""

from __future__ import annotations

import math
from collections.abc import Sequence

import numpy as np
import pytest

from marker_tracker.core.config import TrackingSettings
from marker_tracker.core.types import MarkerDefinition, RawDetection
from marker_tracker.tracking.registry import MarkerRegistry


def rotation_x(degrees: float) -> np.ndarray:
    """Rotation about the x axis (pitch)."""
    a = math.radians(degrees)
    m = np.eye(4)
    m[1, 1], m[1, 2] = math.cos(a), -math.sin(a)
    m[2, 1], m[2, 2] = math.sin(a), math.cos(a)
    return m


def rotation_y(degrees: float) -> np.ndarray:
    """Rotation about the y axis (yaw)."""
    a = math.radians(degrees)
    m = np.eye(4)
    m[0, 0], m[0, 2] = math.cos(a), math.sin(a)
    m[2, 0], m[2, 2] = -math.sin(a), math.cos(a)
    return m


def rotation_z(degrees: float) -> np.ndarray:
    """Rotation about the z axis (roll)."""
    a = math.radians(degrees)
    m = np.eye(4)
    m[0, 0], m[0, 1] = math.cos(a), -math.sin(a)
    m[1, 0], m[1, 1] = math.sin(a), math.cos(a)
    return m


def translation(x: float, y: float, z: float) -> np.ndarray:
    """Pure translation transform."""
    m = np.eye(4)
    m[:3, 3] = (x, y, z)
    return m


class ScriptedDetector:
    """MarkerDetector that replays a fixed list of detections per frame.

    An entry may be an Exception instance, which ``detect`` raises.
    Once the script runs out every further frame has no detections.
    """

    def __init__(self, frames: Sequence[Sequence[RawDetection] | Exception]) -> None:
        self._frames = list(frames)
        self._current: list[RawDetection] = []
        self.calls = 0

    def detect(self, image: np.ndarray) -> int:
        self.calls += 1
        entry = self._frames.pop(0) if self._frames else []
        if isinstance(entry, Exception):
            raise entry
        self._current = list(entry)
        return len(self._current)

    def matched_slot(self, index: int) -> int:
        return self._current[index].slot

    def confidence(self, index: int) -> float:
        return self._current[index].confidence

    def transform(self, index: int) -> np.ndarray:
        return self._current[index].transform


@pytest.fixture
def identity() -> np.ndarray:
    """4x4 identity transform."""
    return np.eye(4)


@pytest.fixture
def tracking_settings() -> TrackingSettings:
    """Create tracking settings for testing."""
    return TrackingSettings(
        min_confidence=0.3,
        confidence_scale=1000,
        max_lost_frames=50,
        smoothing_window=10,
    )


@pytest.fixture
def markers() -> tuple[MarkerDefinition, ...]:
    """Two registered markers, slots 0 and 1."""
    registry = MarkerRegistry()
    registry.register(0, 0.095, "hiro", "robot")
    registry.register(1, 0.095, "kanji", "cow")
    return registry.markers


@pytest.fixture
def blank_image() -> np.ndarray:
    """Black 240x320 BGR image."""
    return np.zeros((240, 320, 3), dtype=np.uint8)
