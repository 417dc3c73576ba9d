"""Tests for application settings."""

from __future__ import annotations

import json
from collections.abc import Iterator
from pathlib import Path

import pytest

from marker_tracker.core.config import (
    DetectorSettings,
    Settings,
    TrackingSettings,
    UISettings,
    get_settings,
)


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Iterator[None]:
    """Run each test away from any local .env file."""
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class TestDefaults:
    """Tests for default configuration values."""

    def test_tracking_defaults(self) -> None:
        settings = TrackingSettings()

        assert settings.min_confidence == 0.3
        assert settings.confidence_scale == 1000
        assert settings.max_lost_frames == 50
        assert settings.smoothing_window == 10
        assert settings.position_scale == 100.0
        assert settings.gimbal_epsilon == 1e-5

    def test_default_markers(self) -> None:
        settings = Settings()

        assert [(m.pattern, m.name, m.model) for m in settings.markers] == [
            (0, "hiro", "robot"),
            (1, "kanji", "cow"),
        ]
        assert all(m.width_m == 0.095 for m in settings.markers)

    def test_get_settings_is_cached(self) -> None:
        assert get_settings() is get_settings()


class TestEnvironmentOverrides:
    """Tests for environment variable overrides."""

    def test_tracking_prefix(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TRACKING_MAX_LOST_FRAMES", "5")

        settings = Settings()

        assert settings.tracking.max_lost_frames == 5

    def test_detector_prefix(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ARUCO_DICTIONARY", "DICT_5X5_50")
        monkeypatch.setenv("ARUCO_FLIP_XY", "false")

        settings = DetectorSettings()

        assert settings.dictionary == "DICT_5X5_50"
        assert settings.flip_xy is False

    def test_ui_aliases(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SHOW_WINDOW", "false")
        monkeypatch.setenv("STATUS_INTERVAL_FRAMES", "10")

        settings = UISettings()

        assert settings.show_window is False
        assert settings.status_interval_frames == 10

    def test_markers_from_json(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv(
            "MARKERS",
            json.dumps([{"pattern": 7, "width_m": 0.05, "name": "seven", "model": "cube"}]),
        )

        settings = Settings()

        assert len(settings.markers) == 1
        assert settings.markers[0].pattern == 7
        assert settings.markers[0].width_m == 0.05

    def test_removed_matching_option_rejected(self) -> None:
        """Double assignment is already impossible, so there is no switch for it."""
        with pytest.raises(ValueError):
            TrackingSettings(exclusive_matching=True)

    def test_invalid_confidence_rejected(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TRACKING_MIN_CONFIDENCE", "1.5")

        with pytest.raises(ValueError):
            TrackingSettings()
