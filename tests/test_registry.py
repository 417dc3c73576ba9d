"""Tests for marker registration."""

from __future__ import annotations

import pytest

from marker_tracker.core.config import MarkerConfig
from marker_tracker.core.exceptions import PatternLoadError, SetupError
from marker_tracker.tracking.registry import MarkerRegistry


class TestMarkerRegistry:
    """Tests for the MarkerRegistry class."""

    def test_slots_follow_registration_order(self) -> None:
        registry = MarkerRegistry()
        first = registry.register(7, 0.05, "a", "cube")
        second = registry.register(3, 0.08, "b", "ball")

        assert (first.slot, second.slot) == (0, 1)
        assert [m.slot for m in registry] == [0, 1]
        assert registry[1] is second
        assert len(registry) == 2

    def test_label(self) -> None:
        marker = MarkerRegistry().register(0, 0.095, "hiro", "robot")
        assert marker.label == "hiro / robot"

    def test_duplicate_pattern_rejected(self) -> None:
        registry = MarkerRegistry()
        registry.register(0, 0.095, "a", "x")

        with pytest.raises(PatternLoadError):
            registry.register(0, 0.095, "b", "y")

    def test_missing_pattern_rejected(self) -> None:
        with pytest.raises(PatternLoadError):
            MarkerRegistry().register(None, 0.095, "a", "x")

    def test_invalid_width_is_setup_error(self) -> None:
        with pytest.raises(SetupError):
            MarkerRegistry().register(0, 0.0, "a", "x")

    def test_from_config(self) -> None:
        registry = MarkerRegistry.from_config(
            [
                MarkerConfig(pattern=4, name="left", model="cow"),
                MarkerConfig(pattern=2, width_m=0.05, name="right", model="robot"),
            ]
        )

        assert [m.pattern for m in registry.markers] == [4, 2]
        assert registry[1].width == 0.05
        assert registry[0].width == 0.095
