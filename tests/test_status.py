"""Tests for the status text and overlay."""

from __future__ import annotations

import numpy as np

from marker_tracker.core.types import MarkerReport
from marker_tracker.pipeline.tracker import TrackingReport
from marker_tracker.ui.status import StatusLayout, format_status, marker_status_lines, render_status


def _visible(slot: int = 0) -> MarkerReport:
    return MarkerReport(
        slot=slot,
        label="hiro / robot",
        visible=True,
        confidence=0.9,
        position=(12.3, -4.5, 50.0),
        rotation=(0.0, 90.0, 270.0),
    )


def _hidden(slot: int = 1) -> MarkerReport:
    return MarkerReport(
        slot=slot,
        label="kanji / cow",
        visible=False,
        confidence=None,
        position=None,
        rotation=None,
    )


class TestMarkerStatusLines:
    """Tests for marker_status_lines."""

    def test_visible_marker(self) -> None:
        assert marker_status_lines(_visible()) == [
            "0. hiro / robot (0.9)",
            "    at (12.3, -4.5, 50.0)",
            "    rots (0.0, 90.0, 270.0)",
        ]

    def test_hidden_marker(self) -> None:
        assert marker_status_lines(_hidden()) == [
            "1. kanji / cow (-)",
            " not visible",
        ]

    def test_whole_numbers_keep_decimal_point(self) -> None:
        report = MarkerReport(
            slot=2,
            label="a / b",
            visible=True,
            confidence=1.0,
            position=(0.0, 0.0, 0.0),
            rotation=(0.0, 45.0, 0.0),
        )

        assert marker_status_lines(report) == [
            "2. a / b (1.0)",
            "    at (0.0, 0.0, 0.0)",
            "    rots (0.0, 45.0, 0.0)",
        ]

    def test_visible_without_pose(self) -> None:
        report = MarkerReport(
            slot=0, label="a / b", visible=True, confidence=0.5, position=None, rotation=None
        )
        lines = marker_status_lines(report)
        assert lines[1] == "    at an unknown position"
        assert lines[2] == "    with unknown rotations"


class TestFormatStatus:
    """Tests for format_status."""

    def test_lists_markers_in_slot_order(self) -> None:
        report = TrackingReport(frame_index=3, markers=[_visible(0), _hidden(1)])

        text = format_status(report)

        assert text.splitlines() == [
            "0. hiro / robot (0.9)",
            "    at (12.3, -4.5, 50.0)",
            "    rots (0.0, 90.0, 270.0)",
            "1. kanji / cow (-)",
            " not visible",
        ]

    def test_skipped_frame_is_flagged(self) -> None:
        report = TrackingReport(frame_index=0, markers=[_hidden(0)], skipped=True)
        assert format_status(report).endswith("(frame skipped)")


class TestRenderStatus:
    """Tests for render_status."""

    def test_draws_on_copy(self, blank_image: np.ndarray) -> None:
        report = TrackingReport(frame_index=0, markers=[_visible(0), _hidden(1)])

        result = render_status(blank_image, report)

        assert result.shape == blank_image.shape
        assert result.any()
        assert not blank_image.any()

    def test_no_markers_leaves_image_unchanged(self, blank_image: np.ndarray) -> None:
        report = TrackingReport(frame_index=0, markers=[])
        result = render_status(blank_image, report, StatusLayout(x=5, y=15))
        np.testing.assert_array_equal(result, blank_image)
