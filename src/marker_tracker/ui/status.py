"""Status text for the per-frame tracking report."""

from __future__ import annotations

from dataclasses import dataclass

import cv2
import numpy as np
from numpy.typing import NDArray

from marker_tracker.core.types import MarkerReport
from marker_tracker.pipeline.tracker import TrackingReport


@dataclass
class StatusLayout:
    """Layout configuration for the status panel."""

    x: int = 10
    y: int = 20
    line_height: int = 18
    font_scale: float = 0.45
    thickness: int = 1

    # Colors (BGR)
    color_text: tuple[int, int, int] = (255, 255, 255)
    color_bg: tuple[int, int, int] = (0, 0, 0)
    color_hidden: tuple[int, int, int] = (0, 165, 255)


def _format_vector(values: tuple[float, float, float]) -> str:
    return f"({values[0]}, {values[1]}, {values[2]})"


def marker_status_lines(report: MarkerReport) -> list[str]:
    """Describe one marker.

    Args:
        report: Marker report

    Returns:
        Header line followed by position/rotation lines, or a
        "not visible" line for hidden markers
    """
    confidence = "-" if report.confidence is None else f"{report.confidence}"
    lines = [f"{report.slot}. {report.label} ({confidence})"]

    if not report.visible:
        lines.append(" not visible")
        return lines

    if report.position is not None:
        lines.append(f"    at {_format_vector(report.position)}")
    else:
        lines.append("    at an unknown position")

    if report.rotation is not None:
        lines.append(f"    rots {_format_vector(report.rotation)}")
    else:
        lines.append("    with unknown rotations")

    return lines


def format_status(report: TrackingReport) -> str:
    """Format a tracking report as multi-line status text."""
    lines: list[str] = []
    for marker in report.markers:
        lines.extend(marker_status_lines(marker))
    if report.skipped:
        lines.append("(frame skipped)")
    return "\n".join(lines)


def render_status(
    image: NDArray[np.uint8],
    report: TrackingReport,
    layout: StatusLayout | None = None,
) -> NDArray[np.uint8]:
    """Draw the status text onto a copy of a frame.

    Args:
        image: Input image
        report: Tracking report to display
        layout: Panel layout (uses defaults if None)

    Returns:
        Image with status overlay
    """
    layout = layout or StatusLayout()
    result = image.copy()
    font = cv2.FONT_HERSHEY_SIMPLEX

    y = layout.y
    for marker in report.markers:
        color = layout.color_text if marker.visible else layout.color_hidden
        for text in marker_status_lines(marker):
            (text_w, text_h), baseline = cv2.getTextSize(
                text, font, layout.font_scale, layout.thickness
            )
            cv2.rectangle(
                result,
                (layout.x - 2, y - text_h - 2),
                (layout.x + text_w + 2, y + baseline),
                layout.color_bg,
                -1,
            )
            cv2.putText(
                result,
                text,
                (layout.x, y),
                font,
                layout.font_scale,
                color,
                layout.thickness,
                cv2.LINE_AA,
            )
            y += layout.line_height

    return result
