"""User interface: status text and overlay."""

from marker_tracker.ui.status import format_status, marker_status_lines, render_status

__all__ = ["format_status", "marker_status_lines", "render_status"]
