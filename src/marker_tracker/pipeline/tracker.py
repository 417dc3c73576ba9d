"""Per-frame marker tracking orchestration."""

from __future__ import annotations

import threading
from collections.abc import Sequence
from dataclasses import dataclass, field

from marker_tracker.core.config import TrackingSettings
from marker_tracker.core.exceptions import DetectorError, SetupError
from marker_tracker.core.logging import get_logger
from marker_tracker.core.types import Frame, MarkerDefinition, MarkerReport, RawDetection, Transform
from marker_tracker.render.commands import (
    ApplyTransform,
    RenderCommand,
    SceneRenderer,
    SetInvisible,
    dispatch,
)
from marker_tracker.tracking.affine import is_affine
from marker_tracker.tracking.decomposer import PoseDecomposer
from marker_tracker.tracking.matcher import ConfidenceGate, find_best_detection_index
from marker_tracker.tracking.smoother import PoseSmoother
from marker_tracker.tracking.state import MarkerTrackState
from marker_tracker.tracking.visibility import VisibilityEvent, VisibilityStateMachine
from marker_tracker.vision.detector import MarkerDetector, collect_detections

logger = get_logger(__name__)


@dataclass
class TrackingReport:
    """Result of one tracking tick.

    Attributes:
        frame_index: Index of the processed frame
        markers: One report per registered marker, in slot order
        commands: Scene commands issued during this tick
        skipped: True if the detector failed and no state was updated
    """

    frame_index: int
    markers: list[MarkerReport]
    commands: list[RenderCommand] = field(default_factory=list)
    skipped: bool = False

    @property
    def visible_count(self) -> int:
        """Number of markers currently shown."""
        return sum(1 for m in self.markers if m.visible)

    def get(self, slot: int) -> MarkerReport:
        """Get the report for a marker slot."""
        return self.markers[slot]


class MarkerTracker:
    """Orchestrates the marker tracking pipeline.

    For each frame:
    - Collect raw detections from the detector
    - Pick the best detection per marker
    - Gate it by confidence
    - Smooth and decompose accepted transforms
    - Update visibility hysteresis
    - Build the status report and render commands

    Ticks are serialized by an internal lock so marker state is never
    updated by two frames at once.
    """

    def __init__(
        self,
        markers: Sequence[MarkerDefinition],
        detector: MarkerDetector,
        settings: TrackingSettings | None = None,
        renderer: SceneRenderer | None = None,
    ) -> None:
        """Initialize tracker.

        Args:
            markers: Registered markers, slots must be dense and in order
            detector: Detector used for every frame
            settings: Tracking settings (uses defaults if None)
            renderer: Optional scene receiving the render commands

        Raises:
            SetupError: If the marker slots are not ``0..n-1`` in order
        """
        for expected, marker in enumerate(markers):
            if marker.slot != expected:
                raise SetupError(f"Marker '{marker.name}' has slot {marker.slot}, expected {expected}")

        self.settings = settings or TrackingSettings()
        self._markers = tuple(markers)
        self._detector = detector
        self._renderer = renderer

        self._gate = ConfidenceGate(self.settings.min_confidence, self.settings.confidence_scale)
        self._visibility = VisibilityStateMachine(self.settings.max_lost_frames)
        self._decomposer = PoseDecomposer(self.settings.position_scale, self.settings.gimbal_epsilon)
        self._states = [self._new_state() for _ in self._markers]

        self._lock = threading.Lock()
        self._skipped_frames = 0

    @property
    def markers(self) -> tuple[MarkerDefinition, ...]:
        """Registered markers in slot order."""
        return self._markers

    @property
    def states(self) -> tuple[MarkerTrackState, ...]:
        """Tracking state per slot."""
        return tuple(self._states)

    @property
    def skipped_frames(self) -> int:
        """Number of frames skipped because the detector failed."""
        return self._skipped_frames

    def state(self, slot: int) -> MarkerTrackState:
        """Get the tracking state of one marker."""
        return self._states[slot]

    def process_frame(self, frame: Frame) -> TrackingReport:
        """Run one tracking tick on a captured frame.

        A detector failure skips the whole tick: every marker keeps its
        previous state and the report is flagged as skipped.

        Args:
            frame: Frame snapshot to detect markers in

        Returns:
            TrackingReport for this frame
        """
        with self._lock:
            try:
                detections = collect_detections(self._detector, frame.image)
            except DetectorError as e:
                self._skipped_frames += 1
                logger.warning("Skipping frame %d: %s", frame.index, e)
                return TrackingReport(
                    frame_index=frame.index,
                    markers=self._build_reports({}),
                    skipped=True,
                )

            return self._update(frame.index, detections)

    def process_detections(
        self,
        detections: Sequence[RawDetection],
        frame_index: int = 0,
    ) -> TrackingReport:
        """Run one tracking tick on an already collected detection list.

        Args:
            detections: Raw detections for the frame, in detector order
            frame_index: Frame index recorded in the report

        Returns:
            TrackingReport for this frame
        """
        with self._lock:
            return self._update(frame_index, detections)

    def reset(self) -> None:
        """Forget all tracking history and hide every marker."""
        with self._lock:
            commands: list[RenderCommand] = [
                SetInvisible(marker.slot)
                for marker, state in zip(self._markers, self._states, strict=True)
                if state.is_visible
            ]
            self._states = [self._new_state() for _ in self._markers]
            self._skipped_frames = 0

            if self._renderer is not None:
                dispatch(commands, self._renderer)

        logger.info("Tracker reset")

    def _new_state(self) -> MarkerTrackState:
        return MarkerTrackState(smoother=PoseSmoother(self.settings.smoothing_window))

    def _update(self, frame_index: int, detections: Sequence[RawDetection]) -> TrackingReport:
        """Update every marker from one frame's detections."""
        commands: list[RenderCommand] = []
        confidences: dict[int, float] = {}

        for marker, state in zip(self._markers, self._states, strict=True):
            best_idx = find_best_detection_index(detections, marker.slot)

            if best_idx is None:
                event = self._visibility.on_missing(state)
            else:
                detection = detections[best_idx]
                confidences[marker.slot] = self._gate.quantize(detection.confidence)

                if self._gate.accepts(detection.confidence):
                    event = self._accept(marker, state, detection.transform, commands)
                else:
                    event = self._visibility.on_rejected(state)

            if event is VisibilityEvent.HIDDEN:
                commands.append(SetInvisible(marker.slot))
                logger.info("Marker %d (%s) lost, hiding", marker.slot, marker.label)
            elif event is VisibilityEvent.SHOWN:
                logger.info("Marker %d (%s) found", marker.slot, marker.label)

        if self._renderer is not None:
            dispatch(commands, self._renderer)

        return TrackingReport(
            frame_index=frame_index,
            markers=self._build_reports(confidences),
            commands=commands,
        )

    def _accept(
        self,
        marker: MarkerDefinition,
        state: MarkerTrackState,
        transform: Transform,
        commands: list[RenderCommand],
    ) -> VisibilityEvent | None:
        """Apply a confident detection to a marker."""
        if not state.smoother.add(transform):
            logger.warning("Marker %d: rejected non-affine transform", marker.slot)
            return self._visibility.on_rejected(state)

        event = self._visibility.on_accepted(state)

        smoothed = state.smoother.compute()
        if smoothed is None or not is_affine(smoothed):
            logger.warning("Marker %d: ignoring non-affine smoothed transform", marker.slot)
            return event

        state.apply_pose(smoothed, self._decomposer.decompose(smoothed))
        commands.append(ApplyTransform(marker.slot, smoothed.copy()))
        return event

    def _build_reports(self, confidences: dict[int, float]) -> list[MarkerReport]:
        reports = []
        for marker, state in zip(self._markers, self._states, strict=True):
            visible = state.is_visible
            reports.append(
                MarkerReport(
                    slot=marker.slot,
                    label=marker.label,
                    visible=visible,
                    confidence=confidences.get(marker.slot),
                    position=state.position if visible else None,
                    rotation=state.rotation if visible else None,
                )
            )
        return reports
