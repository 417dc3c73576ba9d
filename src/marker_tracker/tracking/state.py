"""Per-marker mutable tracking state."""

from __future__ import annotations

from dataclasses import dataclass, field

from marker_tracker.core.types import PoseEstimate, Transform, Vector3, Visibility
from marker_tracker.tracking.smoother import PoseSmoother


@dataclass
class MarkerTrackState:
    """Tracking state for one registered marker.

    Owned by the tracker and updated once per frame tick.

    Attributes:
        visibility: Current visibility of the marker's object
        lost_count: Consecutive frames without any match
        smoother: Window of recently accepted raw transforms
        smoothed_transform: Last averaged transform applied to the scene
        position: Last decomposed position, None until first accepted detection
        rotation: Last decomposed rotation, None until first accepted detection
    """

    visibility: Visibility = Visibility.HIDDEN
    lost_count: int = 0
    smoother: PoseSmoother = field(default_factory=PoseSmoother)
    smoothed_transform: Transform | None = None
    position: Vector3 | None = None
    rotation: Vector3 | None = None

    @property
    def is_visible(self) -> bool:
        """Check if the marker's object is shown."""
        return self.visibility == Visibility.VISIBLE

    @property
    def has_pose(self) -> bool:
        """Check if a pose has ever been computed."""
        return self.position is not None and self.rotation is not None

    def apply_pose(self, transform: Transform, pose: PoseEstimate) -> None:
        """Store a freshly smoothed transform and its decomposition."""
        self.smoothed_transform = transform
        self.position = pose.position
        self.rotation = pose.rotation
