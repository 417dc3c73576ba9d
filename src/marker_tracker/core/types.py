"""Core data types and structures."""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Any

import numpy as np
from numpy.typing import NDArray

Transform = NDArray[np.float64]
Vector3 = tuple[float, float, float]


@dataclass(slots=True)
class Frame:
    """A video frame with metadata.

    Attributes:
        image: BGR image array (OpenCV format)
        timestamp: Frame timestamp in seconds
        index: Frame sequence number
    """

    image: NDArray[np.uint8]
    timestamp: float
    index: int

    @property
    def width(self) -> int:
        """Frame width in pixels."""
        return int(self.image.shape[1])

    @property
    def height(self) -> int:
        """Frame height in pixels."""
        return int(self.image.shape[0])

    @property
    def dimensions(self) -> tuple[int, int]:
        """Frame dimensions as (width, height)."""
        return self.width, self.height


@dataclass(frozen=True, slots=True)
class MarkerDefinition:
    """Registration record for one marker.

    Attributes:
        slot: Dense index assigned in registration order
        pattern: Opaque pattern handle consumed by the detector
        width: Physical marker width in world units (metres)
        name: Marker name (e.g. pattern file or ArUco label)
        model: Name of the virtual object attached to the marker
    """

    slot: int
    pattern: Any
    width: float
    name: str
    model: str

    @property
    def label(self) -> str:
        """Human readable identity used in status output."""
        return f"{self.name} / {self.model}"


@dataclass(frozen=True, slots=True)
class RawDetection:
    """One observation reported by the detector for the current frame.

    Attributes:
        slot: Marker slot the detector matched, -1 if unregistered
        confidence: Detection confidence [0, 1]
        transform: 4x4 marker-to-camera transform
    """

    slot: int
    confidence: float
    transform: Transform


class Visibility(Enum):
    """Visibility states of a tracked marker."""

    HIDDEN = auto()
    VISIBLE = auto()


@dataclass(frozen=True, slots=True)
class PoseEstimate:
    """Decomposed marker pose.

    Position is in output units (centimetres by default), rotation is
    (pitch, yaw, roll) in whole degrees.
    """

    position: Vector3
    rotation: Vector3


@dataclass(frozen=True, slots=True)
class MarkerReport:
    """Per-marker status snapshot for one frame.

    Attributes:
        slot: Marker slot index
        label: Marker identity label
        visible: Whether the marker's object is shown
        confidence: Confidence observed this frame, None if no match
        position: Position in output units, None if unknown or hidden
        rotation: Euler angles in degrees, None if unknown or hidden
    """

    slot: int
    label: str
    visible: bool
    confidence: float | None
    position: Vector3 | None
    rotation: Vector3 | None
