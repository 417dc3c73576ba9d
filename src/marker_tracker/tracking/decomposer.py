"""Decomposition of 4x4 transforms into position and Euler angles.

The rotation extraction is the closed-form decomposition from the
"Matrix and Quaternion FAQ" (Q37). It has a singular branch that forces
pitch to zero and recovers roll from the (0, 1) and (1, 1) elements.
"""

from __future__ import annotations

import math

from marker_tracker.core.types import PoseEstimate, Transform, Vector3
from marker_tracker.tracking.affine import check_affine


def round_half_up(value: float, num_places: int) -> float:
    """Round to ``num_places`` decimals with halves rounded up.

    Unlike the builtin ``round`` this never rounds half to even, so 0.25
    becomes 0.3 and -0.25 becomes -0.2.
    """
    power = 10**num_places
    # + 0.0 turns -0.0 into 0.0
    return math.floor(value * power + 0.5) / power + 0.0


class PoseDecomposer:
    """Converts smoothed marker transforms into human readable pose values."""

    def __init__(self, position_scale: float = 100.0, gimbal_epsilon: float = 1e-5) -> None:
        """Initialize decomposer.

        Args:
            position_scale: Factor from world units to output units (m -> cm)
            gimbal_epsilon: Yaw magnitude (radians) at or below which the
                singular branch is used
        """
        self.position_scale = position_scale
        self.gimbal_epsilon = gimbal_epsilon

    def decompose(self, transform: Transform) -> PoseEstimate:
        """Split a transform into position and rotation.

        Args:
            transform: 4x4 affine transform

        Returns:
            PoseEstimate with position rounded to 1 decimal place and
            (pitch, yaw, roll) rounded to whole degrees in [0, 360]

        Raises:
            NonAffineTransformError: If the transform is not affine
        """
        m = check_affine(transform)
        return PoseEstimate(
            position=self.position(m),
            rotation=self.euler_angles(m),
        )

    def position(self, m: Transform) -> Vector3:
        """Extract the translation column in output units."""
        x = round_half_up(float(m[0, 3]) * self.position_scale, 1)
        y = round_half_up(float(m[1, 3]) * self.position_scale, 1)
        z = round_half_up(float(m[2, 3]) * self.position_scale, 1)
        return x, y, z

    def euler_angles(self, m: Transform) -> Vector3:
        """Extract (pitch, yaw, roll) in degrees from the rotation block."""
        # clamp guards asin against averaging drift just past +-1
        yaw = -math.asin(max(-1.0, min(1.0, float(m[2, 0]))))
        c = math.cos(yaw)

        if abs(yaw) > self.gimbal_epsilon:
            pitch = math.atan2(-float(m[2, 1]) / c, float(m[2, 2]) / c)
            roll = math.atan2(-float(m[1, 0]) / c, float(m[0, 0]) / c)
        else:
            pitch = 0.0
            roll = math.atan2(float(m[0, 1]), float(m[1, 1]))

        pitch = -pitch
        roll = -roll

        angles = []
        for angle in (pitch, yaw, roll):
            if angle < 0.0:
                angle += 2 * math.pi
            angles.append(round_half_up(math.degrees(angle), 0))

        return angles[0], angles[1], angles[2]
