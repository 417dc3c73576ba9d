"""Affine-consistency checks for 4x4 homogeneous transforms.

A transform is accepted when it is a finite 4x4 matrix whose bottom row is
(0, 0, 0, 1) and whose upper-left 3x3 block is invertible, i.e. it is a
rotation + scale + translation with no projective component.
"""

from __future__ import annotations

from typing import Any

import numpy as np

from marker_tracker.core.exceptions import NonAffineTransformError
from marker_tracker.core.types import Transform

AFFINE_TOLERANCE = 1e-9

_BOTTOM_ROW = np.array([0.0, 0.0, 0.0, 1.0])


def _affine_problem(matrix: Any, tolerance: float) -> str | None:
    """Describe why ``matrix`` is not affine, or None if it is."""
    m = np.asarray(matrix, dtype=np.float64)

    if m.shape != (4, 4):
        return f"expected a 4x4 matrix, got shape {m.shape}"

    if not np.all(np.isfinite(m)):
        return "matrix contains non-finite values"

    if not np.allclose(m[3], _BOTTOM_ROW, rtol=0.0, atol=tolerance):
        return f"projective bottom row {m[3].tolist()}"

    if abs(np.linalg.det(m[:3, :3])) <= tolerance:
        return "singular rotation/scale block"

    return None


def is_affine(matrix: Any, tolerance: float = AFFINE_TOLERANCE) -> bool:
    """Check whether a matrix is an affine transform."""
    return _affine_problem(matrix, tolerance) is None


def check_affine(matrix: Any, tolerance: float = AFFINE_TOLERANCE) -> Transform:
    """Validate a matrix and return it as a float64 4x4 array.

    Args:
        matrix: Candidate transform (anything numpy can convert)
        tolerance: Absolute tolerance for the structure checks

    Returns:
        The transform as a new float64 array

    Raises:
        NonAffineTransformError: If the matrix fails the check
    """
    problem = _affine_problem(matrix, tolerance)
    if problem is not None:
        raise NonAffineTransformError(f"Not an affine transform: {problem}")

    return np.array(matrix, dtype=np.float64)
