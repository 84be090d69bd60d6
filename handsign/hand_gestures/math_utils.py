"""Vector and geometry utility functions."""

import math

import numpy as np
from numpy.typing import NDArray

Point2 = tuple[float, float]


def heading_rad(origin: Point2, target: Point2) -> float:
    """Angle of the origin->target vector, in radians."""
    return math.atan2(target[1] - origin[1], target[0] - origin[0])


def rotation_matrix2(theta: float) -> NDArray[np.float64]:
    """Standard 2D rotation matrix for a counter-clockwise angle in radians."""
    c, s = math.cos(theta), math.sin(theta)
    return np.array([[c, -s], [s, c]], dtype=np.float64)


def l2_distances(points: NDArray[np.float64], query: NDArray[np.float64]) -> NDArray[np.float64]:
    """Euclidean distance from query to every row of points."""
    return np.sqrt(np.sum((points - query) ** 2, axis=1))


def all_finite(values) -> bool:
    """True when every value is a finite real number."""
    return bool(np.all(np.isfinite(np.asarray(values, dtype=np.float64))))
