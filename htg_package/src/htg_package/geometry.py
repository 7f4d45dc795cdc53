"""
Geometry helpers shared by the densifier and the projector.

Catmull-Rom evaluation, bounding boxes over point sequences and the
aspect-preserving fit scale. All functions are pure.
"""

import numpy as np
from typing import Iterable, Optional, Sequence, Tuple


def catmull_rom(p0, p1, p2, p3, t: float) -> np.ndarray:
    """
    Evaluate the uniform Catmull-Rom segment between p1 and p2.

    Args:
        p0, p1, p2, p3: (x, y) control points; the curve runs from p1 (t=0) to p2 (t=1)
        t: Curve parameter in [0, 1]

    Returns:
        Array [x, y] of the interpolated position
    """
    p0 = np.asarray(p0, dtype=float)
    p1 = np.asarray(p1, dtype=float)
    p2 = np.asarray(p2, dtype=float)
    p3 = np.asarray(p3, dtype=float)

    t2 = t * t
    t3 = t2 * t

    return 0.5 * (
        (2.0 * p1)
        + (-p0 + p2) * t
        + (2.0 * p0 - 5.0 * p1 + 4.0 * p2 - p3) * t2
        + (-p0 + 3.0 * p1 - 3.0 * p2 + p3) * t3
    )


def is_valid_point(point) -> bool:
    """True for an (x, y) pair; None and short entries are rejected."""
    return point is not None and len(point) >= 2


def bounding_box(points: Iterable[Optional[Sequence[float]]]) -> Tuple[float, float, float, float]:
    """
    Axis-aligned bounds of a point sequence.

    Malformed entries (None, fewer than two coordinates) are skipped.

    Returns:
        (min_x, min_y, max_x, max_y)

    Raises:
        ValueError: if the sequence holds no valid point
    """
    valid = [(float(p[0]), float(p[1])) for p in points if is_valid_point(p)]
    if not valid:
        raise ValueError("No valid coordinate points to bound")

    xy = np.array(valid, dtype=float)
    min_x, min_y = xy.min(axis=0)
    max_x, max_y = xy.max(axis=0)
    return float(min_x), float(min_y), float(max_x), float(max_y)


def fit_scale(data_width: float, data_height: float,
              target_width: float, target_height: float) -> float:
    """
    Uniform scale that fits a data extent into a target extent.

    Both extents positive: the tighter axis wins, so the aspect ratio holds.
    One extent zero: scale by the other axis alone. Both zero: 1.
    """
    if data_width > 0 and data_height > 0:
        return min(target_width / data_width, target_height / data_height)
    if data_width > 0:
        return target_width / data_width
    if data_height > 0:
        return target_height / data_height
    return 1.0
