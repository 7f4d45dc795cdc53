"""
Path densification.

Turns a sparse, jittery control-point sequence into a smooth, densely sampled
path by chaining uniform Catmull-Rom segments through every control point.
"""

import logging
import numpy as np
from typing import Iterator, List, Optional, Sequence, Tuple

from .errors import InsufficientControlPoints
from .geometry import catmull_rom
from .params import Point

logger = logging.getLogger(__name__)


def segment_windows(control_points: Sequence[Point]) -> Iterator[Tuple[Point, Point, Point, Point]]:
    """
    Yield the four-point window (p0, p1, p2, p3) for every segment p1 -> p2.

    Neighbours past either end are clamped to the first/last control point,
    so the curve never overshoots the endpoints.

    Raises:
        InsufficientControlPoints: if fewer than two points are given
    """
    n = len(control_points) if control_points is not None else 0
    if n < 2:
        raise InsufficientControlPoints(n)

    for i in range(n - 1):
        yield (
            control_points[max(0, i - 1)],
            control_points[i],
            control_points[i + 1],
            control_points[min(n - 1, i + 2)],
        )


def densify_path(control_points: Sequence[Point], points_per_segment: int) -> Optional[List[Point]]:
    """
    Smooth and densify a control-point sequence.

    Args:
        control_points: Ordered (x, y) control points
        points_per_segment: Samples added per segment, at t = j / points_per_segment

    Returns:
        The first control point followed by points_per_segment rounded samples
        for each of the N-1 segments, or None when fewer than two control
        points are given.
    """
    if points_per_segment < 1:
        raise ValueError(f"points_per_segment must be >= 1, got {points_per_segment}")

    try:
        windows = list(segment_windows(control_points))
    except InsufficientControlPoints as e:
        logger.warning("Skipping smoothing: %s", e)
        return None

    first = control_points[0]
    path: List[Point] = [(int(first[0]), int(first[1]))]

    for p0, p1, p2, p3 in windows:
        for j in range(1, points_per_segment + 1):
            t = j / points_per_segment
            x, y = np.rint(catmull_rom(p0, p1, p2, p3, t))
            path.append((int(x), int(y)))

    logger.debug(
        "Densified %d control points into %d samples", len(control_points), len(path)
    )
    return path
