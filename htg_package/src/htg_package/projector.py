"""Auto-fit projection of a path onto a fixed-size canvas."""

from typing import Iterable, Optional, Sequence, Tuple

from .geometry import bounding_box, fit_scale
from .params import CanvasSpec, FitTransform


def compute_fit(
    path: Iterable[Optional[Sequence[float]]],
    canvas_size: Tuple[int, int] = (1000, 1000),
    padding: float = 50.0,
) -> FitTransform:
    """
    Uniform scale + translation placing a path in the middle of the canvas.

    The bounding box is scaled to fit the drawable area (canvas minus padding
    on every side) without distorting the aspect ratio, and its midpoint is
    moved to the canvas center.

    Args:
        path: (x, y) points; None and malformed entries are ignored
        canvas_size: (width, height) in pixels
        padding: Border kept free on each side

    Raises:
        ValueError: if the path holds no valid point
    """
    canvas = CanvasSpec(width=canvas_size[0], height=canvas_size[1], padding=padding)
    min_x, min_y, max_x, max_y = bounding_box(path)

    scale = fit_scale(
        max_x - min_x, max_y - min_y,
        canvas.drawable_width, canvas.drawable_height,
    )

    data_cx = (min_x + max_x) / 2.0
    data_cy = (min_y + max_y) / 2.0
    canvas_cx, canvas_cy = canvas.center

    return FitTransform(
        scale=scale,
        translate=(canvas_cx - data_cx * scale, canvas_cy - data_cy * scale),
    )
