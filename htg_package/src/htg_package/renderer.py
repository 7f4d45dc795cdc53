"""
Raster rendering of a trajectory with Pillow.

The path is fitted onto the canvas with ``compute_fit``, drawn as a white
polyline on black, and every ``marker_every``-th segment start is marked with
a red dot.
"""

import logging
from pathlib import Path
from typing import Optional, Sequence, Union

from PIL import Image, ImageDraw

from .geometry import is_valid_point
from .params import CanvasSpec
from .projector import compute_fit

logger = logging.getLogger(__name__)

BACKGROUND_COLOR = (0, 0, 0)
LINE_COLOR = (255, 255, 255)
MARKER_COLOR = (255, 0, 0)
LINE_WIDTH = 1
MARKER_RADIUS = 2.5


def render_path(
    path: Sequence[Optional[Sequence[int]]],
    canvas: Optional[CanvasSpec] = None,
    marker_every: int = 4,
) -> Image.Image:
    """
    Draw a path onto a new RGB image.

    Args:
        path: (x, y) points in path space; None and malformed entries are skipped
        canvas: Canvas size and padding (1000x1000, padding 50 by default)
        marker_every: Mark segment i's start vertex when i % marker_every == 0;
            0 disables the markers

    Raises:
        ValueError: if the path holds no valid point
    """
    canvas = canvas or CanvasSpec()
    fit = compute_fit(path, (canvas.width, canvas.height), canvas.padding)

    image = Image.new("RGB", (canvas.width, canvas.height), BACKGROUND_COLOR)
    draw = ImageDraw.Draw(image)

    for i in range(len(path) - 1):
        a, b = path[i], path[i + 1]
        if not (is_valid_point(a) and is_valid_point(b)):
            continue

        x1, y1 = fit.apply(a)
        x2, y2 = fit.apply(b)
        draw.line([(x1, y1), (x2, y2)], fill=LINE_COLOR, width=LINE_WIDTH)

        if marker_every and i % marker_every == 0:
            draw.ellipse(
                [x1 - MARKER_RADIUS, y1 - MARKER_RADIUS, x1 + MARKER_RADIUS, y1 + MARKER_RADIUS],
                fill=MARKER_COLOR,
            )

    return image


def save_trajectory_png(
    path: Sequence[Optional[Sequence[int]]],
    output_file: Union[str, Path],
    canvas: Optional[CanvasSpec] = None,
    marker_every: int = 4,
) -> Optional[Path]:
    """
    Render a path and write it as PNG.

    Returns:
        The written file, or None when the path holds no valid point
    """
    if not any(is_valid_point(p) for p in path):
        logger.warning("No valid coordinate points found to render.")
        return None

    image = render_path(path, canvas=canvas, marker_every=marker_every)

    output_file = Path(output_file)
    output_file.parent.mkdir(parents=True, exist_ok=True)
    image.save(output_file, format="PNG")

    logger.info("Image saved successfully to %s", output_file)
    return output_file
