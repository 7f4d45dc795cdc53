"""Typed records for the trajectory pipeline."""

import numbers
from dataclasses import dataclass, field
from typing import List, Optional, Tuple


Point = Tuple[int, int]


def as_point(value, name: str = "point") -> Point:
    """
    Coerce an (x, y) pair to integer pixel coordinates.

    Integral floats (3.0) are accepted; fractional values are rejected
    rather than truncated.

    Raises:
        ValueError: if value is not a pair of integral numbers
    """
    if value is None or not hasattr(value, "__len__") or len(value) != 2:
        raise ValueError(f"{name} must be an (x, y) pair, got {value!r}")

    coords = []
    for v in value:
        if isinstance(v, bool):
            raise ValueError(f"{name} must hold integer coordinates, got {value!r}")
        if isinstance(v, numbers.Integral):
            coords.append(int(v))
            continue
        try:
            as_float = float(v)
        except (TypeError, ValueError) as e:
            raise ValueError(f"{name} must hold integer coordinates, got {value!r}") from e
        if not as_float.is_integer():
            raise ValueError(f"{name} must hold integer coordinates, got {value!r}")
        coords.append(int(as_float))
    return coords[0], coords[1]


@dataclass(frozen=True)
class CanvasSpec:
    """Target raster size and the empty border kept around the path."""
    width: int = 1000
    height: int = 1000
    padding: float = 50.0

    @property
    def drawable_width(self) -> float:
        return self.width - 2 * self.padding

    @property
    def drawable_height(self) -> float:
        return self.height - 2 * self.padding

    @property
    def center(self) -> Tuple[float, float]:
        return self.width / 2.0, self.height / 2.0


@dataclass(frozen=True)
class FitTransform:
    """Uniform scale plus translation from path space to canvas space.

    canvas = (point - data_center) * scale + canvas_center, folded into
    canvas = point * scale + translate.
    """
    scale: float
    translate: Tuple[float, float]

    def apply(self, point) -> Tuple[float, float]:
        """Map a single (x, y) point onto the canvas."""
        return (
            point[0] * self.scale + self.translate[0],
            point[1] * self.scale + self.translate[1],
        )

    def apply_all(self, points) -> List[Tuple[float, float]]:
        return [self.apply(p) for p in points]


@dataclass
class TrajectoryResult:
    """Output of one generation run.

    - control_points: start, model-derived interior points, end
    - path: dense smoothed path (equal to control_points when smoothing was skipped)
    - smoothed: False when densification fell back to the raw control points
    - image_path: where the rendering was written, if any
    """
    start: Point
    end: Point
    control_points: List[Point]
    path: List[Point]
    smoothed: bool = True
    image_path: Optional[str] = None
    notes: List[str] = field(default_factory=list)
