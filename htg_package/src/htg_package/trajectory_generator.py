"""
Human-like trajectory generator.

This module wires the pipeline end to end: a trained model proposes noisy
control points between two screen positions, the control points are turned
into a smooth dense path with Catmull-Rom splines, and the result can be
rendered to PNG for inspection.

Implementation Notes:
- The random source is owned by the generator instance and seeded from the
  config; pass ``rng`` to share or script it
- A predictor failure is terminal for the request (PredictionUnavailable is raised)
- Fewer than two control points skip smoothing; the raw points become the path
"""

import json
import logging
import numpy as np
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Sequence, Union

from .config import GeneratorConfig
from .densifier import densify_path
from .params import CanvasSpec, Point, TrajectoryResult, as_point
from .predictor import OnnxPredictor, Predictor
from .renderer import save_trajectory_png
from .synthesizer import synthesize_control_points

logger = logging.getLogger(__name__)


class TrajectoryGenerator:
    """
    Generates human-like movement paths between two points.

    Example:
        >>> generator = TrajectoryGenerator(GeneratorConfig(model_path="model.onnx"))
        >>> result = generator.generate_trajectory(start=(100, 200), end=(500, 400))
        >>> for x, y in result.path:
        ...     page.mouse.move(x, y)
    """

    def __init__(
        self,
        config: Optional[GeneratorConfig] = None,
        predictor: Optional[Predictor] = None,
        rng=None,
    ):
        """
        Args:
            config: Generator settings (defaults when None)
            predictor: Control-point model; an OnnxPredictor on config.model_path when None
            rng: Random source exposing ``random()``; seeded from config.random_seed when None
        """
        self.config = config or GeneratorConfig()

        if predictor is None:
            predictor = OnnxPredictor(self.config.model_path, device=self.config.device)
        self.predictor = predictor

        if rng is None:
            rng = np.random.default_rng(self.config.random_seed)
        self.rng = rng

    @property
    def canvas(self) -> CanvasSpec:
        return CanvasSpec(
            width=self.config.canvas_width,
            height=self.config.canvas_height,
            padding=self.config.padding,
        )

    def random_point(self) -> Point:
        """Uniform random screen position in [0, screen_width) x [0, screen_height)."""
        x = int(self.rng.random() * self.config.screen_width)
        y = int(self.rng.random() * self.config.screen_height)
        return x, y

    def generate_control_points(
        self,
        start: Sequence[int],
        end: Sequence[int],
        randomness: Optional[float] = None,
    ) -> List[Point]:
        """
        Query the model for the control-point sequence of one movement.

        Raises:
            PredictionUnavailable: if the model is missing or the prediction fails
        """
        if randomness is None:
            randomness = self.config.randomness

        return synthesize_control_points(
            as_point(start, "start"),
            as_point(end, "end"),
            randomness,
            self.predictor,
            rng=self.rng,
            max_distance=self.config.max_distance,
            margin=self.config.normalization_margin,
        )

    def default_output_file(self) -> Path:
        return Path(self.config.output_dir) / f"output-{datetime.now().strftime('%H-%M-%S')}.png"

    def generate_trajectory(
        self,
        start: Optional[Sequence[int]] = None,
        end: Optional[Sequence[int]] = None,
        randomness: Optional[float] = None,
        density: Optional[int] = None,
        render: bool = False,
        output_file: Optional[Union[str, Path]] = None,
    ) -> TrajectoryResult:
        """
        Generate a dense, smoothed path from start to end.

        Args:
            start: Start point in pixels; random when None
            end: End point in pixels; random when None
            randomness: Jitter amplitude (config.randomness when None)
            density: Interpolated samples per control-point segment (config.density when None)
            render: Write a PNG of the path
            output_file: PNG destination; <output_dir>/output-HH-MM-SS.png when None

        Returns:
            TrajectoryResult

        Raises:
            PredictionUnavailable: if no model-derived control points are available
            ValueError: on malformed points or density < 1
        """
        if start is None:
            start = self.random_point()
            logger.info("No start provided. Generating random coordinates: %d,%d", *start)
        if end is None:
            end = self.random_point()
            logger.info("No end provided. Generating random coordinates: %d,%d", *end)

        start = as_point(start, "start")
        end = as_point(end, "end")

        if density is None:
            density = self.config.density
        if density < 1:
            raise ValueError(f"density must be at least 1, got {density}")

        control_points = self.generate_control_points(start, end, randomness)

        result = TrajectoryResult(
            start=start,
            end=end,
            control_points=control_points,
            path=list(control_points),
            smoothed=False,
        )

        dense = densify_path(control_points, density)
        if dense is None:
            result.notes.append(
                "Not enough control points generated for smoothing. Path might be direct."
            )
            logger.warning(result.notes[-1])
        else:
            result.path = dense
            result.smoothed = True

        if render:
            target = Path(output_file) if output_file is not None else self.default_output_file()
            try:
                written = save_trajectory_png(
                    result.path, target, canvas=self.canvas, marker_every=self.config.marker_every
                )
            except OSError as e:
                logger.error("Failed to write %s: %s", target, e)
                result.notes.append(f"render failed: {e}")
            else:
                result.image_path = str(written) if written is not None else None

        return result

    def generate_trajectory_from_task(self, task_file: Union[str, Path], **kwargs) -> TrajectoryResult:
        """
        Generate a trajectory described by a task.json file.

        Format: {"start": [x, y], "end": [x, y], "randomness": 1.5, "density": 5}
        Only "start" and "end" are required. Keyword arguments are passed on to
        ``generate_trajectory`` and win over the file.
        """
        task_path = Path(task_file)
        if not task_path.exists():
            raise FileNotFoundError(f"Task file not found: {task_file}")

        with open(task_path, 'r') as f:
            task_data = json.load(f)

        for key in ("start", "end"):
            if key not in task_data:
                raise ValueError(f"task.json must contain '{key}' key")

        params = {
            "start": task_data["start"],
            "end": task_data["end"],
            "randomness": task_data.get("randomness"),
            "density": task_data.get("density"),
        }
        params.update(kwargs)
        return self.generate_trajectory(**params)
