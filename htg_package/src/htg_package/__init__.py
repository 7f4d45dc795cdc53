"""
Humanized Trajectory Generator - human-like pointer paths from a trained model.

A neural model proposes noisy control points between two screen positions;
the package smooths them into a dense Catmull-Rom path and can render the
result for visual inspection.
"""

__version__ = "0.1.0"

from .config import GeneratorConfig, load_config
from .densifier import densify_path
from .errors import (
    DegenerateNormalization,
    InsufficientControlPoints,
    PredictionFailed,
    PredictionUnavailable,
    PredictorUnavailable,
    TrajectoryError,
)
from .geometry import bounding_box, catmull_rom, fit_scale
from .params import CanvasSpec, FitTransform, TrajectoryResult
from .predictor import OnnxPredictor, Predictor
from .projector import compute_fit
from .renderer import render_path, save_trajectory_png
from .serialization import path_from_json, path_to_json
from .synthesizer import synthesize_control_points
from .trajectory_generator import TrajectoryGenerator

__all__ = [
    "TrajectoryGenerator",
    "GeneratorConfig",
    "load_config",
    "synthesize_control_points",
    "densify_path",
    "compute_fit",
    "catmull_rom",
    "bounding_box",
    "fit_scale",
    "render_path",
    "save_trajectory_png",
    "path_to_json",
    "path_from_json",
    "OnnxPredictor",
    "Predictor",
    "CanvasSpec",
    "FitTransform",
    "TrajectoryResult",
    "TrajectoryError",
    "PredictionUnavailable",
    "PredictorUnavailable",
    "PredictionFailed",
    "DegenerateNormalization",
    "InsufficientControlPoints",
]
