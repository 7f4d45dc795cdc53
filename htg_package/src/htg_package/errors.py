"""Failure kinds raised by the trajectory pipeline."""

from typing import Optional


class TrajectoryError(Exception):
    """Base class; ``stage`` names the pipeline step that failed."""

    default_stage = "pipeline"

    def __init__(self, message: str, stage: Optional[str] = None):
        self.stage = stage or self.default_stage
        super().__init__(f"[{self.stage}] {message}")


class PredictionUnavailable(TrajectoryError):
    """No model-derived control points could be produced for this request."""

    default_stage = "predict"


class PredictorUnavailable(PredictionUnavailable):
    """The inference model is missing or could not be loaded."""

    default_stage = "load"


class PredictionFailed(PredictionUnavailable):
    """The predictor raised, returned nothing, or returned an unusable vector."""

    default_stage = "predict"


class DegenerateNormalization(TrajectoryError):
    """The normalization denominator is zero."""

    default_stage = "normalize"


class InsufficientControlPoints(TrajectoryError):
    """Fewer than two control points are available for smoothing."""

    default_stage = "densify"

    def __init__(self, count: int):
        self.count = count
        super().__init__(f"need at least 2 control points, got {count}")
