"""
Control-point synthesis.

Normalizes a start/end pair (plus jitter) into the model's input space, runs
the predictor, and decodes its output into a control-point sequence that
always begins at the requested start and ends at the requested end.

The predicted points are consumed in order until one lands within
``max_distance`` of the end point on both axes independently; the model is
then considered to have converged to the destination.
"""

import logging
import numpy as np
from typing import List, Optional, Sequence, Tuple

from .errors import DegenerateNormalization, PredictionFailed, PredictionUnavailable, PredictorUnavailable
from .params import Point, as_point
from .predictor import Predictor

logger = logging.getLogger(__name__)

MAX_DISTANCE = 3
NORMALIZATION_MARGIN = 1.5
INPUT_SHAPE = (1, 2, 2)


def draw_jitter(rng, randomness: float) -> float:
    """Uniform draw in [-randomness, randomness) from a [0, 1) source."""
    return float(rng.random()) * 2.0 * randomness - randomness


def normalization_scale(start: Point, end: Point, margin: float = NORMALIZATION_MARGIN) -> float:
    """Largest input coordinate, widened by ``margin``.

    Raises:
        DegenerateNormalization: if the scale is zero
    """
    largest = max(start[0], start[1], end[0], end[1]) * margin
    if largest == 0:
        raise DegenerateNormalization(
            f"all coordinates of {tuple(start)} -> {tuple(end)} are zero"
        )
    return float(largest)


def normalize_endpoints(
    start: Point,
    end: Point,
    randomness: float,
    rng,
    margin: float = NORMALIZATION_MARGIN,
) -> Tuple[np.ndarray, float]:
    """
    Build the model input tensor.

    Each of start.x, start.y, end.x, end.y gets an independent jitter draw,
    then every element is divided by the normalization scale.

    Args:
        start: Requested start point
        end: Requested end point
        randomness: Jitter amplitude (>= 0)
        rng: Random source exposing ``random()`` in [0, 1)
        margin: Multiplier applied to the largest coordinate

    Returns:
        (inputs, largest) where inputs has shape [1, 2, 2] and dtype float32

    Raises:
        DegenerateNormalization: if every coordinate is zero
    """
    largest = normalization_scale(start, end, margin)

    values = [
        start[0] + draw_jitter(rng, randomness),
        start[1] + draw_jitter(rng, randomness),
        end[0] + draw_jitter(rng, randomness),
        end[1] + draw_jitter(rng, randomness),
    ]
    inputs = np.asarray(values, dtype=np.float32) / np.float32(largest)
    return inputs.reshape(INPUT_SHAPE), largest


def decode_predictions(
    predictions: Sequence[float],
    largest: float,
    end: Point,
    max_distance: int = MAX_DISTANCE,
) -> List[Point]:
    """
    Denormalize predicted points, stopping once one reaches the end point.

    Args:
        predictions: Flat model output [x0, y0, x1, y1, ...] in normalized space
        largest: Scale used to normalize the input
        end: Requested end point
        max_distance: Per-axis tolerance for the convergence check

    Returns:
        Interior control points, in prediction order (start/end not included)

    Raises:
        PredictionFailed: on an empty, malformed, odd-length or non-finite output
    """
    try:
        values = np.asarray(predictions, dtype=float).ravel()
    except (TypeError, ValueError) as e:
        raise PredictionFailed(f"model returned unusable output: {e}", stage="decode") from e

    if values.size == 0:
        raise PredictionFailed("model returned no predictions", stage="decode")
    if values.size % 2 != 0:
        raise PredictionFailed(
            f"model returned an odd number of components ({values.size})", stage="decode"
        )
    if not np.all(np.isfinite(values)):
        raise PredictionFailed("model returned non-finite values", stage="decode")

    points = np.rint(values.reshape(-1, 2) * largest).astype(int)

    interior: List[Point] = []
    for x, y in points:
        x, y = int(x), int(y)
        if abs(x - end[0]) <= max_distance and abs(y - end[1]) <= max_distance:
            break
        interior.append((x, y))

    return interior


def synthesize_control_points(
    start: Point,
    end: Point,
    randomness: float,
    predictor: Optional[Predictor],
    rng=None,
    max_distance: int = MAX_DISTANCE,
    margin: float = NORMALIZATION_MARGIN,
) -> List[Point]:
    """
    Produce the control-point sequence for a start -> end movement.

    Args:
        start: Requested start point
        end: Requested end point
        randomness: Jitter amplitude added to the model inputs
        predictor: Callable model, see ``Predictor``
        rng: Random source with ``random()``; a fresh numpy Generator if None
        max_distance: Per-axis tolerance for the convergence check
        margin: Normalization margin

    Returns:
        [start, *predicted, end]

    Raises:
        PredictorUnavailable: if no predictor is given or it cannot load
        PredictionFailed: if the prediction raises or is unusable
        ValueError: on malformed points or negative randomness
    """
    start = as_point(start, "start")
    end = as_point(end, "end")

    if randomness < 0:
        raise ValueError(f"randomness must be >= 0, got {randomness}")

    if predictor is None:
        raise PredictorUnavailable("no predictor configured")

    if rng is None:
        rng = np.random.default_rng()

    try:
        inputs, largest = normalize_endpoints(start, end, randomness, rng, margin)
    except DegenerateNormalization as e:
        logger.warning("Using direct path: %s", e)
        return [start, end]

    try:
        predictions = predictor(inputs)
    except PredictionUnavailable:
        raise
    except Exception as e:
        raise PredictionFailed(f"An error occurred during model prediction: {e}") from e

    if predictions is None:
        raise PredictionFailed("Results are null")

    interior = decode_predictions(predictions, largest, end, max_distance)
    logger.debug("Accepted %d predicted control points", len(interior))

    return [start] + interior + [end]
