"""Command line entry point: ``htg --start 100,200 --end 800,600``.

Endpoints left out are drawn at random on the configured screen. The dense
path is printed as JSON and, unless ``--no-render`` is given, drawn to PNG.
"""

import argparse
import logging
import sys
from typing import List, Optional, Tuple

from .config import load_config
from .errors import PredictionUnavailable
from .serialization import path_to_json
from .trajectory_generator import TrajectoryGenerator

logger = logging.getLogger(__name__)


def parse_point(text: str) -> Tuple[int, int]:
    """Parse "x,y" into a point."""
    parts = [p.strip() for p in text.split(",")]
    try:
        if len(parts) != 2:
            raise ValueError(text)
        return int(parts[0]), int(parts[1])
    except ValueError:
        raise argparse.ArgumentTypeError(
            "Invalid format. Please enter two numbers separated by a comma (e.g., 100,200)."
        )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="htg",
        description="Generate a human-like movement path between two points.",
    )
    parser.add_argument("--start", type=parse_point, default=None,
                        help="Start point as x,y (random when omitted)")
    parser.add_argument("--end", type=parse_point, default=None,
                        help="End point as x,y (random when omitted)")
    parser.add_argument("--randomness", type=float, default=None,
                        help="Jitter amplitude added to the model inputs (default: 1.5)")
    parser.add_argument("--density", type=int, default=None,
                        help="Interpolated points per segment (default: 5)")
    parser.add_argument("--model", dest="model_path", default=None,
                        help="Path to the ONNX model (default: model.onnx)")
    parser.add_argument("--config", dest="config_file", default=None,
                        help="JSON config file")
    parser.add_argument("--output", default=None,
                        help="PNG destination (default: output/output-HH-MM-SS.png)")
    parser.add_argument("--no-render", action="store_true",
                        help="Only print the path, do not write an image")
    parser.add_argument("--seed", type=int, default=None,
                        help="Seed for the random source")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Enable debug logging")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config = load_config(
            args.config_file,
            model_path=args.model_path,
            random_seed=args.seed,
        )
    except (FileNotFoundError, ValueError) as e:
        logger.error("Invalid configuration: %s", e)
        return 1

    randomness = args.randomness
    if randomness is not None and randomness < 0:
        logger.warning("Invalid randomness %s. Using default %s.", randomness, config.randomness)
        randomness = None

    density = args.density
    if density is not None and density < 1:
        logger.warning("Density must be at least 1. Using default %s.", config.density)
        density = None

    generator = TrajectoryGenerator(config)

    try:
        result = generator.generate_trajectory(
            start=args.start,
            end=args.end,
            randomness=randomness,
            density=density,
            render=not args.no_render,
            output_file=args.output,
        )
    except PredictionUnavailable as e:
        logger.error("Trajectory generation failed: %s", e)
        return 1

    print("Trajectory:")
    print(path_to_json(result.path))
    return 0


if __name__ == "__main__":
    sys.exit(main())
