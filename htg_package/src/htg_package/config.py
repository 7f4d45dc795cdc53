"""
Generator configuration.

Defaults mirror the interactive tool: randomness 1.5, density 5, a 1000x1000
canvas with 50px padding, random endpoints drawn on a 1920x1080 screen.
A JSON file can override any field; keyword overrides win over the file.
"""

import json
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional, Union


@dataclass
class GeneratorConfig:
    """All knobs of a generation run."""
    model_path: str = "model.onnx"
    device: str = "cpu"

    randomness: float = 1.5
    density: int = 5
    max_distance: int = 3
    normalization_margin: float = 1.5

    canvas_width: int = 1000
    canvas_height: int = 1000
    padding: float = 50.0
    marker_every: int = 4
    output_dir: str = "output"

    screen_width: int = 1920
    screen_height: int = 1080
    random_seed: Optional[int] = None

    def __post_init__(self):
        self.validate()

    def validate(self):
        if self.density < 1:
            raise ValueError(f"density must be at least 1, got {self.density}")
        if self.randomness < 0:
            raise ValueError(f"randomness must be >= 0, got {self.randomness}")
        if self.max_distance < 0:
            raise ValueError(f"max_distance must be >= 0, got {self.max_distance}")
        if self.padding < 0:
            raise ValueError(f"padding must be >= 0, got {self.padding}")
        if self.canvas_width <= 0 or self.canvas_height <= 0:
            raise ValueError(
                f"canvas must be positive, got {self.canvas_width}x{self.canvas_height}"
            )
        if self.screen_width <= 0 or self.screen_height <= 0:
            raise ValueError(
                f"screen must be positive, got {self.screen_width}x{self.screen_height}"
            )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _merge(config: Dict[str, Any], updates: Dict[str, Any], source: str):
    known = {f.name for f in fields(GeneratorConfig)}
    unknown = sorted(set(updates) - known)
    if unknown:
        raise ValueError(f"Unknown config keys in {source}: {', '.join(unknown)}")
    config.update(updates)


def load_config(config_file: Optional[Union[str, Path]] = None, **overrides) -> GeneratorConfig:
    """
    Build a configuration from defaults, an optional JSON file and overrides.

    Args:
        config_file: JSON object with GeneratorConfig fields. A nested
                     {"generator": {...}} object is accepted as well.
        **overrides: Field values taking precedence over the file; None
                     values are ignored.

    Raises:
        FileNotFoundError: if config_file does not exist
        ValueError: on unknown keys or invalid values
    """
    config = GeneratorConfig().to_dict()

    if config_file is not None:
        config_path = Path(config_file)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_file}")

        with open(config_path, 'r') as f:
            file_config = json.load(f)

        if not isinstance(file_config, dict):
            raise ValueError(f"Config file must hold a JSON object: {config_file}")
        if "generator" in file_config:
            file_config = file_config["generator"]

        _merge(config, file_config, str(config_path))

    _merge(config, {k: v for k, v in overrides.items() if v is not None}, "overrides")

    return GeneratorConfig(**config)
