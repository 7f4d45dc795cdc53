"""JSON point-array format for dense paths: ``[[x, y], [x, y], ...]``."""

import json
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Union

from .params import Point


def path_to_json(path: Iterable[Optional[Sequence[int]]]) -> str:
    """Serialize a path compactly, omitting None entries."""
    return json.dumps(
        [[int(p[0]), int(p[1])] for p in path if p is not None],
        separators=(",", ":"),
    )


def path_from_json(text: str) -> List[Point]:
    """
    Parse a point array back into (x, y) tuples.

    Raises:
        ValueError: if the document is not an array of 2-element integer arrays
    """
    data = json.loads(text)
    if not isinstance(data, list):
        raise ValueError("Path JSON must be an array of [x, y] pairs")

    path: List[Point] = []
    for i, item in enumerate(data):
        if item is None:
            continue
        if not isinstance(item, list) or len(item) != 2:
            raise ValueError(f"Entry {i} is not an [x, y] pair: {item!r}")
        x, y = item
        if isinstance(x, bool) or isinstance(y, bool) or not isinstance(x, int) or not isinstance(y, int):
            raise ValueError(f"Entry {i} must hold integers: {item!r}")
        path.append((x, y))
    return path


def save_path(path: Iterable[Optional[Sequence[int]]], output_file: Union[str, Path]) -> Path:
    """Write a path as JSON to ``output_file``."""
    output_file = Path(output_file)
    output_file.parent.mkdir(parents=True, exist_ok=True)
    output_file.write_text(path_to_json(path))
    return output_file


def load_path(input_file: Union[str, Path]) -> List[Point]:
    """Read a path written by ``save_path``."""
    input_file = Path(input_file)
    if not input_file.exists():
        raise FileNotFoundError(f"Path file not found: {input_file}")
    return path_from_json(input_file.read_text())
