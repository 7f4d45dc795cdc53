"""
Tests for the end-to-end trajectory generator.

A stub predictor stands in for the trained model so the pipeline is
deterministic: start (0, 0) -> end (100, 100) normalizes by 150, and the stub
output [0.2, 0.2, 0.4, 0.4] decodes to control points (30, 30), (60, 60).
"""

import json
from pathlib import Path

import pytest

from htg_package import GeneratorConfig, TrajectoryGenerator
from htg_package.errors import PredictionFailed, PredictionUnavailable, PredictorUnavailable
from htg_package.serialization import path_from_json, path_to_json


@pytest.fixture
def generator(stub_predictor, tmp_path):
    config = GeneratorConfig(random_seed=42, output_dir=str(tmp_path / "output"))
    return TrajectoryGenerator(config, predictor=stub_predictor([0.2, 0.2, 0.4, 0.4]))


def test_generate_trajectory(generator):
    """Dense path runs from the exact start to the exact end."""
    result = generator.generate_trajectory(start=(0, 0), end=(100, 100), randomness=0.0, density=5)

    assert result.control_points == [(0, 0), (30, 30), (60, 60), (100, 100)]
    assert result.smoothed
    assert len(result.path) == 1 + 3 * 5
    assert result.path[0] == (0, 0)
    assert result.path[-1] == (100, 100)
    assert result.image_path is None


def test_defaults_come_from_config(generator):
    result = generator.generate_trajectory(start=(0, 0), end=(100, 100))
    assert len(result.path) == 1 + 3 * generator.config.density


def test_density_one_keeps_control_points(generator):
    result = generator.generate_trajectory(start=(0, 0), end=(100, 100), randomness=0.0, density=1)
    assert result.path == result.control_points


def test_random_endpoints_within_screen(generator):
    for _ in range(20):
        result = generator.generate_trajectory()
        for x, y in (result.start, result.end):
            assert 0 <= x < 1920
            assert 0 <= y < 1080
        assert result.path[0] == result.start
        assert result.path[-1] == result.end


def test_seeded_generators_agree(stub_predictor):
    config = GeneratorConfig(random_seed=7)
    first = TrajectoryGenerator(config, predictor=stub_predictor([0.5, 0.5]))
    second = TrajectoryGenerator(config, predictor=stub_predictor([0.5, 0.5]))

    a = first.generate_trajectory()
    b = second.generate_trajectory()
    assert (a.start, a.end, a.path) == (b.start, b.end, b.path)


def test_render_to_png(generator, tmp_path):
    output_file = tmp_path / "render.png"
    result = generator.generate_trajectory(start=(0, 0), end=(100, 100), render=True, output_file=output_file)

    assert result.image_path == str(output_file)
    assert output_file.exists()


def test_render_default_location(generator):
    result = generator.generate_trajectory(start=(0, 0), end=(100, 100), render=True)

    image_path = Path(result.image_path)
    assert image_path.parent == Path(generator.config.output_dir)
    assert image_path.name.startswith("output-")
    assert image_path.suffix == ".png"
    assert image_path.exists()


def test_path_serializes(generator):
    result = generator.generate_trajectory(start=(0, 0), end=(100, 100))
    assert path_from_json(path_to_json(result.path)) == result.path


def test_invalid_density(generator):
    with pytest.raises(ValueError):
        generator.generate_trajectory(start=(0, 0), end=(100, 100), density=0)


def test_malformed_point(generator):
    with pytest.raises(ValueError):
        generator.generate_trajectory(start=(0, 0, 0), end=(100, 100))


def test_prediction_failure_is_terminal(stub_predictor):
    generator = TrajectoryGenerator(GeneratorConfig(), predictor=stub_predictor([0.1, 0.2, 0.3]))
    with pytest.raises(PredictionFailed):
        generator.generate_trajectory(start=(0, 0), end=(100, 100))


def test_missing_model_file(tmp_path):
    generator = TrajectoryGenerator(GeneratorConfig(model_path=str(tmp_path / "model.onnx")))
    with pytest.raises(PredictorUnavailable):
        generator.generate_trajectory(start=(10, 10), end=(500, 300))


def test_degenerate_request_is_direct(generator):
    result = generator.generate_trajectory(start=(0, 0), end=(0, 0), density=4)

    assert result.control_points == [(0, 0), (0, 0)]
    assert result.path == [(0, 0)] * 5
    assert generator.predictor.calls == []


def test_generate_from_task_file(generator, tmp_path):
    task_file = tmp_path / "task.json"
    task_file.write_text(json.dumps({"start": [0, 0], "end": [100, 100], "randomness": 0.0, "density": 2}))

    result = generator.generate_trajectory_from_task(task_file)
    assert len(result.path) == 1 + 3 * 2
    assert result.end == (100, 100)


def test_task_file_requires_endpoints(generator, tmp_path):
    task_file = tmp_path / "task.json"
    task_file.write_text(json.dumps({"start": [0, 0]}))
    with pytest.raises(ValueError, match="end"):
        generator.generate_trajectory_from_task(task_file)


def test_task_file_missing(generator, tmp_path):
    with pytest.raises(FileNotFoundError):
        generator.generate_trajectory_from_task(tmp_path / "task.json")


def test_failures_share_a_base_class(stub_predictor):
    generator = TrajectoryGenerator(GeneratorConfig(), predictor=stub_predictor(RuntimeError("boom")))
    with pytest.raises(PredictionUnavailable):
        generator.generate_control_points((1, 1), (50, 50))


@pytest.mark.parametrize("start", [(1.7, 2), (1, "a"), (True, 2), 5])
def test_non_integral_point_is_rejected(generator, start):
    """Fractional coordinates raise instead of being truncated."""
    with pytest.raises(ValueError):
        generator.generate_trajectory(start=start, end=(100, 100))


def test_integral_floats_are_accepted(generator):
    result = generator.generate_trajectory(start=(0.0, 0.0), end=(100.0, 100), randomness=0.0, density=1)
    assert result.path == [(0, 0), (30, 30), (60, 60), (100, 100)]
    assert all(isinstance(v, int) for point in result.path for v in point)
