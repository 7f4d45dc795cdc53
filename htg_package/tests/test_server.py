"""Tests for the FastAPI trajectory endpoint."""

import pytest
from fastapi.testclient import TestClient

from htg_package import GeneratorConfig, TrajectoryGenerator
from server import app, get_generator


@pytest.fixture
def client_with(stub_predictor):
    """Factory: client_with(outputs) -> TestClient backed by a stub predictor."""

    def make(outputs):
        generator = TrajectoryGenerator(GeneratorConfig(random_seed=1), predictor=stub_predictor(outputs))
        app.dependency_overrides[get_generator] = lambda: generator
        return TestClient(app)

    yield make
    app.dependency_overrides.clear()


def test_health(client_with):
    response = client_with([0.25, 0.25]).get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}


def test_generate(client_with):
    client = client_with([0.25, 0.25])
    response = client.post("/api/trajectory", json={"start": [100, 200], "end": [800, 600], "density": 4})

    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert data["control_points"] == [[100, 200], [300, 300], [800, 600]]
    assert data["trajectory"][0] == [100, 200]
    assert data["trajectory"][-1] == [800, 600]
    assert len(data["trajectory"]) == 1 + 2 * 4


def test_bad_point(client_with):
    response = client_with([0.25, 0.25]).post("/api/trajectory", json={"start": [1, 2, 3], "end": [8, 6]})
    assert response.status_code == 400


def test_bad_density(client_with):
    response = client_with([0.25, 0.25]).post(
        "/api/trajectory", json={"start": [1, 2], "end": [8, 6], "density": 0}
    )
    assert response.status_code == 400


def test_prediction_failure(client_with):
    response = client_with(RuntimeError("session crashed")).post(
        "/api/trajectory", json={"start": [100, 200], "end": [800, 600]}
    )
    assert response.status_code == 503
    assert "session crashed" in response.json()["detail"]


def test_response_fields(client_with):
    response = client_with([0.25, 0.25]).post("/api/trajectory", json={"start": [100, 200], "end": [800, 600]})
    assert set(response.json()) == {"success", "trajectory", "control_points", "smoothed"}


def test_unusable_model_output_is_unavailable(client_with):
    response = client_with(["x", "y"]).post(
        "/api/trajectory", json={"start": [100, 200], "end": [800, 600]}
    )
    assert response.status_code == 503
