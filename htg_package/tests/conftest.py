"""Shared fixtures: deterministic predictors and random sources."""

import numpy as np
import pytest


class StubPredictor:
    """Returns a fixed output vector and records every input it receives."""

    def __init__(self, outputs):
        self.outputs = outputs
        self.calls = []

    def __call__(self, inputs):
        self.calls.append(np.array(inputs, copy=True))
        if isinstance(self.outputs, Exception):
            raise self.outputs
        return self.outputs


class ScriptedRandom:
    """Random source replaying a fixed sequence of [0, 1) draws."""

    def __init__(self, values):
        self.values = list(values)
        self.drawn = 0

    def random(self):
        value = self.values[self.drawn]
        self.drawn += 1
        return value


@pytest.fixture
def stub_predictor():
    """Factory: stub_predictor(outputs) -> StubPredictor."""
    return StubPredictor


@pytest.fixture
def scripted_random():
    """Factory: scripted_random(values) -> ScriptedRandom."""
    return ScriptedRandom


@pytest.fixture
def rng():
    return np.random.default_rng(1234)
