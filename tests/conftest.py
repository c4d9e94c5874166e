import numpy as np
import pytest

from acs import ACSConfig


class ScriptedRandom:
    """Replays a fixed list of draws, then fails loudly."""

    def __init__(self, values):
        self.values = list(values)
        self.calls = 0

    def random(self):
        if not self.values:
            raise AssertionError("ScriptedRandom ran out of values")
        self.calls += 1
        return self.values.pop(0)


@pytest.fixture
def scripted():
    return ScriptedRandom


@pytest.fixture
def four_cities():
    return np.array(
        [
            [0, 2, 9, 10],
            [1, 0, 6, 4],
            [15, 7, 0, 8],
            [6, 3, 12, 0],
        ],
        dtype=float,
    )


@pytest.fixture
def greedy_cfg():
    return ACSConfig(alpha=1.0, beta=1.0, rho=0.5, Q=1.0, q0=1.0, phi=0.5, tau0=0.1,
                     n_ants=1, n_iterations=1, initial_city=0)


class Recorder:
    def __init__(self):
        self.events = []

    def __call__(self, event):
        self.events.append(event)

    def of(self, kind):
        return [e for e in self.events if isinstance(e, kind)]


@pytest.fixture
def recorder():
    return Recorder()
