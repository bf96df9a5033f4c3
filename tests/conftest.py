"""Pytest fixtures for lightsim tests."""

from __future__ import annotations

import matplotlib

matplotlib.use("Agg")

import numpy as np
import pytest

from lightsim.simulation import SimulationParameters


class FixedSequence:
    """Uniform source replaying a fixed list of variates."""

    def __init__(self, values):
        self.values = list(values)
        self.calls = []

    def random(self, size):
        self.calls.append(size)
        out, self.values = self.values[:size], self.values[size:]
        return np.array(out, dtype=np.float64)


@pytest.fixture
def default_params():
    """Default parameters with a fixed seed."""
    return SimulationParameters(seed=42)


@pytest.fixture
def continuous_motion_params():
    """60 ticks of 10s, entry at 20s, motion on every eligible tick."""
    return SimulationParameters(
        duration=600,
        tick_interval=10,
        entry_time=20,
        motion_probability=1.0,
        seed=0,
    )


@pytest.fixture
def fixed_sequence():
    """Factory for uniform sources with a fixed sequence."""
    return FixedSequence


@pytest.fixture
def random_motion():
    """Random 0/1 motion sequences for stress tests."""
    rng = np.random.default_rng(1234)
    return [rng.integers(0, 2, size=int(rng.integers(1, 300))) for _ in range(50)]
