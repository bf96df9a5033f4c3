"""Simulation module for lightsim.

This module provides the simulation parameters, single runs and the
experiment runner for sweeps and Monte Carlo repetitions.
"""

from lightsim.simulation.environment import (
    SimulationResult,
    SimulationRun,
    run_simulation,
)
from lightsim.simulation.parameters import (
    InvalidParametersError,
    SimulationParameters,
)
from lightsim.simulation.runner import (
    ExperimentResult,
    ExperimentRunner,
)

__all__ = [
    # Parameters
    "SimulationParameters",
    "InvalidParametersError",
    # Environment
    "SimulationResult",
    "SimulationRun",
    "run_simulation",
    # Runner
    "ExperimentResult",
    "ExperimentRunner",
]
