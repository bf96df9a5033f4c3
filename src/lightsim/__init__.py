"""lightsim: Monte Carlo comparison of light timeout policies.

This package provides tools for:
- Generating synthetic motion traces for a single occupant
- Inferring ground-truth occupancy from motion
- Simulating fixed and adaptive light timeout policies
- Scoring energy use and false negatives per policy
- Running probability sweeps and Monte Carlo repetitions
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("lightsim")
except PackageNotFoundError:
    __version__ = "0.1.0"

__all__ = ["__version__"]
