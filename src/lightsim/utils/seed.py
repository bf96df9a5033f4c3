"""Reproducibility utilities for random number generation.

Every simulation run draws from its own ``numpy.random.Generator``; the
helpers here create those generators and derive independent child seeds for
sweeps and Monte Carlo repetitions. Nothing in the package uses global
random state.
"""

from __future__ import annotations

import numpy as np


def get_rng(seed: int | np.random.SeedSequence | None = None) -> np.random.Generator:
    """Get a NumPy random number generator.

    Args:
        seed: Optional seed (or seed sequence) for the generator.

    Returns:
        NumPy random number generator.
    """
    return np.random.default_rng(seed)


def spawn_seeds(
    seed: int | np.random.SeedSequence | None,
    n: int,
) -> list[np.random.SeedSequence]:
    """Derive ``n`` statistically independent child seeds.

    Args:
        seed: Root seed or seed sequence. ``None`` draws fresh entropy.
        n: Number of child seeds.

    Returns:
        List of child seed sequences, one per run.
    """
    if n < 0:
        raise ValueError(f"n must be non-negative, got {n}")
    root = seed if isinstance(seed, np.random.SeedSequence) else np.random.SeedSequence(seed)
    return root.spawn(n)
