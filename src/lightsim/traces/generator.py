"""Synthetic motion trace generation.

Motion is modelled as a memoryless presence-triggered sensor: before the
occupant enters no motion is possible, afterwards every tick fires
independently with a fixed probability.
"""

from __future__ import annotations

from typing import Protocol

import numpy as np
from numpy.typing import NDArray

from lightsim.utils.seed import get_rng


class UniformSource(Protocol):
    """Source of uniform variates in [0, 1).

    ``numpy.random.Generator`` satisfies this protocol; tests can pass any
    object with a compatible ``random`` method to replay a fixed sequence.
    """

    def random(self, size: int) -> NDArray[np.float64]: ...


def generate_motion_trace(
    n_ticks: int,
    tick_interval: float,
    entry_time: float,
    probability: float,
    seed: int | np.random.SeedSequence | None = None,
    rng: UniformSource | None = None,
) -> NDArray[np.int8]:
    """Generate a per-tick motion trace.

    Ticks whose absolute time is earlier than ``entry_time`` are always 0.
    For every later tick one uniform variate is drawn, in tick order, and
    the tick shows motion iff the variate is below ``probability``.

    Args:
        n_ticks: Number of ticks.
        tick_interval: Seconds per tick.
        entry_time: Absolute time at which the occupant enters.
        probability: Motion probability per occupied tick, in (0, 1].
        seed: Seed used when ``rng`` is not given.
        rng: Injectable uniform source. Takes precedence over ``seed``.

    Returns:
        Read-only int8 array of 0/1 values with length ``n_ticks``.

    Raises:
        ValueError: If arguments are out of range.
    """
    if n_ticks < 0:
        raise ValueError(f"n_ticks must be non-negative, got {n_ticks}")
    if tick_interval <= 0:
        raise ValueError(f"tick_interval must be positive, got {tick_interval}")
    if not 0 < probability <= 1:
        raise ValueError(f"probability must be in (0, 1], got {probability}")

    if rng is None:
        rng = get_rng(seed)

    times = np.arange(n_ticks) * tick_interval
    eligible = times >= entry_time
    n_eligible = int(eligible.sum())

    motion = np.zeros(n_ticks, dtype=np.int8)
    if n_eligible:
        draws = np.asarray(rng.random(n_eligible), dtype=np.float64)
        if draws.shape != (n_eligible,):
            raise ValueError(
                f"Uniform source returned shape {draws.shape}, expected ({n_eligible},)"
            )
        motion[eligible] = draws < probability

    motion.setflags(write=False)
    return motion
