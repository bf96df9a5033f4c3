"""Ground-truth occupancy inferred from motion.

An occupant is considered present at every motion tick and for up to
``presence_threshold`` seconds after the last detected motion.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

ENTERED = "entered"
LEFT = "left"


@dataclass(frozen=True)
class OccupancyEvent:
    """A change in ground-truth presence.

    Attributes:
        time: Absolute time of the first tick in the new state.
        kind: Either ``"entered"`` or ``"left"``.
    """

    time: float
    kind: str


def infer_occupancy(
    motion: NDArray[np.integer] | list[int],
    tick_interval: float,
    presence_threshold: float,
) -> NDArray[np.bool_]:
    """Derive the occupancy trace from a motion trace.

    Single forward pass with no lookahead. Before the first motion tick no
    tick is occupied.

    Args:
        motion: Motion trace of 0/1 values.
        tick_interval: Seconds per tick.
        presence_threshold: Maximum quiet time (seconds) after the last
            motion during which the occupant is still present.

    Returns:
        Read-only boolean array with the same length as ``motion``.
    """
    if tick_interval <= 0:
        raise ValueError(f"tick_interval must be positive, got {tick_interval}")
    if presence_threshold < 0:
        raise ValueError(f"presence_threshold must be non-negative, got {presence_threshold}")

    motion = np.asarray(motion)
    occupancy = np.zeros(len(motion), dtype=bool)
    last_motion_time = None

    for i, moved in enumerate(motion):
        current_time = i * tick_interval
        if moved:
            last_motion_time = current_time
            occupancy[i] = True
        elif last_motion_time is not None:
            occupancy[i] = (current_time - last_motion_time) <= presence_threshold

    occupancy.setflags(write=False)
    return occupancy


def occupancy_events(
    occupancy: NDArray[np.bool_] | list[bool],
    tick_interval: float,
) -> list[OccupancyEvent]:
    """List the enter/leave transitions of an occupancy trace.

    A trace that starts occupied produces an ``entered`` event at time 0.
    """
    occupancy = np.asarray(occupancy, dtype=bool)
    if len(occupancy) == 0:
        return []

    events = []
    if occupancy[0]:
        events.append(OccupancyEvent(time=0, kind=ENTERED))

    changes = np.flatnonzero(occupancy[1:] != occupancy[:-1]) + 1
    for i in changes:
        kind = ENTERED if occupancy[i] else LEFT
        events.append(OccupancyEvent(time=int(i) * tick_interval, kind=kind))
    return events
