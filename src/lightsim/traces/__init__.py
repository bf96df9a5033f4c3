"""Trace generation module for lightsim.

This module provides the synthetic motion generator and the occupancy
oracle that scores light policies.
"""

from lightsim.traces.generator import UniformSource, generate_motion_trace
from lightsim.traces.occupancy import (
    ENTERED,
    LEFT,
    OccupancyEvent,
    infer_occupancy,
    occupancy_events,
)

__all__ = [
    # Generator
    "UniformSource",
    "generate_motion_trace",
    # Occupancy
    "OccupancyEvent",
    "ENTERED",
    "LEFT",
    "infer_occupancy",
    "occupancy_events",
]
