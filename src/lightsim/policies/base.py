"""Abstract base class for light timeout policies.

This module defines the interface that all timeout policies must implement.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

import numpy as np
from numpy.typing import NDArray

LIGHT_OFF = 0
LIGHT_ON = 1


class BaseTimeoutPolicy(ABC):
    """Abstract base class for light timeout policies.

    A policy is a per-tick state machine driven only by raw motion. Its
    runtime counters live in a state object that ``reset`` recreates, so
    every call to ``run`` is an independent pass over a trace.

    Attributes:
        name: Short policy name used as the key in results.
        tick_interval: Seconds per tick.
    """

    name: str = "base"

    def __init__(self, tick_interval: float):
        """Initialize the policy.

        Args:
            tick_interval: Seconds per tick.
        """
        if tick_interval <= 0:
            raise ValueError(f"tick_interval must be positive, got {tick_interval}")
        self.tick_interval = tick_interval

    @abstractmethod
    def reset(self) -> None:
        """Restore the initial runtime state (light off)."""

    @abstractmethod
    def step(self, motion: bool | int) -> int:
        """Advance one tick.

        Args:
            motion: Whether motion was detected during this tick.

        Returns:
            Light state for this tick (``LIGHT_ON`` or ``LIGHT_OFF``).
        """

    def run(self, motion: NDArray[np.integer] | list[int]) -> NDArray[np.int8]:
        """Run the policy over a complete motion trace.

        Args:
            motion: Motion trace of 0/1 values.

        Returns:
            Read-only int8 light state trace with the same length.
        """
        self.reset()
        light = np.fromiter(
            (self.step(bool(m)) for m in np.asarray(motion)),
            dtype=np.int8,
            count=len(motion),
        )
        light.setflags(write=False)
        return light

    def get_config(self) -> dict[str, Any]:
        """Get policy configuration.

        Returns:
            Dictionary of configuration parameters.
        """
        return {"name": self.name, "tick_interval": self.tick_interval}
