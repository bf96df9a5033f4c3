"""Adaptive-timeout light policy.

Each motion tick extends a countdown by one tick interval up to a cap; each
quiet tick consumes one interval. A trigger from idle grants the full base
timeout at once, so an isolated motion keeps the light on as long as the
base timeout rather than a single tick.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import NDArray

from lightsim.policies.base import LIGHT_OFF, LIGHT_ON, BaseTimeoutPolicy


@dataclass
class AdaptiveTimeoutState:
    """Runtime state of an adaptive-timeout pass.

    Attributes:
        countdown: Remaining on-time in seconds, within [0, max_timeout].
    """

    countdown: float = 0


class AdaptiveTimeoutPolicy(BaseTimeoutPolicy):
    """Self-extending timeout policy.

    Example:
        >>> policy = AdaptiveTimeoutPolicy(base_timeout=20, max_timeout=60, tick_interval=10)
        >>> policy.run([1, 1, 1, 0, 0, 0, 0]).tolist()
        [1, 1, 1, 1, 1, 1, 0]
    """

    name = "adaptive"

    def __init__(self, base_timeout: float, max_timeout: float, tick_interval: float):
        """Initialize the adaptive-timeout policy.

        Args:
            base_timeout: Countdown granted by a trigger from idle.
            max_timeout: Upper bound of the countdown.
            tick_interval: Seconds per tick.

        Raises:
            ValueError: If ``base_timeout`` is negative or exceeds ``max_timeout``.
        """
        super().__init__(tick_interval)
        if base_timeout < 0:
            raise ValueError(f"base_timeout must be non-negative, got {base_timeout}")
        if base_timeout > max_timeout:
            raise ValueError(
                f"base_timeout ({base_timeout}) must not exceed max_timeout ({max_timeout})"
            )
        self.base_timeout = base_timeout
        self.max_timeout = max_timeout
        self.state = AdaptiveTimeoutState()

    @property
    def countdown(self) -> float:
        """Remaining on-time in seconds."""
        return self.state.countdown

    def reset(self) -> None:
        self.state = AdaptiveTimeoutState()

    def step(self, motion: bool | int) -> int:
        state = self.state
        if motion:
            if state.countdown == 0:
                state.countdown = self.base_timeout
            else:
                state.countdown = min(state.countdown + self.tick_interval, self.max_timeout)
            return LIGHT_ON

        state.countdown = max(state.countdown - self.tick_interval, 0)
        return LIGHT_ON if state.countdown > 0 else LIGHT_OFF

    def get_config(self) -> dict[str, Any]:
        """Get policy configuration."""
        return {
            **super().get_config(),
            "base_timeout": self.base_timeout,
            "max_timeout": self.max_timeout,
        }


def adaptive_timeout_trace(
    motion: NDArray[np.integer] | list[int],
    tick_interval: float,
    base_timeout: float,
    max_timeout: float,
) -> NDArray[np.int8]:
    """Light state trace of the adaptive-timeout policy for ``motion``."""
    policy = AdaptiveTimeoutPolicy(
        base_timeout=base_timeout,
        max_timeout=max_timeout,
        tick_interval=tick_interval,
    )
    return policy.run(motion)
