"""Fixed-timeout light policy (baseline).

The light latches on at motion and turns off once a fixed quiet time has
elapsed since the last motion tick.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import NDArray

from lightsim.policies.base import LIGHT_OFF, LIGHT_ON, BaseTimeoutPolicy


@dataclass
class FixedTimeoutState:
    """Runtime state of a fixed-timeout pass.

    Attributes:
        elapsed_quiet: Seconds since the last motion tick.
    """

    elapsed_quiet: float


class FixedTimeoutPolicy(BaseTimeoutPolicy):
    """Fixed-timeout policy.

    The quiet counter starts already at the timeout so that the light is
    off before the first motion is seen.

    Example:
        >>> policy = FixedTimeoutPolicy(timeout=20, tick_interval=10)
        >>> policy.run([0, 1, 0, 0, 0]).tolist()
        [0, 1, 1, 0, 0]
    """

    name = "fixed"

    def __init__(self, timeout: float, tick_interval: float):
        """Initialize the fixed-timeout policy.

        Args:
            timeout: Quiet seconds after which the light turns off.
            tick_interval: Seconds per tick.
        """
        super().__init__(tick_interval)
        if timeout < 0:
            raise ValueError(f"timeout must be non-negative, got {timeout}")
        self.timeout = timeout
        self.state = FixedTimeoutState(elapsed_quiet=timeout)

    def reset(self) -> None:
        self.state = FixedTimeoutState(elapsed_quiet=self.timeout)

    def step(self, motion: bool | int) -> int:
        if motion:
            self.state.elapsed_quiet = 0
            return LIGHT_ON

        self.state.elapsed_quiet += self.tick_interval
        return LIGHT_ON if self.state.elapsed_quiet < self.timeout else LIGHT_OFF

    def get_config(self) -> dict[str, Any]:
        """Get policy configuration."""
        return {**super().get_config(), "timeout": self.timeout}


def fixed_timeout_trace(
    motion: NDArray[np.integer] | list[int],
    tick_interval: float,
    timeout: float,
) -> NDArray[np.int8]:
    """Light state trace of the fixed-timeout policy for ``motion``."""
    return FixedTimeoutPolicy(timeout=timeout, tick_interval=tick_interval).run(motion)
