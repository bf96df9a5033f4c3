"""Light timeout policies for lightsim.

This module provides the fixed and adaptive timeout state machines and a
small factory for building them from simulation parameters.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from lightsim.policies.adaptive import (
    AdaptiveTimeoutPolicy,
    AdaptiveTimeoutState,
    adaptive_timeout_trace,
)
from lightsim.policies.base import LIGHT_OFF, LIGHT_ON, BaseTimeoutPolicy
from lightsim.policies.fixed import (
    FixedTimeoutPolicy,
    FixedTimeoutState,
    fixed_timeout_trace,
)

if TYPE_CHECKING:
    from lightsim.simulation.parameters import SimulationParameters

POLICY_NAMES = ("fixed", "adaptive")


def create_policy(name: str, params: SimulationParameters) -> BaseTimeoutPolicy:
    """Create a policy by name from simulation parameters.

    Args:
        name: One of ``POLICY_NAMES``.
        params: Simulation parameters supplying the policy constants.

    Returns:
        A fresh policy instance.

    Raises:
        ValueError: If the name is unknown.
    """
    if name == "fixed":
        return FixedTimeoutPolicy(
            timeout=params.fixed_timeout,
            tick_interval=params.tick_interval,
        )
    if name == "adaptive":
        return AdaptiveTimeoutPolicy(
            base_timeout=params.adaptive_timeout,
            max_timeout=params.max_adaptive_timeout,
            tick_interval=params.tick_interval,
        )
    raise ValueError(f"Unknown policy: {name!r}. Available: {list(POLICY_NAMES)}")


__all__ = [
    # Base
    "BaseTimeoutPolicy",
    "LIGHT_ON",
    "LIGHT_OFF",
    # Fixed
    "FixedTimeoutPolicy",
    "FixedTimeoutState",
    "fixed_timeout_trace",
    # Adaptive
    "AdaptiveTimeoutPolicy",
    "AdaptiveTimeoutState",
    "adaptive_timeout_trace",
    # Factory
    "POLICY_NAMES",
    "create_policy",
]
