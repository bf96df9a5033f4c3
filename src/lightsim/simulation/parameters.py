"""Immutable simulation parameters.

This module defines the configuration value passed to every component of
the simulation. Parameters are validated once, at construction, so that no
trace is ever generated from an invalid configuration.
"""

from __future__ import annotations

import dataclasses
import math
from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import NDArray
from omegaconf import DictConfig, OmegaConf


class InvalidParametersError(ValueError):
    """Raised when simulation parameters violate their invariants."""


@dataclass(frozen=True)
class SimulationParameters:
    """Configuration for one simulation run.

    All times are in seconds.

    Attributes:
        duration: Total simulated time.
        tick_interval: Length of one tick.
        fixed_timeout: Quiet time after which the fixed policy turns off.
        adaptive_timeout: Base timeout granted by a fresh adaptive trigger.
        max_adaptive_timeout: Cap on the adaptive countdown.
        presence_threshold: Quiet time after the last motion during which
            the occupant is still considered present.
        entry_time: Time before which no motion can occur.
        motion_probability: Per-tick motion probability once occupied.
        seed: Optional seed for the motion generator.
    """

    duration: float = 600
    tick_interval: float = 10
    fixed_timeout: float = 20
    adaptive_timeout: float = 20
    max_adaptive_timeout: float = 60
    presence_threshold: float = 40
    entry_time: float = 20
    motion_probability: float = 0.4
    seed: int | None = None

    def __post_init__(self) -> None:
        errors = self._check()
        if errors:
            raise InvalidParametersError("Invalid simulation parameters: " + "; ".join(errors))

    def _check(self) -> list[str]:
        errors = []
        if self.tick_interval <= 0:
            errors.append(f"tick_interval must be positive, got {self.tick_interval}")
        elif self.duration <= 0:
            errors.append(f"duration must be positive, got {self.duration}")
        elif not math.isclose(self._tick_count() * self.tick_interval, self.duration):
            errors.append(
                f"duration ({self.duration}) must be a multiple of "
                f"tick_interval ({self.tick_interval})"
            )
        if not 0 < self.motion_probability <= 1:
            errors.append(
                f"motion_probability must be in (0, 1], got {self.motion_probability}"
            )
        if self.presence_threshold < 0:
            errors.append(
                f"presence_threshold must be non-negative, got {self.presence_threshold}"
            )
        if self.fixed_timeout < 0:
            errors.append(f"fixed_timeout must be non-negative, got {self.fixed_timeout}")
        if self.adaptive_timeout < 0:
            errors.append(
                f"adaptive_timeout must be non-negative, got {self.adaptive_timeout}"
            )
        if self.adaptive_timeout > self.max_adaptive_timeout:
            errors.append(
                f"adaptive_timeout ({self.adaptive_timeout}) must not exceed "
                f"max_adaptive_timeout ({self.max_adaptive_timeout})"
            )
        if self.entry_time < 0:
            errors.append(f"entry_time must be non-negative, got {self.entry_time}")
        return errors

    def _tick_count(self) -> int:
        return round(self.duration / self.tick_interval)

    @property
    def n_ticks(self) -> int:
        """Number of ticks on the simulation time axis."""
        return self._tick_count()

    def tick_times(self) -> NDArray[np.number]:
        """Absolute time of every tick (index * tick_interval)."""
        return np.arange(self.n_ticks) * self.tick_interval

    def replace(self, **changes: Any) -> SimulationParameters:
        """Return a validated copy with some fields changed."""
        return dataclasses.replace(self, **changes)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return dataclasses.asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SimulationParameters:
        """Create parameters from a dictionary.

        Unknown keys are rejected so that typos in config files surface as
        errors instead of silently falling back to defaults.

        Raises:
            InvalidParametersError: On unknown keys or invalid values.
        """
        known = {f.name for f in dataclasses.fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise InvalidParametersError(f"Unknown simulation parameters: {unknown}")
        return cls(**data)

    @classmethod
    def from_config(cls, config: DictConfig) -> SimulationParameters:
        """Create parameters from the ``simulation`` section of a config.

        Args:
            config: Full configuration or just its ``simulation`` node.
        """
        node = config.simulation if "simulation" in config else config
        return cls.from_dict(OmegaConf.to_container(node, resolve=True))
