"""Energy and false-negative metrics for light policies.

This module scores light state traces against the occupancy oracle and
aggregates the scores of repeated Monte Carlo runs.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import NDArray


@dataclass(frozen=True)
class StatisticsSummary:
    """Per-policy statistics for one run.

    Attributes:
        policy_name: Name of the scored policy.
        n_ticks: Number of ticks scored.
        on_count: Ticks with the light on.
        off_count: Ticks with the light off.
        false_negatives: Ticks with the light off while occupied.
        switch_count: Number of on/off toggles.
        tick_interval: Seconds per tick.
    """

    policy_name: str
    n_ticks: int
    on_count: int
    off_count: int
    false_negatives: int
    switch_count: int = 0
    tick_interval: float = 1.0

    @property
    def on_percentage(self) -> float:
        """Percentage of ticks the light was on."""
        return self.on_count * 100 / self.n_ticks if self.n_ticks else 0.0

    @property
    def off_percentage(self) -> float:
        """Percentage of ticks the light was off."""
        return self.off_count * 100 / self.n_ticks if self.n_ticks else 0.0

    @property
    def on_seconds(self) -> float:
        """Total on-time in seconds."""
        return self.on_count * self.tick_interval

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "policy_name": self.policy_name,
            "n_ticks": self.n_ticks,
            "on_count": self.on_count,
            "off_count": self.off_count,
            "on_percentage": self.on_percentage,
            "off_percentage": self.off_percentage,
            "false_negatives": self.false_negatives,
            "switch_count": self.switch_count,
            "on_seconds": self.on_seconds,
        }

    def summary(self) -> str:
        """Get summary string."""
        return (
            f"Light on: {self.on_percentage:.1f}% of the time\n"
            f"Light off: {self.off_percentage:.1f}% of the time\n"
            f"Off while occupied: {self.false_negatives} ticks\n"
            f"Switches: {self.switch_count}"
        )


@dataclass(frozen=True)
class MonteCarloSummary:
    """Statistics of one policy across repeated runs.

    Attributes:
        policy_name: Name of the policy.
        n_runs: Number of runs aggregated.
        on_percentage_mean: Mean on-percentage.
        on_percentage_std: Standard deviation of the on-percentage.
        false_negatives_mean: Mean false-negative count.
        false_negatives_std: Standard deviation of the false-negative count.
    """

    policy_name: str
    n_runs: int
    on_percentage_mean: float
    on_percentage_std: float
    false_negatives_mean: float
    false_negatives_std: float

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "policy_name": self.policy_name,
            "n_runs": self.n_runs,
            "on_percentage_mean": self.on_percentage_mean,
            "on_percentage_std": self.on_percentage_std,
            "false_negatives_mean": self.false_negatives_mean,
            "false_negatives_std": self.false_negatives_std,
        }


def count_switches(light_state: NDArray[np.integer] | Sequence[int]) -> int:
    """Count number of on/off changes in a light state trace.

    Args:
        light_state: Light state trace of 0/1 values.

    Returns:
        Number of state changes.
    """
    light_state = np.asarray(light_state)
    if len(light_state) < 2:
        return 0
    return int(np.count_nonzero(light_state[1:] != light_state[:-1]))


def compute_statistics(
    light_state: NDArray[np.integer] | Sequence[int],
    occupancy: NDArray[np.bool_] | Sequence[bool],
    policy_name: str,
    tick_interval: float = 1.0,
) -> StatisticsSummary:
    """Score one policy's light trace against the occupancy oracle.

    Args:
        light_state: Light state trace of 0/1 values.
        occupancy: Ground-truth occupancy trace.
        policy_name: Name recorded in the summary.
        tick_interval: Seconds per tick, for on-time.

    Returns:
        StatisticsSummary for the policy.

    Raises:
        ValueError: If the traces differ in length.
    """
    light_on = np.asarray(light_state).astype(bool)
    occupied = np.asarray(occupancy).astype(bool)
    if light_on.shape != occupied.shape:
        raise ValueError(
            f"Trace length mismatch: light state has {light_on.size} ticks, "
            f"occupancy has {occupied.size}"
        )

    n_ticks = int(light_on.size)
    on_count = int(np.count_nonzero(light_on))

    return StatisticsSummary(
        policy_name=policy_name,
        n_ticks=n_ticks,
        on_count=on_count,
        off_count=n_ticks - on_count,
        false_negatives=int(np.count_nonzero(~light_on & occupied)),
        switch_count=count_switches(light_on.astype(np.int8)),
        tick_interval=tick_interval,
    )


def compute_policy_statistics(
    light_states: Mapping[str, NDArray[np.integer]],
    occupancy: NDArray[np.bool_] | Sequence[bool],
    tick_interval: float = 1.0,
) -> dict[str, StatisticsSummary]:
    """Score every policy independently against the same occupancy trace.

    Args:
        light_states: Light state trace per policy name.
        occupancy: Ground-truth occupancy trace.
        tick_interval: Seconds per tick.

    Returns:
        StatisticsSummary per policy name, in input order.
    """
    return {
        name: compute_statistics(light, occupancy, name, tick_interval)
        for name, light in light_states.items()
    }


def aggregate_statistics(
    runs: Sequence[Mapping[str, StatisticsSummary]],
) -> dict[str, MonteCarloSummary]:
    """Aggregate per-run statistics into Monte Carlo summaries.

    Args:
        runs: One ``{policy_name: StatisticsSummary}`` mapping per run.

    Returns:
        MonteCarloSummary per policy name.

    Raises:
        ValueError: If ``runs`` is empty.
    """
    if not runs:
        raise ValueError("Cannot aggregate an empty list of runs")

    summaries = {}
    for name in runs[0]:
        on_pct = np.array([run[name].on_percentage for run in runs], dtype=np.float64)
        fn = np.array([run[name].false_negatives for run in runs], dtype=np.float64)
        summaries[name] = MonteCarloSummary(
            policy_name=name,
            n_runs=len(runs),
            on_percentage_mean=float(np.mean(on_pct)),
            on_percentage_std=float(np.std(on_pct)),
            false_negatives_mean=float(np.mean(fn)),
            false_negatives_std=float(np.std(fn)),
        )
    return summaries
