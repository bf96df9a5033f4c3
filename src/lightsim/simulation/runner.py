"""Experiment runner for Monte Carlo runs and parameter sweeps.

This module provides utilities for running repeated simulations and
comparing policies across motion probabilities.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import numpy as np

from lightsim.evaluation.metrics import MonteCarloSummary, aggregate_statistics
from lightsim.io.export import write_json
from lightsim.simulation.environment import SimulationResult, SimulationRun
from lightsim.simulation.parameters import SimulationParameters
from lightsim.utils.logging import LoggerAdapter, get_logger, log_metrics
from lightsim.utils.seed import get_rng, spawn_seeds

logger = get_logger("simulation.runner")


@dataclass
class ExperimentResult:
    """Results from a set of repeated runs with the same parameters.

    Attributes:
        name: Experiment name.
        parameters: Parameters shared by every run.
        runs: Individual run results, in execution order.
        aggregate: Monte Carlo summary per policy name.
    """

    name: str
    parameters: SimulationParameters
    runs: list[SimulationResult]
    aggregate: dict[str, MonteCarloSummary]

    def summary(self) -> str:
        """Get experiment summary."""
        lines = [f"=== {self.name} ({len(self.runs)} runs) ==="]
        for name, agg in self.aggregate.items():
            lines.append(
                f"{name}: on {agg.on_percentage_mean:.1f}% (±{agg.on_percentage_std:.1f}), "
                f"false negatives {agg.false_negatives_mean:.2f} (±{agg.false_negatives_std:.2f})"
            )
        return "\n".join(lines)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "name": self.name,
            "parameters": self.parameters.to_dict(),
            "n_runs": len(self.runs),
            "aggregate": {name: agg.to_dict() for name, agg in self.aggregate.items()},
        }


class ExperimentRunner:
    """Run and manage simulation experiments.

    Every run gets its own generator from a child seed spawned off the
    parameters' seed, so a seeded experiment is reproducible and its runs
    are statistically independent.

    Example:
        >>> runner = ExperimentRunner()
        >>> results = runner.run_sweep(SimulationParameters(seed=1), [0.2, 0.4, 0.8], runs=50)
        >>> print(runner.get_comparison_table())
    """

    def __init__(self, output_dir: str | Path | None = None):
        """Initialize the runner.

        Args:
            output_dir: Directory for saving experiment summaries.
        """
        self.output_dir = Path(output_dir) if output_dir else None
        self.results: dict[str, ExperimentResult] = {}

    def run_experiment(
        self,
        name: str,
        parameters: SimulationParameters,
        runs: int = 1,
        seed_sequence: np.random.SeedSequence | None = None,
        progress: bool = False,
    ) -> ExperimentResult:
        """Run the same parameters ``runs`` times.

        Args:
            name: Experiment name.
            parameters: Simulation parameters.
            runs: Number of Monte Carlo repetitions.
            seed_sequence: Root seed sequence; defaults to one built from
                ``parameters.seed``.
            progress: Show a progress bar.

        Returns:
            ExperimentResult with every run and the aggregate.
        """
        if runs < 1:
            raise ValueError(f"runs must be at least 1, got {runs}")

        root = parameters.seed if seed_sequence is None else seed_sequence
        child_seeds = spawn_seeds(root, runs)
        run_logger = LoggerAdapter(logger, {"experiment": name})

        iterator = range(runs)
        if progress:
            from tqdm import tqdm

            iterator = tqdm(iterator, desc=name, leave=False)

        results = []
        for i in iterator:
            result = SimulationRun(parameters, rng=get_rng(child_seeds[i])).run()
            results.append(result)
            run_logger.debug("run %d done", i)

        aggregate = aggregate_statistics([r.statistics for r in results])
        for policy_name, agg in aggregate.items():
            log_metrics(
                run_logger,
                {
                    "on_pct": agg.on_percentage_mean,
                    "false_negatives": agg.false_negatives_mean,
                },
                prefix=policy_name,
            )

        experiment = ExperimentResult(
            name=name,
            parameters=parameters,
            runs=results,
            aggregate=aggregate,
        )
        self.results[name] = experiment

        if self.output_dir is not None:
            self._save_result(experiment)

        return experiment

    def run_sweep(
        self,
        parameters: SimulationParameters,
        probabilities: Sequence[float],
        runs: int = 1,
        progress: bool = False,
    ) -> dict[str, ExperimentResult]:
        """Run one experiment per motion probability.

        Args:
            parameters: Base parameters; only the probability changes.
            probabilities: Motion probabilities to sweep.
            runs: Monte Carlo repetitions per probability.
            progress: Show progress bars.

        Returns:
            Dictionary of experiment name (``"p=0.40"``) to result.
        """
        roots = spawn_seeds(parameters.seed, len(probabilities))
        results = {}
        for probability, root in zip(probabilities, roots):
            point = parameters.replace(motion_probability=probability)
            name = f"p={probability:.2f}"
            results[name] = self.run_experiment(
                name, point, runs=runs, seed_sequence=root, progress=progress
            )
        return results

    def _save_result(self, result: ExperimentResult) -> None:
        """Save experiment summary to file."""
        safe_name = result.name.replace("=", "_").replace(".", "_")
        write_json(result.to_dict(), self.output_dir / f"{safe_name}_summary.json")

    def get_comparison_table(self) -> str:
        """Get comparison table of all results.

        Returns:
            Formatted comparison table string.
        """
        if not self.results:
            return "No results available."

        lines = [
            "| Experiment | Policy   | Runs | On % (mean) | On % (std) | FN (mean) | FN (std) |",
            "|------------|----------|------|-------------|------------|-----------|----------|",
        ]
        for name, result in self.results.items():
            for policy_name, agg in result.aggregate.items():
                lines.append(
                    f"| {name:10} | {policy_name:8} | {agg.n_runs:4d} | "
                    f"{agg.on_percentage_mean:11.2f} | {agg.on_percentage_std:10.2f} | "
                    f"{agg.false_negatives_mean:9.2f} | {agg.false_negatives_std:8.2f} |"
                )
        return "\n".join(lines)
