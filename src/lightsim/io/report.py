"""Console report of simulation results.

Renders the per-tick trace and the per-policy statistics as rich tables.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING

from rich.console import Console
from rich.table import Table

from lightsim.traces.occupancy import ENTERED

if TYPE_CHECKING:
    from lightsim.evaluation.metrics import MonteCarloSummary, StatisticsSummary
    from lightsim.simulation.environment import SimulationResult


def trace_table(result: SimulationResult) -> Table:
    """Build the per-tick trace table.

    Rows where the occupant enters or leaves are marked in the ``Event``
    column.
    """
    table = Table(title="Light timeout simulation")
    table.add_column("Time", justify="right")
    table.add_column("Motion", justify="center")
    table.add_column("Person", justify="center")
    for name in result.light_states:
        table.add_column(name.capitalize(), justify="center")
    table.add_column("Event")

    events = {round(e.time / result.parameters.tick_interval): e for e in result.occupancy_events()}

    for i, time in enumerate(result.tick_times):
        event = events.get(i)
        if event is None:
            marker = ""
        elif event.kind == ENTERED:
            marker = "[green]person entered[/green]"
        else:
            marker = "[yellow]person left[/yellow]"
        table.add_row(
            f"{time:g}",
            str(int(result.motion[i])),
            str(int(result.occupancy[i])),
            *(str(int(light[i])) for light in result.light_states.values()),
            marker,
        )
    return table


def statistics_table(statistics: Mapping[str, StatisticsSummary]) -> Table:
    """Build the per-policy statistics table."""
    table = Table(title="Policy statistics")
    table.add_column("Policy")
    table.add_column("On %", justify="right")
    table.add_column("Off %", justify="right")
    table.add_column("False negatives", justify="right")
    table.add_column("Switches", justify="right")
    for name, stats in statistics.items():
        table.add_row(
            name.capitalize(),
            f"{stats.on_percentage:.1f}",
            f"{stats.off_percentage:.1f}",
            str(stats.false_negatives),
            str(stats.switch_count),
        )
    return table


def aggregate_table(
    experiments: Mapping[str, Mapping[str, MonteCarloSummary]],
) -> Table:
    """Build a table of Monte Carlo summaries, one row per experiment and policy."""
    table = Table(title="Monte Carlo summary")
    table.add_column("Experiment")
    table.add_column("Policy")
    table.add_column("Runs", justify="right")
    table.add_column("On % (mean ± std)", justify="right")
    table.add_column("False negatives (mean ± std)", justify="right")
    for experiment, aggregate in experiments.items():
        for name, agg in aggregate.items():
            table.add_row(
                experiment,
                name.capitalize(),
                str(agg.n_runs),
                f"{agg.on_percentage_mean:.1f} ± {agg.on_percentage_std:.1f}",
                f"{agg.false_negatives_mean:.2f} ± {agg.false_negatives_std:.2f}",
            )
    return table


def render_report(
    result: SimulationResult,
    console: Console | None = None,
    show_trace: bool = True,
) -> None:
    """Print a simulation result to the console.

    Args:
        result: Simulation result.
        console: Rich console (defaults to stdout).
        show_trace: Include the per-tick trace table.
    """
    console = console or Console()
    if show_trace:
        console.print(trace_table(result))
    console.print(statistics_table(result.statistics))
