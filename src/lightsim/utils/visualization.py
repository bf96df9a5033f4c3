"""Visualization utilities for plotting results.

This module provides functions for plotting light timelines and policy
comparisons.
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import TYPE_CHECKING

import matplotlib.pyplot as plt
import pandas as pd
import seaborn as sns
from matplotlib.figure import Figure

if TYPE_CHECKING:
    from lightsim.evaluation.metrics import StatisticsSummary
    from lightsim.simulation.environment import SimulationResult


def setup_plotting_style(style: str = "seaborn-v0_8-whitegrid") -> None:
    """Set up matplotlib style for report figures.

    Args:
        style: Matplotlib style to use.
    """
    try:
        plt.style.use(style)
    except OSError:
        sns.set_style("whitegrid")

    plt.rcParams.update(
        {
            "figure.figsize": (10, 6),
            "figure.dpi": 100,
            "savefig.dpi": 200,
            "font.size": 11,
            "axes.titlesize": 13,
            "legend.fontsize": 10,
            "axes.grid": True,
            "grid.alpha": 0.3,
        }
    )


def plot_light_timeline(
    result: SimulationResult,
    title: str = "Light Timeout Timeline",
    figsize: tuple[float, float] = (12, 7),
) -> Figure:
    """Plot motion, occupancy and every policy's light state over time.

    False-negative ticks (light off while occupied) are shaded red on each
    policy's row.

    Args:
        result: Simulation result.
        title: Plot title.
        figsize: Figure size.

    Returns:
        Matplotlib figure.
    """
    n_plots = 2 + len(result.light_states)
    fig, axes = plt.subplots(n_plots, 1, figsize=figsize, sharex=True)
    times = result.tick_times

    axes[0].step(times, result.motion, where="post", linewidth=1.5, color="gray")
    axes[0].set_ylabel("Motion")
    axes[0].set_title(title)

    axes[1].step(times, result.occupancy.astype(int), where="post", linewidth=1.5, color="green")
    axes[1].set_ylabel("Occupied")

    for ax, (name, light) in zip(axes[2:], result.light_states.items()):
        ax.step(times, light, where="post", linewidth=1.5)
        ax.fill_between(times, light, step="post", alpha=0.3)
        missed = (light == 0) & result.occupancy
        ax.fill_between(times, missed.astype(int), step="post", color="red", alpha=0.25)
        ax.set_ylabel(name.capitalize())

    for ax in axes:
        ax.set_ylim(-0.1, 1.1)
        ax.set_yticks([0, 1])

    axes[-1].set_xlabel("Time (s)")
    plt.tight_layout()
    return fig


def plot_policy_comparison(
    statistics: Mapping[str, StatisticsSummary],
    title: str = "Policy Comparison",
    figsize: tuple[float, float] = (10, 4),
) -> Figure:
    """Plot on-percentage and false negatives side by side per policy.

    Args:
        statistics: StatisticsSummary per policy name.
        title: Plot title.
        figsize: Figure size.

    Returns:
        Matplotlib figure.
    """
    df = pd.DataFrame(
        {
            "policy": [name.capitalize() for name in statistics],
            "on_percentage": [s.on_percentage for s in statistics.values()],
            "false_negatives": [s.false_negatives for s in statistics.values()],
        }
    )

    fig, (ax_energy, ax_fn) = plt.subplots(1, 2, figsize=figsize)
    sns.barplot(data=df, x="policy", y="on_percentage", ax=ax_energy)
    ax_energy.set_ylabel("Light On (%)")
    ax_energy.set_xlabel("")
    ax_energy.set_ylim(0, 100)

    sns.barplot(data=df, x="policy", y="false_negatives", ax=ax_fn)
    ax_fn.set_ylabel("False Negatives (ticks)")
    ax_fn.set_xlabel("")

    fig.suptitle(title)
    plt.tight_layout()
    return fig


def save_figure(
    fig: Figure,
    path: str | Path,
    formats: list[str] | None = None,
    dpi: int = 200,
) -> list[Path]:
    """Save figure to file(s).

    Args:
        fig: Matplotlib figure.
        path: Output path (without extension).
        formats: List of formats to save (default: ["png"]).
        dpi: Resolution for raster formats.

    Returns:
        Paths of the written files.
    """
    if formats is None:
        formats = ["png"]

    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    written = []
    for fmt in formats:
        out = path.with_suffix(f".{fmt}")
        fig.savefig(out, dpi=dpi, bbox_inches="tight")
        written.append(out)
    return written
