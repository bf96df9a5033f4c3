"""Evaluation metrics module for lightsim.

This module provides energy and false-negative metrics for light policies.
"""

from lightsim.evaluation.metrics import (
    MonteCarloSummary,
    StatisticsSummary,
    aggregate_statistics,
    compute_policy_statistics,
    compute_statistics,
    count_switches,
)

__all__ = [
    "StatisticsSummary",
    "MonteCarloSummary",
    "compute_statistics",
    "compute_policy_statistics",
    "count_switches",
    "aggregate_statistics",
]
