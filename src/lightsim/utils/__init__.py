"""Utility functions for lightsim.

This module provides configuration, logging and reproducibility utilities.
Plotting helpers live in ``lightsim.utils.visualization`` and are imported
on demand so that matplotlib is only loaded when figures are requested.
"""

from lightsim.utils.config import (
    default_config,
    get_nested,
    load_config,
    merge_configs,
    save_config,
    to_dict,
)
from lightsim.utils.logging import (
    LoggerAdapter,
    get_logger,
    log_metrics,
    setup_logging,
)
from lightsim.utils.seed import (
    get_rng,
    spawn_seeds,
)

__all__ = [
    # config
    "load_config",
    "default_config",
    "merge_configs",
    "to_dict",
    "get_nested",
    "save_config",
    # logging
    "setup_logging",
    "get_logger",
    "LoggerAdapter",
    "log_metrics",
    # seed
    "get_rng",
    "spawn_seeds",
]
