"""CSV and JSON export of simulation results.

Files are written to a temporary sibling and moved into place, so a disk
or permission fault never leaves a partially written artifact behind.
"""

from __future__ import annotations

import json
import os
import tempfile
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import IO, TYPE_CHECKING, Any

import pandas as pd

from lightsim.utils.logging import get_logger

if TYPE_CHECKING:
    from lightsim.evaluation.metrics import StatisticsSummary
    from lightsim.simulation.environment import SimulationResult

logger = get_logger("io.export")

TRACE_COLUMNS = ["Time", "Motion", "Person", "Fixed", "Adaptive"]
STATISTICS_COLUMNS = ["Method", "LightOnPercentage", "LightOffPercentage", "Flaws"]

TRACE_FILENAME = "simulation_data.csv"
STATISTICS_FILENAME = "statistics_data.csv"
SUMMARY_FILENAME = "summary.json"


class ExportError(OSError):
    """Raised when a result artifact cannot be written."""


def _atomic_write(path: str | Path, write: Callable[[IO[str]], None]) -> Path:
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{path.name}.", suffix=".tmp", dir=path.parent
        )
    except OSError as e:
        raise ExportError(f"Unable to write {path}: {e}") from e

    try:
        with os.fdopen(fd, "w", newline="") as f:
            write(f)
        os.replace(tmp_name, path)
    except OSError as e:
        Path(tmp_name).unlink(missing_ok=True)
        raise ExportError(f"Unable to write {path}: {e}") from e
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise

    logger.debug("Wrote %s", path)
    return path


def trace_frame(result: SimulationResult) -> pd.DataFrame:
    """Per-tick table in the ``simulation_data.csv`` layout."""
    return pd.DataFrame(
        {
            "Time": result.tick_times,
            "Motion": result.motion.astype(int),
            "Person": result.occupancy.astype(int),
            "Fixed": result.light_states["fixed"].astype(int),
            "Adaptive": result.light_states["adaptive"].astype(int),
        },
        columns=TRACE_COLUMNS,
    )


def statistics_frame(statistics: Mapping[str, StatisticsSummary]) -> pd.DataFrame:
    """Per-policy table in the ``statistics_data.csv`` layout."""
    rows = [
        {
            "Method": name.capitalize(),
            "LightOnPercentage": stats.on_percentage,
            "LightOffPercentage": stats.off_percentage,
            "Flaws": stats.false_negatives,
        }
        for name, stats in statistics.items()
    ]
    return pd.DataFrame(rows, columns=STATISTICS_COLUMNS)


def write_trace_csv(result: SimulationResult, path: str | Path) -> Path:
    """Write the per-tick trace table.

    Args:
        result: Simulation result with fixed and adaptive traces.
        path: Output CSV path.

    Returns:
        The written path.

    Raises:
        ExportError: If the file cannot be written.
    """
    table = trace_frame(result)
    return _atomic_write(path, lambda f: table.to_csv(f, index=False))


def write_statistics_csv(
    statistics: Mapping[str, StatisticsSummary],
    path: str | Path,
) -> Path:
    """Write the per-policy statistics table.

    Raises:
        ExportError: If the file cannot be written.
    """
    table = statistics_frame(statistics)
    return _atomic_write(path, lambda f: table.to_csv(f, index=False))


def write_json(data: Any, path: str | Path) -> Path:
    """Write ``data`` as indented JSON.

    Raises:
        ExportError: If the file cannot be written.
    """
    return _atomic_write(path, lambda f: json.dump(data, f, indent=2))


def save_result(result: SimulationResult, output_dir: str | Path) -> list[Path]:
    """Write the trace CSV, statistics CSV and JSON summary of a run.

    Args:
        result: Simulation result.
        output_dir: Directory to write into.

    Returns:
        Paths of the written files.

    Raises:
        ExportError: If any file cannot be written.
    """
    output_dir = Path(output_dir)
    paths = [
        write_trace_csv(result, output_dir / TRACE_FILENAME),
        write_statistics_csv(result.statistics, output_dir / STATISTICS_FILENAME),
        write_json(result.to_dict(), output_dir / SUMMARY_FILENAME),
    ]
    logger.info("Simulation data written to %s", output_dir)
    return paths
