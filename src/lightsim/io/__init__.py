"""Input/output module for lightsim.

This module provides CSV/JSON export and rich console reports.
"""

from lightsim.io.export import (
    STATISTICS_COLUMNS,
    TRACE_COLUMNS,
    ExportError,
    save_result,
    statistics_frame,
    trace_frame,
    write_json,
    write_statistics_csv,
    write_trace_csv,
)
from lightsim.io.report import aggregate_table, render_report

__all__ = [
    # Export
    "ExportError",
    "TRACE_COLUMNS",
    "STATISTICS_COLUMNS",
    "trace_frame",
    "statistics_frame",
    "write_trace_csv",
    "write_statistics_csv",
    "write_json",
    "save_result",
    # Report
    "render_report",
    "aggregate_table",
]
