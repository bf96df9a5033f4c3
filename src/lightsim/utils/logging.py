"""Package logging.

Console output goes through rich on stderr, so log lines never interleave
with the report tables printed on stdout.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.logging import RichHandler

PACKAGE_LOGGER = "lightsim"


def setup_logging(
    level: int | str = logging.INFO,
    log_file: str | Path | None = None,
) -> logging.Logger:
    """Configure the ``lightsim`` logger.

    Calling this again replaces the previous handlers.

    Args:
        level: Logging level, as a number or a name such as "DEBUG".
        log_file: Also append plain records to this file.

    Returns:
        The package logger.
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)
    logger.handlers.clear()

    handler = RichHandler(console=Console(stderr=True), show_path=False)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(logging.Formatter("%(asctime)s %(name)s %(levelname)s %(message)s"))
        logger.addHandler(file_handler)

    return logger


def get_logger(name: str | None = None) -> logging.Logger:
    """Logger for a ``lightsim`` submodule, e.g. ``get_logger("io.export")``."""
    if name is None:
        return logging.getLogger(PACKAGE_LOGGER)
    return logging.getLogger(f"{PACKAGE_LOGGER}.{name}")


class LoggerAdapter(logging.LoggerAdapter):
    """Prefixes every message with ``[key=value]`` tags, e.g. the experiment name."""

    def __init__(self, logger: logging.Logger, extra: dict[str, Any] | None = None):
        super().__init__(logger, extra or {})

    def process(self, msg: str, kwargs: Any) -> tuple[str, Any]:
        tags = " ".join(f"[{k}={v}]" for k, v in self.extra.items())
        return (f"{tags} {msg}" if tags else msg), kwargs


def log_metrics(
    logger: logging.Logger | logging.LoggerAdapter,
    metrics: dict[str, Any],
    prefix: str = "",
) -> None:
    """Log ``metrics`` as one ``name: value`` line at INFO level."""
    parts = [prefix] if prefix else []
    for name, value in metrics.items():
        parts.append(f"{name}: {value:.2f}" if isinstance(value, float) else f"{name}: {value}")
    logger.info(" | ".join(parts))
