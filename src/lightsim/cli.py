"""Command-line entry point for the light timeout simulation.

Usage:
    lightsim                                  # one run with default parameters
    lightsim --seed 7 --output-dir out --plot # save CSVs, JSON and figures
    lightsim -p 0.2 -p 0.4 -p 0.8 --runs 200  # Monte Carlo probability sweep
"""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Any

from omegaconf import DictConfig
from rich.console import Console

from lightsim.io.export import ExportError, save_result
from lightsim.io.report import aggregate_table, render_report
from lightsim.simulation import (
    ExperimentRunner,
    InvalidParametersError,
    SimulationParameters,
    run_simulation,
)
from lightsim.utils.config import default_config, get_nested, load_config, merge_configs
from lightsim.utils.logging import get_logger, setup_logging

logger = get_logger("cli")

EXIT_OK = 0
EXIT_EXPORT_FAILED = 1
EXIT_INVALID_PARAMETERS = 2

_OVERRIDES = {
    "duration": "duration",
    "interval": "tick_interval",
    "fixed_timeout": "fixed_timeout",
    "adaptive_timeout": "adaptive_timeout",
    "max_adaptive_timeout": "max_adaptive_timeout",
    "presence_threshold": "presence_threshold",
    "entry_time": "entry_time",
    "seed": "seed",
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lightsim",
        description="Compare fixed and adaptive light timeout policies on synthetic motion.",
    )
    parser.add_argument("--config", type=Path, help="YAML configuration file")
    parser.add_argument("--duration", type=int, help="total simulated seconds")
    parser.add_argument("--interval", type=int, help="seconds per tick")
    parser.add_argument("--fixed-timeout", type=int, help="fixed policy timeout (s)")
    parser.add_argument("--adaptive-timeout", type=int, help="adaptive base timeout (s)")
    parser.add_argument("--max-adaptive-timeout", type=int, help="adaptive timeout cap (s)")
    parser.add_argument("--presence-threshold", type=int, help="presence persistence (s)")
    parser.add_argument("--entry-time", type=int, help="occupant entry time (s)")
    parser.add_argument(
        "-p",
        "--probability",
        type=float,
        action="append",
        help="motion probability; repeat to sweep several values",
    )
    parser.add_argument("--seed", type=int, help="random seed")
    parser.add_argument("--runs", type=int, help="Monte Carlo repetitions per probability")
    parser.add_argument("--output-dir", type=Path, help="directory for CSV/JSON/figures")
    parser.add_argument("--plot", action="store_true", help="save timeline and comparison plots")
    parser.add_argument("--no-trace", action="store_true", help="omit the per-tick table")
    parser.add_argument("--progress", action="store_true", help="show progress bars")
    parser.add_argument("--log-level", default="INFO", help="logging level")
    return parser


def resolve_config(args: argparse.Namespace) -> DictConfig:
    """Merge the base config file with command-line overrides."""
    config = load_config(args.config) if args.config else default_config()

    simulation: dict[str, Any] = {
        key: getattr(args, attr)
        for attr, key in _OVERRIDES.items()
        if getattr(args, attr) is not None
    }
    experiment: dict[str, Any] = {}
    if args.probability:
        experiment["probabilities"] = args.probability
        simulation["motion_probability"] = args.probability[0]
    if args.runs is not None:
        experiment["runs"] = args.runs
    if args.output_dir is not None:
        experiment["output_dir"] = str(args.output_dir)

    config = merge_configs(config, {"simulation": simulation, "experiment": experiment})

    # a single listed probability is a plain run at that probability
    probabilities = get_nested(config, "experiment.probabilities")
    if probabilities is not None and len(probabilities) == 1:
        config = merge_configs(config, {"simulation": {"motion_probability": probabilities[0]}})
    return config


def _save_plots(result, output_dir: Path) -> None:
    from lightsim.utils.visualization import (
        plot_light_timeline,
        plot_policy_comparison,
        save_figure,
        setup_plotting_style,
    )

    setup_plotting_style()
    save_figure(plot_light_timeline(result), output_dir / "timeline")
    save_figure(plot_policy_comparison(result.statistics), output_dir / "comparison")
    logger.info("Figures written to %s", output_dir)


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)
    console = Console()

    try:
        config = resolve_config(args)
        params = SimulationParameters.from_config(config)
    except (FileNotFoundError, InvalidParametersError) as e:
        logger.error("%s", e)
        return EXIT_INVALID_PARAMETERS

    probabilities = get_nested(config, "experiment.probabilities")
    runs = int(get_nested(config, "experiment.runs", 1))
    if runs < 1:
        logger.error("runs must be at least 1, got %d", runs)
        return EXIT_INVALID_PARAMETERS
    output_dir = get_nested(config, "experiment.output_dir")
    output_dir = Path(output_dir) if output_dir else None

    try:
        if (probabilities is not None and len(probabilities) > 1) or runs > 1:
            sweep = list(probabilities) if probabilities else [params.motion_probability]
            # validate every sweep point before running any
            for p in sweep:
                params.replace(motion_probability=p)
            runner = ExperimentRunner(output_dir)
            results = runner.run_sweep(params, sweep, runs=runs, progress=args.progress)
            console.print(aggregate_table({name: r.aggregate for name, r in results.items()}))
            return EXIT_OK

        logger.info("Starting light timeout simulation")
        result = run_simulation(params)
        render_report(result, console, show_trace=not args.no_trace)
        if output_dir is not None:
            save_result(result, output_dir)
            if args.plot:
                _save_plots(result, output_dir)
        elif args.plot:
            logger.warning("--plot requires --output-dir; no figures written")
    except InvalidParametersError as e:
        logger.error("%s", e)
        return EXIT_INVALID_PARAMETERS
    except ExportError as e:
        logger.error("%s", e)
        return EXIT_EXPORT_FAILED

    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
