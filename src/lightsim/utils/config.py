"""Configuration loading and management utilities.

This module provides utilities for loading and managing simulation
configurations using OmegaConf.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from omegaconf import DictConfig, OmegaConf

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parents[3] / "configs" / "default.yaml"


def load_config(config_path: str | Path) -> DictConfig:
    """Load a YAML configuration file.

    Args:
        config_path: Path to the YAML configuration file.

    Returns:
        Configuration as a DictConfig object.

    Raises:
        FileNotFoundError: If the configuration file does not exist.
    """
    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    return OmegaConf.load(config_path)


def default_config() -> DictConfig:
    """Build the built-in configuration.

    Reads ``configs/default.yaml`` when running from a source checkout and
    otherwise falls back to the same values defined inline.
    """
    if DEFAULT_CONFIG_PATH.exists():
        return load_config(DEFAULT_CONFIG_PATH)

    return OmegaConf.create(
        {
            "simulation": {
                "duration": 600,
                "tick_interval": 10,
                "fixed_timeout": 20,
                "adaptive_timeout": 20,
                "max_adaptive_timeout": 60,
                "presence_threshold": 40,
                "entry_time": 20,
                "motion_probability": 0.4,
                "seed": None,
            },
            "experiment": {
                "probabilities": None,
                "runs": 1,
                "output_dir": None,
            },
        }
    )


def merge_configs(*configs: DictConfig | dict[str, Any]) -> DictConfig:
    """Merge multiple configurations.

    Later configurations override earlier ones.

    Args:
        *configs: Configuration objects (or plain dicts) to merge.

    Returns:
        Merged configuration.
    """
    return OmegaConf.merge(*configs)


def to_dict(config: DictConfig) -> dict[str, Any]:
    """Convert a DictConfig to a plain dictionary.

    Args:
        config: Configuration object.

    Returns:
        Plain dictionary representation.
    """
    return OmegaConf.to_container(config, resolve=True)


def get_nested(config: DictConfig, key: str, default: Any = None) -> Any:
    """Get a nested configuration value safely.

    Args:
        config: Configuration object.
        key: Dot-separated key path (e.g., "simulation.tick_interval").
        default: Default value if key not found.

    Returns:
        Configuration value or default.
    """
    value = OmegaConf.select(config, key, default=default)
    return default if value is None else value


def save_config(config: DictConfig, path: str | Path) -> None:
    """Save configuration to a YAML file.

    Args:
        config: Configuration to save.
        path: Output file path.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    OmegaConf.save(config, path)
