"""
Configuration loading utilities.

This module builds a validated ``CalculatorConfig`` from a YAML file. A YAML
file may set any subset of the options; everything else keeps its default:

.. code-block:: yaml

    extraction:
      min_total_guess: 20
      max_reasonable_hours: 100
      fallback_hourly_rate: 7.5
    export:
      format: csv
      output_dir: output
      filename_prefix: tip_distribution
"""

from __future__ import annotations

from pathlib import Path

import pydantic
import yaml

from tip_shares.library.config.models import CalculatorConfig
from tip_shares.library.exceptions import ConfigurationError, DataLoadingError


def load_calculator_config(config_path: Path | str | None = None) -> CalculatorConfig:
    """
    Load calculator configuration from a YAML file.

    Parameters
    ----------
    config_path
        Path to the YAML file. ``None`` returns the default configuration.

    Returns
    -------
    CalculatorConfig
        Validated configuration

    Raises
    ------
    DataLoadingError
        If the file does not exist or cannot be read
    ConfigurationError
        If the file is not valid YAML, is not a mapping, or fails validation
    """
    if config_path is None:
        return CalculatorConfig()

    config_path = Path(config_path)
    if not config_path.exists():
        raise DataLoadingError(f"Configuration file not found: {config_path}")

    try:
        with open(config_path, encoding="utf-8") as f:
            raw_config = yaml.safe_load(f)
    except OSError as e:
        raise DataLoadingError(f"Could not read {config_path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {config_path}: {e}") from e

    if raw_config is None:
        return CalculatorConfig()
    if not isinstance(raw_config, dict):
        raise ConfigurationError(
            f"Configuration in {config_path} must be a mapping, "
            f"got {type(raw_config).__name__}"
        )

    try:
        return CalculatorConfig(**raw_config)
    except pydantic.ValidationError as e:
        raise ConfigurationError(f"Invalid configuration in {config_path}:\n{e}") from e
