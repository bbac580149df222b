"""Configuration models for the tip calculator."""

from tip_shares.library.config.models import (
    CalculatorConfig,
    ExportConfig,
    ExtractionParameters,
)

__all__ = [
    "CalculatorConfig",
    "ExportConfig",
    "ExtractionParameters",
]
