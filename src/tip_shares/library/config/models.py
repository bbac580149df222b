"""Pydantic models for calculator configuration validation.

Bill denominations are fixed and deliberately absent from configuration.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from tip_shares.library.allocations.results.metadata import get_export_formats
from tip_shares.library.error_messages import format_error, suggest_similar
from tip_shares.library.exceptions import ConfigurationError


class ExtractionParameters(BaseModel):
    """Thresholds used when reading participants and totals from report text."""

    min_total_guess: float = Field(
        20.0,
        description="Amounts found in the text must exceed this to count as the total",
    )
    max_reasonable_hours: float = Field(
        100.0, description="Upper bound (exclusive) for a plausible hours value"
    )
    fallback_hourly_rate: float = Field(
        7.5,
        description="Rate per hour used to estimate a total the report does not state",
    )

    model_config = {"extra": "forbid"}

    @field_validator("min_total_guess", "max_reasonable_hours", "fallback_hourly_rate")
    @classmethod
    def validate_positive(cls, v: float) -> float:
        """Validate that thresholds are positive."""
        if not v > 0:
            raise ConfigurationError(
                f"Extraction parameters must be positive numbers, got {v}"
            )
        return v


class ExportConfig(BaseModel):
    """Configuration for exporting distribution results."""

    format: str = Field("csv", description="Export format: csv, json or table")
    output_dir: str = Field("output", description="Directory for exported files")
    filename_prefix: str = Field(
        "tip_distribution", description="Start of exported file names"
    )

    model_config = {"extra": "forbid"}

    @field_validator("format")
    @classmethod
    def validate_format(cls, v: str) -> str:
        """Validate the export format, suggesting close matches for typos."""
        valid_formats = get_export_formats()
        if v not in valid_formats:
            raise ConfigurationError(
                format_error(
                    "invalid_export_format",
                    export_format=v,
                    suggestion=suggest_similar(v, valid_formats),
                )
            )
        return v

    @field_validator("filename_prefix")
    @classmethod
    def validate_filename_prefix(cls, v: str) -> str:
        """Validate the prefix is a plain, non-empty file name part."""
        if not v.strip() or "/" in v or "\\" in v:
            raise ConfigurationError(
                f"filename_prefix must be a non-empty name without path "
                f"separators, got {v!r}"
            )
        return v


class CalculatorConfig(BaseModel):
    """Complete calculator configuration."""

    extraction: ExtractionParameters = Field(default_factory=ExtractionParameters)
    export: ExportConfig = Field(default_factory=ExportConfig)

    model_config = {"extra": "forbid"}
