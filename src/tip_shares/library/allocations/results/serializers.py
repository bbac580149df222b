"""
Serialization utilities for tip distribution results.

This module renders results as a pandas DataFrame, a plain text table, or
files (CSV with one row per participant, JSON with records plus totals).
"""

from __future__ import annotations

import datetime as dt
import json
import logging
from pathlib import Path

import pandas as pd

from tip_shares.library.allocations.balancing import render_breakdowns
from tip_shares.library.allocations.results import TipDistributionResult
from tip_shares.library.allocations.results.metadata import (
    AMOUNT_COLUMN,
    BREAKDOWN_COLUMN,
    EXPORT_COLUMNS,
    EXPORT_SUFFIXES,
    HOURS_COLUMN,
    NAME_COLUMN,
    get_export_formats,
)
from tip_shares.library.error_messages import format_error, suggest_similar
from tip_shares.library.exceptions import ConfigurationError, DataError

logger = logging.getLogger(__name__)


def result_to_dataframe(result: TipDistributionResult) -> pd.DataFrame:
    """
    Convert a distribution result to a DataFrame with one row per participant.

    Parameters
    ----------
    result
        The distribution to convert

    Returns
    -------
    pd.DataFrame
        Columns ``EXPORT_COLUMNS``; tip amounts rendered as ``"$N"``
    """
    rendered = render_breakdowns([r.breakdown for r in result.results])
    rows = [
        {
            NAME_COLUMN: r.name,
            HOURS_COLUMN: r.hours,
            AMOUNT_COLUMN: f"${r.amount}",
            BREAKDOWN_COLUMN: bills,
        }
        for r, bills in zip(result.results, rendered)
    ]
    return pd.DataFrame(rows, columns=EXPORT_COLUMNS)


def format_result_table(result: TipDistributionResult) -> str:
    """
    Format a distribution as a plain text summary and table.

    The summary lists total tips, the distributed whole units, total hours and
    the participant count, followed by one row per participant.
    """
    df = result_to_dataframe(result)
    df[HOURS_COLUMN] = df[HOURS_COLUMN].map(lambda hours: f"{hours:.2f}")

    summary = [
        f"Total Tips:  ${result.total_tips:.2f}"
        + (" (estimated)" if result.total_estimated else ""),
        f"Distributed: ${result.total_distributed}",
        f"Total Hours: {result.total_hours:.2f}",
        f"Partners:    {result.participant_count}",
    ]
    table = df.to_string(index=False)
    note = (
        "Note: Tips are rounded down to the nearest dollar and distributed as "
        "fairly as possible using available bill denominations."
    )
    return "\n".join(summary) + "\n\n" + table + "\n\n" + note


def _validate_export_format(export_format: str) -> None:
    if export_format not in EXPORT_SUFFIXES:
        raise ConfigurationError(
            format_error(
                "invalid_export_format",
                export_format=export_format,
                suggestion=suggest_similar(export_format, get_export_formats()),
            )
        )


def save_distribution_result(
    result: TipDistributionResult,
    output_dir: Path | str,
    export_format: str = "csv",
    filename_prefix: str = "tip_distribution",
    run_date: dt.date | None = None,
) -> Path:
    """
    Save a distribution result to a CSV or JSON file.

    Parameters
    ----------
    result
        The distribution to save
    output_dir
        Directory to write into (created if missing)
    export_format
        ``"csv"`` or ``"json"``
    filename_prefix
        Start of the file name; the run date and suffix are appended
    run_date
        Date used in the file name (default: today)

    Returns
    -------
    Path
        Path to the written file, ``<prefix>_<YYYY-MM-DD>.<suffix>``

    Raises
    ------
    ConfigurationError
        If ``export_format`` is unknown or not a file format
    DataError
        If writing the file fails
    """
    _validate_export_format(export_format)
    suffix = EXPORT_SUFFIXES[export_format]
    if suffix is None:
        raise ConfigurationError(
            f"Export format '{export_format}' is printed, not saved to a file"
        )

    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    run_date = run_date or dt.date.today()
    path = output_dir / f"{filename_prefix}_{run_date.isoformat()}{suffix}"

    try:
        if export_format == "csv":
            result_to_dataframe(result).to_csv(path, index=False)
        else:
            path.write_text(json.dumps(result.to_dict(), indent=2), encoding="utf-8")
    except OSError as e:
        raise DataError(f"Failed to save tip distribution to {path}: {e}") from e

    logger.info(
        "Saved tip distribution for %d partners to %s",
        result.participant_count,
        path,
    )
    return path
