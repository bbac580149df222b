"""
Column metadata for exported tip distribution results.

Keeping column names here lets the CSV export, the text table and the tests
agree on one definition.
"""

from __future__ import annotations

# Columns of the per-participant export, in order
NAME_COLUMN = "Partner Name"
HOURS_COLUMN = "Hours"
AMOUNT_COLUMN = "Tip Amount"
BREAKDOWN_COLUMN = "Bill Breakdown"

EXPORT_COLUMNS: list[str] = [
    NAME_COLUMN,
    HOURS_COLUMN,
    AMOUNT_COLUMN,
    BREAKDOWN_COLUMN,
]

# Supported export formats and their file suffixes ("table" is printed only)
EXPORT_SUFFIXES: dict[str, str | None] = {
    "csv": ".csv",
    "json": ".json",
    "table": None,
}


def get_export_formats() -> list[str]:
    """Get all supported export formats."""
    return list(EXPORT_SUFFIXES)
