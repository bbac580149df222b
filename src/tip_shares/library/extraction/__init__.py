"""
Extraction of participant hours and tip totals from report text.

"""

from tip_shares.library.extraction.text import (
    ExtractedReport,
    estimate_total_tips,
    extract_report,
    find_total_tips,
    split_lines,
)

__all__ = [
    "ExtractedReport",
    "estimate_total_tips",
    "extract_report",
    "find_total_tips",
    "split_lines",
]
