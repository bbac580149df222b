"""
Best-effort extraction of participants and the tip total from report text.

The text usually comes from OCR of a printed tip report, so nothing here is
exact. Participants are searched with three strategies, from most to least
structured, and the first strategy that finds anyone wins:

1. A table whose header row names the name and hours columns.
2. ``name: hours`` / ``name hours`` on a line.
3. Any word followed by a number.

When the report states no usable total, one is estimated from total hours
at a flat hourly rate. That estimate is a heuristic and is flagged on the
returned report.
"""

from __future__ import annotations

import logging
import math
import re

from attrs import field, frozen

from tip_shares.library.allocations.types import Participant
from tip_shares.library.config.models import ExtractionParameters

logger = logging.getLogger(__name__)

# Tried in order on every line; the first value above the minimum wins
TOTAL_PATTERNS: tuple[re.Pattern, ...] = (
    re.compile(r"total\s+tips:?\s*\$?\s*(\d+[.,]?\d*)", re.IGNORECASE),
    re.compile(r"tips:?\s*\$?\s*(\d+[.,]?\d*)", re.IGNORECASE),
    re.compile(r"total:?\s*\$?\s*(\d+[.,]?\d*)", re.IGNORECASE),
    re.compile(r"\$\s*(\d+[.,]?\d*)"),
)

NUMBER_PATTERN = re.compile(r"\d+(?:[.,]\d+)?")
NAME_HOURS_PATTERN = re.compile(r"([a-z\s]+)[:\s]+(\d+(?:[.,]\d+)?)", re.IGNORECASE)

# Lines containing any of these are headers or summaries, not participants
HEADER_WORDS: tuple[str, ...] = (
    "partner",
    "name",
    "hour",
    "total",
    "report",
    "distribution",
)


@frozen
class ExtractedReport:
    """Participants and total read from one report.

    Attributes
    ----------
    participants
        Participants in the order they appear in the text
    total_tips
        Total found in the text, the estimated total, or 0.0 when neither is
        available
    total_estimated
        True when ``total_tips`` was estimated from hours
    """

    participants: tuple[Participant, ...] = field(converter=tuple)
    total_tips: float
    total_estimated: bool = False


def split_lines(text: str) -> list[str]:
    """Split text into lines with collapsed inner whitespace, dropping blanks."""
    lines = (" ".join(line.split()) for line in text.splitlines())
    return [line for line in lines if line]


def parse_number(value: str) -> float | None:
    """Parse a number that may use a comma as decimal separator."""
    try:
        return float(value.replace(",", "."))
    except ValueError:
        return None


def find_total_tips(lines: list[str], min_total_guess: float = 20.0) -> float:
    """
    Find the tip total stated in the report.

    Parameters
    ----------
    lines
        Report lines
    min_total_guess
        Smaller amounts are ignored; they are more likely hours or line items

    Returns
    -------
    float
        The first plausible total, or 0.0 if none is found
    """
    for line in lines:
        for pattern in TOTAL_PATTERNS:
            match = pattern.search(line)
            if not match:
                continue
            value = parse_number(match.group(1))
            if value is not None and value > min_total_guess:
                logger.debug("Found total tips %s in line %r", value, line)
                return value
    return 0.0


def _find_hours(parts: list[str], max_hours: float) -> tuple[int, float] | None:
    """Position and value of the first number within ``(0, max_hours)``."""
    for position, part in enumerate(parts):
        match = NUMBER_PATTERN.search(part)
        if match:
            hours = parse_number(match.group(0))
            if hours is not None and 0 < hours < max_hours:
                return position, hours
    return None


def find_header_order(lines: list[str]) -> bool | None:
    """
    Find the table header row and report the column order.

    Returns
    -------
    bool | None
        True when the name column comes before the hours column, False when
        it comes after, None when no line names both columns
    """
    for line in lines:
        lower = line.lower()
        parts = lower.split()
        name_columns = [
            j for j, part in enumerate(parts) if "partner" in part or "name" in part
        ]
        hours_columns = [
            j for j, part in enumerate(parts) if "hour" in part or "time" in part
        ]
        if name_columns and hours_columns:
            logger.debug("Found header row %r", line)
            return name_columns[0] < hours_columns[0]
    return None


def extract_table_participants(
    lines: list[str], max_hours: float = 100.0
) -> list[Participant]:
    """
    Extract participants from a table with a name/hours header row.

    The header only fixes the column order. Each data row is split at its
    first number within ``(0, max_hours)``: the words on the name side form
    the name, stripped to letters and spaces. Rows mentioning header or
    summary words (``HEADER_WORDS``) are skipped.
    """
    name_first = find_header_order(lines)
    if name_first is None:
        return []

    participants = []
    for line in lines:
        lower = line.lower()
        if any(word in lower for word in HEADER_WORDS):
            continue
        parts = line.split()
        found = _find_hours(parts, max_hours)
        if found is None:
            continue
        position, hours = found

        name_parts = parts[:position] if name_first else parts[position + 1 :]
        name = " ".join(re.sub(r"[^a-zA-Z\s]", "", " ".join(name_parts)).split())
        if len(name) > 1:
            participants.append(Participant(name=name, hours=hours))
    return participants


def extract_pattern_participants(
    lines: list[str], max_hours: float = 100.0
) -> list[Participant]:
    """Extract participants from ``name: hours`` or ``name hours`` lines."""
    participants = []
    for line in lines:
        match = NAME_HOURS_PATTERN.search(line)
        if not match:
            continue
        name = match.group(1).strip()
        hours = parse_number(match.group(2))
        if name and hours is not None and 0 < hours < max_hours:
            participants.append(Participant(name=name, hours=hours))
    return participants


def extract_word_pair_participants(
    lines: list[str], max_hours: float = 100.0
) -> list[Participant]:
    """Extract participants from any word immediately followed by a number."""
    participants = []
    for line in lines:
        words = line.split()
        for word, next_word in zip(words, words[1:]):
            if not re.match(r"[a-z]", word, re.IGNORECASE):
                continue
            if not NUMBER_PATTERN.fullmatch(next_word):
                continue
            hours = parse_number(next_word)
            if len(word) > 1 and hours is not None and 0 < hours < max_hours:
                participants.append(Participant(name=word, hours=hours))
    return participants


def estimate_total_tips(
    participants: list[Participant], hourly_rate: float = 7.5
) -> float:
    """
    Estimate a tip total from hours worked at a flat hourly rate.

    Rounded half up to whole units.
    """
    total_hours = sum(p.hours for p in participants)
    return float(math.floor(total_hours * hourly_rate + 0.5))


def extract_report(
    text: str, parameters: ExtractionParameters | None = None
) -> ExtractedReport:
    """
    Extract participants and the tip total from report text.

    Parameters
    ----------
    text
        Plain text of the report (e.g. OCR output)
    parameters
        Extraction thresholds (default: ``ExtractionParameters()``)

    Returns
    -------
    ExtractedReport
        Possibly empty participants; deciding what to do with an empty result
        is up to the caller
    """
    parameters = parameters or ExtractionParameters()
    lines = split_lines(text)
    max_hours = parameters.max_reasonable_hours

    total_tips = find_total_tips(lines, parameters.min_total_guess)

    participants = extract_table_participants(lines, max_hours)
    if not participants:
        logger.debug("No table structure found, trying name/hours patterns")
        participants = extract_pattern_participants(lines, max_hours)
    if not participants:
        logger.debug("No name/hours patterns found, trying word/number pairs")
        participants = extract_word_pair_participants(lines, max_hours)

    total_estimated = False
    if total_tips == 0 and participants:
        total_tips = estimate_total_tips(participants, parameters.fallback_hourly_rate)
        total_estimated = True
        logger.warning(
            "No tip total found in report, estimated %.2f from hours at %.2f/hour",
            total_tips,
            parameters.fallback_hourly_rate,
        )

    logger.info(
        "Extracted %d participants and total %.2f from %d lines",
        len(participants),
        total_tips,
        len(lines),
    )
    return ExtractedReport(
        participants=participants,
        total_tips=total_tips,
        total_estimated=total_estimated,
    )
