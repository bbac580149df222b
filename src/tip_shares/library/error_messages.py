"""
Error message templates for tip distribution.

Messages follow WHAT/CAUSE/FIX structure.
"""

from __future__ import annotations

from collections.abc import Iterable
from difflib import get_close_matches

ERROR_MESSAGES = {
    "no_participants": """
No participants provided for {context}.

WHAT HAPPENED:
  The participant list is empty, so there is nobody to distribute tips to.

LIKELY CAUSE:
  - Extraction found no name/hours pairs in the report text
  - All manual entries were filtered out

HOW TO FIX:
  Provide at least one participant with hours worked:
  >>> manager.calculate([Participant("Ana", 12.5)], total_tips=100)
""",
    "zero_total_hours": """
Total hours worked is zero.

WHAT HAPPENED:
  {count} participant(s) were given, but their hours add up to 0.
  Tips are split in proportion to hours, so nothing can be divided.

LIKELY CAUSE:
  - Hours column was read as zeros from the report
  - Hours were left at their default value during manual entry

HOW TO FIX:
  Give at least one participant a positive number of hours.
""",
    "negative_hours": """
Invalid hours for participant '{name}'.

WHAT HAPPENED:
  Hours must be a finite number >= 0, got {hours}.

HOW TO FIX:
  Correct the hours value for '{name}' before calculating.
""",
    "invalid_pool": """
Invalid tip pool total.

WHAT HAPPENED:
  The total to distribute must be a finite number between 0 and
  {max_pool}, got {total}.

LIKELY CAUSE:
  - The total was mistyped or read incorrectly from the report
  - A refund or correction was entered as a negative total
  - The total was scaled to cents or read with extra digits

HOW TO FIX:
  Pass the collected tip total as a non-negative number, for example
  total_tips=312.75
""",
    "invalid_amount": """
Invalid amount for bill breakdown.

WHAT HAPPENED:
  Amounts must be whole, non-negative currency units, got {amount!r}.

HOW TO FIX:
  Floor the value to whole units before breaking it into bills.
""",
    "breakdown_total_mismatch": """
Bill breakdown does not add up to its amount.

WHAT HAPPENED:
  Participant at position {position} holds bills worth {actual}
  but the group amount is {expected}.

LIKELY CAUSE:
  Breakdowns from different amounts were mixed into one balancing group.

HOW TO FIX:
  Group breakdowns by amount first:
  >>> groups = group_by_amount(amounts)
""",
    "conservation_violated": """
Distributed amounts do not add up to the pool.

WHAT HAPPENED:
  The pool floors to {expected} whole units but {actual} were distributed.
  Difference: {difference}

LIKELY CAUSE:
  Implementation bug in the allocation step.

HOW TO FIX:
  This is likely a bug. Please report this with:
  - The participant hours
  - The total tip amount
""",
    "no_participants_extracted": """
No participant data could be extracted from the report.

WHAT HAPPENED:
  None of the extraction strategies (table columns, 'name: hours'
  pattern, word/number pairs) found a participant in {line_count} line(s).

LIKELY CAUSE:
  - OCR output is garbled or empty
  - Hours fall outside the accepted range (0, {max_hours})

HOW TO FIX:
  Check the extracted text, or enter participants manually:
  $ tip-shares --participant "Ana=12.5" --participant "Ben=8" --total 150
""",
    "invalid_export_format": """
Export format '{export_format}' not recognized.

WHAT HAPPENED:
  The specified export format is not supported.

HOW TO FIX:
  {suggestion}

  Valid export formats:
  - 'csv': comma separated file with one row per participant
  - 'json': records plus totals
  - 'table': plain text table printed to the terminal
""",
}


def format_error(key: str, **kwargs) -> str:
    """
    Format an error message with the given parameters.

    Parameters
    ----------
    key
        The error message key from ERROR_MESSAGES
    **kwargs
        Parameters to format into the message template

    Returns
    -------
    str
        The formatted error message. An unknown key names the closest known
        keys; a template missing one of its parameters falls back to its
        headline.
    """
    template = ERROR_MESSAGES.get(key)
    if template is None:
        return f"Unknown error: {key}. {suggest_similar(key, ERROR_MESSAGES)}"
    try:
        return template.format(**kwargs).strip()
    except KeyError as e:
        headline = template.strip().splitlines()[0]
        return f"{headline} (details unavailable, missing {e.args[0]!r})"


def suggest_similar(
    value: str, valid_options: Iterable[str], max_suggestions: int = 3
) -> str:
    """
    Suggest valid options that are close to a mistyped value.

    Matching ignores case and surrounding whitespace, so ``" CSV"`` suggests
    ``csv``.

    Parameters
    ----------
    value
        The invalid value that was provided
    valid_options
        Valid options to match against
    max_suggestions
        Maximum number of suggestions to return (default: 3)

    Returns
    -------
    str
        ``"Did you mean: ...?"`` or, without close matches, the list of valid
        options
    """
    options = list(valid_options)
    by_lower = {option.lower(): option for option in options}
    matches = get_close_matches(
        value.strip().lower(), list(by_lower), n=max_suggestions, cutoff=0.6
    )
    if matches:
        return f"Did you mean: {', '.join(by_lower[m] for m in matches)}?"
    return f"Valid options: {', '.join(options)}"
