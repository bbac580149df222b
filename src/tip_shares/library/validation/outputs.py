"""
Output validation functions for the tip-shares library.

This module contains invariant checks for distribution results:
- Conservation (distributed amounts add up to the floored pool)
- Bill breakdown totals (each breakdown adds up to its amount)
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from typing import TYPE_CHECKING

from tip_shares.library.error_messages import format_error
from tip_shares.library.exceptions import OutputValidationError

if TYPE_CHECKING:
    from tip_shares.library.allocations.types import BillBreakdown


def validate_conservation(amounts: Sequence[int], total_tips: float) -> None:
    """
    Validate that distributed amounts add up to the floored pool.

    Parameters
    ----------
    amounts
        Whole-unit amounts, one per participant
    total_tips
        The original (unfloored) pool

    Raises
    ------
    OutputValidationError
        If ``sum(amounts) != floor(total_tips)`` or any amount is negative
    """
    expected = math.floor(total_tips)
    actual = sum(amounts)
    if actual != expected:
        raise OutputValidationError(
            format_error(
                "conservation_violated",
                expected=expected,
                actual=actual,
                difference=actual - expected,
            )
        )
    negative = [amount for amount in amounts if amount < 0]
    if negative:
        raise OutputValidationError(
            f"Distributed amounts must be non-negative, found: {negative}"
        )


def validate_breakdown_totals(
    amounts: Sequence[int], breakdowns: Sequence[BillBreakdown]
) -> None:
    """
    Validate that every bill breakdown adds up to its amount.

    Parameters
    ----------
    amounts
        Whole-unit amounts, one per participant
    breakdowns
        Bill breakdowns in the same order as ``amounts``

    Raises
    ------
    OutputValidationError
        If the sequences differ in length or a breakdown total differs from
        its amount
    """
    if len(amounts) != len(breakdowns):
        raise OutputValidationError(
            f"Got {len(amounts)} amounts but {len(breakdowns)} bill breakdowns"
        )
    for position, (amount, breakdown) in enumerate(zip(amounts, breakdowns)):
        if breakdown.total != amount:
            raise OutputValidationError(
                format_error(
                    "breakdown_total_mismatch",
                    position=position,
                    actual=breakdown.total,
                    expected=amount,
                )
            )
