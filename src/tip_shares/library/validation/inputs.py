"""
Input validation functions for the tip-shares library.

This module contains the precondition checks shared by the allocation engine
and the Pydantic input models:
- Participant list validation (non-empty, valid hours, positive total hours)
- Pool validation (finite, non-negative)
- Amount validation for bill decomposition (whole, non-negative units)
"""

from __future__ import annotations

import math
import operator
from collections.abc import Sequence
from typing import TYPE_CHECKING

from tip_shares.library.error_messages import format_error
from tip_shares.library.exceptions import InvalidInputError

if TYPE_CHECKING:
    from tip_shares.library.allocations.types import Participant

# Largest pool accepted. Entitlements are floats; their rounding error must
# stay far below one unit for the floored shares to add up to the pool.
MAX_POOL = 10**12


def validate_hours(name: str, hours: float) -> float:
    """
    Validate hours worked by a single participant.

    Parameters
    ----------
    name
        Participant name, used in the error message
    hours
        Hours worked

    Returns
    -------
    float
        The hours as a float

    Raises
    ------
    InvalidInputError
        If hours are negative, NaN or infinite
    """
    try:
        value = float(hours)
    except (TypeError, ValueError) as e:
        raise InvalidInputError(
            format_error("negative_hours", name=name, hours=repr(hours))
        ) from e
    if not math.isfinite(value) or value < 0:
        raise InvalidInputError(format_error("negative_hours", name=name, hours=hours))
    return value


def validate_pool(total: float) -> float:
    """
    Validate the pooled tip total.

    Parameters
    ----------
    total
        Total amount to distribute, in currency units

    Returns
    -------
    float
        The total as a float

    Raises
    ------
    InvalidInputError
        If the total is negative, NaN, infinite, above ``MAX_POOL`` or not a
        number
    """
    try:
        value = float(total)
    except (TypeError, ValueError) as e:
        raise InvalidInputError(
            format_error("invalid_pool", total=repr(total), max_pool=MAX_POOL)
        ) from e
    if not math.isfinite(value) or not 0 <= value <= MAX_POOL:
        raise InvalidInputError(
            format_error("invalid_pool", total=total, max_pool=MAX_POOL)
        )
    return value


def validate_participants(
    participants: Sequence[Participant], context: str = "tip allocation"
) -> float:
    """
    Validate a participant list and return its total hours.

    Parameters
    ----------
    participants
        Participants taking part in one calculation run
    context
        Description of the calling step for error messages

    Returns
    -------
    float
        Sum of hours across all participants (always > 0)

    Raises
    ------
    InvalidInputError
        If the list is empty, any hours value is invalid, or the hours sum
        to zero
    """
    if len(participants) == 0:
        raise InvalidInputError(format_error("no_participants", context=context))

    total_hours = 0.0
    for participant in participants:
        total_hours += validate_hours(participant.name, participant.hours)

    if total_hours == 0:
        raise InvalidInputError(
            format_error("zero_total_hours", count=len(participants))
        )
    return total_hours


def validate_amount(amount: int) -> int:
    """
    Validate a whole-unit amount for bill decomposition.

    Parameters
    ----------
    amount
        Amount in whole currency units

    Returns
    -------
    int
        The amount as a plain int

    Raises
    ------
    InvalidInputError
        If the amount is negative or not an integer (bools are rejected too)
    """
    if isinstance(amount, bool):
        raise InvalidInputError(format_error("invalid_amount", amount=amount))
    try:
        value = operator.index(amount)
    except TypeError as e:
        raise InvalidInputError(format_error("invalid_amount", amount=amount)) from e
    if value < 0:
        raise InvalidInputError(format_error("invalid_amount", amount=amount))
    return value
