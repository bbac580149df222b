"""
Core allocation logic: proportional tip shares in whole currency units.

Tips are split in proportion to hours worked using the largest-remainder
method. Every participant first receives the floor of their exact
entitlement; the whole units lost to flooring are then handed out one at a
time to the participants who lost the largest fractions.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence

import numpy as np

from tip_shares.library.allocations.types import Participant, Share
from tip_shares.library.exceptions import AllocationError
from tip_shares.library.validation.inputs import validate_participants, validate_pool

logger = logging.getLogger(__name__)

# Entitlements are rounded to this many decimals before flooring so that
# float noise such as 2.9999999999999996 does not cost a participant a unit.
ENTITLEMENT_DECIMALS = 9


def calculate_entitlements(
    hours: Sequence[float], total_units: int, total_hours: float | None = None
) -> np.ndarray:
    """
    Calculate exact proportional entitlements in currency units.

    Parameters
    ----------
    hours
        Hours worked per participant
    total_units
        Whole units to distribute (the floored pool)
    total_hours
        Sum of ``hours``; computed when not given

    Returns
    -------
    np.ndarray
        ``hours_i / total_hours * total_units`` per participant, rounded to
        ``ENTITLEMENT_DECIMALS`` decimals
    """
    hours_array = np.asarray(hours, dtype=float)
    if total_hours is None:
        total_hours = float(hours_array.sum())
    entitlements = hours_array / total_hours * total_units
    return np.round(entitlements, ENTITLEMENT_DECIMALS)


def distribute_remainder(entitlements: np.ndarray, total_units: int) -> np.ndarray:
    """
    Floor entitlements and hand out the leftover units by largest remainder.

    Parameters
    ----------
    entitlements
        Exact entitlements per participant
    total_units
        Whole units that must be distributed in total

    Returns
    -------
    np.ndarray
        Integer amounts per participant, summing to ``total_units``

    Raises
    ------
    AllocationError
        If the floored entitlements already exceed ``total_units``, or leave
        at least one unit per participant undistributed

    Notes
    -----
    Losses are sorted with a stable sort, so equal losses are resolved by
    input position: earlier participants receive the extra unit first. Two
    participants with identical hours can therefore end up one unit apart.
    """
    floors = np.floor(entitlements)
    amounts = floors.astype(np.int64)
    leftover = total_units - int(amounts.sum())
    if leftover < 0:
        raise AllocationError(
            f"Floored entitlements sum to {int(amounts.sum())}, "
            f"more than the {total_units} units available"
        )
    if leftover >= len(amounts):
        raise AllocationError(
            f"{leftover} units left after flooring {len(amounts)} entitlements, "
            "expected fewer than one per participant"
        )
    if leftover == 0:
        return amounts

    losses = entitlements - floors
    order = np.argsort(-losses, kind="stable")
    amounts[order[:leftover]] += 1

    logger.debug(
        "Distributed %d leftover unit(s) to positions %s",
        leftover,
        order[:leftover].tolist(),
    )
    return amounts


def allocate(participants: Sequence[Participant], pool: float) -> tuple[Share, ...]:
    """
    Split a tip pool into whole-unit shares proportional to hours worked.

    Parameters
    ----------
    participants
        Participants in display order
    pool
        Total tips collected, in currency units. Fractions of a unit are never
        distributed.

    Returns
    -------
    tuple[Share, ...]
        One share per participant, in input order. Amounts sum to
        ``floor(pool)`` exactly.

    Raises
    ------
    InvalidInputError
        If ``participants`` is empty, any hours value is negative or not
        finite, ``pool`` is negative, not finite or above
        :data:`~tip_shares.library.validation.inputs.MAX_POOL`, or total
        hours are zero

    Examples
    --------
    >>> shares = allocate([Participant("A", 10), Participant("B", 10)], 21)
    >>> [share.amount for share in shares]
    [11, 10]
    """
    total_hours = validate_participants(participants)
    total_units = math.floor(validate_pool(pool))

    if total_units == 0:
        return tuple(Share(participant=p, amount=0) for p in participants)

    entitlements = calculate_entitlements(
        [p.hours for p in participants], total_units, total_hours
    )
    amounts = distribute_remainder(entitlements, total_units)

    return tuple(
        Share(participant=participant, amount=int(amount))
        for participant, amount in zip(participants, amounts)
    )
