"""
Balancing of bill mixes between participants with equal tip amounts.

Greedy decomposition runs independently per participant, so two people with
the same amount can be handed different bills (one $20 against two $10s).
Balancing pools the bills of each equal-amount group and hands them back out
as evenly as possible. Nobody with the same amount should get noticeably
more large bills than a peer.

The procedure for one group of ``n`` participants holding ``amount`` each:

1. Count every denomination across the group.
2. Give each participant ``count // n`` of the $20, $10 and $5 bills (as far
   as their amount allows, largest first); $1 bills absorb the rest.
3. Hand out the leftover $20s, then $10s, then $5s one at a time to
   successive participants with room for them, by position and wrapping
   around. After each award the participant's smaller bills are recomputed
   from what is left of the amount, so no count ever goes negative.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

import numpy as np
import pandas as pd

from tip_shares.library.allocations.types import DENOMINATIONS, BillBreakdown
from tip_shares.library.error_messages import format_error
from tip_shares.library.exceptions import InvalidInputError

logger = logging.getLogger(__name__)

# $1 bills are never averaged; they absorb whatever the larger bills leave
LARGER_DENOMINATIONS: tuple[int, ...] = DENOMINATIONS[:-1]


def group_by_amount(amounts: Sequence[int]) -> dict[int, list[int]]:
    """
    Group participant positions by their amount.

    Parameters
    ----------
    amounts
        Whole-unit amounts in participant order

    Returns
    -------
    dict[int, list[int]]
        Amount -> positions holding that amount. Keys appear in order of first
        appearance and positions are ascending, so the original participant
        order is preserved within every group.

    Examples
    --------
    >>> group_by_amount([23, 10, 23])
    {23: [0, 2], 10: [1]}
    """
    if len(amounts) == 0:
        return {}
    positions = pd.Series(range(len(amounts)))
    return {
        int(amount): group.tolist()
        for amount, group in positions.groupby(np.asarray(amounts), sort=False)
    }


def _fit_below(counts: list[int], amount: int, start: int) -> None:
    """
    Refit the denominations after index ``start`` into what is left of amount.

    Counts of the larger bills after ``start`` are kept where they still fit
    and capped otherwise; the $1 count takes the exact remainder.
    """
    remaining = amount - sum(counts[i] * DENOMINATIONS[i] for i in range(start + 1))
    for i in range(start + 1, len(LARGER_DENOMINATIONS)):
        counts[i] = min(counts[i], remaining // DENOMINATIONS[i])
        remaining -= counts[i] * DENOMINATIONS[i]
    counts[-1] = remaining


def _next_fitting_position(
    working: list[list[int]], amount: int, index: int, cursor: int
) -> int | None:
    """First position from ``cursor`` (wrapping) with room for one more bill."""
    denomination = DENOMINATIONS[index]
    n = len(working)
    for offset in range(n):
        position = (cursor + offset) % n
        committed = sum(
            working[position][i] * DENOMINATIONS[i] for i in range(index + 1)
        )
        if committed + denomination <= amount:
            return position
    return None


def balance_group(
    breakdowns: Sequence[BillBreakdown], amount: int
) -> tuple[BillBreakdown, ...]:
    """
    Even out the bill mix of participants who share one amount.

    Parameters
    ----------
    breakdowns
        Breakdowns of every participant in the group, in participant order.
        Each must add up to ``amount``.
    amount
        The amount every participant in the group receives

    Returns
    -------
    tuple[BillBreakdown, ...]
        Balanced breakdowns in the same order, each adding up to ``amount``
        with non-negative counts. Groups of one are returned unchanged.

    Raises
    ------
    InvalidInputError
        If any breakdown does not add up to ``amount``

    Notes
    -----
    A leftover bill goes to the next participant (by position, wrapping) whose
    amount can hold it on top of their larger bills. A leftover bill nobody
    can hold is dropped and its value stays in the smaller bills.

    Examples
    --------
    >>> balanced = balance_group(
    ...     [BillBreakdown((1, 0, 0, 3)), BillBreakdown((0, 2, 0, 3))], 23
    ... )
    >>> [b.total for b in balanced]
    [23, 23]
    """
    for position, breakdown in enumerate(breakdowns):
        if breakdown.total != amount:
            raise InvalidInputError(
                format_error(
                    "breakdown_total_mismatch",
                    position=position,
                    actual=breakdown.total,
                    expected=amount,
                )
            )

    n = len(breakdowns)
    if n <= 1:
        return tuple(breakdowns)
    if amount == 0:
        return (BillBreakdown.zero(),) * n

    totals = np.array([b.counts for b in breakdowns], dtype=np.int64).sum(axis=0)
    averages = totals[: len(LARGER_DENOMINATIONS)] // n

    # Everyone starts from the group averages
    working = []
    for _ in range(n):
        counts = [int(avg) for avg in averages] + [0]
        _fit_below(counts, amount, -1)
        working.append(counts)

    for index, denomination in enumerate(LARGER_DENOMINATIONS):
        leftover = int(totals[index] - averages[index] * n)
        cursor = 0
        for _ in range(leftover):
            position = _next_fitting_position(working, amount, index, cursor)
            if position is None:
                logger.debug(
                    "No participant at amount %d can hold another $%d bill",
                    amount,
                    denomination,
                )
                break
            working[position][index] += 1
            _fit_below(working[position], amount, index)
            cursor = position + 1

    return tuple(BillBreakdown(tuple(counts)) for counts in working)


def balance_breakdowns(
    amounts: Sequence[int], breakdowns: Sequence[BillBreakdown]
) -> tuple[BillBreakdown, ...]:
    """
    Balance bill mixes within every group of equal amounts.

    Parameters
    ----------
    amounts
        Whole-unit amounts in participant order
    breakdowns
        Bill breakdowns in the same order as ``amounts``

    Returns
    -------
    tuple[BillBreakdown, ...]
        Balanced breakdowns, back in the original participant positions

    Raises
    ------
    InvalidInputError
        If the sequences differ in length or a breakdown does not add up to
        its amount
    """
    if len(amounts) != len(breakdowns):
        raise InvalidInputError(
            f"Got {len(amounts)} amounts but {len(breakdowns)} bill breakdowns"
        )

    balanced = list(breakdowns)
    for amount, positions in group_by_amount(amounts).items():
        if len(positions) <= 1:
            continue
        group = balance_group([breakdowns[p] for p in positions], amount)
        for position, breakdown in zip(positions, group):
            balanced[position] = breakdown
        logger.debug("Balanced %d participants at amount %d", len(positions), amount)
    return tuple(balanced)


def render_breakdowns(breakdowns: Sequence[BillBreakdown]) -> tuple[str, ...]:
    """Render each breakdown as its ``"2x$20, 1x$5"`` summary string."""
    return tuple(breakdown.render() for breakdown in breakdowns)
