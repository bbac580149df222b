"""
End-to-end tip distribution as a chain of pure transformations.

``Participants -> Shares -> greedy breakdowns -> balanced breakdowns ->
TipDistributionResult``. Each stage returns new immutable values and can be
checked on its own.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from tip_shares.library.allocations.balancing import balance_breakdowns
from tip_shares.library.allocations.core import allocate
from tip_shares.library.allocations.denominations import decompose_all
from tip_shares.library.allocations.results import TipDistributionResult, TipResult
from tip_shares.library.allocations.types import Participant
from tip_shares.library.validation.inputs import validate_pool

logger = logging.getLogger(__name__)


def distribute_tips(
    participants: Sequence[Participant],
    total_tips: float,
    total_estimated: bool = False,
) -> TipDistributionResult:
    """
    Split a tip pool by hours worked and break every share into bills.

    Parameters
    ----------
    participants
        Participants in display order
    total_tips
        Pool to distribute, in currency units; numeric strings are accepted
        and the result records the pool as a float
    total_estimated
        Whether the pool was guessed rather than read; recorded on the result

    Returns
    -------
    TipDistributionResult
        One record per participant, in input order

    Raises
    ------
    InvalidInputError
        If the participants or the pool are invalid (see
        :func:`~tip_shares.library.allocations.core.allocate`)

    Examples
    --------
    >>> result = distribute_tips([Participant("A", 10), Participant("B", 10)], 21)
    >>> [(r.name, r.amount, r.bill_breakdown) for r in result.results]
    [('A', 11, '1x$10, 1x$1'), ('B', 10, '1x$10')]
    """
    total_tips = validate_pool(total_tips)
    shares = allocate(participants, total_tips)
    amounts = [share.amount for share in shares]
    logger.debug("Allocated amounts %s from total %s", amounts, total_tips)

    greedy = decompose_all(amounts)
    balanced = balance_breakdowns(amounts, greedy)

    return TipDistributionResult(
        total_tips=total_tips,
        results=tuple(
            TipResult(
                name=share.name,
                hours=share.hours,
                amount=share.amount,
                breakdown=breakdown,
            )
            for share, breakdown in zip(shares, balanced)
        ),
        total_estimated=total_estimated,
    )
