"""
Greedy decomposition of whole-unit amounts into bills.

"""

from __future__ import annotations

from collections.abc import Iterable

from tip_shares.library.allocations.types import DENOMINATIONS, BillBreakdown
from tip_shares.library.validation.inputs import validate_amount


def decompose(amount: int) -> BillBreakdown:
    """
    Break an amount into the fewest bills from ``DENOMINATIONS``.

    Takes as many of the largest bill as fit, then moves on to the next
    smaller one. The $1 bill absorbs whatever is left, so decomposition
    always succeeds.

    Parameters
    ----------
    amount
        Whole currency units, >= 0

    Returns
    -------
    BillBreakdown
        Bill counts whose total equals ``amount``

    Raises
    ------
    InvalidInputError
        If ``amount`` is negative or not an integer

    Examples
    --------
    >>> decompose(47).as_dict()
    {20: 2, 10: 0, 5: 1, 1: 2}
    """
    remaining = validate_amount(amount)
    counts = []
    for denomination in DENOMINATIONS:
        count, remaining = divmod(remaining, denomination)
        counts.append(count)
    return BillBreakdown(tuple(counts))


def decompose_all(amounts: Iterable[int]) -> tuple[BillBreakdown, ...]:
    """Decompose each amount independently, keeping order."""
    return tuple(decompose(amount) for amount in amounts)
