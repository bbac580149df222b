"""
Result containers for tip distribution calculations.

A distribution result records the original pool alongside one record per
participant (amount plus balanced bill breakdown). The container validates
itself on creation:

1. **Conservation**: amounts add up to ``floor(total_tips)``.
2. **Bill totals**: every breakdown adds up to its participant's amount.

Records and the summary dictionary use the field names consumed by
presentation and export code (``billBreakdown``, ``totalTips``,
``totalDistributed``).
"""

from __future__ import annotations

from attrs import define, field, frozen

from tip_shares.library.allocations.types import BillBreakdown
from tip_shares.library.validation.outputs import (
    validate_breakdown_totals,
    validate_conservation,
)


@frozen
class TipResult:
    """Final tip record for one participant.

    Attributes
    ----------
    name
        Participant name
    hours
        Hours worked
    amount
        Whole-unit tip amount
    breakdown
        Balanced bill breakdown adding up to ``amount``
    """

    name: str
    hours: float
    amount: int
    breakdown: BillBreakdown

    @property
    def bill_breakdown(self) -> str:
        """Rendered breakdown, e.g. ``"2x$20, 1x$5, 2x$1"``."""
        return self.breakdown.render()

    @property
    def bills(self) -> dict[int, int]:
        """Denomination -> count for all four denominations."""
        return self.breakdown.as_dict()

    def to_record(self) -> dict:
        """Record for presentation/export collaborators."""
        return {
            "name": self.name,
            "hours": self.hours,
            "amount": self.amount,
            "billBreakdown": self.bill_breakdown,
            "bills": self.bills,
        }


@define
class TipDistributionResult:
    """Container for a complete tip distribution with validation.

    Attributes
    ----------
    total_tips
        The pool as given by the caller, not floored
    results
        One record per participant, in input order
    total_estimated
        True when the pool was guessed from hours instead of read from a
        report
    """

    total_tips: float
    results: tuple[TipResult, ...] = field(converter=tuple)
    total_estimated: bool = field(default=False, kw_only=True)

    def __attrs_post_init__(self):
        """Initialize and validate the result."""
        self.validate()

    def validate(self) -> None:
        """Validate conservation and bill totals.

        Raises
        ------
        OutputValidationError
            If amounts do not add up to the floored pool, or a breakdown does
            not add up to its amount
        """
        amounts = [result.amount for result in self.results]
        validate_conservation(amounts, self.total_tips)
        validate_breakdown_totals(
            amounts, [result.breakdown for result in self.results]
        )

    @property
    def total_distributed(self) -> int:
        """Sum of all amounts (equals ``floor(total_tips)``)."""
        return sum(result.amount for result in self.results)

    @property
    def total_hours(self) -> float:
        """Sum of hours across participants."""
        return sum(result.hours for result in self.results)

    @property
    def participant_count(self) -> int:
        """Number of participants in the distribution."""
        return len(self.results)

    def to_records(self) -> list[dict]:
        """Per-participant records in input order."""
        return [result.to_record() for result in self.results]

    def to_dict(self) -> dict:
        """Records plus the ``totalTips`` and ``totalDistributed`` figures."""
        return {
            "results": self.to_records(),
            "totalTips": self.total_tips,
            "totalDistributed": self.total_distributed,
            "totalHours": self.total_hours,
            "totalEstimated": self.total_estimated,
        }
