"""
Value types shared by the allocation, bill decomposition and balancing steps.

Every type here is an immutable ``attrs`` class. Each calculation run builds
fresh values and never mutates them, so the conservation and non-negativity
invariants can be checked independently after every stage.
"""

from __future__ import annotations

from attrs import field, frozen

from tip_shares.library.exceptions import InvalidInputError
from tip_shares.library.validation.inputs import validate_hours

# Bill values in descending order. Greedy decomposition is optimal for this
# set only because each value divides the next larger one (1 | 5 | 10 | 20);
# an arbitrary set of values would need a different decomposition algorithm.
DENOMINATIONS: tuple[int, ...] = (20, 10, 5, 1)


def _validate_name(instance, attribute, value: str) -> None:
    if not isinstance(value, str) or not value.strip():
        raise InvalidInputError(
            f"Participant name must be a non-empty string, got {value!r}"
        )


def _to_hours(value):
    # Unconvertible values are left for the validator to reject
    try:
        return float(value)
    except (TypeError, ValueError):
        return value


def _validate_participant_hours(instance, attribute, value: float) -> None:
    validate_hours(instance.name, value)


@frozen
class Participant:
    """
    One recipient of a proportional share of the tip pool.

    Attributes
    ----------
    name
        Display name, non-empty
    hours
        Hours worked, finite and >= 0
    """

    name: str = field(validator=_validate_name)
    hours: float = field(converter=_to_hours, validator=_validate_participant_hours)


@frozen
class Share:
    """
    A participant's whole-unit entitlement after rounding.

    Attributes
    ----------
    participant
        The participant the share belongs to
    amount
        Whole currency units, >= 0
    """

    participant: Participant
    amount: int

    @property
    def name(self) -> str:
        """Participant name."""
        return self.participant.name

    @property
    def hours(self) -> float:
        """Hours worked by the participant."""
        return self.participant.hours


def _to_counts(value) -> tuple[int, ...]:
    return tuple(value)


def _validate_counts(instance, attribute, value: tuple[int, ...]) -> None:
    if len(value) != len(DENOMINATIONS):
        raise InvalidInputError(
            f"Bill breakdown needs one count per denomination {DENOMINATIONS}, "
            f"got {len(value)} counts"
        )
    for denomination, count in zip(DENOMINATIONS, value):
        if isinstance(count, bool) or not isinstance(count, int) or count < 0:
            raise InvalidInputError(
                f"Count for ${denomination} bills must be a non-negative "
                f"integer, got {count!r}"
            )


@frozen
class BillBreakdown:
    """
    Number of bills of each denomination making up one amount.

    Counts are stored in ``DENOMINATIONS`` order (20, 10, 5, 1).

    Examples
    --------
    >>> breakdown = BillBreakdown((2, 0, 1, 2))
    >>> breakdown.total
    47
    >>> breakdown.render()
    '2x$20, 1x$5, 2x$1'
    """

    counts: tuple[int, ...] = field(converter=_to_counts, validator=_validate_counts)

    @classmethod
    def zero(cls) -> BillBreakdown:
        """Breakdown holding no bills at all."""
        return cls((0,) * len(DENOMINATIONS))

    def count(self, denomination: int) -> int:
        """Number of bills of ``denomination``."""
        return self.counts[DENOMINATIONS.index(denomination)]

    @property
    def total(self) -> int:
        """Value of all bills in the breakdown."""
        return sum(
            count * denomination
            for count, denomination in zip(self.counts, DENOMINATIONS)
        )

    def as_dict(self) -> dict[int, int]:
        """Denomination -> count for all four denominations."""
        return dict(zip(DENOMINATIONS, self.counts))

    def render(self) -> str:
        """
        Render the breakdown as ``"<count>x$<denomination>"`` parts.

        Zero counts are left out; an empty breakdown renders as ``""``.
        """
        return ", ".join(
            f"{count}x${denomination}"
            for denomination, count in zip(DENOMINATIONS, self.counts)
            if count > 0
        )
