"""Pydantic models for tip distribution input validation.

These models validate the records handed over by extraction or manual entry
before the allocation engine runs. Validators raise ``InvalidInputError``
directly so callers see one error type for every precondition violation.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING, Any

import pydantic
from pydantic import BaseModel, Field, ValidationInfo, field_validator, model_validator

from tip_shares.library.exceptions import InvalidInputError
from tip_shares.library.validation.inputs import (
    validate_hours,
    validate_participants,
    validate_pool,
)

if TYPE_CHECKING:
    from tip_shares.library.allocations.types import Participant


class ParticipantInput(BaseModel):
    """One ``{name, hours}`` record from extraction or manual entry."""

    name: str = Field(..., description="Display name of the participant")
    hours: float = Field(..., description="Hours worked, >= 0")

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Strip surrounding whitespace and reject empty names."""
        stripped = v.strip()
        if not stripped:
            raise InvalidInputError("Participant name must not be empty")
        return stripped

    @field_validator("hours")
    @classmethod
    def validate_hours_value(cls, v: float, info: ValidationInfo) -> float:
        """Validate hours are finite and non-negative."""
        return validate_hours(info.data.get("name", "<unknown>"), v)


class DistributionInputs(BaseModel):
    """
    Validates all input data before a tip distribution runs.

    Examples
    --------
    >>> inputs = DistributionInputs(
    ...     participants=[{"name": "Ana", "hours": 12.5}, {"name": "Ben", "hours": 8}],
    ...     total_tips=150,
    ... )
    >>> [p.name for p in inputs.to_participants()]
    ['Ana', 'Ben']
    """

    participants: list[ParticipantInput] = Field(
        ..., description="Participants in display order"
    )
    total_tips: float = Field(..., description="Pooled tip total, >= 0")

    @field_validator("total_tips")
    @classmethod
    def validate_total_tips(cls, v: float) -> float:
        """Validate the pool is finite and non-negative."""
        return validate_pool(v)

    @model_validator(mode="after")
    def validate_hours_total(self) -> DistributionInputs:
        """Require at least one participant and a positive hours total."""
        validate_participants(self.participants, context="tip distribution inputs")
        return self

    def to_participants(self) -> list[Participant]:
        """Convert validated records to ``Participant`` values."""
        from tip_shares.library.allocations.types import Participant

        return [Participant(name=p.name, hours=p.hours) for p in self.participants]


def build_distribution_inputs(
    records: Iterable[Mapping[str, Any] | ParticipantInput], total_tips: Any
) -> DistributionInputs:
    """
    Validate raw records and a total, reporting all failures as invalid input.

    Parameters
    ----------
    records
        ``{name, hours}`` mappings (or already validated records)
    total_tips
        Pooled total as given by the caller

    Returns
    -------
    DistributionInputs
        The validated inputs

    Raises
    ------
    InvalidInputError
        If any record or the total is invalid, including type errors that
        Pydantic reports (e.g. non-numeric hours)
    """
    try:
        return DistributionInputs(participants=list(records), total_tips=total_tips)
    except pydantic.ValidationError as e:
        raise InvalidInputError(f"Invalid tip distribution inputs:\n{e}") from e
