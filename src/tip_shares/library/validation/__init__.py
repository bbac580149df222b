"""
Validation for the tip-shares library.

The Pydantic input models live in ``tip_shares.library.validation.models``.
"""

from .inputs import (
    validate_amount,
    validate_hours,
    validate_participants,
    validate_pool,
)
from .outputs import validate_breakdown_totals, validate_conservation

__all__ = [
    "validate_amount",
    "validate_breakdown_totals",
    "validate_conservation",
    "validate_hours",
    "validate_participants",
    "validate_pool",
]
