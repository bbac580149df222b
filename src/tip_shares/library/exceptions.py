"""
Exceptions that are used throughout the tip-shares library.

"""

from __future__ import annotations


class TipSharesError(Exception):
    """Base exception for tip-shares library."""

    pass


class ConfigurationError(TipSharesError):
    """Raised when configuration is invalid or missing."""

    pass


class DataError(TipSharesError):
    """Base exception for data-related errors."""

    pass


class DataLoadingError(DataError):
    """Raised when input or configuration files cannot be loaded."""

    pass


class ExtractionError(DataError):
    """
    Raised when participant data cannot be extracted from report text.

    Extraction happens before any allocation runs, so this error never
    carries a partial distribution.
    """

    pass


class AllocationError(TipSharesError):
    """Raised when a tip distribution cannot be calculated."""

    pass


class ValidationError(TipSharesError):
    """Base exception for validation errors."""

    pass


class InvalidInputError(ValidationError):
    """
    Raised when a caller hands the allocation engine invalid input.

    Covers zero total hours, negative hours or totals, negative or
    non-integer amounts and bill breakdowns that do not add up. It is the
    only error the allocation engine raises and it is never retried.
    """

    pass


class OutputValidationError(ValidationError):
    """
    Raised when output validation fails.

    Output validation checks that distributed amounts add up to the floored
    pool and that every bill breakdown adds up to its amount.
    """

    pass
