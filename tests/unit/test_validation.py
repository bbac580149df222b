"""
Tests for input models, input checks and error message formatting.

"""

from __future__ import annotations

import math

import pytest

from tip_shares.library.error_messages import (
    ERROR_MESSAGES,
    format_error,
    suggest_similar,
)
from tip_shares.library.exceptions import InvalidInputError, TipSharesError
from tip_shares.library.validation import (
    validate_amount,
    validate_hours,
    validate_pool,
)
from tip_shares.library.validation.models import (
    DistributionInputs,
    ParticipantInput,
    build_distribution_inputs,
)

# Sample parameters for every error template
ERROR_PARAMETERS = {
    "no_participants": {"context": "tip allocation"},
    "zero_total_hours": {"count": 2},
    "negative_hours": {"name": "Ana", "hours": -1},
    "invalid_pool": {"total": -5, "max_pool": 10**12},
    "invalid_amount": {"amount": 2.5},
    "breakdown_total_mismatch": {"position": 1, "actual": 22, "expected": 23},
    "conservation_violated": {"expected": 10, "actual": 11, "difference": 1},
    "no_participants_extracted": {"line_count": 3, "max_hours": 100.0},
    "invalid_export_format": {"export_format": "xml", "suggestion": "Use csv"},
}


class TestParticipantInput:
    """Test validation of single participant records."""

    def test_name_is_stripped(self):
        """Surrounding whitespace is removed from names."""
        record = ParticipantInput(name="  Ana ", hours="12.5")

        assert record.name == "Ana"
        assert record.hours == 12.5

    def test_empty_name_fails(self):
        """Blank names are rejected."""
        with pytest.raises(InvalidInputError, match="must not be empty"):
            ParticipantInput(name="   ", hours=1)

    @pytest.mark.parametrize("hours", [-0.5, math.nan, math.inf])
    def test_invalid_hours_fail(self, hours):
        """Hours must be finite and non-negative."""
        with pytest.raises(InvalidInputError, match="Invalid hours for .*'Ana'"):
            ParticipantInput(name="Ana", hours=hours)


class TestDistributionInputs:
    """Test validation of a complete set of inputs."""

    def test_valid_inputs_convert_to_participants(self):
        """Validated records become participants in the same order."""
        inputs = build_distribution_inputs(
            [{"name": "Ana", "hours": 12.5}, {"name": "Ben", "hours": "8"}], "150.25"
        )

        assert inputs.total_tips == 150.25
        assert [(p.name, p.hours) for p in inputs.to_participants()] == [
            ("Ana", 12.5),
            ("Ben", 8.0),
        ]

    def test_no_participants(self):
        """An empty record list is rejected."""
        with pytest.raises(InvalidInputError, match="No participants provided"):
            DistributionInputs(participants=[], total_tips=100)

    def test_zero_total_hours(self):
        """Records whose hours sum to zero are rejected."""
        with pytest.raises(InvalidInputError, match="Total hours worked is zero"):
            build_distribution_inputs([{"name": "Ana", "hours": 0}], 100)

    def test_negative_total(self):
        """Negative totals are rejected."""
        with pytest.raises(InvalidInputError, match="Invalid tip pool total"):
            build_distribution_inputs([{"name": "Ana", "hours": 1}], -10)

    def test_type_errors_become_invalid_input(self):
        """Pydantic type errors are reported as invalid input."""
        with pytest.raises(InvalidInputError, match="Invalid tip distribution inputs"):
            build_distribution_inputs([{"name": "Ana", "hours": "lots"}], 100)

    def test_missing_field_becomes_invalid_input(self):
        """Records without hours are reported as invalid input."""
        with pytest.raises(InvalidInputError, match="Invalid tip distribution inputs"):
            build_distribution_inputs([{"name": "Ana"}], 100)


class TestInputChecks:
    """Test the plain validation functions."""

    def test_validate_hours_converts(self):
        """Numeric strings are converted to floats."""
        assert validate_hours("Ana", "7.5") == 7.5

    def test_validate_pool_accepts_zero(self):
        """A zero pool is valid."""
        assert validate_pool(0) == 0.0

    def test_validate_amount_returns_int(self):
        """Whole amounts come back as plain ints."""
        assert validate_amount(47) == 47

    def test_errors_share_base_class(self):
        """Every library error derives from TipSharesError."""
        with pytest.raises(TipSharesError):
            validate_amount(-1)


class TestErrorMessages:
    """Test the error message templates."""

    def test_parameters_cover_every_template(self):
        """Every template has sample parameters in this module."""
        assert set(ERROR_PARAMETERS) == set(ERROR_MESSAGES)

    @pytest.mark.parametrize("key", sorted(ERROR_MESSAGES))
    def test_templates_format_with_structure(self, key):
        """Each template formats and explains what happened and how to fix it."""
        message = format_error(key, **ERROR_PARAMETERS[key])

        assert "WHAT HAPPENED:" in message
        assert "HOW TO FIX:" in message
        assert message == message.strip()

    def test_unknown_key_names_closest_keys(self):
        """Unknown keys produce a placeholder naming the closest known keys."""
        message = format_error("invalid_pol", total=-5)

        assert message.startswith("Unknown error: invalid_pol.")
        assert "Did you mean: invalid_pool" in message

    def test_missing_parameter_falls_back_to_headline(self):
        """A template missing a parameter still yields its headline."""
        message = format_error("invalid_pool", total=-5)

        assert message == (
            "Invalid tip pool total. (details unavailable, missing 'max_pool')"
        )

    def test_suggest_similar_finds_typo(self):
        """Close matches are suggested."""
        assert suggest_similar("jsn", ["csv", "json", "table"]) == "Did you mean: json?"

    def test_suggest_similar_ignores_case_and_whitespace(self):
        """Matching is case-insensitive and returns the option as spelt."""
        assert suggest_similar(" CSV", ["csv", "json"]) == "Did you mean: csv?"

    def test_suggest_similar_lists_options(self):
        """Without close matches all options are listed."""
        assert suggest_similar("xml", ["csv", "json"]) == "Valid options: csv, json"
