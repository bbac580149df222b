"""
Tests for the tip distribution manager.

"""

from __future__ import annotations

import json

import pytest
from conftest import HOURS_FIRST_REPORT_TEXT, make_participants

from tip_shares.library.allocations.manager import TipDistributionManager
from tip_shares.library.config import CalculatorConfig, ExportConfig
from tip_shares.library.exceptions import (
    ConfigurationError,
    ExtractionError,
    InvalidInputError,
)


class TestCalculate:
    """Test calculation entry points."""

    def test_calculate(self, manager):
        """Participants entered by hand are distributed directly."""
        result = manager.calculate(
            make_participants([("Ana", 12), ("Ben", 8)]), total_tips=100.75
        )

        assert [r.amount for r in result.results] == [60, 40]
        assert result.total_estimated is False

    def test_calculate_converts_string_total(self, manager, two_equal_participants):
        """A numeric string total is validated and converted, not passed through."""
        result = manager.calculate(two_equal_participants, total_tips="21")

        assert result.total_tips == 21.0
        assert result.total_distributed == 21

    def test_calculate_from_records(self, manager):
        """Raw records are validated and converted first."""
        result = manager.calculate_from_records(
            [{"name": " Ana ", "hours": "12"}, {"name": "Ben", "hours": 8}], "100"
        )

        assert [(r.name, r.amount) for r in result.results] == [
            ("Ana", 60),
            ("Ben", 40),
        ]

    def test_calculate_from_records_rejects_bad_hours(self, manager):
        """Invalid records raise before any calculation."""
        with pytest.raises(InvalidInputError):
            manager.calculate_from_records([{"name": "Ana", "hours": -2}], 100)


class TestCalculateFromText:
    """Test the report text workflow."""

    def test_stated_total(self, manager, structured_report_text):
        """The total stated in the report is distributed."""
        result = manager.calculate_from_text(structured_report_text)

        assert [r.name for r in result.results] == ["Alice Smith", "Bob Jones", "Carla"]
        assert [r.amount for r in result.results] == [227, 196, 89]
        assert result.total_distributed == 512
        assert result.total_estimated is False

    def test_explicit_total_overrides_report(self, manager, structured_report_text):
        """A caller supplied total wins over the stated one."""
        result = manager.calculate_from_text(structured_report_text, total_tips=100)

        assert [r.amount for r in result.results] == [44, 38, 18]
        assert result.total_tips == 100

    def test_estimated_total_is_flagged(self, manager):
        """A total estimated from hours is marked as such."""
        result = manager.calculate_from_text(HOURS_FIRST_REPORT_TEXT)

        assert result.total_tips == 154.0
        assert result.total_estimated is True
        assert [r.amount for r in result.results] == [90, 64]

    def test_explicit_total_is_not_estimated(self, manager):
        """An explicit total clears the estimated flag."""
        result = manager.calculate_from_text(HOURS_FIRST_REPORT_TEXT, total_tips=50)

        assert result.total_estimated is False

    def test_no_participants_found(self, manager):
        """Text without participants is an extraction error."""
        with pytest.raises(ExtractionError, match="in 2 line"):
            manager.calculate_from_text("Weekly report\nnothing here")

    def test_uses_configured_extraction_parameters(self):
        """Extraction thresholds come from the manager configuration."""
        manager = TipDistributionManager(
            config=CalculatorConfig(extraction={"max_reasonable_hours": 10})
        )

        result = manager.calculate_from_text(HOURS_FIRST_REPORT_TEXT, total_tips=30)

        assert [r.name for r in result.results] == ["Eli"]


class TestSave:
    """Test exporting through the manager."""

    def test_save_uses_config(self, tmp_path, two_equal_participants):
        """Format and prefix come from the export configuration."""
        manager = TipDistributionManager(
            config=CalculatorConfig(
                export=ExportConfig(format="json", filename_prefix="friday")
            )
        )
        result = manager.calculate(two_equal_participants, 21)

        path = manager.save(result, output_dir=tmp_path)

        assert path.parent == tmp_path
        assert path.name.startswith("friday_")
        assert path.suffix == ".json"
        assert json.loads(path.read_text())["totalDistributed"] == 21

    def test_format_override(self, manager, tmp_path, two_equal_participants):
        """An explicit format overrides the configured one."""
        result = manager.calculate(two_equal_participants, 21)

        path = manager.save(result, output_dir=tmp_path, export_format="json")

        assert path.suffix == ".json"

    def test_table_is_not_saved(self, manager, tmp_path, two_equal_participants):
        """Saving with the table format is a configuration error."""
        result = manager.calculate(two_equal_participants, 21)

        with pytest.raises(ConfigurationError):
            manager.save(result, output_dir=tmp_path, export_format="table")

    def test_format_table(self, manager, two_equal_participants):
        """The manager renders the plain text table."""
        result = manager.calculate(two_equal_participants, 21)

        assert "1x$10, 1x$1" in manager.format_table(result)
