"""
Tests for reading participants and totals from report text.

"""

from __future__ import annotations

import pytest
from conftest import HOURS_FIRST_REPORT_TEXT, PATTERN_REPORT_TEXT

from tip_shares.library.config.models import ExtractionParameters
from tip_shares.library.extraction import (
    estimate_total_tips,
    extract_report,
    find_total_tips,
    split_lines,
)
from tip_shares.library.extraction.text import (
    extract_pattern_participants,
    extract_table_participants,
    extract_word_pair_participants,
    find_header_order,
    parse_number,
)


def _pairs(participants):
    return [(p.name, p.hours) for p in participants]


class TestExtractReport:
    """Test the full extraction over the three strategies."""

    def test_structured_report(self, structured_report_text):
        """Table rows and the stated total are read."""
        report = extract_report(structured_report_text)

        assert _pairs(report.participants) == [
            ("Alice Smith", 32.5),
            ("Bob Jones", 28.0),
            ("Carla", 12.75),
        ]
        assert report.total_tips == 512.5
        assert report.total_estimated is False

    def test_hours_before_names(self):
        """A header with hours first flips the column order."""
        report = extract_report(HOURS_FIRST_REPORT_TEXT)

        assert _pairs(report.participants) == [("Dana", 12.0), ("Eli", 8.5)]

    def test_missing_total_is_estimated(self):
        """Without a stated total, hours times the fallback rate is used."""
        report = extract_report(HOURS_FIRST_REPORT_TEXT)

        # 20.5 hours at 7.50 = 153.75, rounded half up
        assert report.total_tips == 154.0
        assert report.total_estimated is True

    def test_estimate_uses_configured_rate(self):
        """The fallback rate comes from the extraction parameters."""
        report = extract_report(
            HOURS_FIRST_REPORT_TEXT, ExtractionParameters(fallback_hourly_rate=10)
        )

        assert report.total_tips == 205.0

    def test_pattern_report(self):
        """Lines without a header fall back to name/hours patterns."""
        report = extract_report(PATTERN_REPORT_TEXT)

        assert _pairs(report.participants) == [("Ana", 12.5), ("Ben", 8.0)]
        assert report.total_tips == 150.0
        assert report.total_estimated is False

    def test_word_pairs_are_last_resort(self):
        """Any word followed by a plausible number is taken as a participant."""
        report = extract_report("Shift 2024 Ana 12 Ben 6")

        assert _pairs(report.participants) == [("Ana", 12.0), ("Ben", 6.0)]

    @pytest.mark.parametrize("text", ["", "   \n\n", "nothing useful here"])
    def test_nothing_found(self, text):
        """Text without participants gives an empty report and no estimate."""
        report = extract_report(text)

        assert report.participants == ()
        assert report.total_tips == 0.0
        assert report.total_estimated is False

    def test_hours_outside_range_ignored(self):
        """Hours at or above the maximum are not participants."""
        report = extract_report("Ana: 120\nBen: 8", ExtractionParameters())

        assert _pairs(report.participants) == [("Ben", 8.0)]


class TestStrategies:
    """Test individual extraction strategies and helpers."""

    def test_table_requires_header(self):
        """Without a header row the table strategy finds nothing."""
        assert extract_table_participants(["Ana 12", "Ben 8"]) == []

    def test_table_strips_non_letters_from_names(self):
        """OCR noise around names is removed."""
        lines = ["Name Hours", "A|ice_ O'Neil 12"]

        assert _pairs(extract_table_participants(lines)) == [("Aice ONeil", 12.0)]

    def test_header_order(self):
        """Column order is taken from the first header line."""
        assert find_header_order(["Partner Name Hours"]) is True
        assert find_header_order(["Time Worked Name"]) is False
        assert find_header_order(["Ana 12"]) is None

    def test_pattern_strategy(self):
        """``name: hours`` and ``name hours`` both match."""
        lines = ["Ana: 12,5", "Ben 8"]

        assert _pairs(extract_pattern_participants(lines)) == [
            ("Ana", 12.5),
            ("Ben", 8.0),
        ]

    def test_word_pair_strategy_skips_single_letters(self):
        """Single-letter words are not names."""
        assert _pairs(extract_word_pair_participants(["x 4 Eve 7"])) == [("Eve", 7.0)]


class TestTotalsAndHelpers:
    """Test total detection and small parsing helpers."""

    def test_small_amounts_are_skipped(self):
        """Amounts at or below the minimum guess are not the total."""
        assert find_total_tips(["Tips: $15", "Total: $250"]) == 250.0

    def test_comma_decimal_total(self):
        """Comma decimal separators are accepted."""
        assert find_total_tips(["Total Tips: $312,75"]) == 312.75

    def test_no_total(self):
        """No total gives 0.0."""
        assert find_total_tips(["Ana 12"]) == 0.0

    def test_estimate_total_tips(self, two_equal_participants):
        """20 hours at 7.50 is 150."""
        assert estimate_total_tips(two_equal_participants) == 150.0

    @pytest.mark.parametrize(
        "value,expected", [("12", 12.0), ("12.5", 12.5), ("12,5", 12.5), ("x", None)]
    )
    def test_parse_number(self, value, expected):
        """Dots and commas both work as decimal separators."""
        assert parse_number(value) == expected

    def test_split_lines(self):
        """Whitespace is collapsed per line and blank lines dropped."""
        assert split_lines("  Ana   12 \n\n\tBen\t8\n") == ["Ana 12", "Ben 8"]
