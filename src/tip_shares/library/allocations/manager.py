"""
Manager for orchestrating tip distribution runs.

This module provides the central interface for calculating a tip distribution
from participants entered by hand, from raw ``{name, hours}`` records, or
from report text, and for exporting the result.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from pathlib import Path
from typing import Any

from attrs import define, field

from tip_shares.library.allocations.distribution import distribute_tips
from tip_shares.library.allocations.results import TipDistributionResult
from tip_shares.library.allocations.results.serializers import (
    format_result_table,
    save_distribution_result,
)
from tip_shares.library.allocations.types import Participant
from tip_shares.library.config.models import CalculatorConfig
from tip_shares.library.error_messages import format_error
from tip_shares.library.exceptions import ExtractionError
from tip_shares.library.extraction import extract_report, split_lines
from tip_shares.library.validation.models import build_distribution_inputs

logger = logging.getLogger(__name__)


@define
class TipDistributionManager:
    """
    Manager for tip distribution runs with validation and result handling.

    Every call is an independent run: the manager holds configuration only,
    never results, so one instance can serve concurrent callers.

    Attributes
    ----------
    config
        Extraction thresholds and export settings

    Examples
    --------
    >>> manager = TipDistributionManager()
    >>> result = manager.calculate(
    ...     [Participant("Ana", 12), Participant("Ben", 8)], total_tips=100.75
    ... )
    >>> [r.amount for r in result.results]
    [60, 40]
    """

    config: CalculatorConfig = field(factory=CalculatorConfig)

    def calculate(
        self,
        participants: Sequence[Participant],
        total_tips: float,
        total_estimated: bool = False,
    ) -> TipDistributionResult:
        """
        Calculate the distribution for participants entered by hand.

        Parameters
        ----------
        participants
            Participants in display order
        total_tips
            Pool to distribute
        total_estimated
            Whether the pool was estimated rather than read from a report

        Returns
        -------
        TipDistributionResult
            Validated distribution result

        Raises
        ------
        InvalidInputError
            If participants or the total are invalid
        """
        result = distribute_tips(participants, total_tips, total_estimated)
        logger.info(
            "Distributed $%d of $%.2f among %d partners",
            result.total_distributed,
            result.total_tips,
            result.participant_count,
        )
        return result

    def calculate_from_records(
        self, records: Iterable[Mapping[str, Any]], total_tips: Any
    ) -> TipDistributionResult:
        """
        Validate raw ``{name, hours}`` records and calculate the distribution.

        Raises
        ------
        InvalidInputError
            If any record or the total fails validation
        """
        inputs = build_distribution_inputs(records, total_tips)
        return self.calculate(inputs.to_participants(), inputs.total_tips)

    def calculate_from_text(
        self, text: str, total_tips: float | None = None
    ) -> TipDistributionResult:
        """
        Extract participants from report text and calculate the distribution.

        Parameters
        ----------
        text
            Plain report text, e.g. OCR output
        total_tips
            Explicit pool; overrides whatever total the text states

        Returns
        -------
        TipDistributionResult
            Validated distribution result

        Raises
        ------
        ExtractionError
            If no participants could be extracted
        InvalidInputError
            If the extracted data is invalid for allocation
        """
        report = extract_report(text, self.config.extraction)
        if not report.participants:
            raise ExtractionError(
                format_error(
                    "no_participants_extracted",
                    line_count=len(split_lines(text)),
                    max_hours=self.config.extraction.max_reasonable_hours,
                )
            )

        if total_tips is not None:
            return self.calculate(report.participants, total_tips)
        return self.calculate(
            report.participants,
            report.total_tips,
            total_estimated=report.total_estimated,
        )

    def format_table(self, result: TipDistributionResult) -> str:
        """Plain text summary and table of a result."""
        return format_result_table(result)

    def save(
        self,
        result: TipDistributionResult,
        output_dir: Path | str | None = None,
        export_format: str | None = None,
    ) -> Path:
        """
        Save a result using the configured export settings.

        Parameters
        ----------
        result
            The distribution to save
        output_dir
            Overrides ``config.export.output_dir``
        export_format
            Overrides ``config.export.format``

        Returns
        -------
        Path
            Path to the written file

        Raises
        ------
        ConfigurationError
            If the export format is unknown or ``"table"``
        """
        export = self.config.export
        return save_distribution_result(
            result,
            output_dir=output_dir if output_dir is not None else export.output_dir,
            export_format=export_format or export.format,
            filename_prefix=export.filename_prefix,
        )
