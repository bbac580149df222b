"""
Calculate a tip distribution from the command line.

"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

from tip_shares.library.allocations.manager import TipDistributionManager
from tip_shares.library.config.models import ExportConfig
from tip_shares.library.exceptions import DataError, TipSharesError
from tip_shares.library.utils import load_calculator_config


def parse_participant(value: str) -> dict[str, str]:
    """
    Parse a ``NAME=HOURS`` command line value into a record.

    Hours are validated later, together with the rest of the inputs.
    """
    import argparse

    name, sep, hours = value.rpartition("=")
    if not sep or not name.strip():
        raise argparse.ArgumentTypeError(
            f"expected NAME=HOURS, got {value!r} (e.g. --participant 'Ana=12.5')"
        )
    return {"name": name.strip(), "hours": hours.strip()}


def main(argv: list[str] | None = None) -> int:
    """
    Command-line interface for tip distribution.

    Usage
    -----
    Manual entry::

        tip-shares --participant "Ana=12.5" --participant "Ben=8" --total 150

    From OCR text of a tip report (the stated total is used unless --total
    is given)::

        tip-shares --text-file report.txt --format json --output-dir out/

    Returns
    -------
    int
        0 on success, 2 on invalid input or configuration
    """
    import argparse

    parser = argparse.ArgumentParser(
        prog="tip-shares",
        description="Split pooled tips by hours worked and break them into bills",
    )
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument(
        "--participant",
        action="append",
        type=parse_participant,
        dest="participants",
        metavar="NAME=HOURS",
        help="Participant and hours worked (repeatable)",
    )
    source.add_argument(
        "--text-file", type=Path, help="Plain text of a tip report (e.g. OCR output)"
    )
    parser.add_argument("--total", type=float, help="Total tips to distribute")
    parser.add_argument("--config", type=Path, help="YAML configuration file")
    parser.add_argument(
        "--format",
        dest="export_format",
        help="Export format: csv, json or table (default from configuration)",
    )
    parser.add_argument("--output-dir", type=Path, help="Directory for exported files")
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.participants and args.total is None:
        parser.error("--total is required with --participant")

    try:
        config = load_calculator_config(args.config)
        if args.export_format:
            config = config.model_copy(
                update={
                    "export": ExportConfig(
                        **{**config.export.model_dump(), "format": args.export_format}
                    )
                }
            )
        manager = TipDistributionManager(config=config)

        if args.text_file is not None:
            try:
                text = args.text_file.read_text(encoding="utf-8")
            except OSError as e:
                raise DataError(f"Could not read {args.text_file}: {e}") from e
            result = manager.calculate_from_text(text, total_tips=args.total)
        else:
            result = manager.calculate_from_records(args.participants, args.total)

        print(manager.format_table(result))

        if config.export.format != "table":
            path = manager.save(result, output_dir=args.output_dir)
            print(f"\nSaved to {path}")
    except TipSharesError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    return 0


if __name__ == "__main__":
    sys.exit(main())
