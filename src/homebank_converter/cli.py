"""
Command-line interface for HomeBank conversion.
"""

import argparse
import logging
import sys
from datetime import datetime

from .config import ConfigurationError, load_config
from .csv_parser import CSVFileError, UnknownBankError
from .output_formatter import FileSavingError
from .parser import HomebankConverter

logger = logging.getLogger(__name__)


def main():
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="homebank-converter",
        description="Convert bank CSV exports into HomeBank import files",
    )

    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging (DEBUG level)",
    )

    parser.add_argument(
        "--config",
        help="Path to the bank configuration file (default: ~/.hbc/config.json)",
    )

    parser.add_argument(
        "csv_file",
        help="Path to the bank CSV export",
    )

    parser.add_argument(
        "--bank",
        "-b",
        required=True,
        help="Bank the export comes from, e.g. bawag",
    )

    parser.add_argument(
        "--output",
        "-o",
        help="Write the HomeBank CSV to this file instead of stdout",
    )

    parser.add_argument(
        "--header",
        action="store_true",
        help="Write a header line with the HomeBank column names",
    )

    parser.add_argument(
        "--start-date",
        help="Start date filter (DD.MM.YYYY format)",
    )

    parser.add_argument(
        "--end-date",
        help="End date filter (DD.MM.YYYY format)",
    )

    parser.add_argument(
        "--summary",
        action="store_true",
        help="Log a summary of the conversion",
    )

    args = parser.parse_args()

    # Configure logging
    log_level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(levelname)s: %(message)s",
    )

    # Parse dates if provided
    try:
        start_date = (
            datetime.strptime(args.start_date, "%d.%m.%Y").date()
            if args.start_date
            else None
        )
        end_date = (
            datetime.strptime(args.end_date, "%d.%m.%Y").date()
            if args.end_date
            else None
        )
    except ValueError as e:
        logger.error(f"Error: invalid date filter: {e}")
        sys.exit(1)

    try:
        config = load_config(args.config)
    except ConfigurationError as e:
        logger.error(f"Error loading configuration: {e}")
        sys.exit(1)

    converter = HomebankConverter(config, include_header=args.header)

    try:
        result = converter.convert_file(args.csv_file, args.bank, start_date, end_date)
    except (UnknownBankError, CSVFileError) as e:
        logger.error(f"Error converting file: {e}")
        sys.exit(1)

    if args.output:
        try:
            converter.write_homebank(result, args.output)
        except FileSavingError as e:
            logger.error(str(e))
            sys.exit(1)
        logger.info(f"Wrote {len(result.lines)} lines to {args.output}")
    else:
        print(converter.format_homebank(result))

    if args.summary:
        logger.info(converter.format_summary(result))


if __name__ == "__main__":
    main()
