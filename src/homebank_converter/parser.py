"""
Main converter class that orchestrates the conversion process.
"""

import logging
from datetime import date
from pathlib import Path

from .config import Config
from .csv_parser import get_adapter
from .models import ConversionResult
from .normalizer import normalize_all
from .output_formatter import HomebankFormatter, SummaryFormatter

logger = logging.getLogger(__name__)


class HomebankConverter:
    """Converts bank exports into HomeBank accounting lines."""

    def __init__(self, config: Config | None = None, include_header: bool = False):
        self.config = config or Config()
        self.homebank_formatter = HomebankFormatter(include_header=include_header)
        self.summary_formatter = SummaryFormatter()

    def convert_file(
        self,
        file_path: str | Path,
        bank_id: str,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> ConversionResult:
        """
        Parse a bank export and classify its transactions.

        Args:
            file_path: Path to the CSV file
            bank_id: Bank the export comes from, e.g. "bawag"
            start_date: Optional start date filter
            end_date: Optional end date filter

        Returns:
            ConversionResult object
        """
        adapter = get_adapter(bank_id)
        transactions = adapter.parse_file(file_path)

        if start_date or end_date:
            transactions = adapter.filter_by_date_range(
                transactions,
                start_date or date.min,
                end_date or date.max,
            )

        bank_config = self.config.for_bank(bank_id)
        lines = normalize_all(transactions, bank_config)
        logger.debug(f"Normalized {len(lines)} transactions for bank '{bank_id}'")

        return ConversionResult(
            bank_id=bank_id,
            lines=lines,
            skipped_rows=adapter.skipped_rows,
        )

    def format_homebank(self, result: ConversionResult) -> str:
        """Format result as HomeBank CSV."""
        return self.homebank_formatter.format_lines(result.lines)

    def write_homebank(self, result: ConversionResult, file_path: str | Path) -> None:
        """Write result as HomeBank CSV file."""
        self.homebank_formatter.write(result.lines, file_path)

    def format_summary(self, result: ConversionResult) -> str:
        """Format summary information."""
        return self.summary_formatter.format_summary(result)
