"""
Output formatting for HomeBank import files.
"""

import logging
from decimal import Decimal
from pathlib import Path

from .classifier import UNKNOWN_PAYEE
from .models import AccountingLine, ConversionResult

logger = logging.getLogger(__name__)

HOMEBANK_COLUMNS = ("date", "payment", "info", "payee", "memo", "amount", "category", "tags")


class FileSavingError(Exception):
    """Exception raised when an output file cannot be saved."""


class HomebankFormatter:
    """Formats accounting lines in the HomeBank CSV import format."""

    def __init__(self, delimiter: str = ";", include_header: bool = False):
        self.delimiter = delimiter
        self.include_header = include_header

    def format_lines(self, lines: list[AccountingLine]) -> str:
        """
        Format accounting lines for HomeBank.

        Args:
            lines: Accounting lines to format

        Returns:
            CSV text, one row per line
        """
        rows = []
        if self.include_header:
            rows.append(self.delimiter.join(HOMEBANK_COLUMNS))
        rows.extend(self.format_line(line) for line in lines)
        return "\n".join(rows)

    def format_line(self, line: AccountingLine) -> str:
        fields = [
            line.date.strftime("%Y-%m-%d"),
            str(line.payment),
            self._clean(line.info),
            self._clean(line.payee),
            self._clean(line.memo),
            self._format_amount(line.amount),
            self._clean(line.category),
            self._clean(" ".join(line.tags)),
        ]
        return self.delimiter.join(fields)

    def write(self, lines: list[AccountingLine], file_path: str | Path) -> None:
        """Write accounting lines to a HomeBank CSV file."""
        path = Path(file_path)
        logger.info(f"Saving {len(lines)} lines to {path}")
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, "w", encoding="utf-8") as f:
                f.write(self.format_lines(lines))
                f.write("\n")
        except OSError as e:
            logger.error(f"Failed to save output to {path}: {e}")
            raise FileSavingError(f"Failed to save output to {path}: {e}") from e

    def _clean(self, text: str) -> str:
        # The import format has no quoting, so the delimiter must not appear in fields
        return text.replace(self.delimiter, ",").replace("\n", " ")

    def _format_amount(self, amount: Decimal) -> str:
        return f"{amount:.2f}"


class SummaryFormatter:
    """Formats summary information."""

    @staticmethod
    def format_summary(result: ConversionResult) -> str:
        """Format a summary of the conversion result."""
        lines = []
        lines.append(f"=== HomeBank Conversion Summary ({result.bank_id}) ===")
        lines.append(f"Total transactions converted: {len(result.lines)}")
        lines.append(f"Skipped rows: {result.skipped_rows}")
        lines.append(f"Unknown payees: {result.count_payee(UNKNOWN_PAYEE)}")
        lines.append(f"Total income: {result.total_income:.2f}")
        lines.append(f"Total expenses: {abs(result.total_expenses):.2f}")
        lines.append(
            f"Net balance: {result.total_income + result.total_expenses:.2f}",
        )

        category_totals = result.category_totals
        if category_totals:
            lines.append("")
            lines.append("Category totals:")
            for category, total in sorted(category_totals.items()):
                lines.append(f"  {category}: {total:.2f}")

        return "\n".join(lines)
