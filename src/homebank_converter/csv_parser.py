"""
CSV parsing for bank exports.
"""

import csv
import logging
from collections.abc import Sequence
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from pathlib import Path

import pandas as pd

from .models import CanonicalTransaction

logger = logging.getLogger(__name__)


class CSVFileError(Exception):
    """Exception raised when an export file cannot be read."""


class RowParseError(Exception):
    """Exception raised when a single CSV row cannot be decoded."""


class UnknownBankError(Exception):
    """Exception raised when no adapter exists for a bank."""


def parse_amount(text: str) -> Decimal:
    """
    Parse an amount written with '.' as thousands and ',' as decimal separator.

    Args:
        text: Amount string, e.g. "-1.234,56" or "-15,39 €"

    Returns:
        Signed Decimal amount
    """
    cleaned = text.replace(".", "").replace(",", ".").replace("€", "").strip()
    try:
        amount = Decimal(cleaned)
    except InvalidOperation as e:
        raise RowParseError(f"Invalid amount: {text!r}") from e
    if not amount.is_finite():
        raise RowParseError(f"Invalid amount: {text!r}")
    return amount


def parse_date(text: str, date_format: str = "%d.%m.%Y") -> date:
    """Parse a date, by default in DD.MM.YYYY format."""
    try:
        return datetime.strptime(text.strip(), date_format).date()
    except ValueError as e:
        raise RowParseError(f"Invalid date: {text!r}") from e


class SourceAdapter:
    """Base class for bank specific CSV export parsers."""

    bank_id = ""
    columns: tuple[str, ...] = ()

    def __init__(
        self,
        encoding: str = "utf-8",
        delimiter: str = ";",
        log: logging.Logger | None = None,
    ):
        self.encoding = encoding
        self.delimiter = delimiter
        self.logger = log or logger
        self.skipped_rows = 0

    def parse_row(self, fields: Sequence[str]) -> CanonicalTransaction:
        """Convert the fields of one CSV row into a transaction."""
        raise NotImplementedError

    def _skip_bad_line(self, fields: list[str]) -> None:
        self.logger.warning(f"Skipping row with unexpected number of fields: {fields}")
        self.skipped_rows += 1
        return None

    def read_rows(self, file_path: str | Path) -> list[list[str]]:
        """
        Read the raw rows of an export file.

        Raises:
            CSVFileError: If the file is missing or cannot be read
        """
        try:
            df = pd.read_csv(
                file_path,
                sep=self.delimiter,
                encoding=self.encoding,
                header=None,
                names=list(self.columns),
                index_col=False,
                dtype=str,
                keep_default_na=False,
                quoting=csv.QUOTE_NONE,
                skip_blank_lines=True,
                engine="python",
                on_bad_lines=self._skip_bad_line,
            )
        except pd.errors.EmptyDataError:
            return []
        except (OSError, UnicodeDecodeError, pd.errors.ParserError) as e:
            self.logger.error(f"Error reading CSV file {file_path}: {e}")
            raise CSVFileError(f"Error reading CSV file {file_path}: {e}") from e

        # Short rows are padded with NaN by pandas
        return [
            [value if isinstance(value, str) else "" for value in row]
            for row in df.itertuples(index=False, name=None)
        ]

    def parse_file(self, file_path: str | Path) -> list[CanonicalTransaction]:
        """
        Parse an export file and return its transactions.

        Rows that cannot be decoded are logged and skipped.

        Args:
            file_path: Path to the CSV file

        Returns:
            List of CanonicalTransaction objects
        """
        self.skipped_rows = 0
        rows = self.read_rows(file_path)

        transactions = []
        for line_number, fields in enumerate(rows, start=1):
            try:
                transactions.append(self.parse_row(fields))
            except RowParseError as e:
                self.logger.warning(f"Could not parse row {line_number}: {e}")
                self.skipped_rows += 1

        self.logger.info(
            f"Parsed {len(transactions)} transactions from {file_path}"
            f" ({self.skipped_rows} rows skipped)",
        )
        return transactions

    def filter_by_date_range(
        self,
        transactions: list[CanonicalTransaction],
        start_date: date,
        end_date: date,
    ) -> list[CanonicalTransaction]:
        """
        Filter transactions by date range.

        Args:
            transactions: List of transactions to filter
            start_date: Start date (inclusive)
            end_date: End date (inclusive)

        Returns:
            Filtered list of transactions
        """
        return [t for t in transactions if start_date <= t.date <= end_date]


class BawagCSVParser(SourceAdapter):
    """Parser for BAWAG P.S.K. CSV exports."""

    bank_id = "bawag"
    columns = ("iban", "text", "booking_date", "value_date", "amount", "currency")

    def parse_row(self, fields: Sequence[str]) -> CanonicalTransaction:
        iban, text, booking_date, _value_date, amount, currency = fields
        return CanonicalTransaction(
            account_id=iban,
            free_text=text,
            date=parse_date(booking_date),
            amount=parse_amount(amount),
            currency=currency,
        )


ADAPTERS: dict[str, type[SourceAdapter]] = {
    BawagCSVParser.bank_id: BawagCSVParser,
}


def get_adapter(bank_id: str, **kwargs) -> SourceAdapter:
    """Create the CSV adapter for a bank."""
    try:
        adapter_class = ADAPTERS[bank_id.lower()]
    except KeyError:
        raise UnknownBankError(
            f"No CSV parser for bank '{bank_id}'. Supported banks: {sorted(ADAPTERS)}",
        ) from None
    return adapter_class(**kwargs)
