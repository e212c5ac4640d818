"""
Data models for HomeBank conversion.
"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal

DEFAULT_LABEL = "Unknown"


@dataclass(frozen=True)
class CanonicalTransaction:
    """A single bank transaction, independent of the bank's CSV layout."""

    account_id: str
    free_text: str
    date: date
    amount: Decimal
    currency: str


@dataclass
class CategoryConfig:
    """Category keywords and the label used when nothing matches."""

    default_label: str = DEFAULT_LABEL
    mapping: dict[str, list[str]] = field(default_factory=dict)

    def __post_init__(self):
        if not self.default_label:
            raise ValueError("Category default label must not be empty")


@dataclass
class PayeeConfig:
    """Payee keywords."""

    mapping: dict[str, list[str]] = field(default_factory=dict)


@dataclass
class BankConfig:
    """Effective configuration of one bank."""

    income_label: str = DEFAULT_LABEL
    category: CategoryConfig = field(default_factory=CategoryConfig)
    payee: PayeeConfig = field(default_factory=PayeeConfig)


@dataclass(frozen=True)
class AccountingLine:
    """A line of the HomeBank CSV import format."""

    date: date
    payee: str
    memo: str
    amount: Decimal
    category: str
    tags: tuple[str, ...] = ()
    payment: int = 0
    info: str = ""


@dataclass
class ConversionResult:
    """Result of converting one export file."""

    bank_id: str
    lines: list[AccountingLine]
    skipped_rows: int = 0

    @property
    def total_income(self) -> Decimal:
        return sum((line.amount for line in self.lines if line.amount > 0), Decimal(0))

    @property
    def total_expenses(self) -> Decimal:
        return sum((line.amount for line in self.lines if line.amount < 0), Decimal(0))

    @property
    def category_totals(self) -> dict[str, Decimal]:
        totals: dict[str, Decimal] = {}
        for line in self.lines:
            totals[line.category] = totals.get(line.category, Decimal(0)) + line.amount
        return totals

    def count_payee(self, payee: str) -> int:
        """Count lines assigned to the given payee."""
        return sum(1 for line in self.lines if line.payee == payee)
