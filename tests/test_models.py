"""Unit tests for models.py."""

import dataclasses
from datetime import date
from decimal import Decimal

import pytest

from homebank_converter.models import (
    AccountingLine,
    BankConfig,
    CanonicalTransaction,
    CategoryConfig,
    ConversionResult,
    PayeeConfig,
)


def _line(amount, category="Misc", payee="UNKNOWN"):
    return AccountingLine(
        date=date(2020, 5, 26),
        payee=payee,
        memo="Text",
        amount=Decimal(amount),
        category=category,
    )


class TestCanonicalTransaction:
    """Tests for CanonicalTransaction dataclass."""

    def test_transaction_creation(self):
        """Test creating a transaction."""
        transaction = CanonicalTransaction(
            account_id="AT1",
            free_text="Some Text",
            date=date(2020, 5, 26),
            amount=Decimal("-15.39"),
            currency="EUR",
        )

        assert transaction.account_id == "AT1"
        assert transaction.free_text == "Some Text"
        assert transaction.date == date(2020, 5, 26)
        assert transaction.amount == Decimal("-15.39")
        assert transaction.currency == "EUR"

    def test_transaction_is_immutable(self):
        """Test that transactions cannot be modified."""
        transaction = CanonicalTransaction(
            account_id="AT1",
            free_text="Some Text",
            date=date(2020, 5, 26),
            amount=Decimal("-15.39"),
            currency="EUR",
        )

        with pytest.raises(dataclasses.FrozenInstanceError):
            transaction.amount = Decimal("0")


class TestBankConfig:
    """Tests for the configuration dataclasses."""

    def test_defaults(self):
        """Test the built-in default configuration."""
        config = BankConfig()

        assert config.income_label == "Unknown"
        assert config.category.default_label == "Unknown"
        assert config.category.mapping == {}
        assert config.payee.mapping == {}

    def test_defaults_not_shared(self):
        """Test that default mappings are separate objects."""
        first = BankConfig()
        second = BankConfig()

        first.category.mapping["Family"] = ["Joe"]

        assert second.category.mapping == {}

    def test_empty_default_label_rejected(self):
        """Test that the category default label must not be empty."""
        with pytest.raises(ValueError, match="must not be empty"):
            CategoryConfig(default_label="")

    def test_payee_config(self):
        """Test creating a payee configuration."""
        payee = PayeeConfig(mapping={"Billa": ["billa"]})

        assert payee.mapping == {"Billa": ["billa"]}


class TestAccountingLine:
    """Tests for AccountingLine dataclass."""

    def test_defaults(self):
        """Test the default values of optional fields."""
        line = _line("-1.00")

        assert line.tags == ()
        assert line.payment == 0
        assert line.info == ""


class TestConversionResult:
    """Tests for ConversionResult."""

    def test_totals(self):
        """Test income and expense totals."""
        result = ConversionResult(
            bank_id="bawag",
            lines=[_line("100.00"), _line("-15.39"), _line("-4.61"), _line("0")],
        )

        assert result.total_income == Decimal("100.00")
        assert result.total_expenses == Decimal("-20.00")

    def test_totals_empty(self):
        """Test totals without lines."""
        result = ConversionResult(bank_id="bawag", lines=[])

        assert result.total_income == Decimal(0)
        assert result.total_expenses == Decimal(0)
        assert result.category_totals == {}
        assert result.skipped_rows == 0

    def test_category_totals(self):
        """Test per category totals."""
        result = ConversionResult(
            bank_id="bawag",
            lines=[
                _line("-10.00", "Groceries"),
                _line("-5.50", "Groceries"),
                _line("2000.00", "Salary"),
            ],
        )

        assert result.category_totals == {
            "Groceries": Decimal("-15.50"),
            "Salary": Decimal("2000.00"),
        }

    def test_count_payee(self):
        """Test counting lines of a payee."""
        result = ConversionResult(
            bank_id="bawag",
            lines=[_line("-1", payee="Billa"), _line("-1"), _line("-1")],
        )

        assert result.count_payee("UNKNOWN") == 2
        assert result.count_payee("Billa") == 1
