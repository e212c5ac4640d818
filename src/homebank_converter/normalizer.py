"""
Conversion of canonical transactions into HomeBank accounting lines.
"""

from collections.abc import Iterable

from .classifier import BankClassifier
from .models import AccountingLine, BankConfig, CanonicalTransaction


def normalize(
    transaction: CanonicalTransaction,
    bank_config: BankConfig,
    classifier: BankClassifier | None = None,
) -> AccountingLine:
    """
    Build the accounting line for a transaction.

    Args:
        transaction: Transaction read from the bank export
        bank_config: Effective configuration of the bank
        classifier: Classifier built from bank_config, reused across calls
            when given

    Returns:
        AccountingLine with payee and category assigned
    """
    if classifier is None:
        classifier = BankClassifier(bank_config)

    texts = [transaction.free_text]
    return AccountingLine(
        date=transaction.date,
        payee=classifier.payee_for(texts, transaction.amount),
        memo=transaction.free_text,
        amount=transaction.amount,
        category=classifier.category_for(texts),
    )


def normalize_all(
    transactions: Iterable[CanonicalTransaction],
    bank_config: BankConfig,
) -> list[AccountingLine]:
    """Normalize transactions of one bank, building the keyword indices once."""
    classifier = BankClassifier(bank_config)
    return [normalize(t, bank_config, classifier) for t in transactions]
