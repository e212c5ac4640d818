"""
Keyword based payee and category classification.
"""

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from decimal import Decimal
from types import MappingProxyType

from .models import BankConfig

logger = logging.getLogger(__name__)

UNKNOWN_PAYEE = "UNKNOWN"


@dataclass(frozen=True)
class KeywordIndex:
    """Lower-cased keyword -> label lookup with its matching order."""

    lookup: Mapping[str, str]
    priority: tuple[str, ...]

    @classmethod
    def build(cls, mapping: Mapping[str, Sequence[str]]) -> "KeywordIndex":
        """
        Invert a label -> keywords mapping.

        Labels are processed in sorted order, so if two labels share a
        keyword the lexicographically greatest label keeps it. The priority
        order puts longer keywords first and sorts keywords of equal length
        alphabetically.

        Args:
            mapping: Label to keyword phrases

        Returns:
            KeywordIndex ready for matching
        """
        lookup: dict[str, str] = {}
        for label in sorted(mapping):
            for phrase in mapping[label]:
                keyword = phrase.lower()
                if not keyword.strip():
                    logger.debug(f"Ignoring empty keyword for label '{label}'")
                    continue
                if keyword in lookup and lookup[keyword] != label:
                    logger.debug(
                        f"Keyword '{keyword}' moves from '{lookup[keyword]}' to '{label}'",
                    )
                lookup[keyword] = label

        priority = tuple(sorted(lookup, key=lambda keyword: (-len(keyword), keyword)))
        return cls(lookup=MappingProxyType(lookup), priority=priority)

    def find(self, texts: Sequence[str]) -> str | None:
        """Return the label of the first keyword contained in any of the texts."""
        lowered = [text.lower() for text in texts]
        for keyword in self.priority:
            for text in lowered:
                if keyword in text:
                    return self.lookup[keyword]
        return None

    def __len__(self) -> int:
        return len(self.priority)


def build_keyword_index(mapping: Mapping[str, Sequence[str]]) -> KeywordIndex:
    """Build a KeywordIndex from a label -> keywords mapping."""
    return KeywordIndex.build(mapping)


def classify_category(index: KeywordIndex, texts: Sequence[str]) -> str | None:
    """Find the category for the given texts, None if no keyword matches."""
    return index.find(texts)


def classify_payee(
    index: KeywordIndex,
    texts: Sequence[str],
    amount: Decimal,
    income_label: str,
) -> str | None:
    """
    Find the payee for the given texts.

    Positive amounts are treated as income and get the income label without
    looking at the text. Zero is not income.
    """
    if amount > 0:
        return income_label
    return index.find(texts)


class BankClassifier:
    """Classifies transactions of a single bank."""

    def __init__(self, bank_config: BankConfig):
        self.bank_config = bank_config
        self.category_index = KeywordIndex.build(bank_config.category.mapping)
        self.payee_index = KeywordIndex.build(bank_config.payee.mapping)
        logger.debug(
            f"Built keyword indices with {len(self.category_index)} category "
            f"and {len(self.payee_index)} payee keywords",
        )

    def category_for(self, texts: Sequence[str]) -> str:
        """Category label, falling back to the configured default."""
        category = classify_category(self.category_index, texts)
        if category is None:
            return self.bank_config.category.default_label
        return category

    def payee_for(self, texts: Sequence[str], amount: Decimal) -> str:
        """Payee label, falling back to UNKNOWN_PAYEE."""
        payee = classify_payee(
            self.payee_index,
            texts,
            amount,
            self.bank_config.income_label,
        )
        if payee is None:
            return UNKNOWN_PAYEE
        return payee
