"""
HomeBank Converter - converts bank CSV exports into HomeBank import files.

This package parses bank specific CSV exports, assigns payees and categories
using configurable keywords, and writes HomeBank compatible CSV output.
"""

from .classifier import UNKNOWN_PAYEE, BankClassifier, KeywordIndex
from .config import Config, load_config
from .csv_parser import BawagCSVParser, SourceAdapter
from .models import (
    AccountingLine,
    BankConfig,
    CanonicalTransaction,
    CategoryConfig,
    ConversionResult,
    PayeeConfig,
)
from .normalizer import normalize
from .output_formatter import HomebankFormatter, SummaryFormatter
from .parser import HomebankConverter

__version__ = "0.1.0"
__all__ = [
    "UNKNOWN_PAYEE",
    "AccountingLine",
    "BankClassifier",
    "BankConfig",
    "BawagCSVParser",
    "CanonicalTransaction",
    "CategoryConfig",
    "Config",
    "ConversionResult",
    "HomebankConverter",
    "HomebankFormatter",
    "KeywordIndex",
    "PayeeConfig",
    "SourceAdapter",
    "SummaryFormatter",
    "load_config",
    "normalize",
]
