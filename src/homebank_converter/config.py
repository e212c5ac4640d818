"""
Loading and resolving the per-bank configuration.

The configuration file is a JSON object keyed by bank identifier. The
``default`` entry is merged onto the built-in defaults, every other entry is
merged onto the resulting default configuration.
"""

import json
import logging
from pathlib import Path
from typing import Any

from .models import BankConfig, CategoryConfig, PayeeConfig

logger = logging.getLogger(__name__)

DEFAULT_BANK_ID = "default"
DEFAULT_CONFIG_DIR = ".hbc"
DEFAULT_FILE_NAME = "config.json"


class ConfigurationError(Exception):
    """Exception raised when the configuration cannot be loaded."""


class ConfigNotFoundError(ConfigurationError):
    """Exception raised when an explicitly requested config file does not exist."""


class ConfigParseError(ConfigurationError):
    """Exception raised when the config file is structurally invalid."""


def default_config_path() -> Path:
    """Path used when no config file is given explicitly."""
    return Path.home() / DEFAULT_CONFIG_DIR / DEFAULT_FILE_NAME


def _check_label(value: Any, where: str) -> str:
    if not isinstance(value, str) or not value:
        raise ConfigParseError(f"{where} must be a non-empty string, got {value!r}")
    return value


def _check_section(value: Any, where: str) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise ConfigParseError(f"{where} must be an object, got {type(value).__name__}")
    return value


def _check_mapping(value: Any, where: str) -> dict[str, list[str]]:
    mapping = _check_section(value, where)
    for label, phrases in mapping.items():
        if not isinstance(phrases, list) or not all(
            isinstance(phrase, str) for phrase in phrases
        ):
            raise ConfigParseError(f"{where}.{label} must be a list of strings")
    return mapping


def _merge_mapping(
    base: dict[str, list[str]],
    override: dict[str, list[str]] | None,
) -> dict[str, list[str]]:
    # Labels present in the override replace the base keywords entirely.
    merged = {label: list(phrases) for label, phrases in base.items()}
    if override:
        merged.update({label: list(phrases) for label, phrases in override.items()})
    return merged


def merge_bank_config(raw: dict[str, Any], base: BankConfig, bank_id: str = "") -> BankConfig:
    """
    Merge a raw (possibly partial) bank entry onto a base configuration.

    Args:
        raw: Bank entry as read from the config file
        base: Configuration supplying every value the entry leaves out
        bank_id: Bank identifier, only used in error messages

    Returns:
        Effective BankConfig
    """
    where = bank_id or "bank"
    raw = _check_section(raw, where)

    income_label = base.income_label
    if "income" in raw:
        income_label = _check_label(raw["income"], f"{where}.income")

    category = CategoryConfig(
        default_label=base.category.default_label,
        mapping=_merge_mapping(base.category.mapping, None),
    )
    if "category" in raw:
        raw_category = _check_section(raw["category"], f"{where}.category")
        if "default" in raw_category:
            category.default_label = _check_label(
                raw_category["default"],
                f"{where}.category.default",
            )
        if "mapping" in raw_category:
            category.mapping = _merge_mapping(
                base.category.mapping,
                _check_mapping(raw_category["mapping"], f"{where}.category.mapping"),
            )

    payee = PayeeConfig(mapping=_merge_mapping(base.payee.mapping, None))
    if "payee" in raw:
        raw_payee = _check_section(raw["payee"], f"{where}.payee")
        if "mapping" in raw_payee:
            payee.mapping = _merge_mapping(
                base.payee.mapping,
                _check_mapping(raw_payee["mapping"], f"{where}.payee.mapping"),
            )

    return BankConfig(income_label=income_label, category=category, payee=payee)


def resolve(raw: dict[str, Any]) -> dict[str, BankConfig]:
    """
    Resolve every bank entry of a raw config document.

    Bank identifiers are case-insensitive and stored lower-cased.

    Returns:
        Mapping of bank identifier to effective BankConfig, always
        containing the default entry
    """
    raw = {
        bank_id.lower(): entry
        for bank_id, entry in _check_section(raw, "configuration").items()
    }

    default_cfg = BankConfig()
    if DEFAULT_BANK_ID in raw:
        default_cfg = merge_bank_config(raw[DEFAULT_BANK_ID], default_cfg, DEFAULT_BANK_ID)

    configs = {DEFAULT_BANK_ID: default_cfg}
    for bank_id, entry in raw.items():
        if bank_id == DEFAULT_BANK_ID:
            continue
        configs[bank_id] = merge_bank_config(entry, default_cfg, bank_id)
        logger.debug(f"Resolved configuration for bank '{bank_id}'")

    return configs


def read_config_file(path: Path) -> dict[str, Any]:
    """Read the raw JSON config document."""
    try:
        with open(path, encoding="utf-8") as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        logger.error(f"Invalid JSON in config file {path}: {e}")
        raise ConfigParseError(f"Invalid JSON in config file {path}: {e}") from e
    except OSError as e:
        logger.error(f"Failed to load config from {path}: {e}")
        raise ConfigurationError(f"Failed to load config from {path}: {e}") from e


class Config:
    """Effective configuration of all configured banks."""

    def __init__(self, bank_configs: dict[str, BankConfig] | None = None):
        self.bank_configs = bank_configs or {DEFAULT_BANK_ID: BankConfig()}
        self.bank_configs.setdefault(DEFAULT_BANK_ID, BankConfig())

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "Config":
        return cls(resolve(raw))

    @classmethod
    def load(cls, custom_path: Path | str | None = None) -> "Config":
        """
        Load the configuration from a file.

        Args:
            custom_path: Explicit config file. If omitted the file in the
                user's home directory is used when it exists.

        Raises:
            ConfigNotFoundError: If custom_path is given but does not exist
            ConfigParseError: If the file is not a valid configuration
        """
        if custom_path is not None:
            path = Path(custom_path)
            if not path.exists():
                raise ConfigNotFoundError(f"Unable to find config file: {path}")
        else:
            path = default_config_path()
            logger.debug(f"Trying to load config from {path}")
            if not path.exists():
                logger.warning("No config file found - using default config")
                return cls()

        logger.info(f"Loading configuration from {path}")
        config = cls.from_dict(read_config_file(path))
        logger.info(f"Loaded configuration for {len(config.bank_configs)} banks")
        return config

    def for_bank(self, bank_id: str) -> BankConfig:
        """Effective configuration of a bank, the default one if not configured."""
        bank_id = bank_id.lower()
        if bank_id in self.bank_configs:
            return self.bank_configs[bank_id]
        logger.debug(f"No configuration for bank '{bank_id}', using default")
        return self.bank_configs[DEFAULT_BANK_ID]

    def banks(self) -> list[str]:
        return sorted(self.bank_configs)


def load_config(path: Path | str | None = None) -> Config:
    """Load the configuration, see Config.load."""
    return Config.load(path)
