"""
config.py – Load and validate calculator settings from the environment.

All configuration is read from environment variables (or a .env file at the
repository root).  Every variable is optional; the defaults reproduce the
calculator's fixed figures.  Call `get_config()` once at startup to obtain a
validated Config object.

    CO2_LOG_LEVEL            logging level name           (WARNING)
    CO2_KG_PER_CREDIT        kg CO₂ offset by one credit  (1000)
    CO2_CREDIT_PRICE_MIN     low price per credit         (50)
    CO2_CREDIT_PRICE_MAX     high price per credit        (150)
    CO2_CURRENCY             currency label               (BRL)
    CO2_FACTOR_TABLE_FILE    JSON emission factor table   (built-in table)
    CO2_CORS_ORIGINS         comma-separated API origins  (*)
"""
from __future__ import annotations

import logging
import math
import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

from co2_calculator.calculations import CreditPricing
from co2_calculator.constants import (
    CREDIT_PRICE_MAX,
    CREDIT_PRICE_MIN,
    DEFAULT_CURRENCY,
    KG_PER_CREDIT,
)
from co2_calculator.emission_factors import DEFAULT_FACTOR_TABLE, EmissionFactorTable
from co2_calculator.exceptions import InvalidInputError

# Repository root (parent of the co2_calculator package) so .env can live there.
_REPO_ROOT = Path(__file__).resolve().parent.parent

# override=True ensures .env values always win over stale OS-level env vars.
_env_file = _REPO_ROOT / ".env"
if _env_file.exists():
    load_dotenv(_env_file, override=True)

LOG_FORMAT = "%(asctime)s  %(levelname)-8s  %(message)s"
LOG_DATEFMT = "%H:%M:%S"
DEFAULT_LOG_LEVEL = "WARNING"


@dataclass
class Config:
    """Validated runtime configuration."""

    log_level: str = DEFAULT_LOG_LEVEL
    kg_per_credit: float = KG_PER_CREDIT
    credit_price_min: float = CREDIT_PRICE_MIN
    credit_price_max: float = CREDIT_PRICE_MAX
    currency: str = DEFAULT_CURRENCY
    factor_table_file: str | None = None
    cors_origins: list[str] = field(default_factory=lambda: ["*"])

    # Derived – engine collaborators built from the raw values
    pricing: CreditPricing = field(init=False)
    factor_table: EmissionFactorTable = field(init=False)

    def __post_init__(self) -> None:
        self.log_level = self.log_level.upper()
        if not isinstance(logging.getLevelName(self.log_level), int):
            raise EnvironmentError(f"CO2_LOG_LEVEL: unknown logging level {self.log_level!r}")

        try:
            self.pricing = CreditPricing(
                kg_per_credit=self.kg_per_credit,
                price_min=self.credit_price_min,
                price_max=self.credit_price_max,
                currency=self.currency,
            )
        except InvalidInputError as exc:
            raise EnvironmentError(f"Invalid carbon credit settings: {exc}") from exc

        self.factor_table = self._load_factor_table()

    def _load_factor_table(self) -> EmissionFactorTable:
        if not self.factor_table_file:
            return DEFAULT_FACTOR_TABLE
        path = Path(self.factor_table_file)
        if not path.is_absolute():
            path = _REPO_ROOT / path
        try:
            return EmissionFactorTable.from_json_file(path)
        except (OSError, InvalidInputError) as exc:
            raise EnvironmentError(f"CO2_FACTOR_TABLE_FILE: {exc}") from exc


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw)
    except ValueError:
        raise EnvironmentError(f"{name} must be a number, got {raw!r}") from None
    if not math.isfinite(value):
        raise EnvironmentError(f"{name} must be finite, got {raw!r}")
    return value


def _env_list(name: str, default: list[str]) -> list[str]:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return list(default)
    return [item.strip() for item in raw.split(",") if item.strip()]


def get_config(log_level: str | None = None) -> Config:
    """
    Read environment variables, validate them, and return a Config.

    Parameters
    ----------
    log_level:
        Override the logging level (e.g. from a CLI flag).

    Raises
    ------
    EnvironmentError
        If any variable is present but malformed.
    """
    return Config(
        log_level=log_level or os.environ.get("CO2_LOG_LEVEL") or DEFAULT_LOG_LEVEL,
        kg_per_credit=_env_float("CO2_KG_PER_CREDIT", KG_PER_CREDIT),
        credit_price_min=_env_float("CO2_CREDIT_PRICE_MIN", CREDIT_PRICE_MIN),
        credit_price_max=_env_float("CO2_CREDIT_PRICE_MAX", CREDIT_PRICE_MAX),
        currency=(os.environ.get("CO2_CURRENCY") or DEFAULT_CURRENCY).strip(),
        factor_table_file=os.environ.get("CO2_FACTOR_TABLE_FILE") or None,
        cors_origins=_env_list("CO2_CORS_ORIGINS", ["*"]),
    )


def setup_logging(level: str) -> None:
    """Configure root logging the same way for every entry point."""
    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt=LOG_DATEFMT)
