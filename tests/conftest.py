"""Shared fixtures for the calculator test-suite."""
import pytest

from co2_calculator.emission_factors import EmissionFactorTable

_CO2_ENV_VARS = (
    "CO2_LOG_LEVEL",
    "CO2_KG_PER_CREDIT",
    "CO2_CREDIT_PRICE_MIN",
    "CO2_CREDIT_PRICE_MAX",
    "CO2_CURRENCY",
    "CO2_FACTOR_TABLE_FILE",
    "CO2_CORS_ORIGINS",
)


@pytest.fixture
def clean_env(monkeypatch):
    """Remove every CO2_* variable so defaults apply."""
    for name in _CO2_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.fixture
def tied_table():
    """Two zero-emission modes listed before the baseline, to exercise tie-breaks."""
    return EmissionFactorTable.from_mapping({"walk": 0.0, "bicycle": 0.0, "car": 0.12, "van": 0.12})
