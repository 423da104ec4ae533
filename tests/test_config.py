"""
Unit tests for co2_calculator/config.py

Environment variables are set with monkeypatch; the clean_env fixture
removes any CO2_* variables inherited from the shell first.
"""
import json

import pytest

from co2_calculator.config import Config, get_config
from co2_calculator.emission_factors import DEFAULT_FACTOR_TABLE


class TestGetConfig:

    def test_defaults(self, clean_env):
        cfg = get_config()
        assert isinstance(cfg, Config)
        assert cfg.log_level == "WARNING"
        assert cfg.pricing.kg_per_credit == 1000
        assert (cfg.pricing.price_min, cfg.pricing.price_max) == (50, 150)
        assert cfg.pricing.currency == "BRL"
        assert cfg.factor_table is DEFAULT_FACTOR_TABLE
        assert cfg.cors_origins == ["*"]

    def test_pricing_from_env(self, clean_env):
        clean_env.setenv("CO2_KG_PER_CREDIT", "500")
        clean_env.setenv("CO2_CREDIT_PRICE_MIN", "20")
        clean_env.setenv("CO2_CREDIT_PRICE_MAX", "80.5")
        clean_env.setenv("CO2_CURRENCY", "USD")
        cfg = get_config()
        assert cfg.pricing.kg_per_credit == 500.0
        assert cfg.pricing.price_max == 80.5
        assert cfg.pricing.currency == "USD"

    def test_log_level_override(self, clean_env):
        clean_env.setenv("CO2_LOG_LEVEL", "info")
        assert get_config().log_level == "INFO"
        assert get_config(log_level="DEBUG").log_level == "DEBUG"

    def test_cors_origins_list(self, clean_env):
        clean_env.setenv("CO2_CORS_ORIGINS", "http://localhost:3000, https://example.org ,")
        assert get_config().cors_origins == ["http://localhost:3000", "https://example.org"]

    def test_blank_values_fall_back_to_defaults(self, clean_env):
        clean_env.setenv("CO2_KG_PER_CREDIT", "  ")
        assert get_config().pricing.kg_per_credit == 1000

    @pytest.mark.parametrize(
        "name, value",
        [
            ("CO2_KG_PER_CREDIT", "abc"),
            ("CO2_KG_PER_CREDIT", "0"),
            ("CO2_CREDIT_PRICE_MIN", "nan"),
            ("CO2_CREDIT_PRICE_MIN", "500"),
            ("CO2_LOG_LEVEL", "chatty"),
        ],
    )
    def test_malformed_values_raise(self, clean_env, name, value):
        clean_env.setenv(name, value)
        with pytest.raises(EnvironmentError):
            get_config()


class TestFactorTableFile:

    def test_loads_table_from_file(self, clean_env, tmp_path):
        path = tmp_path / "regional.json"
        path.write_text(json.dumps({"factors": {"car": 0.15, "bus": 0.05}}), encoding="utf-8")
        clean_env.setenv("CO2_FACTOR_TABLE_FILE", str(path))
        table = get_config().factor_table
        assert table.all_modes() == ("car", "bus")
        assert table.factor_for("car") == 0.15

    def test_missing_file_raises(self, clean_env, tmp_path):
        clean_env.setenv("CO2_FACTOR_TABLE_FILE", str(tmp_path / "absent.json"))
        with pytest.raises(EnvironmentError, match="CO2_FACTOR_TABLE_FILE"):
            get_config()

    def test_bad_table_raises(self, clean_env, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"factors": {"bus": -1}}), encoding="utf-8")
        clean_env.setenv("CO2_FACTOR_TABLE_FILE", str(path))
        with pytest.raises(EnvironmentError):
            get_config()
