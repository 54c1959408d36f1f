"""Tests for environment-driven backtest settings."""

import os

import pytest
from decimal import Decimal

from pydantic import ValidationError

from sma_backtest import config as config_module
from sma_backtest.config import BacktestSettings, get_backtest_settings


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    """Run without SMA_BACKTEST_* variables or a .env file."""
    for key in list(os.environ):
        if key.startswith("SMA_BACKTEST_"):
            monkeypatch.delenv(key)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(config_module, "_settings", None)


class TestBacktestSettings:
    def test_defaults(self):
        settings = BacktestSettings()
        assert settings.strategy_name == "sma_crossover"
        assert settings.initial_capital == Decimal("10000")
        assert settings.fixed_trade_amount == Decimal("0")
        assert settings.short_period == 10
        assert settings.long_period == 30

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("SMA_BACKTEST_SHORT_PERIOD", "5")
        monkeypatch.setenv("SMA_BACKTEST_INITIAL_CAPITAL", "2500.50")
        settings = BacktestSettings()
        assert settings.short_period == 5
        assert settings.initial_capital == Decimal("2500.50")

    def test_dotenv_file(self, tmp_path):
        (tmp_path / ".env").write_text("SMA_BACKTEST_LONG_PERIOD=50\n")
        assert BacktestSettings().long_period == 50

    def test_cached_instance(self):
        assert get_backtest_settings() is get_backtest_settings()


class TestToStrategyConfig:
    def test_uses_settings(self):
        config = BacktestSettings().to_strategy_config()
        assert config.short_period == 10
        assert config.long_period == 30
        assert config.stop_loss_pct == Decimal("0.02")
        assert config.order_size_pct == Decimal("0.5")

    def test_overrides_skip_none(self):
        config = BacktestSettings().to_strategy_config(short_period=3, long_period=None)
        assert config.short_period == 3
        assert config.long_period == 30

    def test_invalid_combination(self, monkeypatch):
        monkeypatch.setenv("SMA_BACKTEST_SHORT_PERIOD", "40")
        with pytest.raises(ValidationError, match="must be greater than short_period"):
            BacktestSettings().to_strategy_config()
