"""Backtest host configuration.

Settings come from environment variables prefixed with SMA_BACKTEST_
(or a .env file); CLI flags override them.
"""

from __future__ import annotations

from decimal import Decimal

from pydantic_settings import BaseSettings, SettingsConfigDict

from sma_core.models import StrategyConfig


class BacktestSettings(BaseSettings):
    """Backtest configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="SMA_BACKTEST_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    strategy_name: str = "sma_crossover"

    # Account
    initial_capital: Decimal = Decimal("10000")
    fixed_trade_amount: Decimal = Decimal("0")  # 0 = size by signal percent

    # Strategy parameters (see StrategyConfig for constraints)
    short_period: int = 10
    long_period: int = 30
    stop_loss_pct: Decimal | None = Decimal("0.02")
    take_profit_pct: Decimal | None = Decimal("0.05")
    order_size_pct: Decimal = Decimal("0.5")

    def to_strategy_config(self, **overrides) -> StrategyConfig:
        """Build a validated StrategyConfig, applying non-None overrides."""
        params = {
            "short_period": self.short_period,
            "long_period": self.long_period,
            "stop_loss_pct": self.stop_loss_pct,
            "take_profit_pct": self.take_profit_pct,
            "order_size_pct": self.order_size_pct,
        }
        params.update({k: v for k, v in overrides.items() if v is not None})
        return StrategyConfig(**params)


_settings: BacktestSettings | None = None


def get_backtest_settings() -> BacktestSettings:
    """Get cached backtest settings instance."""
    global _settings
    if _settings is None:
        _settings = BacktestSettings()
    return _settings
