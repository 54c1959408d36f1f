"""Reference backtest host for sma_core strategies.

Loads candles from CSV, drives a strategy through the call contract,
enforces stop-loss/take-profit, and reports trade statistics. Depends
on sma_core for all decision logic.

Usage:
    python -m sma_backtest --candles data/btc_1h.csv
"""

from sma_backtest.engine import BacktestEngine, EngineResult
from sma_backtest.stats import BacktestResult, StatisticsCalculator

__all__ = ["BacktestEngine", "EngineResult", "BacktestResult", "StatisticsCalculator"]
