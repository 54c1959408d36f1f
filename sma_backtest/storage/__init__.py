"""Candle input for the backtest host."""

from sma_backtest.storage.candle_source import (
    CandleDataError,
    load_candles_csv,
)

__all__ = ["CandleDataError", "load_candles_csv"]
