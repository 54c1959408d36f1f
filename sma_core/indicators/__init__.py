"""Technical indicators (pure math, no I/O)."""

from sma_core.indicators.history import PriceHistory
from sma_core.indicators.series import IndicatorSeries, IndicatorState
from sma_core.indicators.sma import SMAIndicator

__all__ = [
    "PriceHistory",
    "SMAIndicator",
    "IndicatorSeries",
    "IndicatorState",
]
