"""Per-candle indicator series aligned with the price history."""

from __future__ import annotations

from decimal import Decimal
from typing import Iterator

from sma_core.indicators.history import PriceHistory
from sma_core.indicators.sma import SMAIndicator


class IndicatorSeries:
    """One SMA value (or None) per processed candle.

    Entry i is the SMA of closes[0..i]; it is None while i + 1 < period.
    """

    def __init__(self, period: int):
        self._indicator = SMAIndicator(period)
        self._values: list[Decimal | None] = []

    @property
    def period(self) -> int:
        return self._indicator.period

    def update(self, history: PriceHistory) -> Decimal | None:
        """Append the SMA for the newest close in `history`."""
        value = self._indicator.update(history)
        self._values.append(value)
        return value

    def value_at(self, index: int) -> Decimal | None:
        """Value at `index`, or None if it is unavailable or out of range."""
        if index < 0 or index >= len(self._values):
            return None
        return self._values[index]

    @property
    def values(self) -> tuple[Decimal | None, ...]:
        """Read-only snapshot of the series."""
        return tuple(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> Iterator[Decimal | None]:
        return iter(self._values)


class IndicatorState:
    """Price history plus the short and long SMA series.

    Written only by the strategy; hosts read through the properties.
    """

    def __init__(self, short_period: int, long_period: int):
        self._prices = PriceHistory()
        self._short = IndicatorSeries(short_period)
        self._long = IndicatorSeries(long_period)

    def update(self, close) -> tuple[Decimal | None, Decimal | None]:
        """Append one close and the matching short/long SMA values."""
        self._prices.append(close)
        return self._short.update(self._prices), self._long.update(self._prices)

    def pair_at(self, index: int) -> tuple[Decimal | None, Decimal | None]:
        """(short, long) SMA values at `index`."""
        return self._short.value_at(index), self._long.value_at(index)

    @property
    def prices(self) -> tuple[Decimal, ...]:
        """Read-only snapshot of the closes."""
        return self._prices.closes

    @property
    def short(self) -> IndicatorSeries:
        return self._short

    @property
    def long(self) -> IndicatorSeries:
        return self._long

    def __len__(self) -> int:
        return len(self._prices)
