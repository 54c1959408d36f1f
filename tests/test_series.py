"""Tests for per-candle indicator series."""

import pytest
from decimal import Decimal

from sma_core.indicators import IndicatorSeries, IndicatorState, PriceHistory


class TestIndicatorSeries:
    """Tests for IndicatorSeries bookkeeping."""

    def test_one_entry_per_update(self):
        history = PriceHistory()
        series = IndicatorSeries(2)
        for close in [1, 2, 3]:
            history.append(close)
            series.update(history)
        assert len(series) == 3
        assert series.values == (None, Decimal("1.5"), Decimal("2.5"))

    def test_value_at_out_of_range_is_none(self):
        history = PriceHistory()
        series = IndicatorSeries(1)
        history.append(5)
        series.update(history)

        assert series.value_at(0) == Decimal("5")
        assert series.value_at(1) is None
        # Negative indices never wrap around to the tail
        assert series.value_at(-1) is None


class TestIndicatorState:
    """Tests for the combined price/short/long state."""

    def test_lengths_stay_aligned(self):
        state = IndicatorState(short_period=3, long_period=5)
        for i, close in enumerate([10, 11, 12, 13, 14, 15, 16], start=1):
            state.update(close)
            assert len(state) == len(state.short) == len(state.long) == len(state.prices) == i

    @pytest.mark.parametrize("short_period,long_period", [(1, 2), (3, 5), (4, 9)])
    def test_presence_follows_period(self, short_period, long_period):
        state = IndicatorState(short_period, long_period)
        for close in range(1, 13):
            state.update(close)

        for i in range(12):
            short, long = state.pair_at(i)
            assert (short is not None) == (i + 1 >= short_period)
            assert (long is not None) == (i + 1 >= long_period)

    def test_update_returns_new_values(self):
        state = IndicatorState(short_period=1, long_period=2)
        assert state.update(4) == (Decimal("4"), None)
        assert state.update(6) == (Decimal("6"), Decimal("5"))

    def test_prices_snapshot_is_immutable(self):
        state = IndicatorState(short_period=1, long_period=2)
        state.update(1)
        prices = state.prices
        assert isinstance(prices, tuple)
        state.update(2)
        assert prices == (Decimal("1"),)
