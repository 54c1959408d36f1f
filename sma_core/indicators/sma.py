"""Incremental simple moving average.

Keeps a running sum over the last `period` closes instead of re-summing
the window on every candle.
"""

from __future__ import annotations

from decimal import Decimal

from sma_core.indicators.history import PriceHistory


class SMAIndicator:
    """Incremental SMA over a PriceHistory.

    update() must be called once after every append to the history; the
    result equals PriceHistory.sma(period) at every step.
    """

    def __init__(self, period: int):
        if period < 1:
            raise ValueError(f"SMA period must be >= 1, got {period}")
        self.period = period
        self._window_sum = Decimal("0")
        self._seen = 0

    def update(self, history: PriceHistory) -> Decimal | None:
        """Fold the newest close into the window and return the current SMA."""
        if len(history) != self._seen + 1:
            raise ValueError(
                f"SMA({self.period}) expected history of length {self._seen + 1}, "
                f"got {len(history)}"
            )
        self._seen += 1
        self._window_sum += history[-1]
        if self._seen > self.period:
            self._window_sum -= history[-self.period - 1]

        if self._seen < self.period:
            return None
        return self._window_sum / self.period

