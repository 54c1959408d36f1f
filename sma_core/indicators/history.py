"""Append-only buffer of closing prices."""

from __future__ import annotations

from decimal import Decimal
from typing import Iterator


def to_decimal(value) -> Decimal:
    """Convert a price to Decimal (floats via str to avoid binary noise)."""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


class PriceHistory:
    """Closing prices in candle order.

    Grows by exactly one element per processed candle and is never
    mutated retroactively.
    """

    def __init__(self) -> None:
        self._closes: list[Decimal] = []

    def append(self, close) -> None:
        """Record the close of the next candle."""
        self._closes.append(to_decimal(close))

    def sma(self, period: int) -> Decimal | None:
        """Mean of the most recent `period` closes, or None if too few.

        Recomputed from the current tail on every call.

        Args:
            period: Number of trailing closes to average.

        Returns:
            The mean as Decimal, or None while fewer than `period` closes
            have been recorded.

        Raises:
            ValueError: If period < 1.
        """
        if period < 1:
            raise ValueError(f"SMA period must be >= 1, got {period}")
        if len(self._closes) < period:
            return None
        return sum(self._closes[-period:], Decimal("0")) / period

    @property
    def closes(self) -> tuple[Decimal, ...]:
        """Read-only snapshot of all recorded closes."""
        return tuple(self._closes)

    def __getitem__(self, index: int) -> Decimal:
        return self._closes[index]

    def __len__(self) -> int:
        return len(self._closes)

    def __iter__(self) -> Iterator[Decimal]:
        return iter(self._closes)
