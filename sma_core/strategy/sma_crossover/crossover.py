"""Crossover detection between two consecutive (short, long) SMA pairs."""

from __future__ import annotations

from decimal import Decimal

from sma_core.strategy.sma_crossover.models import Crossover


def detect_crossover(
    short_cur: Decimal | None,
    long_cur: Decimal | None,
    short_prev: Decimal | None,
    long_prev: Decimal | None,
) -> Crossover:
    """Classify the move from (short_prev, long_prev) to (short_cur, long_cur).

    Equality counts as "not yet crossed": a short SMA sitting exactly on
    the long SMA is still on its old side, and the cross fires on the
    first strict inequality on the new side.

    Args:
        short_cur: Short SMA at the decision candle.
        long_cur: Long SMA at the decision candle.
        short_prev: Short SMA one candle earlier.
        long_prev: Long SMA one candle earlier.

    Returns:
        Crossover.UP or Crossover.DOWN on a fresh cross, otherwise
        Crossover.NONE (including when any value is missing).
    """
    if short_cur is None or long_cur is None or short_prev is None or long_prev is None:
        return Crossover.NONE

    if short_cur > long_cur and short_prev <= long_prev:
        return Crossover.UP
    if short_cur < long_cur and short_prev >= long_prev:
        return Crossover.DOWN
    return Crossover.NONE
