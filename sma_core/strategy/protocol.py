"""Strategy protocol defining the host <-> strategy call contract.

Per candle, a host must:
1. call on_candle() exactly once, in strictly increasing index order
2. then call exactly one of check_entry() (flat) or check_exit() (held)
"""

from __future__ import annotations

from typing import Protocol, Sequence, runtime_checkable

from sma_core.models import Candle, Signal, StrategyConfig
from sma_core.strategy.context import StrategyContext


@runtime_checkable
class Strategy(Protocol):
    """Protocol that all strategies must implement."""

    @property
    def name(self) -> str:
        """Unique strategy identifier (e.g., 'sma_crossover')."""
        ...

    @property
    def version(self) -> str:
        """Strategy version string (e.g., '1.0.0')."""
        ...

    def initialize(self, config: StrategyConfig | None = None) -> StrategyContext:
        """Record configuration and return a fresh context for one run."""
        ...

    def on_candle(
        self,
        context: StrategyContext,
        index: int,
        candles: Sequence[Candle],
    ) -> None:
        """Update indicator state with candles[index].

        Args:
            context: Run context returned by initialize().
            index: Index of the candle being processed.
            candles: All candles up to and including `index`.
        """
        ...

    def check_entry(
        self,
        context: StrategyContext,
        index: int,
        candles: Sequence[Candle],
    ) -> Signal:
        """Decide whether to open a position at candles[index].open."""
        ...

    def check_exit(
        self,
        context: StrategyContext,
        index: int,
        candles: Sequence[Candle],
    ) -> Signal:
        """Decide whether to close the held position at candles[index].open."""
        ...
