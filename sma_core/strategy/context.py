"""Per-run state record passed into every strategy call."""

from __future__ import annotations

from dataclasses import dataclass, field

from sma_core.indicators import IndicatorState
from sma_core.models import PositionState, StrategyConfig


@dataclass
class StrategyContext:
    """State shared between a host and a strategy for one backtest run.

    Ownership:
    - config, position: host-owned; the strategy only reads them
    - indicators: strategy-owned; the host only reads them
    """

    config: StrategyConfig
    indicators: IndicatorState
    position: PositionState = field(default_factory=PositionState.flat)

    @classmethod
    def create(cls, config: StrategyConfig) -> StrategyContext:
        return cls(
            config=config,
            indicators=IndicatorState(config.short_period, config.long_period),
        )

    @property
    def candles_processed(self) -> int:
        return len(self.indicators)
