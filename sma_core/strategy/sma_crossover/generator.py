"""SMA Crossover strategy implementation.

Long/short trend-following strategy:
- Short SMA crosses above Long SMA -> LONG entry (or SHORT exit)
- Short SMA crosses below Long SMA -> SHORT entry (or LONG exit)

Decisions for candle `index` (executed at its open) use only the SMA
values of the two previously closed candles, index - 1 and index - 2.

This module is pure business logic with no I/O dependencies.
"""

from __future__ import annotations

import logging
from typing import Sequence

from sma_core.models import (
    NO_ACTION,
    Candle,
    Direction,
    Entry,
    Exit,
    Signal,
    StrategyConfig,
)
from sma_core.strategy.context import StrategyContext
from sma_core.strategy.registry import register_strategy
from sma_core.strategy.sma_crossover.crossover import detect_crossover
from sma_core.strategy.sma_crossover.models import (
    SMA_CROSSOVER_STRATEGY_NAME,
    SMA_CROSSOVER_VERSION,
    Crossover,
)

logger = logging.getLogger(__name__)

# A crossover needs SMA values at index - 1 and index - 2
MIN_DECISION_INDEX = 2

_ENTRY_DIRECTION = {
    Crossover.UP: Direction.LONG,
    Crossover.DOWN: Direction.SHORT,
}

# Crossover that closes a position of the given direction
_EXIT_CROSSOVER = {
    Direction.LONG: Crossover.DOWN,
    Direction.SHORT: Crossover.UP,
}


def _format_pct(value) -> str:
    return f"{float(value) * 100:g}%"


@register_strategy(SMA_CROSSOVER_STRATEGY_NAME)
class SmaCrossoverStrategy:
    """Dual SMA crossover strategy (long and short).

    Signal Logic:
    - Entry: any crossover while flat, in the crossover's direction
    - Exit: only the crossover opposite to the held position

    Position state is read from the context and never modified here;
    stop-loss/take-profit exits belong to the host.
    """

    def __init__(self, log: logging.Logger | None = None):
        self._log = log or logger

    @property
    def name(self) -> str:
        return SMA_CROSSOVER_STRATEGY_NAME

    @property
    def version(self) -> str:
        return SMA_CROSSOVER_VERSION

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def initialize(self, config: StrategyConfig | None = None) -> StrategyContext:
        """Create the run context and log the configuration summary."""
        config = config or StrategyConfig()
        context = StrategyContext.create(config)

        self._log.info("Strategy Initialized: SMA Crossover (Long/Short)")
        self._log.info(
            "Short SMA: %d, Long SMA: %d", config.short_period, config.long_period
        )
        if config.stop_loss_pct:
            self._log.info("Stop-Loss: %s", _format_pct(config.stop_loss_pct))
        if config.take_profit_pct:
            self._log.info("Take-Profit: %s", _format_pct(config.take_profit_pct))
        self._log.info(
            "Default Order Size (percentage): %s of equity (if Fixed Trade Amount is 0)",
            _format_pct(config.order_size_pct),
        )
        return context

    def on_candle(
        self,
        context: StrategyContext,
        index: int,
        candles: Sequence[Candle],
    ) -> None:
        """Append candles[index].close and the short/long SMA values.

        Raises:
            ValueError: If candles are not fed one by one in index order.
        """
        expected = context.candles_processed
        if index != expected:
            raise ValueError(
                f"on_candle called out of order: expected index {expected}, got {index}"
            )
        if index >= len(candles):
            raise ValueError(
                f"candle index {index} out of range for {len(candles)} candles"
            )

        short_sma, long_sma = context.indicators.update(candles[index].close)
        self._log.debug(
            "Candle %d close=%s short_sma=%s long_sma=%s",
            index, candles[index].close, short_sma, long_sma,
        )

    # ------------------------------------------------------------------
    # Core logic
    # ------------------------------------------------------------------

    def crossover_at(self, context: StrategyContext, index: int) -> Crossover:
        """Crossover as of the close of candle index - 1.

        Returns Crossover.NONE when there is not enough history or any of
        the four SMA values is unavailable.
        """
        if index < MIN_DECISION_INDEX:
            return Crossover.NONE

        short_cur, long_cur = context.indicators.pair_at(index - 1)
        short_prev, long_prev = context.indicators.pair_at(index - 2)
        return detect_crossover(short_cur, long_cur, short_prev, long_prev)

    def check_entry(
        self,
        context: StrategyContext,
        index: int,
        candles: Sequence[Candle],
    ) -> Signal:
        """Decide whether to open a position at candles[index].open.

        Args:
            context: Run context; on_candle() must already have run for
                `index`.
            index: Index of the current (not yet closed) candle.
            candles: Candles up to and including `index`.

        Returns:
            Entry in the crossover's direction on a fresh cross while flat,
            otherwise NoAction.
        """
        if context.position.held:
            return NO_ACTION

        direction = _ENTRY_DIRECTION.get(self.crossover_at(context, index))
        if direction is None:
            return NO_ACTION

        self._log.info(
            "Decision based on candle %d close. Signal %s entry for current "
            "candle %d at open price %.2f",
            index - 1, direction.name, index, candles[index].open,
        )
        return Entry(
            direction=direction,
            size_percent=context.config.order_size_pct,
            decision_index=index - 1,
        )

    def check_exit(
        self,
        context: StrategyContext,
        index: int,
        candles: Sequence[Candle],
    ) -> Signal:
        """Return Exit on the crossover opposite to the held position."""
        position = context.position
        if not position.held:
            return NO_ACTION

        if self.crossover_at(context, index) is not _EXIT_CROSSOVER[position.type]:
            return NO_ACTION

        self._log.info(
            "Decision based on candle %d close. Signal EXIT %s for current "
            "candle %d at open price %.2f",
            index - 1, position.type.name, index, candles[index].open,
        )
        return Exit(direction=position.type, decision_index=index - 1)
