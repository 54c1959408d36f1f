"""Single-position backtest engine driving a strategy over candles.

Processing order for each candle index i:
1. strategy.on_candle() updates indicators with candle i
2. If a position is held:
   a. check stop-loss/take-profit against candle i's high/low
   b. otherwise ask strategy.check_exit(); Exit closes at candle i's open
3. If flat: ask strategy.check_entry(); Entry opens at candle i's open
4. Mark equity to market at candle i's close

The strategy only ever sees candles[0..i]. Any position still open after
the last candle is closed at the last close.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Sequence

from sma_core.models import (
    Candle,
    Direction,
    Entry,
    Exit,
    NoAction,
    PositionState,
    Signal,
    StrategyConfig,
)
from sma_core.strategy import Strategy, StrategyContext

from sma_backtest.models import ExitReason, TradeRecord
from sma_backtest.outcome import ProtectiveExitTracker

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SignalEvent:
    """A non-NoAction signal returned by the strategy at candle `index`."""

    index: int
    signal: Signal


@dataclass
class EngineResult:
    """Raw output of one engine run."""

    initial_capital: Decimal
    trades: list[TradeRecord] = field(default_factory=list)
    signals: list[SignalEvent] = field(default_factory=list)
    equity_curve: list[Decimal] = field(default_factory=list)
    candles_processed: int = 0

    @property
    def final_equity(self) -> Decimal:
        if not self.equity_curve:
            return self.initial_capital
        return self.equity_curve[-1]


class _Account:
    """Cash plus at most one open trade."""

    def __init__(self, initial_capital: Decimal):
        self.cash = initial_capital
        self.open_trade: TradeRecord | None = None
        self.trades: list[TradeRecord] = []

    def open(
        self,
        direction: Direction,
        index: int,
        candle: Candle,
        allocation: Decimal,
    ) -> TradeRecord:
        trade = TradeRecord(
            direction=direction,
            entry_index=index,
            entry_price=candle.open,
            entry_time=candle.timestamp,
            quantity=allocation / candle.open,
        )
        self.cash -= trade.cost
        self.open_trade = trade
        self.trades.append(trade)
        return trade

    def close(
        self,
        index: int,
        candle: Candle,
        price: Decimal,
        reason: ExitReason,
    ) -> TradeRecord:
        trade = self.open_trade
        trade.close(index, price, reason, candle.timestamp)
        self.cash += trade.cost + trade.pnl
        self.open_trade = None
        return trade

    def equity(self, price: Decimal) -> Decimal:
        if self.open_trade is None:
            return self.cash
        return self.cash + self.open_trade.cost + self.open_trade.pnl_at(price)


class BacktestEngine:
    """Host loop implementing the strategy call contract.

    Args:
        strategy: Strategy to drive.
        config: Strategy configuration; its SL/TP percentages are enforced here.
        initial_capital: Starting cash.
        fixed_trade_amount: If > 0, capital per entry; otherwise the entry's
            size_percent of available cash is used.
    """

    def __init__(
        self,
        strategy: Strategy,
        config: StrategyConfig,
        initial_capital: Decimal = Decimal("10000"),
        fixed_trade_amount: Decimal = Decimal("0"),
    ):
        if initial_capital <= 0:
            raise ValueError(f"initial_capital must be > 0, got {initial_capital}")
        if fixed_trade_amount < 0:
            raise ValueError(f"fixed_trade_amount must be >= 0, got {fixed_trade_amount}")
        self.strategy = strategy
        self.config = config
        self.initial_capital = initial_capital
        self.fixed_trade_amount = fixed_trade_amount
        self._protective = ProtectiveExitTracker(
            stop_loss_pct=config.stop_loss_pct,
            take_profit_pct=config.take_profit_pct,
        )

    def run(self, candles: Sequence[Candle]) -> EngineResult:
        """Process all candles in order.

        Args:
            candles: Closed candles in chronological order.

        Returns:
            EngineResult with closed trades, emitted signals and the
            per-candle equity curve.
        """
        context = self.strategy.initialize(self.config)
        account = _Account(self.initial_capital)
        result = EngineResult(initial_capital=self.initial_capital)
        seen: list[Candle] = []

        for index, candle in enumerate(candles):
            seen.append(candle)
            self.strategy.on_candle(context, index, seen)

            if account.open_trade is not None:
                signal = self._step_held(context, account, index, candle, seen)
            else:
                signal = self._step_flat(context, account, index, candle, seen)

            if not isinstance(signal, NoAction):
                result.signals.append(SignalEvent(index=index, signal=signal))
            result.equity_curve.append(account.equity(candle.close))

        if account.open_trade is not None and seen:
            last = len(seen) - 1
            self._close(context, account, last, seen[last], seen[last].close, ExitReason.END_OF_DATA)
            result.equity_curve[-1] = account.equity(seen[last].close)

        result.trades = account.trades
        result.candles_processed = len(seen)
        logger.info(
            "Backtest finished: %d candles, %d signals, %d trades, final equity %.2f",
            result.candles_processed,
            len(result.signals),
            len(result.trades),
            result.final_equity,
        )
        return result

    def _step_held(
        self,
        context: StrategyContext,
        account: _Account,
        index: int,
        candle: Candle,
        seen: Sequence[Candle],
    ) -> Signal:
        hit = self._protective.check(account.open_trade, candle)
        if hit is not None:
            self._close(context, account, index, candle, hit.price, hit.reason)
            return NoAction()

        signal = self.strategy.check_exit(context, index, seen)
        if isinstance(signal, Exit):
            self._close(context, account, index, candle, candle.open, ExitReason.SIGNAL)
        return signal

    def _step_flat(
        self,
        context: StrategyContext,
        account: _Account,
        index: int,
        candle: Candle,
        seen: Sequence[Candle],
    ) -> Signal:
        signal = self.strategy.check_entry(context, index, seen)
        if not isinstance(signal, Entry):
            return signal

        allocation = self._allocation(account.cash, signal.size_percent)
        if allocation <= 0 or candle.open <= 0:
            logger.warning(
                "Skipping %s entry at index %d: allocation=%s open=%s",
                signal.direction.name, index, allocation, candle.open,
            )
            return signal

        trade = account.open(signal.direction, index, candle, allocation)
        context.position = PositionState.opened(signal.direction)
        logger.info(
            "Opened %s at index %d: price=%s qty=%s",
            trade.direction.name, index, trade.entry_price, trade.quantity,
        )
        return signal

    def _allocation(self, cash: Decimal, size_percent: Decimal) -> Decimal:
        if self.fixed_trade_amount > 0:
            return min(self.fixed_trade_amount, cash)
        return cash * size_percent

    def _close(
        self,
        context: StrategyContext,
        account: _Account,
        index: int,
        candle: Candle,
        price: Decimal,
        reason: ExitReason,
    ) -> None:
        trade = account.close(index, candle, price, reason)
        context.position = PositionState.flat()
        logger.info(
            "Closed %s at index %d (%s): price=%s pnl=%.2f",
            trade.direction.name, index, reason.value, price, trade.pnl,
        )
