"""Statistics calculator for backtest results.

Computes overall trade metrics, per-direction and per-exit-reason
breakdowns, and drawdown from the mark-to-market equity curve.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from decimal import Decimal

import numpy as np

from sma_core.models import Direction

from sma_backtest.engine import EngineResult, SignalEvent
from sma_backtest.models import ExitReason, TradeRecord

logger = logging.getLogger(__name__)


@dataclass
class DirectionStats:
    direction: str  # "LONG" or "SHORT"
    total: int = 0
    wins: int = 0
    losses: int = 0
    pnl: float = 0.0

    @property
    def win_rate(self) -> float:
        return (self.wins / self.total * 100) if self.total > 0 else 0.0


@dataclass
class ExitReasonStats:
    reason: str
    total: int = 0
    pnl: float = 0.0


@dataclass
class BacktestResult:
    """Complete backtest results."""

    initial_capital: float
    final_equity: float
    candles_processed: int = 0

    trades: list[TradeRecord] = field(default_factory=list)
    signals: list[SignalEvent] = field(default_factory=list)
    equity_curve: list[float] = field(default_factory=list)

    # Overall
    total_trades: int = 0
    wins: int = 0
    losses: int = 0
    win_rate: float = 0.0
    total_pnl: float = 0.0
    gross_profit: float = 0.0
    gross_loss: float = 0.0
    profit_factor: float = 0.0
    total_return_pct: float = 0.0
    max_drawdown_pct: float = 0.0

    # Breakdowns
    by_direction: list[DirectionStats] = field(default_factory=list)
    by_exit_reason: list[ExitReasonStats] = field(default_factory=list)


def max_drawdown_pct(equity_curve: list[float]) -> float:
    """Largest peak-to-trough decline of the curve, in percent."""
    if not equity_curve:
        return 0.0
    equity = np.asarray(equity_curve, dtype=np.float64)
    peaks = np.maximum.accumulate(equity)
    with np.errstate(divide="ignore", invalid="ignore"):
        drawdowns = np.where(peaks > 0, (peaks - equity) / peaks, 0.0)
    return round(float(drawdowns.max()) * 100, 4)


class StatisticsCalculator:
    """Calculate backtest statistics from an engine run."""

    def calculate(self, run: EngineResult) -> BacktestResult:
        result = BacktestResult(
            initial_capital=float(run.initial_capital),
            final_equity=float(run.final_equity),
            candles_processed=run.candles_processed,
            trades=list(run.trades),
            signals=list(run.signals),
            equity_curve=[float(v) for v in run.equity_curve],
        )
        self._calc_overall(result)
        self._calc_by_direction(result)
        self._calc_by_exit_reason(result)
        return result

    def _calc_overall(self, result: BacktestResult) -> None:
        closed = [t for t in result.trades if not t.is_open]
        pnls = [t.pnl for t in closed]

        result.total_trades = len(closed)
        result.wins = sum(1 for p in pnls if p > 0)
        result.losses = sum(1 for p in pnls if p <= 0)
        if closed:
            result.win_rate = result.wins / len(closed) * 100

        gross_profit = sum((p for p in pnls if p > 0), Decimal("0"))
        gross_loss = -sum((p for p in pnls if p < 0), Decimal("0"))
        result.gross_profit = float(gross_profit)
        result.gross_loss = float(gross_loss)
        result.total_pnl = float(gross_profit - gross_loss)
        if gross_loss > 0:
            result.profit_factor = float(gross_profit / gross_loss)
        elif gross_profit > 0:
            result.profit_factor = float("inf")

        if result.initial_capital > 0:
            result.total_return_pct = (
                (result.final_equity - result.initial_capital)
                / result.initial_capital
                * 100
            )
        result.max_drawdown_pct = max_drawdown_pct(result.equity_curve)

    def _calc_by_direction(self, result: BacktestResult) -> None:
        groups: dict[str, DirectionStats] = {}
        for trade in result.trades:
            if trade.is_open:
                continue
            label = "LONG" if trade.direction == Direction.LONG else "SHORT"
            if label not in groups:
                groups[label] = DirectionStats(direction=label)
            stats = groups[label]
            stats.total += 1
            if trade.pnl > 0:
                stats.wins += 1
            else:
                stats.losses += 1
            stats.pnl += float(trade.pnl)
        result.by_direction = sorted(groups.values(), key=lambda s: s.direction)

    def _calc_by_exit_reason(self, result: BacktestResult) -> None:
        order = {reason.value: i for i, reason in enumerate(ExitReason)}
        groups: dict[str, ExitReasonStats] = {}
        for trade in result.trades:
            if trade.exit_reason is None:
                continue
            label = trade.exit_reason.value
            if label not in groups:
                groups[label] = ExitReasonStats(reason=label)
            groups[label].total += 1
            groups[label].pnl += float(trade.pnl)
        result.by_exit_reason = sorted(groups.values(), key=lambda s: order[s.reason])
