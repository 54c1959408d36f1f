"""Tests for backtest statistics."""

import math

import pytest
from decimal import Decimal

from sma_core.models import Direction

from sma_backtest.engine import EngineResult
from sma_backtest.models import ExitReason, TradeRecord
from sma_backtest.stats import StatisticsCalculator, max_drawdown_pct


def _make_trade(
    direction: Direction,
    entry: str,
    exit: str | None,
    reason: ExitReason | None = ExitReason.SIGNAL,
    qty: str = "1",
) -> TradeRecord:
    trade = TradeRecord(
        direction=direction,
        entry_index=0,
        entry_price=Decimal(entry),
        quantity=Decimal(qty),
    )
    if exit is not None:
        trade.close(1, Decimal(exit), reason)
    return trade


def _make_run(trades, curve=None, capital: str = "1000") -> EngineResult:
    curve = curve if curve is not None else [Decimal(capital)]
    return EngineResult(
        initial_capital=Decimal(capital),
        trades=trades,
        equity_curve=[Decimal(str(v)) for v in curve],
        candles_processed=len(curve),
    )


class TestMaxDrawdown:
    def test_empty_curve(self):
        assert max_drawdown_pct([]) == 0.0

    def test_monotonic_curve(self):
        assert max_drawdown_pct([100, 110, 120]) == 0.0

    def test_peak_to_trough(self):
        assert max_drawdown_pct([100, 120, 90, 130]) == 25.0

    def test_deepest_of_several(self):
        assert max_drawdown_pct([100, 80, 100, 150, 90]) == 40.0


class TestOverall:
    def test_wins_losses_and_profit_factor(self):
        trades = [
            _make_trade(Direction.LONG, "100", "110"),  # +10
            _make_trade(Direction.SHORT, "100", "105"),  # -5
            _make_trade(Direction.LONG, "100", "100"),  # 0 counts as a loss
        ]
        result = StatisticsCalculator().calculate(_make_run(trades, [1000, 1005]))

        assert result.total_trades == 3
        assert result.wins == 1
        assert result.losses == 2
        assert result.win_rate == pytest.approx(100 / 3)
        assert result.gross_profit == pytest.approx(10)
        assert result.gross_loss == pytest.approx(5)
        assert result.total_pnl == pytest.approx(5)
        assert result.profit_factor == pytest.approx(2.0)
        assert result.total_return_pct == pytest.approx(0.5)

    def test_profit_factor_without_losses(self):
        trades = [_make_trade(Direction.LONG, "100", "110")]
        result = StatisticsCalculator().calculate(_make_run(trades))
        assert math.isinf(result.profit_factor)

    def test_no_trades(self):
        result = StatisticsCalculator().calculate(_make_run([]))

        assert result.total_trades == 0
        assert result.win_rate == 0.0
        assert result.profit_factor == 0.0
        assert result.total_return_pct == 0.0

    def test_open_trades_ignored(self):
        trades = [_make_trade(Direction.LONG, "100", None, reason=None)]
        result = StatisticsCalculator().calculate(_make_run(trades))

        assert result.total_trades == 0
        assert result.by_direction == []
        assert result.by_exit_reason == []


class TestBreakdowns:
    def test_by_direction(self):
        trades = [
            _make_trade(Direction.SHORT, "100", "90"),  # +10
            _make_trade(Direction.LONG, "100", "95"),  # -5
            _make_trade(Direction.LONG, "100", "104"),  # +4
        ]
        result = StatisticsCalculator().calculate(_make_run(trades))

        long_stats, short_stats = result.by_direction
        assert long_stats.direction == "LONG"
        assert long_stats.total == 2
        assert long_stats.wins == 1
        assert long_stats.win_rate == pytest.approx(50.0)
        assert long_stats.pnl == pytest.approx(-1)
        assert short_stats.direction == "SHORT"
        assert short_stats.pnl == pytest.approx(10)

    def test_by_exit_reason_follows_enum_order(self):
        trades = [
            _make_trade(Direction.LONG, "100", "90", ExitReason.END_OF_DATA),
            _make_trade(Direction.LONG, "100", "98", ExitReason.STOP_LOSS),
            _make_trade(Direction.LONG, "100", "105", ExitReason.SIGNAL),
            _make_trade(Direction.LONG, "100", "97", ExitReason.STOP_LOSS),
        ]
        result = StatisticsCalculator().calculate(_make_run(trades))

        reasons = [(s.reason, s.total) for s in result.by_exit_reason]
        assert reasons == [("signal", 1), ("stop_loss", 2), ("end_of_data", 1)]
        assert result.by_exit_reason[1].pnl == pytest.approx(-5)
