"""Tests for report formatting and JSON export."""

import json

import pytest
from decimal import Decimal

from sma_core.models import Direction, Entry, Exit

from sma_backtest.engine import EngineResult, SignalEvent
from sma_backtest.models import ExitReason, TradeRecord
from sma_backtest.report import ReportFormatter
from sma_backtest.stats import StatisticsCalculator


@pytest.fixture
def result():
    trade = TradeRecord(
        direction=Direction.LONG,
        entry_index=5,
        entry_price=Decimal("100"),
        quantity=Decimal("2"),
    )
    trade.close(8, Decimal("110"), ExitReason.SIGNAL)
    run = EngineResult(
        initial_capital=Decimal("1000"),
        trades=[trade],
        signals=[
            SignalEvent(index=5, signal=Entry(Direction.LONG, Decimal("0.5"), 4)),
            SignalEvent(index=8, signal=Exit(Direction.LONG, 7)),
        ],
        equity_curve=[Decimal("1000"), Decimal("990"), Decimal("1020")],
        candles_processed=3,
    )
    return StatisticsCalculator().calculate(run)


class TestToDict:
    def test_top_level_keys(self, result):
        data = ReportFormatter.to_dict(result)
        assert set(data) == {
            "summary", "by_direction", "by_exit_reason", "signals", "trades", "equity_curve",
        }

    def test_summary(self, result):
        summary = ReportFormatter.to_dict(result)["summary"]
        assert summary["total_trades"] == 1
        assert summary["wins"] == 1
        assert summary["final_equity"] == 1020.0
        assert summary["total_return_pct"] == 2.0
        # No losing trades: infinite profit factor is exported as null
        assert summary["profit_factor"] is None

    def test_signals(self, result):
        entry, exit_ = ReportFormatter.to_dict(result)["signals"]
        assert entry == {
            "index": 5,
            "kind": "entry",
            "direction": "LONG",
            "decision_index": 4,
            "size_percent": 0.5,
        }
        assert exit_ == {"index": 8, "kind": "exit", "direction": "LONG", "decision_index": 7}

    def test_trades(self, result):
        (trade,) = ReportFormatter.to_dict(result)["trades"]
        assert trade["direction"] == "LONG"
        assert trade["exit_reason"] == "signal"
        assert trade["pnl"] == Decimal("20")
        assert trade["return_pct"] == 10.0


class TestOutput:
    def test_save_json(self, result, tmp_path, capsys):
        path = tmp_path / "out.json"
        ReportFormatter.save_json(result, str(path))

        data = json.loads(path.read_text())
        assert data["trades"][0]["entry_price"] == 100.0
        assert data["trades"][0]["entry_time"] is None
        assert data["equity_curve"] == [1000.0, 990.0, 1020.0]
        assert "Results saved to" in capsys.readouterr().out

    def test_print_console(self, result, capsys):
        ReportFormatter.print_console(result, title="unit")
        out = capsys.readouterr().out
        assert "BACKTEST RESULTS: unit" in out
        assert "OVERALL" in out
        assert "BY DIRECTION" in out
        assert "BY EXIT REASON" in out
        assert "Profit factor:  inf" in out
