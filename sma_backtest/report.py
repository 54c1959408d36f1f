"""Report formatting for backtest results.

Outputs results to console (formatted tables) and JSON files.
"""

from __future__ import annotations

import json
import math
from datetime import datetime
from decimal import Decimal

from sma_core.models import Entry, Exit

from sma_backtest.models import TradeRecord
from sma_backtest.stats import BacktestResult


class DecimalEncoder(json.JSONEncoder):
    def default(self, obj):
        if isinstance(obj, Decimal):
            return float(obj)
        if isinstance(obj, datetime):
            return obj.isoformat()
        return super().default(obj)


def _finite(value: float) -> float | None:
    """JSON has no Infinity; report it as null."""
    return value if math.isfinite(value) else None


def _trade_dict(trade: TradeRecord) -> dict:
    return {
        "direction": trade.direction.name,
        "entry_index": trade.entry_index,
        "entry_time": trade.entry_time,
        "entry_price": trade.entry_price,
        "quantity": trade.quantity,
        "exit_index": trade.exit_index,
        "exit_time": trade.exit_time,
        "exit_price": trade.exit_price,
        "exit_reason": trade.exit_reason.value if trade.exit_reason else None,
        "pnl": trade.pnl,
        "return_pct": round(trade.return_pct, 4),
    }


class ReportFormatter:
    """Format backtest results for display and export."""

    @staticmethod
    def print_console(result: BacktestResult, title: str = "SMA Crossover") -> None:
        """Print formatted report to console."""
        print("\n" + "=" * 70)
        print(f"  BACKTEST RESULTS: {title}")
        print("=" * 70)
        print(f"  Candles:        {result.candles_processed}")
        print(f"  Signals:        {len(result.signals)}")

        print("\n" + "-" * 70)
        print("  OVERALL")
        print("-" * 70)
        print(f"  Initial equity: {result.initial_capital:,.2f}")
        print(f"  Final equity:   {result.final_equity:,.2f}")
        print(f"  Total return:   {result.total_return_pct:+.2f}%")
        print(f"  Max drawdown:   {result.max_drawdown_pct:.2f}%")
        print(f"  Trades:         {result.total_trades}")
        print(f"  Wins:           {result.wins}")
        print(f"  Losses:         {result.losses}")
        print(f"  Win rate:       {result.win_rate:.1f}%")
        print(f"  Total PnL:      {result.total_pnl:+,.2f}")
        print(f"  Profit factor:  {result.profit_factor:.2f}")

        if result.by_direction:
            print("\n" + "-" * 70)
            print("  BY DIRECTION")
            print("-" * 70)
            print(f"  {'Direction':<12} {'Total':>6} {'Wins':>6} {'Losses':>6} {'Win%':>8} {'PnL':>12}")
            for s in result.by_direction:
                print(
                    f"  {s.direction:<12} {s.total:>6} {s.wins:>6} {s.losses:>6} "
                    f"{s.win_rate:>7.1f}% {s.pnl:>+12,.2f}"
                )

        if result.by_exit_reason:
            print("\n" + "-" * 70)
            print("  BY EXIT REASON")
            print("-" * 70)
            print(f"  {'Reason':<14} {'Total':>6} {'PnL':>12}")
            for s in result.by_exit_reason:
                print(f"  {s.reason:<14} {s.total:>6} {s.pnl:>+12,.2f}")

        print("\n" + "=" * 70 + "\n")

    @staticmethod
    def to_dict(result: BacktestResult) -> dict:
        """Convert result to JSON-serializable dict."""
        signals = []
        for event in result.signals:
            entry = {"index": event.index, "kind": event.signal.kind.value}
            if isinstance(event.signal, (Entry, Exit)):
                entry["direction"] = event.signal.direction.name
                entry["decision_index"] = event.signal.decision_index
            if isinstance(event.signal, Entry):
                entry["size_percent"] = float(event.signal.size_percent)
            signals.append(entry)

        return {
            "summary": {
                "candles_processed": result.candles_processed,
                "initial_capital": result.initial_capital,
                "final_equity": round(result.final_equity, 2),
                "total_return_pct": round(result.total_return_pct, 4),
                "max_drawdown_pct": result.max_drawdown_pct,
                "total_trades": result.total_trades,
                "wins": result.wins,
                "losses": result.losses,
                "win_rate": round(result.win_rate, 2),
                "total_pnl": round(result.total_pnl, 2),
                "gross_profit": round(result.gross_profit, 2),
                "gross_loss": round(result.gross_loss, 2),
                "profit_factor": _finite(round(result.profit_factor, 4)),
            },
            "by_direction": [
                {
                    "direction": s.direction,
                    "total": s.total,
                    "wins": s.wins,
                    "losses": s.losses,
                    "win_rate": round(s.win_rate, 2),
                    "pnl": round(s.pnl, 2),
                }
                for s in result.by_direction
            ],
            "by_exit_reason": [
                {"reason": s.reason, "total": s.total, "pnl": round(s.pnl, 2)}
                for s in result.by_exit_reason
            ],
            "signals": signals,
            "trades": [_trade_dict(t) for t in result.trades],
            "equity_curve": [round(v, 2) for v in result.equity_curve],
        }

    @staticmethod
    def save_json(result: BacktestResult, filepath: str) -> None:
        """Save results to JSON file."""
        data = ReportFormatter.to_dict(result)
        with open(filepath, "w") as f:
            json.dump(data, f, cls=DecimalEncoder, indent=2)
        print(f"Results saved to {filepath}")
