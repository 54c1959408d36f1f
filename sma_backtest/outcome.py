"""Stop-loss / take-profit enforcement for the open position.

Levels are fixed percentages of the entry price:
- LONG: SL = entry * (1 - sl_pct), TP = entry * (1 + tp_pct)
- SHORT: SL = entry * (1 + sl_pct), TP = entry * (1 - tp_pct)

Rules, checked against each candle's high/low:
- LONG: low <= SL -> STOP_LOSS, high >= TP -> TAKE_PROFIT
- SHORT: high >= SL -> STOP_LOSS, low <= TP -> TAKE_PROFIT
- Both hit same candle -> STOP_LOSS (pessimistic assumption)
- Fills happen at the level price
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal

from sma_core.models import Candle, Direction

from sma_backtest.models import ExitReason, TradeRecord

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProtectiveExit:
    """A triggered stop-loss or take-profit."""

    reason: ExitReason
    price: Decimal


class ProtectiveExitTracker:
    """Evaluate SL/TP levels for a trade against candles.

    A None percentage disables that side.
    """

    def __init__(
        self,
        stop_loss_pct: Decimal | None = None,
        take_profit_pct: Decimal | None = None,
    ):
        self.stop_loss_pct = stop_loss_pct
        self.take_profit_pct = take_profit_pct

    def levels(
        self, direction: Direction, entry_price: Decimal
    ) -> tuple[Decimal | None, Decimal | None]:
        """Return (sl_price, tp_price) for a position opened at entry_price."""
        sign = direction.value
        sl_price = None
        tp_price = None
        if self.stop_loss_pct:
            sl_price = entry_price * (1 - sign * self.stop_loss_pct)
        if self.take_profit_pct:
            tp_price = entry_price * (1 + sign * self.take_profit_pct)
        return sl_price, tp_price

    def check(self, trade: TradeRecord, candle: Candle) -> ProtectiveExit | None:
        """Check whether `candle` hits the trade's SL or TP."""
        sl_price, tp_price = self.levels(trade.direction, trade.entry_price)

        if trade.direction == Direction.LONG:
            sl_hit = sl_price is not None and candle.low <= sl_price
            tp_hit = tp_price is not None and candle.high >= tp_price
        else:
            sl_hit = sl_price is not None and candle.high >= sl_price
            tp_hit = tp_price is not None and candle.low <= tp_price

        if sl_hit:
            if tp_hit:
                logger.debug(
                    "SL and TP both hit for trade from index %d; assuming SL",
                    trade.entry_index,
                )
            return ProtectiveExit(reason=ExitReason.STOP_LOSS, price=sl_price)
        if tp_hit:
            return ProtectiveExit(reason=ExitReason.TAKE_PROFIT, price=tp_price)
        return None
