"""Trade ledger models for the backtest host."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel

from sma_core.models import Direction


class ExitReason(str, Enum):
    """Why a position was closed."""

    SIGNAL = "signal"  # strategy Exit at candle open
    STOP_LOSS = "stop_loss"
    TAKE_PROFIT = "take_profit"
    END_OF_DATA = "end_of_data"  # closed at the last close


class TradeRecord(BaseModel):
    """One round-trip position."""

    direction: Direction
    entry_index: int
    entry_price: Decimal
    quantity: Decimal
    entry_time: datetime | None = None
    exit_index: int | None = None
    exit_price: Decimal | None = None
    exit_time: datetime | None = None
    exit_reason: ExitReason | None = None

    @property
    def is_open(self) -> bool:
        return self.exit_price is None

    @property
    def cost(self) -> Decimal:
        """Capital committed at entry."""
        return self.entry_price * self.quantity

    def pnl_at(self, price: Decimal) -> Decimal:
        """Profit/loss if the position were closed at `price`."""
        return (price - self.entry_price) * self.quantity * self.direction.value

    @property
    def pnl(self) -> Decimal:
        """Realized profit/loss (0 while open)."""
        if self.exit_price is None:
            return Decimal("0")
        return self.pnl_at(self.exit_price)

    @property
    def return_pct(self) -> float:
        """Realized return on committed capital, in percent."""
        if self.cost == 0:
            return 0.0
        return float(self.pnl / self.cost * 100)

    def close(
        self,
        index: int,
        price: Decimal,
        reason: ExitReason,
        timestamp: datetime | None = None,
    ) -> None:
        if not self.is_open:
            raise ValueError(f"Trade opened at index {self.entry_index} is already closed")
        self.exit_index = index
        self.exit_price = price
        self.exit_reason = reason
        self.exit_time = timestamp
