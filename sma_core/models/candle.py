"""Candle (OHLC) data model."""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict


class Candle(BaseModel):
    """Closed OHLC candle as supplied by the host."""

    model_config = ConfigDict(frozen=True)

    open: Decimal
    high: Decimal
    low: Decimal
    close: Decimal
    volume: Decimal = Decimal("0")
    timestamp: datetime | None = None
