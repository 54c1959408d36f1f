"""Candle loading from CSV files.

Malformed rows are rejected here, before any candle reaches the strategy.

Expected columns (case-insensitive):
- required: open, high, low, close
- optional: timestamp | time | date | datetime, volume
"""

from __future__ import annotations

import logging
from datetime import datetime
from decimal import Decimal, InvalidOperation
from pathlib import Path

import pandas as pd

from sma_core.models import Candle

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ("open", "high", "low", "close")
TIMESTAMP_COLUMNS = ("timestamp", "time", "date", "datetime")


class CandleDataError(ValueError):
    """Candle input is missing, unreadable, or malformed."""


def _parse_price(value: str, column: str, row_number: int) -> Decimal:
    text = value.strip()
    if not text:
        raise CandleDataError(f"Row {row_number}: missing '{column}' value")
    try:
        price = Decimal(text)
    except InvalidOperation:
        raise CandleDataError(
            f"Row {row_number}: invalid '{column}' value {value!r}"
        ) from None
    if not price.is_finite():
        raise CandleDataError(f"Row {row_number}: non-finite '{column}' value {value!r}")
    return price


def _parse_timestamp(value: str, row_number: int) -> datetime | None:
    text = value.strip()
    if not text:
        return None
    try:
        if text.isdigit():
            # Epoch seconds or milliseconds
            unit = "ms" if len(text) >= 13 else "s"
            ts = pd.to_datetime(int(text), unit=unit, utc=True)
        else:
            ts = pd.to_datetime(text, utc=True)
    except (ValueError, OverflowError):
        raise CandleDataError(f"Row {row_number}: invalid timestamp {value!r}") from None
    return ts.to_pydatetime()


def load_candles_csv(path: str | Path) -> list[Candle]:
    """Load candles from a CSV file in file order.

    Args:
        path: CSV file path.

    Returns:
        List of candles, one per data row.

    Raises:
        CandleDataError: If the file is missing or empty, a required column
            is absent, or any row has a blank or non-numeric price.
    """
    path = Path(path)
    try:
        df = pd.read_csv(path, dtype=str, keep_default_na=False)
    except FileNotFoundError:
        raise CandleDataError(f"Candle file not found: {path}") from None
    except pd.errors.EmptyDataError:
        raise CandleDataError(f"Candle file is empty: {path}") from None

    df.columns = [str(c).strip().lower() for c in df.columns]
    missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        raise CandleDataError(
            f"Candle file {path} is missing required columns: {', '.join(missing)}"
        )
    ts_column = next((c for c in TIMESTAMP_COLUMNS if c in df.columns), None)

    candles: list[Candle] = []
    # Row numbers match the file's line numbers (header is line 1)
    for row_number, row in enumerate(df.to_dict("records"), start=2):
        prices = {c: _parse_price(row[c], c, row_number) for c in REQUIRED_COLUMNS}
        volume = Decimal("0")
        if "volume" in row and row["volume"].strip():
            volume = _parse_price(row["volume"], "volume", row_number)
        timestamp = _parse_timestamp(row[ts_column], row_number) if ts_column else None
        candles.append(Candle(**prices, volume=volume, timestamp=timestamp))

    logger.info("Loaded %d candles from %s", len(candles), path)
    return candles
