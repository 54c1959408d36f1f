"""Data models shared by the strategy core and its hosts."""

from sma_core.models.candle import Candle
from sma_core.models.config import StrategyConfig
from sma_core.models.position import PositionState
from sma_core.models.signal import (
    NO_ACTION,
    Direction,
    Entry,
    Exit,
    NoAction,
    Signal,
    SignalKind,
)

__all__ = [
    "Candle",
    "StrategyConfig",
    "PositionState",
    "Direction",
    "SignalKind",
    "Signal",
    "NoAction",
    "Entry",
    "Exit",
    "NO_ACTION",
]
