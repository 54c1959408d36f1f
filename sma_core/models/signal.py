"""Signal data models returned by strategy checks.

A check returns exactly one of:
- NoAction: do nothing this candle
- Entry: open a position in `direction`, sized at `size_percent` of capital
- Exit: close the currently held position at this candle's open
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import ClassVar, Union


class Direction(int, Enum):
    """Trade direction."""

    LONG = 1
    SHORT = -1


class SignalKind(str, Enum):
    """Discriminator for the Signal union."""

    NONE = "none"
    ENTRY = "entry"
    EXIT = "exit"


@dataclass(frozen=True)
class NoAction:
    """Take no action this candle."""

    kind: ClassVar[SignalKind] = SignalKind.NONE


@dataclass(frozen=True)
class Entry:
    """Open a new position.

    Attributes:
        direction: LONG or SHORT.
        size_percent: Fraction of available capital in (0, 1].
        decision_index: Index of the closed candle the decision was based on.
    """

    direction: Direction
    size_percent: Decimal
    decision_index: int

    kind: ClassVar[SignalKind] = SignalKind.ENTRY


@dataclass(frozen=True)
class Exit:
    """Close the held position (whose direction is `direction`)."""

    direction: Direction
    decision_index: int

    kind: ClassVar[SignalKind] = SignalKind.EXIT


Signal = Union[NoAction, Entry, Exit]

NO_ACTION = NoAction()
