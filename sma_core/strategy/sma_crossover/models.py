"""SMA crossover constants and crossover classification."""

from enum import Enum

SMA_CROSSOVER_STRATEGY_NAME = "sma_crossover"
SMA_CROSSOVER_VERSION = "1.0.0"


class Crossover(str, Enum):
    """Transition of the short SMA relative to the long SMA."""

    UP = "up"  # short moved strictly above long
    DOWN = "down"  # short moved strictly below long
    NONE = "none"
