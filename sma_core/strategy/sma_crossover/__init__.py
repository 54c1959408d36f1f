"""SMA Crossover strategy package.

Importing this package triggers strategy registration via the
@register_strategy decorator on SmaCrossoverStrategy.
"""

from sma_core.strategy.sma_crossover.crossover import detect_crossover
from sma_core.strategy.sma_crossover.generator import SmaCrossoverStrategy
from sma_core.strategy.sma_crossover.models import (
    SMA_CROSSOVER_STRATEGY_NAME,
    SMA_CROSSOVER_VERSION,
    Crossover,
)

__all__ = [
    "SmaCrossoverStrategy",
    "Crossover",
    "detect_crossover",
    "SMA_CROSSOVER_STRATEGY_NAME",
    "SMA_CROSSOVER_VERSION",
]
