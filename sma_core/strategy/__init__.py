"""Strategy plugin system.

Public API:
- Strategy: Protocol that all strategies must implement
- StrategyContext: per-run state passed into every strategy call
- register_strategy / create_strategy / get_strategy_class / list_strategies

Importing this package auto-registers all built-in strategies.
"""

from sma_core.strategy.context import StrategyContext
from sma_core.strategy.protocol import Strategy
from sma_core.strategy.registry import (
    create_strategy,
    get_strategy_class,
    list_strategies,
    register_strategy,
)

# Import built-in strategies to trigger auto-registration
import sma_core.strategy.sma_crossover  # noqa: F401

__all__ = [
    "Strategy",
    "StrategyContext",
    "register_strategy",
    "create_strategy",
    "list_strategies",
    "get_strategy_class",
]
