"""Tests for the strategy registry."""

import pytest

from sma_core.strategy import (
    Strategy,
    create_strategy,
    get_strategy_class,
    list_strategies,
    register_strategy,
)
from sma_core.strategy.sma_crossover import SmaCrossoverStrategy


class TestRegistry:
    """Test that SMA Crossover is properly registered."""

    def test_registered_in_strategy_list(self):
        assert "sma_crossover" in list_strategies()

    def test_create_strategy_by_name(self):
        strategy = create_strategy("sma_crossover")
        assert isinstance(strategy, SmaCrossoverStrategy)
        assert isinstance(strategy, Strategy)

    def test_get_strategy_class(self):
        assert get_strategy_class("sma_crossover") is SmaCrossoverStrategy

    def test_unknown_strategy_raises(self):
        with pytest.raises(KeyError, match="Unknown strategy 'nope'"):
            create_strategy("nope")

    def test_duplicate_registration_raises(self):
        class Other:
            pass

        with pytest.raises(ValueError, match="already registered"):
            register_strategy("sma_crossover")(Other)
        assert get_strategy_class("sma_crossover") is SmaCrossoverStrategy
