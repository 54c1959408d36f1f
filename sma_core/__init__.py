"""Core decision logic for the SMA crossover strategy.

This package contains pure business logic with no I/O dependencies
(no files, database, or network access). Hosts drive it through the
call contract in sma_core.strategy.protocol; the reference host lives
in sma_backtest/.
"""
