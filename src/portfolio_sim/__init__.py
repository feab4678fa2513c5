"""Daily-bar portfolio backtesting with risk controls."""

__version__ = "0.1.0"
