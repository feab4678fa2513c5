"""Error types raised by a simulation run."""

from __future__ import annotations


class SimulationError(Exception):
    """Base class for errors that abort a run."""


class ConfigError(SimulationError):
    """Configuration rejected before any data is fetched."""


class DataUnavailableError(SimulationError):
    """A ticker's price series could not be fetched or failed validation."""

    def __init__(self, message: str, ticker: str | None = None) -> None:
        super().__init__(message)
        self.ticker = ticker


class InsufficientHistoryError(SimulationError):
    """Too few aligned trading days for the run or the selected strategy."""


class ProviderError(Exception):
    """Raised by price providers."""


class NotFoundError(ProviderError):
    """No data for the requested ticker and range."""


class InvalidTickerError(ProviderError):
    """The provider does not recognise the ticker."""
