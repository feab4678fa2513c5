"""Price series store collaborators."""

from portfolio_sim.data.calendar import AlignedPrices, PriceHistory, align_series, common_trading_days
from portfolio_sim.data.fetch import fetch_universe
from portfolio_sim.data.models import PricePoint, PriceSeries
from portfolio_sim.data.provider import CsvPriceProvider, InMemoryPriceProvider, PriceProvider
from portfolio_sim.data.validation import validate_series

__all__ = [
    "AlignedPrices",
    "CsvPriceProvider",
    "InMemoryPriceProvider",
    "PricePoint",
    "PriceHistory",
    "PriceProvider",
    "PriceSeries",
    "align_series",
    "common_trading_days",
    "fetch_universe",
    "validate_series",
]
