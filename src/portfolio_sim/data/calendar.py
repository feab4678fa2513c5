"""Trading-day alignment and look-ahead-free history views."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Iterable

from portfolio_sim.data.models import PriceSeries


@dataclass(frozen=True)
class AlignedPrices:
    days: tuple[date, ...]
    closes: dict[str, tuple[float, ...]]

    @property
    def tickers(self) -> list[str]:
        return sorted(self.closes)

    def prices_on(self, index: int) -> dict[str, float]:
        return {ticker: values[index] for ticker, values in self.closes.items()}

    def history(self, index: int) -> "PriceHistory":
        return PriceHistory(self, index)


class PriceHistory:
    """Closes for every ticker up to and including one trading day."""

    def __init__(self, prices: AlignedPrices, index: int) -> None:
        if index < 0 or index >= len(prices.days):
            raise IndexError(f"Trading day index out of range: {index}")
        self._prices = prices
        self.index = index

    @property
    def tickers(self) -> list[str]:
        return self._prices.tickers

    def dates(self) -> tuple[date, ...]:
        return self._prices.days[: self.index + 1]

    def closes(self, ticker: str) -> tuple[float, ...]:
        return self._prices.closes[ticker][: self.index + 1]

    def latest_prices(self) -> dict[str, float]:
        return self._prices.prices_on(self.index)

    def __len__(self) -> int:
        return self.index + 1


def common_trading_days(series: Iterable[PriceSeries]) -> list[date]:
    """Dates present in every series, ascending."""
    common: set[date] | None = None
    for item in series:
        days = set(item.dates())
        common = days if common is None else common & days
    return sorted(common or ())


def align_series(series_by_ticker: dict[str, PriceSeries]) -> AlignedPrices:
    days = common_trading_days(series_by_ticker.values())
    wanted = set(days)
    closes: dict[str, tuple[float, ...]] = {}
    for ticker, series in series_by_ticker.items():
        closes[ticker] = tuple(point.close for point in series.points if point.day in wanted)
    return AlignedPrices(days=tuple(days), closes=closes)
