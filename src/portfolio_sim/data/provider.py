"""Price provider interface and bundled file-based providers."""

from __future__ import annotations

import csv
import re
from datetime import date
from pathlib import Path

from portfolio_sim.data.models import PricePoint, PriceSeries
from portfolio_sim.errors import InvalidTickerError, NotFoundError, ProviderError

TICKER_PATTERN = re.compile(r"^[A-Z0-9][A-Z0-9.\-^=]{0,14}$")


class PriceProvider:
    def fetch_series(self, ticker: str, start: date, end: date) -> PriceSeries:  # pragma: no cover - interface
        raise NotImplementedError


class InMemoryPriceProvider(PriceProvider):
    """Serves fixed series, used for synthetic fixtures."""

    def __init__(self, series: dict[str, PriceSeries] | None = None) -> None:
        self._series = dict(series or {})
        self.requests: list[tuple[str, date, date]] = []

    def add(self, series: PriceSeries) -> None:
        self._series[series.ticker] = series

    def fetch_series(self, ticker: str, start: date, end: date) -> PriceSeries:
        self.requests.append((ticker, start, end))
        series = self._series.get(ticker)
        if series is None:
            raise NotFoundError(f"No series for {ticker}")
        return series.between(start, end)


class CsvPriceProvider(PriceProvider):
    """Reads ``<directory>/<TICKER>.csv`` files with ``date`` and ``close`` columns."""

    def __init__(self, directory: str | Path) -> None:
        self.directory = Path(directory)

    def fetch_series(self, ticker: str, start: date, end: date) -> PriceSeries:
        if not TICKER_PATTERN.match(ticker):
            raise InvalidTickerError(f"Invalid ticker symbol: {ticker!r}")
        path = self.directory / f"{ticker}.csv"
        if not path.exists():
            raise NotFoundError(f"No price file for {ticker} at {path}")

        points: list[PricePoint] = []
        with path.open("r", encoding="utf-8", newline="") as handle:
            reader = csv.DictReader(handle)
            for row in reader:
                day_raw = row.get("date") or row.get("Date")
                close_raw = row.get("close") or row.get("Close") or row.get("adj_close")
                if not day_raw or close_raw in (None, ""):
                    continue
                try:
                    day = date.fromisoformat(day_raw.strip()[:10])
                    close = float(close_raw)
                except ValueError as exc:
                    raise ProviderError(f"Malformed row in {path} at line {reader.line_num}: {exc}") from exc
                if start <= day <= end:
                    points.append(PricePoint(day=day, close=close))

        if not points:
            raise NotFoundError(f"No prices for {ticker} between {start} and {end}")
        return PriceSeries(ticker=ticker, points=tuple(points))
