"""Yahoo Finance price provider."""

from __future__ import annotations

from datetime import date, timedelta

from portfolio_sim.data.models import PricePoint, PriceSeries
from portfolio_sim.data.provider import PriceProvider
from portfolio_sim.errors import InvalidTickerError, NotFoundError, ProviderError

try:  # pragma: no cover - optional dependency
    import yfinance as yf
except ImportError:  # pragma: no cover - optional dependency
    yf = None


class YahooPriceProvider(PriceProvider):
    def __init__(self, auto_adjust: bool = True) -> None:
        if yf is None:
            raise RuntimeError("yfinance package is not installed")
        self.auto_adjust = auto_adjust

    def fetch_series(self, ticker: str, start: date, end: date) -> PriceSeries:  # pragma: no cover - network
        if not ticker or ticker != ticker.strip().upper():
            raise InvalidTickerError(f"Invalid ticker symbol: {ticker!r}")

        # yfinance treats ``end`` as exclusive
        try:
            frame = yf.Ticker(ticker).history(
                start=start.isoformat(),
                end=(end + timedelta(days=1)).isoformat(),
                interval="1d",
                auto_adjust=self.auto_adjust,
            )
        except Exception as exc:
            raise ProviderError(f"Yahoo request for {ticker} failed: {exc}") from exc
        if frame is None or frame.empty or "Close" not in frame:
            raise NotFoundError(f"Yahoo returned no data for {ticker}")

        points: list[PricePoint] = []
        for index, close in frame["Close"].items():
            if close != close:  # NaN
                continue
            points.append(PricePoint(day=index.date(), close=float(close)))
        return PriceSeries(ticker=ticker, points=tuple(points))
