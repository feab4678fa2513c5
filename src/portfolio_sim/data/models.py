"""Price series data structures."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class PricePoint:
    day: date
    close: float


@dataclass(frozen=True)
class PriceSeries:
    ticker: str
    points: tuple[PricePoint, ...]

    def __len__(self) -> int:
        return len(self.points)

    def dates(self) -> list[date]:
        return [point.day for point in self.points]

    def closes(self) -> list[float]:
        return [point.close for point in self.points]

    def between(self, start: date, end: date) -> "PriceSeries":
        points = tuple(point for point in self.points if start <= point.day <= end)
        return PriceSeries(ticker=self.ticker, points=points)

    @staticmethod
    def from_pairs(ticker: str, pairs) -> "PriceSeries":
        return PriceSeries(
            ticker=ticker,
            points=tuple(PricePoint(day=day, close=float(close)) for day, close in pairs),
        )
