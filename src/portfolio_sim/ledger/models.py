"""Ledger data structures."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum


class OrderAction(str, Enum):
    BUY = "BUY"
    SELL = "SELL"


@dataclass(frozen=True)
class Order:
    ticker: str
    action: OrderAction
    quantity: float
    reason: str


@dataclass(frozen=True)
class Trade:
    id: int
    day: date
    ticker: str
    action: OrderAction
    quantity: float
    price: float
    value: float
    reason: str


@dataclass(frozen=True)
class ChartPoint:
    day: date
    value: float


@dataclass
class PortfolioState:
    cash: float
    holdings: dict[str, float] = field(default_factory=dict)
    peak_value: float = 0.0
    halted: bool = False

    def shares(self, ticker: str) -> float:
        return self.holdings.get(ticker, 0.0)

    def total_value(self, prices: dict[str, float]) -> float:
        return self.cash + sum(quantity * prices[ticker] for ticker, quantity in self.holdings.items())

    def snapshot(self) -> "PortfolioSnapshot":
        return PortfolioSnapshot(
            cash=self.cash,
            holdings=dict(self.holdings),
            peak_value=self.peak_value,
            halted=self.halted,
        )


@dataclass(frozen=True)
class PortfolioSnapshot:
    cash: float
    holdings: dict[str, float]
    peak_value: float
    halted: bool
