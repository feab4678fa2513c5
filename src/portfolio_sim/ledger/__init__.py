"""Portfolio ledger."""

from portfolio_sim.ledger.models import (
    ChartPoint,
    Order,
    OrderAction,
    PortfolioSnapshot,
    PortfolioState,
    Trade,
)
from portfolio_sim.ledger.portfolio import PortfolioLedger

__all__ = [
    "ChartPoint",
    "Order",
    "OrderAction",
    "PortfolioLedger",
    "PortfolioSnapshot",
    "PortfolioState",
    "Trade",
]
