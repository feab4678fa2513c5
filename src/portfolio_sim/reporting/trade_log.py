"""Filtered and sorted views over a trade log."""

from __future__ import annotations

from typing import Iterable, Optional

from portfolio_sim.ledger.models import OrderAction, Trade

SORT_KEYS = {
    "date": lambda trade: (trade.day, trade.id),
    "ticker": lambda trade: (trade.ticker, trade.id),
    "value": lambda trade: (trade.value, trade.id),
}


def filter_trades(
    trades: Iterable[Trade],
    action: Optional[OrderAction | str] = None,
    ticker: Optional[str] = None,
) -> list[Trade]:
    """Trades matching ``action`` and containing ``ticker`` (case-insensitive)."""
    wanted = None
    if action:
        wanted = action if isinstance(action, OrderAction) else OrderAction(action.strip().upper())
    needle = ticker.strip().upper() if ticker else ""
    return [
        trade
        for trade in trades
        if (wanted is None or trade.action == wanted) and needle in trade.ticker.upper()
    ]


def sort_trades(trades: Iterable[Trade], key: str = "date", descending: bool = False) -> list[Trade]:
    if key not in SORT_KEYS:
        raise ValueError(f"Unknown sort key: {key}")
    return sorted(trades, key=SORT_KEYS[key], reverse=descending)
