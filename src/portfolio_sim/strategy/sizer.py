"""Share sizing and target-value rebalancing."""

from __future__ import annotations

import math

from portfolio_sim.ledger.models import Order, OrderAction


def affordable_quantity(budget: float, price: float, fractional: bool) -> float:
    """Largest quantity whose cost ``quantity * price`` does not exceed ``budget``."""
    if budget <= 0 or price <= 0:
        return 0.0
    if fractional:
        quantity = budget / price
        while quantity > 0 and quantity * price > budget:
            quantity = math.nextafter(quantity, 0.0)
        return quantity
    quantity = float(math.floor(budget / price))
    while quantity > 0 and quantity * price > budget:
        quantity -= 1.0
    return quantity


def rebalance_orders(
    targets: dict[str, float],
    holdings: dict[str, float],
    prices: dict[str, float],
    cash: float,
    fractional: bool,
    buy_reason: str,
    sell_reason: str,
) -> list[Order]:
    """Orders moving each ticker's holding value towards its target value.

    Sells come first so their proceeds fund the buys. Buys are capped by the
    cash that will be on hand when the ledger reaches them.
    """
    sells: list[Order] = []
    buys: list[Order] = []
    available = cash

    for ticker in sorted(targets):
        price = prices[ticker]
        held = holdings.get(ticker, 0.0)
        current = held * price
        target = max(0.0, targets[ticker])
        if held <= 0 or current <= target:
            continue
        if target == 0:
            quantity = held
        elif fractional:
            quantity = min(held, (current - target) / price)
        else:
            quantity = min(held, float(math.floor((current - target) / price)))
        if quantity <= 0:
            continue
        sells.append(Order(ticker=ticker, action=OrderAction.SELL, quantity=quantity, reason=sell_reason))
        available += quantity * price

    for ticker in sorted(targets):
        price = prices[ticker]
        current = holdings.get(ticker, 0.0) * price
        gap = targets[ticker] - current
        if gap <= 0:
            continue
        quantity = affordable_quantity(min(gap, available), price, fractional)
        if quantity <= 0:
            continue
        buys.append(Order(ticker=ticker, action=OrderAction.BUY, quantity=quantity, reason=buy_reason))
        available -= quantity * price

    return sells + buys


def portfolio_value(holdings: dict[str, float], prices: dict[str, float], cash: float) -> float:
    return cash + sum(quantity * prices[ticker] for ticker, quantity in holdings.items())
