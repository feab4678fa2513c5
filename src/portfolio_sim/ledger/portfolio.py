"""Portfolio ledger: order application and mark-to-market."""

from __future__ import annotations

from datetime import date
from typing import Iterable, Optional

from portfolio_sim.ledger.models import ChartPoint, Order, OrderAction, PortfolioState, Trade


class PortfolioLedger:
    """Sole writer of :class:`PortfolioState` during a run.

    Orders are applied in sequence at the day's close. A BUY costing more than
    the cash on hand, or a SELL for more shares than held, is skipped without
    producing a trade.
    """

    def __init__(
        self,
        initial_capital: float,
        audit_log: Optional[object] = None,
    ) -> None:
        self.initial_capital = initial_capital
        self.state = PortfolioState(cash=initial_capital, peak_value=initial_capital)
        self.trades: list[Trade] = []
        self.chart: list[ChartPoint] = []
        self._next_trade_id = 1
        self._audit_log = audit_log

    def _log(self, event: str, payload: dict) -> None:
        if self._audit_log is None:
            return
        self._audit_log.log(event, payload)

    def _reject(self, order: Order, day: date, reason: str) -> None:
        self._log(
            "order_rejected",
            {
                "date": day.isoformat(),
                "ticker": order.ticker,
                "action": order.action.value,
                "quantity": order.quantity,
                "reason": reason,
            },
        )

    def apply(self, orders: Iterable[Order], day: date, prices: dict[str, float]) -> list[Trade]:
        executed: list[Trade] = []
        state = self.state
        for order in orders:
            price = prices.get(order.ticker)
            if price is None or price <= 0:
                self._reject(order, day, "No price")
                continue
            if order.quantity <= 0:
                self._reject(order, day, "Non-positive quantity")
                continue

            value = order.quantity * price
            if order.action == OrderAction.BUY:
                if value > state.cash:
                    self._reject(order, day, "Insufficient cash")
                    continue
                state.cash -= value
                state.holdings[order.ticker] = state.shares(order.ticker) + order.quantity
            else:
                held = state.shares(order.ticker)
                if order.quantity > held:
                    self._reject(order, day, "Insufficient shares")
                    continue
                state.cash += value
                remaining = held - order.quantity
                if remaining > 0:
                    state.holdings[order.ticker] = remaining
                else:
                    del state.holdings[order.ticker]

            trade = Trade(
                id=self._next_trade_id,
                day=day,
                ticker=order.ticker,
                action=order.action,
                quantity=order.quantity,
                price=price,
                value=value,
                reason=order.reason,
            )
            self._next_trade_id += 1
            self.trades.append(trade)
            executed.append(trade)
        return executed

    def mark_to_market(self, day: date, prices: dict[str, float]) -> ChartPoint:
        total = self.state.total_value(prices)
        if total > self.state.peak_value:
            self.state.peak_value = total
        return ChartPoint(day=day, value=total)

    def record(self, point: ChartPoint) -> None:
        self.chart.append(point)

    def set_halted(self) -> None:
        self.state.halted = True

    def reset_peak(self, value: float) -> None:
        self.state.peak_value = value
