"""Risk control layer applied between the strategy and the ledger."""

from __future__ import annotations

import math
from typing import Iterable, Optional, Sequence

from portfolio_sim.config.models import RiskControls
from portfolio_sim.ledger.models import ChartPoint, Order, OrderAction, PortfolioState
from portfolio_sim.risk.models import RiskDecision, RiskRule
from portfolio_sim.strategy.indicators import stddev

VOLATILITY_WINDOW = 20
DAMPING_FACTOR = 0.5
TRADING_DAYS_PER_YEAR = 252


def liquidation_orders(holdings: dict[str, float], reason: str) -> list[Order]:
    return [
        Order(ticker=ticker, action=OrderAction.SELL, quantity=quantity, reason=reason)
        for ticker, quantity in sorted(holdings.items())
        if quantity > 0
    ]


def trailing_volatility(values: Sequence[float], window: int = VOLATILITY_WINDOW) -> float:
    """Annualized population std-dev of the last ``window`` daily returns."""
    tail = list(values)[-(window + 1) :]
    returns = [current / previous - 1.0 for previous, current in zip(tail, tail[1:]) if previous > 0]
    if len(returns) < 2:
        return 0.0
    return stddev(returns, len(returns)) * math.sqrt(TRADING_DAYS_PER_YEAR)


def damp_buys(orders: Iterable[Order], factor: float, fractional: bool) -> list[Order]:
    adjusted: list[Order] = []
    for order in orders:
        if order.action != OrderAction.BUY:
            adjusted.append(order)
            continue
        quantity = order.quantity * factor
        if not fractional:
            quantity = float(math.floor(quantity))
        if quantity <= 0:
            continue
        adjusted.append(
            Order(
                ticker=order.ticker,
                action=order.action,
                quantity=quantity,
                reason=f"{order.reason} (volatility damped)",
            )
        )
    return adjusted


class RiskController:
    """Applies the risk rules in priority order; the first rule that fires wins.

    The controller holds no state between days. Everything it needs arrives
    with each call, and the ledger stays the only writer of portfolio flags.
    """

    def __init__(
        self,
        audit_log: Optional[object] = None,
        monitor: Optional[object] = None,
        volatility_window: int = VOLATILITY_WINDOW,
        damping_factor: float = DAMPING_FACTOR,
    ) -> None:
        self.volatility_window = volatility_window
        self.damping_factor = damping_factor
        self._audit_log = audit_log
        self._monitor = monitor

    def _log(self, event: str, payload: dict) -> None:
        if self._audit_log is None:
            return
        self._audit_log.log(event, payload)

    def _notify(self, rule: RiskRule, reason: str) -> None:
        if self._monitor is None:
            return
        if rule == RiskRule.STOP_LOSS:
            self._monitor.stop_loss(reason)
        elif rule == RiskRule.DRAWDOWN_LIMIT:
            self._monitor.drawdown_limit(reason)
        elif rule == RiskRule.VOLATILITY_CAP:
            self._monitor.volatility_throttle(reason)

    def _decide(self, decision: RiskDecision, total_value: float) -> RiskDecision:
        if decision.rule is not None:
            self._log(
                "risk_rule",
                {
                    "rule": decision.rule.value,
                    "reason": decision.reason,
                    "halted": decision.halted,
                    "total_value": total_value,
                    "orders": len(decision.orders),
                },
            )
            self._notify(decision.rule, decision.reason)
        return decision

    def apply(
        self,
        proposed: Sequence[Order],
        state: PortfolioState,
        chart_points: Sequence[ChartPoint],
        controls: RiskControls,
        initial_capital: float,
        prices: dict[str, float],
        fractional_shares: bool = False,
    ) -> RiskDecision:
        orders = list(proposed)
        total_value = state.total_value(prices)

        if state.halted:
            allowed = [order for order in orders if order.action == OrderAction.SELL]
            if len(allowed) == len(orders):
                return RiskDecision(orders=allowed, halted=True)
            return self._decide(
                RiskDecision(
                    orders=allowed,
                    halted=True,
                    rule=RiskRule.HALTED,
                    reason=f"Trading halted, dropped {len(orders) - len(allowed)} buy order(s)",
                ),
                total_value,
            )

        stop_level = initial_capital * (1.0 - controls.stop_loss_pct / 100.0)
        if total_value <= stop_level:
            return self._decide(
                RiskDecision(
                    orders=liquidation_orders(state.holdings, RiskRule.STOP_LOSS.value),
                    halted=True,
                    rule=RiskRule.STOP_LOSS,
                    reason=f"Value {total_value:.2f} at or below stop level {stop_level:.2f}",
                ),
                total_value,
            )

        peak = state.peak_value
        drawdown = (peak - total_value) / peak if peak > 0 else 0.0
        if drawdown >= controls.max_drawdown_pct / 100.0:
            return self._decide(
                RiskDecision(
                    orders=liquidation_orders(state.holdings, RiskRule.DRAWDOWN_LIMIT.value),
                    halted=False,
                    rule=RiskRule.DRAWDOWN_LIMIT,
                    reason=f"Drawdown {drawdown:.2%} reached limit {controls.max_drawdown_pct / 100.0:.2%}",
                    reset_peak=True,
                ),
                total_value,
            )

        volatility = trailing_volatility([point.value for point in chart_points], self.volatility_window)
        if volatility > controls.volatility_cap_pct / 100.0:
            if not any(order.action == OrderAction.BUY for order in orders):
                return RiskDecision(orders=orders, halted=False)
            return self._decide(
                RiskDecision(
                    orders=damp_buys(orders, self.damping_factor, fractional_shares),
                    halted=False,
                    rule=RiskRule.VOLATILITY_CAP,
                    reason=f"Volatility {volatility:.2%} above cap {controls.volatility_cap_pct / 100.0:.2%}",
                ),
                total_value,
            )

        return RiskDecision(orders=orders, halted=False)
