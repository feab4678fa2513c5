"""Equal-weight strategy with periodic rebalancing."""

from __future__ import annotations

from portfolio_sim.data.calendar import PriceHistory
from portfolio_sim.ledger.models import Order
from portfolio_sim.strategy.base import TradingStrategy
from portfolio_sim.strategy.models import RebalanceFrequency, RiskState, ScheduleParams
from portfolio_sim.strategy.schedule import is_rebalance_day
from portfolio_sim.strategy.sizer import portfolio_value, rebalance_orders


class EqualWeightStrategy(TradingStrategy):
    strategy_id = "equal-weight"

    def decide(
        self,
        holdings: dict[str, float],
        cash: float,
        history: PriceHistory,
        risk_state: RiskState,
    ) -> list[Order]:
        if not is_rebalance_day(history.dates(), history.index, self.schedule.rebalance_frequency):
            return []

        prices = history.latest_prices()
        tickers = history.tickers
        target = portfolio_value(holdings, prices, cash) / len(tickers)
        return rebalance_orders(
            {ticker: target for ticker in tickers},
            holdings,
            prices,
            cash,
            fractional=self.schedule.fractional_shares,
            buy_reason="rebalance",
            sell_reason="rebalance",
        )


def build_equal_weight_from_config(parameters: dict) -> EqualWeightStrategy:
    return EqualWeightStrategy(ScheduleParams.from_dict(parameters, RebalanceFrequency.MONTHLY))
