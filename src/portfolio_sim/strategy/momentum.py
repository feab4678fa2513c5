"""Cross-sectional momentum: hold the top-ranked assets by trailing return."""

from __future__ import annotations

import math
from dataclasses import dataclass

from portfolio_sim.data.calendar import PriceHistory
from portfolio_sim.errors import ConfigError
from portfolio_sim.ledger.models import Order
from portfolio_sim.strategy.base import TradingStrategy
from portfolio_sim.strategy.indicators import trailing_return
from portfolio_sim.strategy.models import RebalanceFrequency, RiskState, ScheduleParams, parse_float, parse_int
from portfolio_sim.strategy.schedule import is_rebalance_day
from portfolio_sim.strategy.sizer import rebalance_orders


@dataclass(frozen=True)
class MomentumParams:
    lookback: int = 20
    top_fraction: float = 0.5

    @staticmethod
    def from_dict(data: dict) -> "MomentumParams":
        params = MomentumParams(
            lookback=parse_int(data, "lookback", 20),
            top_fraction=parse_float(data, "top_fraction", 0.5),
        )
        if params.lookback < 1:
            raise ConfigError(f"lookback must be at least 1, got {params.lookback}")
        if not 0 < params.top_fraction <= 1:
            raise ConfigError(f"top_fraction must be in (0, 1], got {params.top_fraction}")
        return params


class MomentumStrategy(TradingStrategy):
    strategy_id = "momentum"

    def __init__(self, params: MomentumParams, schedule: ScheduleParams) -> None:
        super().__init__(schedule)
        self.params = params

    @property
    def min_history(self) -> int:
        return self.params.lookback + 1

    def rank(self, history: PriceHistory) -> list[tuple[str, float]]:
        """Eligible tickers by trailing return, best first, ties by ticker."""
        scores = []
        for ticker in history.tickers:
            score = trailing_return(history.closes(ticker), self.params.lookback)
            if score is not None:
                scores.append((ticker, score))
        scores.sort(key=lambda item: (-item[1], item[0]))
        return scores

    def decide(
        self,
        holdings: dict[str, float],
        cash: float,
        history: PriceHistory,
        risk_state: RiskState,
    ) -> list[Order]:
        if len(history) < self.min_history:
            return []
        first_eligible = len(history) == self.min_history
        due = is_rebalance_day(history.dates(), history.index, self.schedule.rebalance_frequency)
        if not (first_eligible or due):
            return []

        ranked = self.rank(history)
        if not ranked:
            return []

        prices = history.latest_prices()
        eligible = [ticker for ticker, _ in ranked]
        top_n = max(1, math.ceil(len(eligible) * self.params.top_fraction))
        winners = set(eligible[:top_n])
        budget = cash + sum(holdings.get(ticker, 0.0) * prices[ticker] for ticker in eligible)
        targets = {ticker: (budget / top_n if ticker in winners else 0.0) for ticker in eligible}
        return rebalance_orders(
            targets,
            holdings,
            prices,
            cash,
            fractional=self.schedule.fractional_shares,
            buy_reason=f"momentum: top {top_n} by {self.params.lookback}-day return",
            sell_reason=f"momentum: outside top {top_n}",
        )


def build_momentum_from_config(parameters: dict) -> MomentumStrategy:
    return MomentumStrategy(
        MomentumParams.from_dict(parameters),
        ScheduleParams.from_dict(parameters, RebalanceFrequency.MONTHLY),
    )
