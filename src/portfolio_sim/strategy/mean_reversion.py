"""Mean reversion: buy below the trailing average, sell above it."""

from __future__ import annotations

from dataclasses import dataclass

from portfolio_sim.data.calendar import PriceHistory
from portfolio_sim.errors import ConfigError
from portfolio_sim.ledger.models import Order, OrderAction
from portfolio_sim.strategy.base import TradingStrategy
from portfolio_sim.strategy.indicators import zscore_vs_trailing
from portfolio_sim.strategy.models import RebalanceFrequency, RiskState, ScheduleParams, parse_float, parse_int
from portfolio_sim.strategy.schedule import is_rebalance_day
from portfolio_sim.strategy.sizer import affordable_quantity, portfolio_value


@dataclass(frozen=True)
class MeanReversionParams:
    lookback: int = 20
    entry_zscore: float = 1.0

    @staticmethod
    def from_dict(data: dict) -> "MeanReversionParams":
        params = MeanReversionParams(
            lookback=parse_int(data, "lookback", 20),
            entry_zscore=parse_float(data, "entry_zscore", 1.0),
        )
        if params.lookback < 2:
            raise ConfigError(f"lookback must be at least 2, got {params.lookback}")
        if params.entry_zscore <= 0:
            raise ConfigError(f"entry_zscore must be positive, got {params.entry_zscore}")
        return params


class MeanReversionStrategy(TradingStrategy):
    strategy_id = "mean-reversion"

    def __init__(self, params: MeanReversionParams, schedule: ScheduleParams) -> None:
        super().__init__(schedule)
        self.params = params

    @property
    def min_history(self) -> int:
        return self.params.lookback + 1

    def signals(self, history: PriceHistory) -> dict[str, float]:
        scores: dict[str, float] = {}
        for ticker in history.tickers:
            score = zscore_vs_trailing(history.closes(ticker), self.params.lookback)
            if score is not None:
                scores[ticker] = score
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
        if not is_rebalance_day(history.dates(), history.index, self.schedule.rebalance_frequency):
            return []

        prices = history.latest_prices()
        scores = self.signals(history)
        threshold = self.params.entry_zscore
        orders: list[Order] = []
        available = cash

        for ticker in sorted(scores):
            held = holdings.get(ticker, 0.0)
            if scores[ticker] >= threshold and held > 0:
                orders.append(
                    Order(
                        ticker=ticker,
                        action=OrderAction.SELL,
                        quantity=held,
                        reason=f"mean-reversion: above average (z={scores[ticker]:+.2f})",
                    )
                )
                available += held * prices[ticker]

        slice_value = portfolio_value(holdings, prices, cash) / len(history.tickers)
        for ticker in sorted(scores):
            if scores[ticker] > -threshold:
                continue
            gap = slice_value - holdings.get(ticker, 0.0) * prices[ticker]
            if gap <= 0:
                continue
            quantity = affordable_quantity(min(gap, available), prices[ticker], self.schedule.fractional_shares)
            if quantity <= 0:
                continue
            orders.append(
                Order(
                    ticker=ticker,
                    action=OrderAction.BUY,
                    quantity=quantity,
                    reason=f"mean-reversion: below average (z={scores[ticker]:+.2f})",
                )
            )
            available -= quantity * prices[ticker]

        return orders


def build_mean_reversion_from_config(parameters: dict) -> MeanReversionStrategy:
    return MeanReversionStrategy(
        MeanReversionParams.from_dict(parameters),
        ScheduleParams.from_dict(parameters, RebalanceFrequency.DAILY),
    )
