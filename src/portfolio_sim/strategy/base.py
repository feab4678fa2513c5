"""Strategy base interface."""

from __future__ import annotations

from abc import ABC, abstractmethod

from portfolio_sim.data.calendar import PriceHistory
from portfolio_sim.ledger.models import Order
from portfolio_sim.strategy.models import RiskState, ScheduleParams


class TradingStrategy(ABC):
    strategy_id: str

    def __init__(self, schedule: ScheduleParams) -> None:
        self.schedule = schedule

    @property
    def fractional_shares(self) -> bool:
        return self.schedule.fractional_shares

    @property
    def min_history(self) -> int:
        """Closes an asset needs before the strategy can act on it."""
        return 1

    @abstractmethod
    def decide(
        self,
        holdings: dict[str, float],
        cash: float,
        history: PriceHistory,
        risk_state: RiskState,
    ) -> list[Order]:
        raise NotImplementedError
