"""Risk controls."""

from portfolio_sim.risk.controls import (
    DAMPING_FACTOR,
    VOLATILITY_WINDOW,
    RiskController,
    damp_buys,
    liquidation_orders,
    trailing_volatility,
)
from portfolio_sim.risk.models import RiskDecision, RiskEvent, RiskRule

__all__ = [
    "DAMPING_FACTOR",
    "RiskController",
    "RiskDecision",
    "RiskEvent",
    "RiskRule",
    "VOLATILITY_WINDOW",
    "damp_buys",
    "liquidation_orders",
    "trailing_volatility",
]
