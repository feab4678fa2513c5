"""Strategy implementations."""

from portfolio_sim.strategy.base import TradingStrategy
from portfolio_sim.strategy.equal_weight import EqualWeightStrategy, build_equal_weight_from_config
from portfolio_sim.strategy.mean_reversion import (
    MeanReversionParams,
    MeanReversionStrategy,
    build_mean_reversion_from_config,
)
from portfolio_sim.strategy.models import RebalanceFrequency, RiskState, ScheduleParams
from portfolio_sim.strategy.momentum import MomentumParams, MomentumStrategy, build_momentum_from_config
from portfolio_sim.strategy.registry import available_strategies, build_strategy

__all__ = [
    "EqualWeightStrategy",
    "MeanReversionParams",
    "MeanReversionStrategy",
    "MomentumParams",
    "MomentumStrategy",
    "RebalanceFrequency",
    "RiskState",
    "ScheduleParams",
    "TradingStrategy",
    "available_strategies",
    "build_equal_weight_from_config",
    "build_mean_reversion_from_config",
    "build_momentum_from_config",
    "build_strategy",
]
