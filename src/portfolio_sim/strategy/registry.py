"""Strategy lookup by identifier."""

from __future__ import annotations

from typing import Callable

from portfolio_sim.errors import ConfigError
from portfolio_sim.strategy.base import TradingStrategy
from portfolio_sim.strategy.equal_weight import build_equal_weight_from_config
from portfolio_sim.strategy.mean_reversion import build_mean_reversion_from_config
from portfolio_sim.strategy.momentum import build_momentum_from_config

STRATEGY_BUILDERS: dict[str, Callable[[dict], TradingStrategy]] = {
    "equal-weight": build_equal_weight_from_config,
    "momentum": build_momentum_from_config,
    "mean-reversion": build_mean_reversion_from_config,
}


def available_strategies() -> list[str]:
    return sorted(STRATEGY_BUILDERS)


def build_strategy(name: str, parameters: dict | None = None) -> TradingStrategy:
    key = name.strip().lower().replace("_", "-")
    builder = STRATEGY_BUILDERS.get(key)
    if builder is None:
        raise ConfigError(f"Unknown strategy: {name}")
    return builder(dict(parameters or {}))
