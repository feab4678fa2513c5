"""Performance metrics."""

from portfolio_sim.metrics.calculator import (
    PerformanceMetrics,
    alpha_beta,
    annualized_volatility,
    compute_metrics,
    daily_returns,
    equal_weight_benchmark,
    max_drawdown,
    sharpe_ratio,
    win_rate,
)

__all__ = [
    "PerformanceMetrics",
    "alpha_beta",
    "annualized_volatility",
    "compute_metrics",
    "daily_returns",
    "equal_weight_benchmark",
    "max_drawdown",
    "sharpe_ratio",
    "win_rate",
]
