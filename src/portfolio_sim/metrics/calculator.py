"""Performance statistics over a completed run."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

from portfolio_sim.data.calendar import AlignedPrices
from portfolio_sim.ledger.models import ChartPoint, OrderAction, Trade

TRADING_DAYS_PER_YEAR = 252


@dataclass(frozen=True)
class PerformanceMetrics:
    total_return: float
    sharpe_ratio: float
    max_drawdown: float
    volatility: float
    win_rate: float
    alpha: float
    beta: float
    total_pnl: float
    final_value: float
    trade_count: int


def daily_returns(values: Sequence[float]) -> list[float]:
    return [current / previous - 1.0 for previous, current in zip(values, values[1:]) if previous > 0]


def _mean(values: Sequence[float]) -> float:
    return sum(values) / len(values) if values else 0.0


def _pstdev(values: Sequence[float]) -> float:
    if len(values) < 2:
        return 0.0
    mean = _mean(values)
    return math.sqrt(sum((value - mean) ** 2 for value in values) / len(values))


def annualized_volatility(returns: Sequence[float]) -> float:
    return _pstdev(returns) * math.sqrt(TRADING_DAYS_PER_YEAR)


def sharpe_ratio(returns: Sequence[float]) -> float:
    volatility = annualized_volatility(returns)
    if volatility == 0:
        return 0.0
    return _mean(returns) * TRADING_DAYS_PER_YEAR / volatility


def max_drawdown(values: Iterable[float]) -> float:
    peak = 0.0
    worst = 0.0
    for value in values:
        peak = max(peak, value)
        if peak > 0:
            worst = max(worst, (peak - value) / peak)
    return worst


def win_rate(trades: Iterable[Trade]) -> float:
    """Share of SELL trades priced above the average cost of the shares held."""
    shares: dict[str, float] = {}
    cost: dict[str, float] = {}
    wins = 0
    closes = 0
    for trade in trades:
        held = shares.get(trade.ticker, 0.0)
        if trade.action == OrderAction.BUY:
            shares[trade.ticker] = held + trade.quantity
            cost[trade.ticker] = cost.get(trade.ticker, 0.0) + trade.value
            continue
        if held <= 0:
            continue
        average = cost.get(trade.ticker, 0.0) / held
        closes += 1
        if trade.price > average:
            wins += 1
        remaining = held - trade.quantity
        if remaining > 0:
            shares[trade.ticker] = remaining
            cost[trade.ticker] = average * remaining
        else:
            shares.pop(trade.ticker, None)
            cost.pop(trade.ticker, None)
    return wins / closes if closes else 0.0


def alpha_beta(returns: Sequence[float], benchmark_returns: Sequence[float]) -> tuple[float, float]:
    """Annualized alpha and beta of ``returns`` against a benchmark of equal length."""
    count = min(len(returns), len(benchmark_returns))
    if count == 0:
        return 0.0, 0.0
    r = list(returns[:count])
    b = list(benchmark_returns[:count])
    mean_r = _mean(r)
    mean_b = _mean(b)
    variance = sum((value - mean_b) ** 2 for value in b) / count
    covariance = sum((x - mean_r) * (y - mean_b) for x, y in zip(r, b)) / count
    beta = covariance / variance if variance > 0 else 0.0
    alpha = (mean_r - beta * mean_b) * TRADING_DAYS_PER_YEAR
    return alpha, beta


def equal_weight_benchmark(prices: AlignedPrices, initial_capital: float) -> list[ChartPoint]:
    """Buy-and-hold of the whole universe in equal parts from the first day."""
    if not prices.days:
        return []
    tickers = prices.tickers
    slice_value = initial_capital / len(tickers)
    units = {ticker: slice_value / prices.closes[ticker][0] for ticker in tickers}
    return [
        ChartPoint(day=day, value=sum(units[ticker] * prices.closes[ticker][index] for ticker in tickers))
        for index, day in enumerate(prices.days)
    ]


def _aligned_returns(
    chart: Sequence[ChartPoint], benchmark: Sequence[ChartPoint]
) -> tuple[list[float], list[float]]:
    bench_by_day = {point.day: point.value for point in benchmark}
    common = [point for point in chart if point.day in bench_by_day]
    portfolio = daily_returns([point.value for point in common])
    reference = daily_returns([bench_by_day[point.day] for point in common])
    return portfolio, reference


def compute_metrics(
    chart: Sequence[ChartPoint],
    trades: Sequence[Trade],
    initial_capital: float,
    benchmark: Optional[Sequence[ChartPoint]] = None,
) -> PerformanceMetrics:
    values = [point.value for point in chart]
    final_value = values[-1] if values else initial_capital
    returns = daily_returns(values)

    alpha, beta = 0.0, 0.0
    if benchmark:
        alpha, beta = alpha_beta(*_aligned_returns(chart, benchmark))

    return PerformanceMetrics(
        total_return=final_value / initial_capital - 1.0 if initial_capital > 0 else 0.0,
        sharpe_ratio=sharpe_ratio(returns),
        max_drawdown=max_drawdown(values),
        volatility=annualized_volatility(returns),
        win_rate=win_rate(trades),
        alpha=alpha,
        beta=beta,
        total_pnl=final_value - initial_capital,
        final_value=final_value,
        trade_count=len(trades),
    )
