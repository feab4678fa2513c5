import math
from datetime import date, timedelta

from portfolio_sim.config import RiskControls, SimulationConfig
from portfolio_sim.data import InMemoryPriceProvider, PriceSeries
from portfolio_sim.monitoring import LogNotifier, Monitor
from portfolio_sim.reporting import filter_trades, sort_trades, trades_to_csv
from portfolio_sim.simulator import BacktestEngine


def business_days(start: date, count: int) -> list[date]:
    days = []
    current = start
    while len(days) < count:
        if current.weekday() < 5:
            days.append(current)
        current += timedelta(days=1)
    return days


days = business_days(date(2024, 1, 2), 120)
provider = InMemoryPriceProvider()
for ticker, drift, swing in (("AAPL", 0.0015, 0.02), ("MSFT", 0.0008, 0.01), ("GOOGL", -0.0004, 0.015)):
    closes = [100.0 * (1 + drift) ** i * (1 + swing * math.sin(i / 5)) for i in range(len(days))]
    provider.add(PriceSeries.from_pairs(ticker, zip(days, closes)))

engine = BacktestEngine(provider, monitor=Monitor(LogNotifier()))
for strategy in ("equal-weight", "momentum", "mean-reversion"):
    config = SimulationConfig(
        tickers=("AAPL", "MSFT", "GOOGL"),
        start_date=days[0],
        end_date=days[-1],
        initial_capital=100000.0,
        strategy=strategy,
        risk_controls=RiskControls(max_drawdown_pct=20.0, volatility_cap_pct=25.0, stop_loss_pct=15.0),
    )
    result = engine.run(config)
    metrics = result.metrics
    print(f"{strategy}: return {metrics.total_return:.2%}, sharpe {metrics.sharpe_ratio:.2f}, trades {metrics.trade_count}")

largest_buys = sort_trades(filter_trades(result.trades, action="BUY"), key="value", descending=True)[:5]
print(trades_to_csv(largest_buys))
