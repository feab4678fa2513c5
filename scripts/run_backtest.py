from __future__ import annotations

import argparse
from dataclasses import replace
from pathlib import Path

from portfolio_sim.config import load_config, serialize_config
from portfolio_sim.data import CsvPriceProvider
from portfolio_sim.reporting import JsonReportRenderer, write_trades_csv
from portfolio_sim.runtime import create_run_context
from portfolio_sim.simulator import BacktestEngine
from portfolio_sim.strategy import available_strategies


def _build_provider(source: str, prices: str | None):
    if source == "yahoo":
        from portfolio_sim.data.yahoo import YahooPriceProvider

        return YahooPriceProvider()
    if prices is None:
        raise SystemExit("--prices is required when --source csv")
    return CsvPriceProvider(prices)


def main() -> None:
    parser = argparse.ArgumentParser(description="Run a daily-bar portfolio backtest")
    parser.add_argument("--config", required=True)
    parser.add_argument("--prices", help="Directory holding one <TICKER>.csv per ticker")
    parser.add_argument("--output", help="JSON report path (defaults to report.output_path)")
    parser.add_argument("--trades-csv", help="Trade log CSV path (defaults to report.trades_csv_path)")
    parser.add_argument("--source", choices=["csv", "yahoo"], default="csv")
    parser.add_argument("--strategy", choices=available_strategies(), help="Override simulation.strategy")
    parser.add_argument("--audit-log", help="Override monitoring.audit_log_path")
    args = parser.parse_args()

    config = load_config(args.config)
    if args.strategy:
        config = replace(config, simulation=replace(config.simulation, strategy=args.strategy))
    context = create_run_context(args.config, config.run_id_prefix)
    audit_log = context.audit_log(config.monitoring, args.audit_log)
    monitor = context.monitor(config.monitoring)
    audit_log.log("run_config", serialize_config(config))

    engine = BacktestEngine(
        _build_provider(args.source, args.prices),
        audit_log=audit_log,
        monitor=monitor,
    )
    result = engine.run(config.simulation)

    output_path = JsonReportRenderer(Path(args.output or config.report.output_path)).render(result)
    print(f"Wrote {output_path}")
    trades_csv = args.trades_csv or config.report.trades_csv_path
    if trades_csv:
        print(f"Wrote {write_trades_csv(result.trades, trades_csv)}")

    metrics = result.metrics
    print(
        f"{result.strategy}: {result.trading_days} days, {metrics.trade_count} trades, "
        f"return {metrics.total_return:.2%}, sharpe {metrics.sharpe_ratio:.2f}, "
        f"max drawdown {metrics.max_drawdown:.2%}"
    )


if __name__ == "__main__":
    main()
