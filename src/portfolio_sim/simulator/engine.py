"""Backtest orchestration: fetch, align, run the day loop, score."""

from __future__ import annotations

import asyncio
from typing import Optional

from portfolio_sim.config.models import SimulationConfig
from portfolio_sim.config.validation import validate_config
from portfolio_sim.data.calendar import AlignedPrices, align_series
from portfolio_sim.data.fetch import fetch_one, fetch_universe
from portfolio_sim.data.models import PriceSeries
from portfolio_sim.data.provider import PriceProvider
from portfolio_sim.errors import InsufficientHistoryError
from portfolio_sim.ledger.models import ChartPoint
from portfolio_sim.ledger.portfolio import PortfolioLedger
from portfolio_sim.metrics.calculator import compute_metrics, equal_weight_benchmark
from portfolio_sim.risk.controls import RiskController
from portfolio_sim.risk.models import RiskEvent
from portfolio_sim.simulator.models import RunStatus, SimulationResult
from portfolio_sim.strategy.base import TradingStrategy
from portfolio_sim.strategy.models import RiskState
from portfolio_sim.strategy.registry import build_strategy

MIN_TRADING_DAYS = 2


class BacktestEngine:
    """Runs one configured backtest at a time.

    ``status`` walks INITIALIZING -> RUNNING -> COMPLETED, or ends in FAILED
    when any step raises. A failed run re-raises and produces no result.
    """

    def __init__(
        self,
        provider: PriceProvider,
        benchmark_provider: Optional[PriceProvider] = None,
        audit_log: Optional[object] = None,
        monitor: Optional[object] = None,
    ) -> None:
        self.provider = provider
        self.benchmark_provider = benchmark_provider
        self.status = RunStatus.INITIALIZING
        self._audit_log = audit_log
        self._monitor = monitor

    def _log(self, event: str, payload: dict) -> None:
        if self._audit_log is None:
            return
        self._audit_log.log(event, payload)

    def run(self, config: SimulationConfig) -> SimulationResult:
        return asyncio.run(self.run_async(config))

    async def run_async(self, config: SimulationConfig) -> SimulationResult:
        self.status = RunStatus.INITIALIZING
        try:
            config = validate_config(config)
            strategy = build_strategy(config.strategy, config.strategy_parameters)
            self._log(
                "run_start",
                {
                    "tickers": list(config.tickers),
                    "strategy": strategy.strategy_id,
                    "start_date": config.start_date.isoformat(),
                    "end_date": config.end_date.isoformat(),
                    "initial_capital": config.initial_capital,
                    "benchmark": config.benchmark,
                },
            )
            series, benchmark_series = await self._fetch_inputs(config)
            prices = align_series(series)
            self._check_history(prices, strategy)

            self.status = RunStatus.RUNNING
            result = self._simulate(config, strategy, prices, benchmark_series)
        except Exception as exc:
            self.status = RunStatus.FAILED
            self._log("run_failed", {"error": type(exc).__name__, "message": str(exc)})
            if self._monitor is not None:
                self._monitor.run_failed(f"{type(exc).__name__}: {exc}")
            raise

        self.status = RunStatus.COMPLETED
        self._log(
            "run_complete",
            {
                "trading_days": result.trading_days,
                "trades": result.metrics.trade_count,
                "final_value": result.metrics.final_value,
                "total_return": result.metrics.total_return,
                "risk_events": len(result.risk_events),
            },
        )
        return result

    async def _fetch_inputs(
        self, config: SimulationConfig
    ) -> tuple[dict[str, PriceSeries], Optional[PriceSeries]]:
        if config.benchmark is None:
            series = await fetch_universe(
                self.provider, config.tickers, config.start_date, config.end_date, self._audit_log
            )
            return series, None

        benchmark_provider = self.benchmark_provider or self.provider
        try:
            async with asyncio.TaskGroup() as group:
                universe_task = group.create_task(
                    fetch_universe(self.provider, config.tickers, config.start_date, config.end_date, self._audit_log)
                )
                benchmark_task = group.create_task(
                    fetch_one(benchmark_provider, config.benchmark, config.start_date, config.end_date)
                )
        except BaseExceptionGroup as group_error:
            raise group_error.exceptions[0] from None
        return universe_task.result(), benchmark_task.result()

    @staticmethod
    def _check_history(prices: AlignedPrices, strategy: TradingStrategy) -> None:
        count = len(prices.days)
        if count < MIN_TRADING_DAYS:
            raise InsufficientHistoryError(
                f"Need at least {MIN_TRADING_DAYS} common trading days, found {count}"
            )
        if strategy.min_history > count:
            raise InsufficientHistoryError(
                f"Strategy {strategy.strategy_id} needs {strategy.min_history} trading days, found {count}"
            )

    def _simulate(
        self,
        config: SimulationConfig,
        strategy: TradingStrategy,
        prices: AlignedPrices,
        benchmark_series: Optional[PriceSeries],
    ) -> SimulationResult:
        ledger = PortfolioLedger(config.initial_capital, audit_log=self._audit_log)
        risk = RiskController(audit_log=self._audit_log, monitor=self._monitor)
        events: list[RiskEvent] = []

        for index, day in enumerate(prices.days):
            today = prices.prices_on(index)
            opening = ledger.mark_to_market(day, today)
            state = ledger.state
            peak = state.peak_value
            risk_state = RiskState(
                halted=state.halted,
                peak_value=peak,
                drawdown=(peak - opening.value) / peak if peak > 0 else 0.0,
            )

            proposed = strategy.decide(dict(state.holdings), state.cash, prices.history(index), risk_state)
            decision = risk.apply(
                proposed,
                state,
                [*ledger.chart[-risk.volatility_window :], opening],
                config.risk_controls,
                config.initial_capital,
                today,
                fractional_shares=strategy.fractional_shares,
            )
            ledger.apply(decision.orders, day, today)
            if decision.halted and not state.halted:
                ledger.set_halted()

            closing = ledger.mark_to_market(day, today)
            if decision.reset_peak:
                ledger.reset_peak(closing.value)
            ledger.record(closing)
            if decision.rule is not None:
                events.append(
                    RiskEvent(day=day, rule=decision.rule, reason=decision.reason, total_value=opening.value)
                )

        if benchmark_series is not None:
            benchmark = [ChartPoint(day=point.day, value=point.close) for point in benchmark_series.points]
        else:
            benchmark = equal_weight_benchmark(prices, config.initial_capital)

        trades = tuple(ledger.trades)
        chart = tuple(ledger.chart)
        return SimulationResult(
            config=config,
            strategy=strategy.strategy_id,
            portfolio=ledger.state.snapshot(),
            trades=trades,
            chart=chart,
            metrics=compute_metrics(chart, trades, config.initial_capital, benchmark),
            trading_days=len(prices.days),
            risk_events=tuple(events),
        )
