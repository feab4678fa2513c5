"""Simulation result structures."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from portfolio_sim.config.models import SimulationConfig
from portfolio_sim.ledger.models import ChartPoint, PortfolioSnapshot, Trade
from portfolio_sim.metrics.calculator import PerformanceMetrics
from portfolio_sim.risk.models import RiskEvent


class RunStatus(str, Enum):
    INITIALIZING = "initializing"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass(frozen=True)
class SimulationResult:
    config: SimulationConfig
    strategy: str
    portfolio: PortfolioSnapshot
    trades: tuple[Trade, ...]
    chart: tuple[ChartPoint, ...]
    metrics: PerformanceMetrics
    trading_days: int
    risk_events: tuple[RiskEvent, ...] = ()
