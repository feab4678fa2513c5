"""Configuration models for reproducible runs."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Optional

DEFAULT_TICKERS = ("AAPL", "MSFT", "GOOGL")


@dataclass(frozen=True)
class RiskControls:
    max_drawdown_pct: float = 20.0
    volatility_cap_pct: float = 25.0
    stop_loss_pct: float = 15.0


@dataclass(frozen=True)
class SimulationConfig:
    tickers: tuple[str, ...]
    start_date: date
    end_date: date
    initial_capital: float = 100000.0
    strategy: str = "equal-weight"
    risk_controls: RiskControls = RiskControls()
    strategy_parameters: dict[str, Any] = field(default_factory=dict)
    benchmark: Optional[str] = None


@dataclass(frozen=True)
class MonitoringConfig:
    audit_log_path: str = "runtime/audit.log"
    notify_prefix: str = "[SIM]"


@dataclass(frozen=True)
class ReportConfig:
    output_path: str = "reports/backtest.json"
    trades_csv_path: Optional[str] = None


@dataclass(frozen=True)
class BacktestConfig:
    name: str
    version: str
    run_id_prefix: str
    simulation: SimulationConfig
    monitoring: MonitoringConfig = MonitoringConfig()
    report: ReportConfig = ReportConfig()
