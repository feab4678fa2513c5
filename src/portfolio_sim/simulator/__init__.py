"""Backtest orchestration."""

from portfolio_sim.simulator.engine import BacktestEngine
from portfolio_sim.simulator.models import RunStatus, SimulationResult

__all__ = ["BacktestEngine", "RunStatus", "SimulationResult"]
