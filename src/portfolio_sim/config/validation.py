"""Simulation config validation, run before any data is fetched."""

from __future__ import annotations

import math
from dataclasses import replace

from portfolio_sim.config.models import RiskControls, SimulationConfig
from portfolio_sim.errors import ConfigError


def normalize_ticker(ticker: str) -> str:
    return str(ticker).strip().upper()


def validate_risk_controls(controls: RiskControls) -> RiskControls:
    for name in ("max_drawdown_pct", "volatility_cap_pct", "stop_loss_pct"):
        value = getattr(controls, name)
        if not 0 < value <= 100:
            raise ConfigError(f"{name} must be in (0, 100], got {value}")
    return controls


def validate_config(config: SimulationConfig) -> SimulationConfig:
    """Return a normalized copy of ``config`` or raise :class:`ConfigError`."""
    tickers = tuple(normalize_ticker(ticker) for ticker in config.tickers)
    if not tickers:
        raise ConfigError("At least one ticker is required")
    if any(not ticker for ticker in tickers):
        raise ConfigError("Ticker symbols must not be blank")
    duplicates = sorted({ticker for ticker in tickers if tickers.count(ticker) > 1})
    if duplicates:
        raise ConfigError(f"Duplicate tickers: {', '.join(duplicates)}")
    if not (math.isfinite(config.initial_capital) and config.initial_capital > 0):
        raise ConfigError(f"Initial capital must be positive, got {config.initial_capital}")
    if config.start_date >= config.end_date:
        raise ConfigError(f"Start date {config.start_date} must be before end date {config.end_date}")
    validate_risk_controls(config.risk_controls)

    benchmark = normalize_ticker(config.benchmark) if config.benchmark else None
    return replace(config, tickers=tickers, benchmark=benchmark)
