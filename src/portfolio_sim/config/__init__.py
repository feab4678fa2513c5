"""Config loading, validation and freezing."""

from portfolio_sim.config.loader import (
    compute_config_hash,
    freeze_config,
    load_config,
    serialize_config,
    verify_config_lock,
)
from portfolio_sim.config.models import (
    BacktestConfig,
    MonitoringConfig,
    ReportConfig,
    RiskControls,
    SimulationConfig,
)
from portfolio_sim.config.validation import normalize_ticker, validate_config, validate_risk_controls

__all__ = [
    "BacktestConfig",
    "MonitoringConfig",
    "ReportConfig",
    "RiskControls",
    "SimulationConfig",
    "compute_config_hash",
    "freeze_config",
    "load_config",
    "normalize_ticker",
    "serialize_config",
    "validate_config",
    "validate_risk_controls",
    "verify_config_lock",
]
