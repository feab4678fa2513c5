"""Load and freeze configuration files."""

from __future__ import annotations

import hashlib
import json
from dataclasses import asdict
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Any, Optional

import yaml

from portfolio_sim.config.models import (
    DEFAULT_TICKERS,
    BacktestConfig,
    MonitoringConfig,
    ReportConfig,
    RiskControls,
    SimulationConfig,
)
from portfolio_sim.config.validation import validate_config
from portfolio_sim.errors import ConfigError


def load_config(path: str | Path) -> BacktestConfig:
    path = Path(path)
    data = _load_yaml(path)

    name = _require(data, "name")
    version = str(_require(data, "version"))
    run_id_prefix = data.get("run_id_prefix", name)

    simulation = _parse_simulation(_mapping(_require(data, "simulation"), "simulation", required=True))
    monitoring = _parse_monitoring(_mapping(data.get("monitoring"), "monitoring"))
    report = _parse_report(_mapping(data.get("report"), "report"))

    return BacktestConfig(
        name=name,
        version=version,
        run_id_prefix=run_id_prefix,
        simulation=simulation,
        monitoring=monitoring,
        report=report,
    )


def compute_config_hash(path: str | Path) -> str:
    path = Path(path)
    content = path.read_bytes()
    return hashlib.sha256(content).hexdigest()


def freeze_config(path: str | Path, lock_path: Optional[str | Path] = None) -> Path:
    path = Path(path)
    config_hash = compute_config_hash(path)
    if lock_path is None:
        lock_path = path.with_suffix(path.suffix + ".lock.json")
    lock_path = Path(lock_path)

    payload = {
        "config_path": str(path),
        "config_hash": config_hash,
        "frozen_at_utc": datetime.now(timezone.utc).isoformat(),
    }
    lock_path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
    return lock_path


def verify_config_lock(path: str | Path, lock_path: Optional[str | Path] = None) -> bool:
    path = Path(path)
    if lock_path is None:
        lock_path = path.with_suffix(path.suffix + ".lock.json")
    lock_path = Path(lock_path)
    if not lock_path.exists():
        return False
    payload = json.loads(lock_path.read_text(encoding="utf-8"))
    expected = payload.get("config_hash")
    return expected == compute_config_hash(path)


def _load_yaml(path: Path) -> dict[str, Any]:
    data = yaml.safe_load(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ConfigError("Config must be a mapping")
    return data


def _require(data: dict[str, Any], key: str) -> Any:
    if key not in data:
        raise ConfigError(f"Missing required config key: {key}")
    return data[key]


def _mapping(value: Any, key: str, required: bool = False) -> dict[str, Any]:
    if value is None and not required:
        return {}
    if not isinstance(value, dict):
        raise ConfigError(f"{key} must be a mapping")
    return value


def _parse_date(value: Any, key: str) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value))
    except ValueError as exc:
        raise ConfigError(f"Invalid {key}: {value}") from exc


def _parse_float(value: Any, key: str) -> float:
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid {key}: {value}") from exc


def _parse_risk_controls(data: dict[str, Any]) -> RiskControls:
    defaults = RiskControls()
    return RiskControls(
        max_drawdown_pct=_parse_float(data.get("max_drawdown_pct", defaults.max_drawdown_pct), "max_drawdown_pct"),
        volatility_cap_pct=_parse_float(
            data.get("volatility_cap_pct", defaults.volatility_cap_pct), "volatility_cap_pct"
        ),
        stop_loss_pct=_parse_float(data.get("stop_loss_pct", defaults.stop_loss_pct), "stop_loss_pct"),
    )


def _parse_simulation(data: dict[str, Any]) -> SimulationConfig:
    tickers = data.get("tickers")
    if tickers is None:
        tickers = list(DEFAULT_TICKERS)
    if isinstance(tickers, str):
        tickers = [item for item in tickers.split(",")]
    if not isinstance(tickers, (list, tuple)):
        raise ConfigError("tickers must be a list or a comma-separated string")

    strategy = data.get("strategy", "equal-weight")
    parameters: dict[str, Any] = {}
    if isinstance(strategy, dict):
        parameters = dict(_mapping(strategy.get("parameters"), "strategy.parameters"))
        strategy = _require(strategy, "name")

    config = SimulationConfig(
        tickers=tuple(str(ticker) for ticker in tickers),
        start_date=_parse_date(_require(data, "start_date"), "start_date"),
        end_date=_parse_date(_require(data, "end_date"), "end_date"),
        initial_capital=_parse_float(data.get("initial_capital", 100000.0), "initial_capital"),
        strategy=str(strategy),
        risk_controls=_parse_risk_controls(_mapping(data.get("risk_controls"), "risk_controls")),
        strategy_parameters=parameters,
        benchmark=data.get("benchmark"),
    )
    return validate_config(config)


def _parse_monitoring(data: dict[str, Any]) -> MonitoringConfig:
    return MonitoringConfig(
        audit_log_path=str(data.get("audit_log_path", "runtime/audit.log")),
        notify_prefix=str(data.get("notify_prefix", "[SIM]")),
    )


def _parse_report(data: dict[str, Any]) -> ReportConfig:
    trades_csv_path = data.get("trades_csv_path")
    return ReportConfig(
        output_path=str(data.get("output_path", "reports/backtest.json")),
        trades_csv_path=str(trades_csv_path) if trades_csv_path else None,
    )


def serialize_config(config: BacktestConfig) -> dict[str, Any]:
    payload = asdict(config)
    simulation = payload["simulation"]
    simulation["tickers"] = list(config.simulation.tickers)
    simulation["start_date"] = config.simulation.start_date.isoformat()
    simulation["end_date"] = config.simulation.end_date.isoformat()
    return payload
