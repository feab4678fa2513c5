from datetime import date
from pathlib import Path

import pytest

yaml = pytest.importorskip("yaml")

from portfolio_sim.config import (
    RiskControls,
    SimulationConfig,
    freeze_config,
    load_config,
    serialize_config,
    validate_config,
    verify_config_lock,
)
from portfolio_sim.errors import ConfigError

CONFIGS = Path(__file__).resolve().parents[1] / "configs"


def _write(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "config.yaml"
    path.write_text(text, encoding="utf-8")
    return path


def _simulation(**overrides) -> SimulationConfig:
    values = dict(
        tickers=("AAPL", "MSFT"),
        start_date=date(2024, 1, 2),
        end_date=date(2024, 6, 28),
    )
    values.update(overrides)
    return SimulationConfig(**values)


def test_load_config_sample():
    config = load_config(CONFIGS / "default.yaml")
    assert config.simulation.tickers == ("AAPL", "MSFT", "GOOGL")
    assert config.simulation.strategy == "equal-weight"
    assert config.simulation.strategy_parameters["rebalance_frequency"] == "monthly"
    assert config.simulation.risk_controls == RiskControls(20.0, 25.0, 15.0)
    assert config.simulation.start_date == date(2023, 1, 3)
    assert config.report.trades_csv_path == "reports/trades.csv"


def test_freeze_and_verify(tmp_path):
    source = CONFIGS / "default.yaml"
    target = tmp_path / "default.yaml"
    target.write_text(source.read_text(encoding="utf-8"), encoding="utf-8")

    lock_path = freeze_config(target)
    assert verify_config_lock(target, lock_path)

    target.write_text(source.read_text(encoding="utf-8") + "\n# edited\n", encoding="utf-8")
    assert not verify_config_lock(target, lock_path)


def test_missing_simulation_section(tmp_path):
    path = _write(tmp_path, "name: demo\nversion: 1\n")
    with pytest.raises(ConfigError, match="simulation"):
        load_config(path)


def test_comma_separated_tickers_are_normalized(tmp_path):
    path = _write(
        tmp_path,
        "name: demo\n"
        "version: 1\n"
        "simulation:\n"
        "  tickers: ' aapl, msft '\n"
        "  start_date: 2024-01-02\n"
        "  end_date: '2024-03-01'\n"
        "  strategy: momentum\n"
        "  benchmark: spy\n",
    )
    config = load_config(path)
    assert config.simulation.tickers == ("AAPL", "MSFT")
    assert config.simulation.strategy == "momentum"
    assert config.simulation.benchmark == "SPY"
    assert config.simulation.end_date == date(2024, 3, 1)


def test_invalid_date_is_config_error(tmp_path):
    path = _write(
        tmp_path,
        "name: demo\nversion: 1\nsimulation:\n  start_date: yesterday\n  end_date: 2024-03-01\n",
    )
    with pytest.raises(ConfigError, match="start_date"):
        load_config(path)


def test_validate_config_rejects_bad_ranges():
    with pytest.raises(ConfigError):
        validate_config(_simulation(start_date=date(2024, 6, 28)))
    with pytest.raises(ConfigError):
        validate_config(_simulation(initial_capital=0.0))
    with pytest.raises(ConfigError):
        validate_config(_simulation(tickers=()))
    with pytest.raises(ConfigError, match="Duplicate"):
        validate_config(_simulation(tickers=("AAPL", "aapl")))
    with pytest.raises(ConfigError, match="stop_loss_pct"):
        validate_config(_simulation(risk_controls=RiskControls(stop_loss_pct=0.0)))
    with pytest.raises(ConfigError, match="max_drawdown_pct"):
        validate_config(_simulation(risk_controls=RiskControls(max_drawdown_pct=150.0)))


def test_non_finite_capital_is_rejected():
    with pytest.raises(ConfigError, match="Initial capital"):
        validate_config(_simulation(initial_capital=float("nan")))
    with pytest.raises(ConfigError, match="Initial capital"):
        validate_config(_simulation(initial_capital=float("inf")))


def test_null_sections_fall_back_to_defaults(tmp_path):
    path = _write(
        tmp_path,
        "name: demo\n"
        "version: 1\n"
        "simulation:\n"
        "  start_date: 2024-01-02\n"
        "  end_date: 2024-03-01\n"
        "  strategy:\n"
        "    name: momentum\n"
        "    parameters: null\n"
        "  risk_controls: null\n"
        "monitoring: null\n"
        "report: null\n",
    )
    config = load_config(path)
    assert config.simulation.strategy_parameters == {}
    assert config.simulation.risk_controls == RiskControls()
    assert config.monitoring.notify_prefix == "[SIM]"
    assert config.report.trades_csv_path is None


def test_malformed_sections_are_config_errors(tmp_path):
    with pytest.raises(ConfigError, match="simulation"):
        load_config(_write(tmp_path, "name: demo\nversion: 1\nsimulation: null\n"))
    with pytest.raises(ConfigError, match="risk_controls"):
        load_config(
            _write(
                tmp_path,
                "name: demo\nversion: 1\nsimulation:\n"
                "  start_date: 2024-01-02\n  end_date: 2024-03-01\n  risk_controls: [1, 2]\n",
            )
        )
    with pytest.raises(ConfigError, match="tickers"):
        load_config(
            _write(
                tmp_path,
                "name: demo\nversion: 1\nsimulation:\n"
                "  tickers: 42\n  start_date: 2024-01-02\n  end_date: 2024-03-01\n",
            )
        )


def test_serialize_config_is_json_ready():
    config = load_config(CONFIGS / "default.yaml")

    payload = serialize_config(config)

    assert payload["simulation"]["tickers"] == ["AAPL", "MSFT", "GOOGL"]
    assert payload["simulation"]["start_date"] == "2023-01-03"
    assert payload["simulation"]["risk_controls"]["stop_loss_pct"] == 15.0
