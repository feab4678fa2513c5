from pathlib import Path

import pytest

yaml = pytest.importorskip("yaml")

from portfolio_sim.config import compute_config_hash, load_config
from portfolio_sim.runtime import create_run_context

CONFIG = Path(__file__).resolve().parents[1] / "configs" / "default.yaml"


def test_run_id_embeds_prefix_and_hash():
    context = create_run_context(CONFIG, "backtest")

    assert context.run_id.startswith("backtest-")
    assert context.run_id.endswith(compute_config_hash(CONFIG)[:8])


def test_context_binds_audit_log(tmp_path):
    config = load_config(CONFIG)
    context = create_run_context(CONFIG, config.run_id_prefix, run_id="fixed")

    audit = context.audit_log(config.monitoring, tmp_path / "audit.log")
    audit.log("run_start", {"tickers": ["AAPL"]})

    record = audit.read()[0]
    assert record["run_id"] == "fixed"
    assert record["config_hash"] == context.config_hash
    assert context.monitor(config.monitoring).notifier.prefix == "[SIM]"
