"""Result renderers."""

from __future__ import annotations

import json
from dataclasses import asdict
from pathlib import Path
from typing import Any

from portfolio_sim.simulator.models import SimulationResult


class ResultRenderer:
    def render(self, result: SimulationResult) -> Any:  # pragma: no cover - interface
        raise NotImplementedError


def result_to_dict(result: SimulationResult) -> dict[str, Any]:
    config = result.config
    return {
        "summary": {
            "strategy": result.strategy,
            "tickers": list(config.tickers),
            "start_date": config.start_date.isoformat(),
            "end_date": config.end_date.isoformat(),
            "initial_capital": config.initial_capital,
            "benchmark": config.benchmark,
            "trading_days": result.trading_days,
            "cash": result.portfolio.cash,
            "holdings": dict(result.portfolio.holdings),
            "halted": result.portfolio.halted,
        },
        "metrics": asdict(result.metrics),
        "chart": [{"date": point.day.isoformat(), "value": point.value} for point in result.chart],
        "trades": [
            {
                "id": trade.id,
                "date": trade.day.isoformat(),
                "ticker": trade.ticker,
                "action": trade.action.value,
                "quantity": trade.quantity,
                "price": trade.price,
                "value": trade.value,
                "reason": trade.reason,
            }
            for trade in result.trades
        ],
        "risk_events": [
            {
                "date": event.day.isoformat(),
                "rule": event.rule.value,
                "reason": event.reason,
                "total_value": event.total_value,
            }
            for event in result.risk_events
        ],
    }


class JsonReportRenderer(ResultRenderer):
    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def render(self, result: SimulationResult) -> Path:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(result_to_dict(result), indent=2), encoding="utf-8")
        return self.path
