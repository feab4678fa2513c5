"""Risk layer data structures."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Optional

from portfolio_sim.ledger.models import Order


class RiskRule(str, Enum):
    HALTED = "halted"
    STOP_LOSS = "stop-loss"
    DRAWDOWN_LIMIT = "drawdown-limit"
    VOLATILITY_CAP = "volatility-cap"


@dataclass(frozen=True)
class RiskDecision:
    orders: list[Order]
    halted: bool
    rule: Optional[RiskRule] = None
    reason: str = ""
    reset_peak: bool = False


@dataclass(frozen=True)
class RiskEvent:
    day: date
    rule: RiskRule
    reason: str
    total_value: float
