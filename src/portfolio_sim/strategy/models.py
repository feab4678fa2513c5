"""Strategy models shared across variants."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any

from portfolio_sim.errors import ConfigError


class RebalanceFrequency(str, Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"


@dataclass(frozen=True)
class RiskState:
    halted: bool
    peak_value: float
    drawdown: float


@dataclass(frozen=True)
class ScheduleParams:
    rebalance_frequency: RebalanceFrequency = RebalanceFrequency.MONTHLY
    fractional_shares: bool = False

    @staticmethod
    def from_dict(data: dict[str, Any], default_frequency: RebalanceFrequency) -> "ScheduleParams":
        raw = data.get("rebalance_frequency", default_frequency.value)
        try:
            frequency = RebalanceFrequency(str(raw).lower())
        except ValueError as exc:
            raise ConfigError(f"Invalid rebalance_frequency: {raw}") from exc
        return ScheduleParams(
            rebalance_frequency=frequency,
            fractional_shares=parse_bool(data, "fractional_shares", False),
        )


def parse_int(data: dict[str, Any], key: str, default: int) -> int:
    value = data.get(key, default)
    if isinstance(value, bool):
        raise ConfigError(f"Invalid {key}: {value}")
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid {key}: {value}") from exc


def parse_float(data: dict[str, Any], key: str, default: float) -> float:
    value = data.get(key, default)
    try:
        parsed = float(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid {key}: {value}") from exc
    if not math.isfinite(parsed):
        raise ConfigError(f"Invalid {key}: {value}")
    return parsed


def parse_bool(data: dict[str, Any], key: str, default: bool) -> bool:
    value = data.get(key, default)
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in {"true", "false"}:
        return value.strip().lower() == "true"
    raise ConfigError(f"Invalid {key}: {value!r}, expected true or false")
